"""
Signed and encrypted HTTP cookies for Starlette/FastAPI applications.

- `write` / `read`: plain base64 cookies with a size ceiling.
- `write_signed` / `read_signed`: readable by the client, tamper-evident.
- `write_encrypted` / `read_encrypted`: opaque to the client, bound to an identity.

Secrets are always passed explicitly; see `new_cookie_secret`.
"""
from __future__ import annotations

from cookieguard.cookie import Cookie, SameSite
from cookieguard.encrypted import EncryptedValue, read_encrypted, write_encrypted
from cookieguard.errors import (
    CookieDecodeError,
    CookieError,
    CookieGuardError,
    CookieNotFound,
    CookieTooLarge,
    DecryptionFailure,
    EncryptionFailure,
    InvalidIdentity,
    SecretMissing,
    SignatureLengthError,
    SignatureMismatch,
    SplitError,
    ValueTooShort,
)
from cookieguard.secret import SECRET_LENGTH, decode_secret, encode_secret, new_cookie_secret
from cookieguard.signed import read_signed, write_signed
from cookieguard.transport import MAX_COOKIE_SIZE, read, write

__all__ = [
    "Cookie",
    "CookieDecodeError",
    "CookieError",
    "CookieGuardError",
    "CookieNotFound",
    "CookieTooLarge",
    "DecryptionFailure",
    "EncryptedValue",
    "EncryptionFailure",
    "InvalidIdentity",
    "MAX_COOKIE_SIZE",
    "SECRET_LENGTH",
    "SameSite",
    "SecretMissing",
    "SignatureLengthError",
    "SignatureMismatch",
    "SplitError",
    "ValueTooShort",
    "decode_secret",
    "encode_secret",
    "new_cookie_secret",
    "read",
    "read_encrypted",
    "read_signed",
    "write",
    "write_encrypted",
    "write_signed",
]
