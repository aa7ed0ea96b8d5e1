from __future__ import annotations

from typing import Optional


class CookieGuardError(Exception):
    """Base class for every failure raised by the cookie codecs."""

    default_message = "cookie failure"

    def __init__(self, message: Optional[str] = None, *, name: Optional[str] = None) -> None:
        self.name = name
        msg = message or self.default_message
        if name:
            msg = f"{msg} ('{name}')"
        super().__init__(msg)


class SecretMissing(CookieGuardError):
    default_message = "secret key is missing"


class EncryptionFailure(CookieGuardError):
    """Cipher construction failed (bad key length, no entropy)."""

    default_message = "encryption failure"


class CookieError(CookieGuardError):
    """The cookie is missing, malformed, or failed verification."""


class CookieTooLarge(CookieError):
    default_message = "cookie value too long"


class CookieNotFound(CookieError):
    default_message = "cookie not found"


class CookieDecodeError(CookieError):
    default_message = "cannot decode cookie value"


class SignatureLengthError(CookieError):
    default_message = "signature wrong length"


class SignatureMismatch(CookieError):
    default_message = "signature mismatch"


class ValueTooShort(CookieError):
    default_message = "encrypted value too short"


class SplitError(CookieError):
    default_message = "unable to split plaintext"


class InvalidIdentity(CookieError):
    default_message = "invalid identity"


class DecryptionFailure(CookieError):
    # Deliberately generic: must not reveal which check failed.
    default_message = "unable to decrypt cookie"
