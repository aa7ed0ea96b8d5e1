"""
Encrypted cookies: opaque to the client and bound to an integer identity.

Wire value (before base64): nonce || AES-GCM(secret, nonce, "<identity>:<value>").
The secret length picks the AES variant (16/24/32 bytes); the 32-byte secrets
from `new_cookie_secret` give AES-256.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from starlette.requests import Request
from starlette.responses import Response

from cookieguard.cookie import Cookie
from cookieguard.errors import (
    CookieError,
    DecryptionFailure,
    EncryptionFailure,
    InvalidIdentity,
    SplitError,
    ValueTooShort,
)
from cookieguard.transport import read, write

logger = logging.getLogger(__name__)

NONCE_SIZE = 12  # standard GCM nonce

_IDENTITY_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class EncryptedValue:
    """
    Result of `read_encrypted`.

    `value` is always the authenticated payload. When the identity part is not
    a decimal integer, `identity` is None and `error` holds an InvalidIdentity;
    the payload is still returned so callers can log it. This partial result is
    intentional: the whole plaintext has already passed GCM authentication.

    Payload bytes that are not UTF-8 are kept as surrogate escapes in `value`;
    `value_bytes` gives back the exact bytes.
    """

    identity: Optional[int]
    raw_identity: str
    value: str
    error: Optional[CookieError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def value_bytes(self) -> bytes:
        """The payload exactly as written, including any non-UTF-8 bytes."""
        return self.value.encode("utf-8", errors="surrogateescape")

    def unwrap(self) -> Tuple[int, str]:
        if self.error is not None:
            raise self.error
        assert self.identity is not None
        return self.identity, self.value


def _cipher(secret_key: Optional[bytes], *, stage: str) -> AESGCM:
    try:
        return AESGCM(bytes(secret_key or b""))
    except (TypeError, ValueError) as e:
        raise EncryptionFailure(f"unable to create cipher for {stage}: {e}") from e


def write_encrypted(response: Response, identity: int, cookie: Cookie, secret_key: Optional[bytes]) -> str:
    if isinstance(identity, bool) or not isinstance(identity, int):
        raise EncryptionFailure(f"identity must be an int, got {type(identity).__name__}", name=cookie.name)
    aesgcm = _cipher(secret_key, stage="write")
    try:
        nonce = os.urandom(NONCE_SIZE)
    except (OSError, NotImplementedError) as e:
        raise EncryptionFailure("unable to read random bytes into nonce", name=cookie.name) from e

    plaintext = b"%d:" % identity + cookie.value_bytes()
    ciphertext = aesgcm.encrypt(nonce, plaintext, None)
    return write(response, replace(cookie, value=nonce + ciphertext))


def read_encrypted(request: Request, name: str, secret_key: Optional[bytes]) -> EncryptedValue:
    encrypted_value = read(request, name)
    aesgcm = _cipher(secret_key, stage="read")
    if len(encrypted_value) < NONCE_SIZE:
        logger.debug("Encrypted cookie %s shorter than nonce", name)
        raise ValueTooShort(name=name)

    nonce = encrypted_value[:NONCE_SIZE]
    ciphertext = encrypted_value[NONCE_SIZE:]
    try:
        plaintext = aesgcm.decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        logger.debug("Encrypted cookie %s failed to decrypt", name)
        raise DecryptionFailure(name=name) from e

    raw_id, sep, raw_value = plaintext.partition(b":")
    if not sep:
        raise SplitError(name=name)
    raw_identity = raw_id.decode("ascii", errors="replace")
    value = raw_value.decode("utf-8", errors="surrogateescape")

    if not _IDENTITY_RE.fullmatch(raw_identity):
        logger.debug("Encrypted cookie %s carries a non-integer identity", name)
        return EncryptedValue(
            identity=None,
            raw_identity=raw_identity,
            value=value,
            error=InvalidIdentity(f"invalid identity '{raw_identity}'", name=name),
        )
    return EncryptedValue(identity=int(raw_identity), raw_identity=raw_identity, value=value)
