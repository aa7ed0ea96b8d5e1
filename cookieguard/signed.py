"""
Signed cookies: readable by the client, but tamper-evident.

Wire value (before base64): HMAC-SHA256(secret, name || value) || value.
The tag covers the cookie name, so a value signed for one cookie cannot be
replayed under another name with the same secret.
"""
from __future__ import annotations

import hashlib
import logging
from dataclasses import replace
from typing import Optional

from itsdangerous.signer import HMACAlgorithm
from starlette.requests import Request
from starlette.responses import Response

from cookieguard.cookie import Cookie
from cookieguard.errors import SignatureLengthError, SignatureMismatch
from cookieguard.secret import require_secret
from cookieguard.transport import read, write

logger = logging.getLogger(__name__)

SIGNATURE_SIZE = hashlib.sha256().digest_size

_HMAC = HMACAlgorithm(digest_method=hashlib.sha256)


def _sign(secret_key: bytes, name: str, value: bytes) -> bytes:
    return _HMAC.get_signature(secret_key, name.encode("utf-8") + value)


def write_signed(response: Response, cookie: Cookie, secret_key: Optional[bytes]) -> str:
    key = require_secret(secret_key)
    value = cookie.value_bytes()
    signature = _sign(key, cookie.name, value)
    return write(response, replace(cookie, value=signature + value))


def read_signed(request: Request, name: str, secret_key: Optional[bytes]) -> bytes:
    """
    Read a signed cookie and return its value once the signature checks out.

    Transport failures (CookieNotFound, CookieDecodeError) propagate as-is;
    both are CookieError subclasses.
    """
    key = require_secret(secret_key)
    signed_value = read(request, name)
    if len(signed_value) < SIGNATURE_SIZE:
        logger.debug("Signed cookie %s shorter than signature", name)
        raise SignatureLengthError(name=name)

    signature = signed_value[:SIGNATURE_SIZE]
    value = signed_value[SIGNATURE_SIZE:]
    # verify_signature compares in constant time.
    if not _HMAC.verify_signature(key, name.encode("utf-8") + value, signature):
        logger.debug("Signed cookie %s failed verification", name)
        raise SignatureMismatch(name=name)
    return value
