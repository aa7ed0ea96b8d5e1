from __future__ import annotations

import base64
import secrets
from typing import Optional

from cookieguard.errors import SecretMissing
from cookieguard.transport import decode_value

SECRET_LENGTH = 32


def new_cookie_secret(nbytes: int = SECRET_LENGTH) -> bytes:
    """Generate a random secret key for signed or encrypted cookies."""
    return secrets.token_bytes(nbytes)


def encode_secret(secret: bytes) -> str:
    """Text form of a secret, suitable for an environment variable."""
    return base64.urlsafe_b64encode(secret).decode("ascii").rstrip("=")


def decode_secret(text: str) -> bytes:
    """
    Inverse of `encode_secret`. Padding is optional.

    Raises SecretMissing for empty input or input that is not base64 of
    exactly SECRET_LENGTH bytes.
    """
    t = (text or "").strip()
    if not t:
        raise SecretMissing()
    t += "=" * (-len(t) % 4)
    try:
        raw = decode_value(t)
    except ValueError as e:
        raise SecretMissing("secret key is not valid base64") from e
    if len(raw) != SECRET_LENGTH:
        raise SecretMissing(f"secret key must be {SECRET_LENGTH} bytes, got {len(raw)}")
    return raw


def require_secret(secret_key: Optional[bytes]) -> bytes:
    if not secret_key:
        raise SecretMissing()
    return bytes(secret_key)
