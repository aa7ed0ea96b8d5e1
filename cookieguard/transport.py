"""
Transport codec: makes arbitrary bytes safe to carry as a cookie value.

Only a small subset of US-ASCII is allowed in cookie values, so every value
is base64 encoded (URL-safe alphabet, padded). No cryptography happens here;
this is also the codec to use for plain, unauthenticated cookies.
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import replace

from starlette.requests import Request
from starlette.responses import Response

from cookieguard.cookie import Cookie
from cookieguard.errors import CookieDecodeError, CookieNotFound, CookieTooLarge

logger = logging.getLogger(__name__)

# Not all browsers enforce a limit, so we set a conservative one ourselves.
MAX_COOKIE_SIZE = 4096

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def encode_value(value: bytes) -> str:
    return base64.urlsafe_b64encode(value).decode("ascii")


def decode_value(text: str) -> bytes:
    """Strict URL-safe base64 decode; raises ValueError on bad input."""
    if len(text) % 4 or not _B64URL_RE.fullmatch(text):
        raise ValueError("not padded url-safe base64")
    try:
        return base64.b64decode(text.encode("ascii"), altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise ValueError(str(e)) from e


def write(response: Response, cookie: Cookie) -> str:
    """
    Encode `cookie.value` and emit the cookie on `response`.

    Returns the `Set-Cookie` header value that was written. Raises
    CookieTooLarge (without touching the response) when the serialized
    cookie exceeds MAX_COOKIE_SIZE.
    """
    encoded = replace(cookie, value=encode_value(cookie.value_bytes()))
    header = encoded.serialize()
    # serialize() only emits printable ASCII, so this is the byte count on the wire.
    size = len(header.encode("ascii"))
    if size > MAX_COOKIE_SIZE:
        logger.warning(
            "Refusing to write cookie %s: %d bytes exceeds limit of %d", cookie.name, size, MAX_COOKIE_SIZE
        )
        raise CookieTooLarge(f"cookie value too long ({size} > {MAX_COOKIE_SIZE} bytes)", name=cookie.name)
    response.headers.append("set-cookie", header)
    return header


def read(request: Request, name: str) -> bytes:
    """Read a base64 encoded cookie from the request and return the decoded bytes."""
    raw = request.cookies.get(name)
    if raw is None:
        raise CookieNotFound(name=name)
    try:
        return decode_value(raw)
    except ValueError as e:
        logger.debug("Cookie %s is not valid base64", name)
        raise CookieDecodeError(name=name) from e
