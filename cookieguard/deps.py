from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Request

from cookieguard.config import load_cookie_config
from cookieguard.encrypted import EncryptedValue, read_encrypted
from cookieguard.errors import CookieError
from cookieguard.signed import read_signed

logger = logging.getLogger(__name__)


def signed_cookie(name: str) -> Callable[[Request], Optional[bytes]]:
    """
    Build a FastAPI dependency returning the verified value of a signed cookie.

    Missing or tampered cookies yield None (fail closed). A missing secret is
    a deployment error and propagates.
    """

    def dependency(request: Request) -> Optional[bytes]:
        cfg = load_cookie_config()
        try:
            return read_signed(request, name, cfg.secret_key)
        except CookieError as e:
            logger.debug("Rejected signed cookie %s: %s", name, type(e).__name__)
            return None

    return dependency


def encrypted_cookie(name: str) -> Callable[[Request], Optional[EncryptedValue]]:
    """
    Build a FastAPI dependency returning a fully valid encrypted cookie.

    A cookie that decrypts but carries a non-integer identity is treated like
    any other invalid cookie here; call `read_encrypted` directly to see it.
    """

    def dependency(request: Request) -> Optional[EncryptedValue]:
        cfg = load_cookie_config()
        try:
            result = read_encrypted(request, name, cfg.secret_key)
        except CookieError as e:
            logger.debug("Rejected encrypted cookie %s: %s", name, type(e).__name__)
            return None
        if not result.ok:
            logger.debug("Rejected encrypted cookie %s: %s", name, type(result.error).__name__)
            return None
        return result

    return dependency
