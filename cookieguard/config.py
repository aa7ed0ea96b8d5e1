from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

from cookieguard.cookie import Cookie, SameSite
from cookieguard.secret import decode_secret


@dataclass(frozen=True)
class CookieConfig:
    secret: Optional[str]  # url-safe base64 of the 32-byte key
    secure: bool
    same_site: SameSite
    max_age_seconds: int
    path: str
    domain: Optional[str]

    @property
    def secret_key(self) -> bytes:
        """Decoded secret key; raises SecretMissing when unset or malformed."""
        return decode_secret(self.secret or "")

    def cookie(self, name: str, value: Union[str, bytes] = "") -> Cookie:
        """Build a cookie carrying the configured default attributes."""
        return Cookie(
            name=name,
            value=value,
            path=self.path,
            domain=self.domain or "",
            max_age=self.max_age_seconds,
            secure=self.secure,
            http_only=True,
            same_site=self.same_site,
        )

    def clear_cookie(self, name: str) -> Cookie:
        return Cookie(
            name=name,
            path=self.path,
            domain=self.domain or "",
            max_age=-1,
            secure=self.secure,
            http_only=True,
            same_site=self.same_site,
        )


@lru_cache(maxsize=1)
def load_cookie_config() -> CookieConfig:
    """
    Load cookie configuration from environment variables.

    COOKIE_SECRET is only decoded when a codec actually needs it, so apps that
    use plain cookies can run without one.
    """
    public_base_url = (os.getenv("COOKIE_PUBLIC_BASE_URL", "") or "").strip() or None
    secure_env = (os.getenv("COOKIE_SECURE", "") or "").strip().lower()
    if secure_env in ("1", "true", "yes", "on"):
        secure = True
    elif secure_env in ("0", "false", "no", "off"):
        secure = False
    else:
        # Default: secure cookies when base URL is https; otherwise allow local dev.
        secure = True if (public_base_url or "").startswith("https://") else False

    same_site = SameSite.parse(os.getenv("COOKIE_SAMESITE", "") or "lax")
    if same_site is SameSite.DEFAULT:
        same_site = SameSite.LAX

    ttl = int(float((os.getenv("COOKIE_MAX_AGE_SECONDS", "") or "43200").strip() or "43200"))  # 12h default
    if ttl <= 60:
        ttl = 60

    return CookieConfig(
        secret=(os.getenv("COOKIE_SECRET", "") or "").strip() or None,
        secure=secure,
        same_site=same_site,
        max_age_seconds=ttl,
        path=(os.getenv("COOKIE_PATH", "") or "/").strip() or "/",
        domain=(os.getenv("COOKIE_DOMAIN", "") or "").strip() or None,
    )
