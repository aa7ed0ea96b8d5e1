"""
Cookie value object and its canonical `Set-Cookie` serialization.

The serialized form is what the browser receives, so it is also what the
size ceiling in `cookieguard.transport` is measured against. See:
https://developer.mozilla.org/en-US/docs/Web/HTTP/Cookies
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from enum import Enum
from typing import List, Optional, Union

from cookieguard.errors import CookieError

# RFC 6265 token characters.
_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# One DNS label: letters, digits, inner hyphens.
_DOMAIN_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
_IPV4_RE = re.compile(r"[0-9]{1,3}(?:\.[0-9]{1,3}){3}")
# Browsers reject Expires before the start of the Gregorian calendar.
_MIN_EXPIRES_YEAR = 1601


class SameSite(str, Enum):
    DEFAULT = ""
    LAX = "Lax"
    STRICT = "Strict"
    NONE = "None"

    @classmethod
    def parse(cls, value: str | None) -> "SameSite":
        v = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == v:
                return member
        return cls.DEFAULT


@dataclass
class Cookie:
    name: str
    value: Union[str, bytes] = ""
    path: str = ""  # browser defaults to the request path
    domain: str = ""  # browser defaults to the request host

    expires: Optional[datetime] = None
    raw_expires: str = ""

    # max_age == 0: no Max-Age attribute.
    # max_age < 0: delete now ("Max-Age=0").
    # max_age > 0: lifetime in seconds.
    max_age: int = 0
    secure: bool = False  # only sent over HTTPS or to localhost
    http_only: bool = False  # hidden from JavaScript
    same_site: SameSite = SameSite.DEFAULT

    raw: str = ""
    unparsed: List[str] = field(default_factory=list)

    def value_bytes(self) -> bytes:
        if isinstance(self.value, bytes):
            return self.value
        return self.value.encode("utf-8")

    def serialize(self) -> str:
        """Render the cookie as a `Set-Cookie` header value."""
        if not _NAME_RE.fullmatch(self.name or ""):
            raise CookieError("invalid cookie name", name=self.name)

        value = self.value.decode("latin-1") if isinstance(self.value, bytes) else self.value
        value = _sanitize(value, forbidden='";\\')
        if " " in value or "," in value:
            value = f'"{value}"'
        parts = [f"{self.name}={value}"]

        if self.path:
            parts.append(f"Path={_sanitize(self.path, forbidden=';')}")
        if self.domain:
            domain = self.domain.lstrip(".")
            if not _valid_domain(domain):
                raise CookieError("invalid cookie domain", name=self.name)
            parts.append(f"Domain={domain}")
        if self.expires is not None:
            if self.expires.year >= _MIN_EXPIRES_YEAR:
                parts.append(f"Expires={_http_date(self.expires)}")
        elif self.raw_expires:
            parts.append(f"Expires={_sanitize(self.raw_expires, forbidden=';')}")
        if self.max_age > 0:
            parts.append(f"Max-Age={int(self.max_age)}")
        elif self.max_age < 0:
            parts.append("Max-Age=0")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site is not SameSite.DEFAULT:
            parts.append(f"SameSite={self.same_site.value}")
        for attr in self.unparsed:
            attr = _sanitize(attr, forbidden=";").strip()
            if attr:
                parts.append(attr)
        return "; ".join(parts)

    def __str__(self) -> str:
        return self.serialize()


def _sanitize(value: str, *, forbidden: str) -> str:
    # Control characters and separators would split or corrupt the header.
    return "".join(ch for ch in value if 0x20 <= ord(ch) < 0x7F and ch not in forbidden)


def _http_date(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def _valid_domain(domain: str) -> bool:
    """ASCII host name or dotted IPv4 address, as accepted in a Domain attribute."""
    if not domain or len(domain) > 253:
        return False
    if _IPV4_RE.fullmatch(domain):
        return all(int(octet) <= 255 for octet in domain.split("."))
    return all(_DOMAIN_LABEL_RE.fullmatch(label) for label in domain.split("."))
