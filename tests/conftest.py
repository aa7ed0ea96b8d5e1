"""
Pytest config.

Pins the repo root on sys.path so `import cookieguard` works even when a
global `pytest` entrypoint is used without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, Iterator

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

from starlette.requests import Request  # noqa: E402
from starlette.responses import Response  # noqa: E402

from cookieguard.config import load_cookie_config  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_cookie_config() -> Iterator[None]:
    """Env-derived config is cached per process; tests set env vars freely."""
    load_cookie_config.cache_clear()
    yield
    load_cookie_config.cache_clear()


@pytest.fixture
def secret() -> bytes:
    return bytes(32)


def build_request(cookies: Dict[str, str]) -> Request:
    header = "; ".join(f"{k}={v}" for k, v in cookies.items())
    headers = [(b"cookie", header.encode("latin-1"))] if cookies else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def set_cookie_values(response: Response) -> Dict[str, str]:
    """Map cookie name -> raw value from the response's Set-Cookie headers."""
    out: Dict[str, str] = {}
    for header in response.headers.getlist("set-cookie"):
        pair = header.split(";", 1)[0]
        name, _, value = pair.partition("=")
        out[name] = value
    return out


@pytest.fixture
def make_request() -> Callable[[Dict[str, str]], Request]:
    return build_request


@pytest.fixture
def carry() -> Callable[[Response], Request]:
    """Turn a response's Set-Cookie headers into the browser's next request."""

    def _carry(response: Response) -> Request:
        return build_request(set_cookie_values(response))

    return _carry
