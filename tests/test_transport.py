from __future__ import annotations

import base64

import pytest
from starlette.responses import Response

from cookieguard.cookie import Cookie
from cookieguard.errors import CookieDecodeError, CookieError, CookieNotFound, CookieTooLarge
from cookieguard.transport import MAX_COOKIE_SIZE, decode_value, encode_value, read, write


def test_write_encodes_value_and_sets_header() -> None:
    resp = Response()
    header = write(resp, Cookie(name="prefs", value="dark mode", path="/", http_only=True))
    encoded = base64.urlsafe_b64encode(b"dark mode").decode("ascii")
    assert header == f"prefs={encoded}; Path=/; HttpOnly"
    assert resp.headers.getlist("set-cookie") == [header]


def test_write_leaves_caller_cookie_untouched() -> None:
    c = Cookie(name="prefs", value="x")
    write(Response(), c)
    assert c.value == "x"


def test_roundtrip_arbitrary_bytes(carry) -> None:
    value = bytes(range(256))
    resp = Response()
    write(resp, Cookie(name="blob", value=value))
    assert read(carry(resp), "blob") == value


def test_write_rejects_oversized_cookie() -> None:
    resp = Response()
    with pytest.raises(CookieTooLarge) as exc:
        write(resp, Cookie(name="big", value="x" * 4000))
    assert exc.value.name == "big"
    assert resp.headers.getlist("set-cookie") == []


def test_size_limit_counts_attributes() -> None:
    # 3069 bytes -> 4092 chars of base64; "n=" pushes it to 4094.
    fits = Cookie(name="n", value=b"x" * 3069)
    assert len(write(Response(), fits)) <= MAX_COOKIE_SIZE
    with pytest.raises(CookieTooLarge):
        write(Response(), Cookie(name="n", value=b"x" * 3069, path="/somewhere"))


def test_read_missing_cookie(make_request) -> None:
    with pytest.raises(CookieNotFound) as exc:
        read(make_request({}), "sid")
    assert exc.value.name == "sid"


@pytest.mark.parametrize("raw", ["YWI", "YW+j", "YW/j", "Y!Jj", "YWJj=="])
def test_read_rejects_invalid_base64(make_request, raw: str) -> None:
    with pytest.raises(CookieDecodeError):
        read(make_request({"sid": raw}), "sid")


def test_decode_value_requires_padding() -> None:
    assert decode_value(encode_value(b"ab")) == b"ab"
    assert encode_value(b"ab") == "YWI="
    with pytest.raises(ValueError):
        decode_value("YWI")


def test_empty_value_roundtrip(carry) -> None:
    resp = Response()
    write(resp, Cookie(name="empty", value=""))
    assert read(carry(resp), "empty") == b""


def test_decode_value_rejects_trailing_newline() -> None:
    with pytest.raises(ValueError):
        decode_value("YWJj\n")


def test_write_rejects_invalid_domain_without_touching_response() -> None:
    resp = Response()
    with pytest.raises(CookieError):
        write(resp, Cookie(name="sid", value="v", domain="evil.com; Secure=no"))
    with pytest.raises(CookieError):
        write(resp, Cookie(name="sid", value="v", domain="例.com"))
    assert resp.headers.getlist("set-cookie") == []


def test_write_rejects_name_with_newline() -> None:
    resp = Response()
    with pytest.raises(CookieError):
        write(resp, Cookie(name="sid\n", value="v"))
    assert resp.headers.getlist("set-cookie") == []
