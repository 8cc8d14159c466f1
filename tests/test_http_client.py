"""
Tests for the single-attempt HTTP client.
"""

import pytest

from airbnb_extract.http_client import FetchError, FetchResult, HttpClient


def test_get_returns_status_and_body(make_session, make_http):
    session = make_session({"/rooms/": (503, "busy")})

    res = make_http(session).get("HTTPS://WWW.AIRBNB.COM/rooms/1#photos")

    assert res == FetchResult(
        url="https://www.airbnb.com/rooms/1", status_code=503, body=b"busy"
    )
    assert not res.ok
    assert res.text == "busy"
    assert session.calls[0]["timeout"] == 5


def test_get_merges_default_and_call_headers(make_session):
    session = make_session({"/": (200, "")})
    http = HttpClient(session, headers={"User-Agent": "a", "Accept-Language": "en"})

    http.get("https://www.airbnb.com/", headers={"User-Agent": "b"}, timeout_s=2)

    assert session.calls[0]["headers"] == {"User-Agent": "b", "Accept-Language": "en"}
    assert session.calls[0]["timeout"] == 2


def test_network_errors_raise_fetch_error(make_session, make_http, timeout_error):
    session = make_session({"/": timeout_error})

    with pytest.raises(FetchError) as exc_info:
        make_http(session).get("https://www.airbnb.com/robots.txt")

    assert exc_info.value.url == "https://www.airbnb.com/robots.txt"
    assert exc_info.value.cause is timeout_error
