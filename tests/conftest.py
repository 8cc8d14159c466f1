from __future__ import annotations

import json
from typing import Any, Callable

import pytest
from requests import exceptions as req_exc

from airbnb_extract.http_client import HttpClient


class FakeResponse:
    def __init__(self, url: str, status_code: int = 200, body: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.headers = {"Content-Type": "text/html; charset=utf-8"}
        self.content = body.encode("utf-8")


class FakeSession:
    """Stands in for requests.Session; routes by URL path prefix."""

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, timeout=None, headers=None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout, "headers": headers})
        path = url.split("://", 1)[-1]
        path = "/" + path.split("/", 1)[1] if "/" in path else "/"
        for prefix, route in self.routes.items():
            if path.startswith(prefix):
                if isinstance(route, Exception):
                    raise route
                status, body = route
                return FakeResponse(url, status, body)
        return FakeResponse(url, 404, "not found")

    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]


def page_with_data_island(data: Any) -> str:
    payload = json.dumps(data).replace("</", "<\\/")
    return (
        "<!doctype html><html><head><title>Airbnb</title></head><body>"
        f'<script id="data-deferred-state-0" type="application/json">{payload}'
        "</script></body></html>"
    )


@pytest.fixture
def make_session() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def make_http() -> Callable[[FakeSession], HttpClient]:
    def _make(session: FakeSession) -> HttpClient:
        return HttpClient(session, timeout_s=5)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def timeout_error() -> Exception:
    return req_exc.ConnectTimeout("timed out")
