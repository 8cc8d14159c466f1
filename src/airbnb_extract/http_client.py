from __future__ import annotations

import logging
from dataclasses import dataclass

import requests
from requests import exceptions as req_exc

from .urls import normalize_url

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Network failure or timeout while fetching a URL."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Failed to fetch {url}: {cause}")
        self.url = url
        self.cause = cause


@dataclass(frozen=True)
class FetchResult:
    url: str
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpClient:
    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 30,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._headers = dict(headers or {})

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> FetchResult:
        """Fetch ``url`` once; non-2xx responses are returned, not raised."""

        normalized = normalize_url(url)
        merged = {**self._headers, **(headers or {})}
        timeout = self._timeout_s if timeout_s is None else timeout_s

        try:
            resp = self._session.get(normalized, timeout=timeout, headers=merged)
        except req_exc.RequestException as e:
            raise FetchError(normalized, e) from e

        logger.debug("GET %s -> %s", normalized, resp.status_code)
        # Callers may want to inspect bodies of error pages.
        return FetchResult(
            url=normalized,
            status_code=int(resp.status_code),
            body=resp.content,
        )
