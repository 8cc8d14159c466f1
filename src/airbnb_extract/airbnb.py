from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any

import requests

from .convert.html_to_md import html_to_markdown
from .embedded import (
    DATA_ISLAND_SELECTOR,
    EmbeddedJsonError,
    EmbeddedJsonNotFound,
    dig,
    extract_embedded_json,
)
from .http_client import FetchError, FetchResult, HttpClient
from .robots import RobotsPolicy
from .schemas import LISTING_SECTION_SCHEMAS, PAGINATION_SCHEMA, SEARCH_RESULT_SCHEMA
from .transform import flatten, prune, select_by_schema
from .urls import (
    BASE_URL,
    StayParams,
    build_listing_url,
    build_search_url,
    listing_link,
    path_with_query,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# The page has shipped its client data under both names.
_CLIENT_DATA_KEYS = ("niobeClientData", "niobeMinimalClientData")


@dataclass
class ClientConfig:
    base_url: str = BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US,en;q=0.9"
    timeout_s: float = 30
    robots_timeout_s: float = 10
    ignore_robots_txt: bool = False


def tool_result(payload: dict[str, Any], *, is_error: bool = False) -> dict[str, Any]:
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(payload, indent=2, ensure_ascii=False),
            }
        ],
        "isError": is_error,
    }


def decode_listing_id(encoded: str) -> str:
    """Turn ``base64("DemandStayListing:<id>")`` into ``<id>``.

    Values that are not in that form are returned unchanged.
    """

    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return encoded
    _, sep, listing_id = decoded.partition(":")
    return listing_id if sep and listing_id else encoded


def _client_data(data: Any) -> Any:
    for key in _CLIENT_DATA_KEYS:
        found = dig(data, key, 0, 1)
        if found is not None:
            return found
    return None


class AirbnbClient:
    def __init__(
        self,
        *,
        http: HttpClient,
        config: ClientConfig,
        policy: RobotsPolicy | None = None,
    ) -> None:
        self.http = http
        self.cfg = config
        self.policy = policy or RobotsPolicy(
            http,
            config.base_url,
            ignore_all=config.ignore_robots_txt,
            timeout_s=config.robots_timeout_s,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        session: requests.Session | None = None,
    ) -> AirbnbClient:
        http = HttpClient(
            session or requests.Session(),
            timeout_s=config.timeout_s,
            headers={
                "User-Agent": config.user_agent,
                "Accept-Language": config.accept_language,
            },
        )
        return cls(http=http, config=config)

    def _denied(self, url: str, ignore_robots_txt: bool) -> bool:
        if ignore_robots_txt:
            return False
        self.policy.ensure_loaded()
        if self.policy.is_allowed(path_with_query(url), self.cfg.user_agent):
            return False
        logger.warning("robots.txt disallows %s", url)
        return True

    def _fetch_data_island(self, url: str) -> Any:
        res: FetchResult = self.http.get(url)
        if not res.ok:
            raise FetchError(url, RuntimeError(f"HTTP {res.status_code}"))
        return extract_embedded_json(res.text, DATA_ISLAND_SELECTOR)

    def _disallowed_result(self, url_key: str, url: str) -> dict[str, Any]:
        return tool_result(
            {
                "error": (
                    "This path is disallowed by the site's robots.txt for this "
                    "user agent. Pass ignore_robots_txt to override."
                ),
                url_key: url,
            },
            is_error=True,
        )

    def search(
        self,
        location: str,
        stay: StayParams | None = None,
        *,
        place_id: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
        room_type: str | None = None,
        cursor: str | None = None,
        ignore_robots_txt: bool = False,
    ) -> dict[str, Any]:
        search_url = build_search_url(
            location,
            stay,
            place_id=place_id,
            min_price=min_price,
            max_price=max_price,
            room_type=room_type,
            cursor=cursor,
            base_url=self.cfg.base_url,
        )
        if self._denied(search_url, ignore_robots_txt):
            return self._disallowed_result("searchUrl", search_url)

        try:
            data = self._fetch_data_island(search_url)
        except (FetchError, EmbeddedJsonNotFound, EmbeddedJsonError) as e:
            return tool_result(
                {"error": str(e), "searchUrl": search_url}, is_error=True
            )

        payload: dict[str, Any] = {"searchUrl": search_url}
        payload.update(self._search_results(data))
        return tool_result(payload)

    def _search_results(self, data: Any) -> dict[str, Any]:
        results = dig(
            _client_data(data), "data", "presentation", "staysSearch", "results"
        )
        if not isinstance(results, dict):
            logger.warning("Search page carried no staysSearch results")
            return {"searchResults": []}

        prune(results)
        listings: list[dict[str, Any]] = []
        for raw in results.get("searchResults") or []:
            picked = flatten(select_by_schema(raw, SEARCH_RESULT_SCHEMA))
            if not isinstance(picked, dict):
                continue
            encoded = dig(picked, "demandStayListing", "id")
            entry: dict[str, Any] = {}
            if isinstance(encoded, str):
                listing_id = decode_listing_id(encoded)
                entry["id"] = listing_id
                entry["url"] = listing_link(listing_id, base_url=self.cfg.base_url)
            entry.update(picked)
            listings.append(entry)

        logger.debug("Extracted %d search results", len(listings))
        out: dict[str, Any] = {"searchResults": listings}
        pagination = results.get("paginationInfo")
        if isinstance(pagination, dict):
            out["paginationInfo"] = select_by_schema(pagination, PAGINATION_SCHEMA)
        return out

    def listing_details(
        self,
        listing_id: str,
        stay: StayParams | None = None,
        *,
        ignore_robots_txt: bool = False,
    ) -> dict[str, Any]:
        listing_url = build_listing_url(listing_id, stay, base_url=self.cfg.base_url)
        if self._denied(listing_url, ignore_robots_txt):
            return self._disallowed_result("listingUrl", listing_url)

        try:
            data = self._fetch_data_island(listing_url)
        except (FetchError, EmbeddedJsonNotFound, EmbeddedJsonError) as e:
            return tool_result(
                {"error": str(e), "listingUrl": listing_url}, is_error=True
            )

        return tool_result(
            {"listingUrl": listing_url, "details": self._listing_sections(data)}
        )

    def _listing_sections(self, data: Any) -> list[dict[str, Any]]:
        sections = dig(
            _client_data(data),
            "data",
            "presentation",
            "stayProductDetailPage",
            "sections",
            "sections",
        )
        if not isinstance(sections, list):
            logger.warning("Listing page carried no stayProductDetailPage sections")
            return []

        details: list[dict[str, Any]] = []
        for section in sections:
            if not isinstance(section, dict):
                continue
            schema = LISTING_SECTION_SCHEMAS.get(section.get("sectionId") or "")
            if schema is None:
                continue
            prune(section)
            picked = select_by_schema(section.get("section"), schema)
            if not isinstance(picked, dict):
                continue

            html_text = dig(picked, "htmlDescription", "htmlText")
            if isinstance(html_text, str):
                del picked["htmlDescription"]
                picked["description"] = html_to_markdown(html_text)

            entry: dict[str, Any] = {"id": section["sectionId"]}
            entry.update(flatten(picked))
            details.append(entry)

        logger.debug("Extracted %d listing sections", len(details))
        return details
