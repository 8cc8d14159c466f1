from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import ParseResult, quote, urlencode, urlparse, urlunparse

BASE_URL = "https://www.airbnb.com"


def normalize_url(raw_url: str) -> str:
    """Normalize a URL before fetching.

    - Lowercases scheme + hostname.
    - Strips fragments.
    """

    parsed: ParseResult = urlparse(raw_url)
    parsed = parsed._replace(
        scheme=(parsed.scheme or "").lower(),
        netloc=(parsed.netloc or "").lower(),
        fragment="",
    )
    return urlunparse(parsed)


def path_with_query(url: str) -> str:
    parsed = urlparse(url)
    path = parsed.path or "/"
    if parsed.query:
        return f"{path}?{parsed.query}"
    return path


@dataclass(frozen=True)
class StayParams:
    """Dates and party size shared by search and listing requests."""

    checkin: str | None = None
    checkout: str | None = None
    adults: int = 1
    children: int = 0
    infants: int = 0
    pets: int = 0

    def query_pairs(self) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        if self.checkin:
            pairs.append(("checkin", self.checkin))
        if self.checkout:
            pairs.append(("checkout", self.checkout))

        adults = int(self.adults)
        children = int(self.children)
        if adults + children > 0:
            pairs.append(("adults", str(adults)))
            pairs.append(("children", str(children)))
            pairs.append(("infants", str(int(self.infants))))
            pairs.append(("pets", str(int(self.pets))))
        return pairs


def _room_type_param(room_type: str) -> str:
    return re.sub(r"\s+", "_", room_type.strip().lower())


def build_search_url(
    location: str,
    stay: StayParams | None = None,
    *,
    place_id: str | None = None,
    min_price: int | None = None,
    max_price: int | None = None,
    room_type: str | None = None,
    cursor: str | None = None,
    base_url: str = BASE_URL,
) -> str:
    pairs: list[tuple[str, str]] = []
    if place_id:
        pairs.append(("place_id", place_id))
    pairs.extend((stay or StayParams()).query_pairs())
    if min_price:
        pairs.append(("price_min", str(min_price)))
    if max_price:
        pairs.append(("price_max", str(max_price)))
    if room_type:
        pairs.append(("room_types[]", _room_type_param(room_type)))
    if cursor:
        pairs.append(("cursor", cursor))

    url = f"{base_url.rstrip('/')}/s/{quote(location, safe='')}/homes"
    if pairs:
        url += "?" + urlencode(pairs)
    return url


def listing_link(listing_id: str, *, base_url: str = BASE_URL) -> str:
    """Bare /rooms/<id> link, without dates or guest counts."""

    return f"{base_url.rstrip('/')}/rooms/{quote(str(listing_id), safe='')}"


def build_listing_url(
    listing_id: str,
    stay: StayParams | None = None,
    *,
    base_url: str = BASE_URL,
) -> str:
    url = listing_link(listing_id, base_url=base_url)
    pairs = (stay or StayParams()).query_pairs()
    if pairs:
        url += "?" + urlencode(pairs)
    return url
