from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .airbnb import AirbnbClient, ClientConfig
from .tools import AIRBNB_TOOLS, call_tool
from .urls import BASE_URL

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    value = os.getenv(name)
    return bool(value and value.strip().lower() in _TRUTHY)


def _add_stay_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--checkin", help="Check-in date (YYYY-MM-DD)")
    p.add_argument("--checkout", help="Check-out date (YYYY-MM-DD)")
    p.add_argument("--adults", type=int, default=1)
    p.add_argument("--children", type=int, default=0)
    p.add_argument("--infants", type=int, default=0)
    p.add_argument("--pets", type=int, default=0)


def _stay_arguments(args: argparse.Namespace) -> dict:
    return {
        "checkin": args.checkin,
        "checkout": args.checkout,
        "adults": args.adults,
        "children": args.children,
        "infants": args.infants,
        "pets": args.pets,
    }


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="airbnb-extract")
    parser.add_argument(
        "--ignore-robots-txt",
        action="store_true",
        help=(
            "Skip robots.txt checks for every request "
            "(also enabled by IGNORE_ROBOTS_TXT=true)"
        ),
    )
    parser.add_argument("--timeout", type=float, default=30)
    parser.add_argument("--base-url", default=BASE_URL)
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    search_p = sub.add_parser("search", help="Search listings for a location")
    search_p.add_argument("location")
    search_p.add_argument("--place-id", default=None)
    _add_stay_args(search_p)
    search_p.add_argument("--min-price", type=int, default=None)
    search_p.add_argument("--max-price", type=int, default=None)
    search_p.add_argument("--room-type", default=None)
    search_p.add_argument(
        "--cursor",
        default=None,
        help="Pagination cursor from a previous search's paginationInfo",
    )

    listing_p = sub.add_parser("listing", help="Fetch details of one listing")
    listing_p.add_argument("id")
    _add_stay_args(listing_p)

    sub.add_parser("tools", help="Print the tool definitions as JSON")

    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose))

    if args.cmd == "tools":
        print(json.dumps({"tools": list(AIRBNB_TOOLS)}, indent=2))
        return 0

    config = ClientConfig(
        base_url=args.base_url,
        timeout_s=float(args.timeout),
        ignore_robots_txt=bool(args.ignore_robots_txt)
        or _env_flag("IGNORE_ROBOTS_TXT"),
    )
    client = AirbnbClient.from_config(config)

    if args.cmd == "search":
        arguments = {
            "location": args.location,
            "placeId": args.place_id,
            "minPrice": args.min_price,
            "maxPrice": args.max_price,
            "roomType": args.room_type,
            "cursor": args.cursor,
            **_stay_arguments(args),
        }
        result = call_tool(client, "airbnb_search", arguments)
    elif args.cmd == "listing":
        arguments = {"id": args.id, **_stay_arguments(args)}
        result = call_tool(client, "airbnb_listing_details", arguments)
    else:
        return 2

    text = result["content"][0]["text"]
    if result["isError"]:
        print(text, file=sys.stderr)
        return 1
    print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
