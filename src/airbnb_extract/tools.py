from __future__ import annotations

from typing import Any, Callable

from .airbnb import AirbnbClient, tool_result
from .urls import StayParams

_TRUTHY = {"1", "true", "yes", "on"}

_STAY_PROPERTIES: dict[str, Any] = {
    "checkin": {"type": "string", "description": "Check-in date (YYYY-MM-DD)"},
    "checkout": {"type": "string", "description": "Check-out date (YYYY-MM-DD)"},
    "adults": {"type": "number", "description": "Number of adults"},
    "children": {"type": "number", "description": "Number of children"},
    "infants": {"type": "number", "description": "Number of infants"},
    "pets": {"type": "number", "description": "Number of pets"},
    "ignoreRobotsText": {
        "type": "boolean",
        "description": "Ignore robots.txt rules for this request",
    },
}

AIRBNB_SEARCH_TOOL: dict[str, Any] = {
    "name": "airbnb_search",
    "description": (
        "Search for Airbnb listings with various filters and pagination. "
        "Provide direct links to the user"
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "location": {
                "type": "string",
                "description": "Location to search for (city, state, etc.)",
            },
            "placeId": {
                "type": "string",
                "description": "Google Maps Place ID (overrides the location)",
            },
            **_STAY_PROPERTIES,
            "minPrice": {"type": "number", "description": "Minimum price per night"},
            "maxPrice": {"type": "number", "description": "Maximum price per night"},
            "roomType": {
                "type": "string",
                "description": "Type of place (entire home, private room, etc.)",
            },
            "cursor": {
                "type": "string",
                "description": "Base64-encoded string used for pagination",
            },
        },
        "required": ["location"],
    },
}

AIRBNB_LISTING_DETAILS_TOOL: dict[str, Any] = {
    "name": "airbnb_listing_details",
    "description": (
        "Get detailed information about a specific Airbnb listing. "
        "Provide direct links to the user"
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "id": {"type": "string", "description": "The Airbnb listing ID"},
            **_STAY_PROPERTIES,
        },
        "required": ["id"],
    },
}

AIRBNB_TOOLS: tuple[dict[str, Any], ...] = (
    AIRBNB_SEARCH_TOOL,
    AIRBNB_LISTING_DETAILS_TOOL,
)


class UnknownToolError(KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


def _int_arg(args: dict[str, Any], key: str, default: int) -> int:
    value = args.get(key)
    if value is None or value == "":
        return default
    return int(value)


def _optional_int(args: dict[str, Any], key: str) -> int | None:
    value = args.get(key)
    if value is None or value == "":
        return None
    return int(value)


def _stay_params(args: dict[str, Any]) -> StayParams:
    return StayParams(
        checkin=args.get("checkin") or None,
        checkout=args.get("checkout") or None,
        adults=_int_arg(args, "adults", 1),
        children=_int_arg(args, "children", 0),
        infants=_int_arg(args, "infants", 0),
        pets=_int_arg(args, "pets", 0),
    )


def _flag(args: dict[str, Any], key: str) -> bool:
    # Only an explicit true enables a flag; "false", 0 and junk do not.
    value = args.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


ToolCall = Callable[[AirbnbClient], dict[str, Any]]


def _parse_search(args: dict[str, Any]) -> ToolCall:
    location = str(args["location"])
    stay = _stay_params(args)
    kwargs: dict[str, Any] = {
        "place_id": args.get("placeId") or None,
        "min_price": _optional_int(args, "minPrice"),
        "max_price": _optional_int(args, "maxPrice"),
        "room_type": args.get("roomType") or None,
        "cursor": args.get("cursor") or None,
        "ignore_robots_txt": _flag(args, "ignoreRobotsText"),
    }
    return lambda client: client.search(location, stay, **kwargs)


def _parse_listing_details(args: dict[str, Any]) -> ToolCall:
    listing_id = str(args["id"])
    stay = _stay_params(args)
    ignore_robots_txt = _flag(args, "ignoreRobotsText")
    return lambda client: client.listing_details(
        listing_id, stay, ignore_robots_txt=ignore_robots_txt
    )


_PARSERS: dict[str, Callable[[dict[str, Any]], ToolCall]] = {
    AIRBNB_SEARCH_TOOL["name"]: _parse_search,
    AIRBNB_LISTING_DETAILS_TOOL["name"]: _parse_listing_details,
}


def call_tool(
    client: AirbnbClient,
    name: str,
    arguments: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Route a tool call to the client and return its tool result envelope.

    Bad arguments become error results; failures inside the client propagate.
    """

    parse = _PARSERS.get(name)
    if parse is None:
        raise UnknownToolError(name)
    try:
        invoke = parse(dict(arguments or {}))
    except KeyError as e:
        return tool_result({"error": f"Missing argument: {e.args[0]}"}, is_error=True)
    except (TypeError, ValueError) as e:
        return tool_result({"error": f"Invalid argument: {e}"}, is_error=True)
    return invoke(client)
