"""
Tests for tool definitions and call routing.
"""

import json

import pytest

from airbnb_extract.airbnb import AirbnbClient, ClientConfig
from airbnb_extract.tools import AIRBNB_TOOLS, UnknownToolError, call_tool
from conftest import page_with_data_island


def _client(session) -> AirbnbClient:
    return AirbnbClient.from_config(ClientConfig(), session=session)


def test_tool_definitions():
    names = [t["name"] for t in AIRBNB_TOOLS]

    assert names == ["airbnb_search", "airbnb_listing_details"]
    assert AIRBNB_TOOLS[0]["inputSchema"]["required"] == ["location"]
    assert AIRBNB_TOOLS[1]["inputSchema"]["required"] == ["id"]
    for tool in AIRBNB_TOOLS:
        assert "ignoreRobotsText" in tool["inputSchema"]["properties"]


def test_unknown_tool_raises(make_session):
    with pytest.raises(UnknownToolError, match="Unknown tool: nope"):
        call_tool(_client(make_session()), "nope", {})


def test_missing_required_argument_is_error_result(make_session):
    session = make_session()

    result = call_tool(_client(session), "airbnb_search", {})

    assert result["isError"] is True
    assert "location" in json.loads(result["content"][0]["text"])["error"]
    assert session.calls == []


def test_invalid_number_is_error_result(make_session):
    result = call_tool(
        _client(make_session()), "airbnb_listing_details", {"id": "1", "adults": "many"}
    )

    assert result["isError"] is True


def test_search_arguments_reach_the_url(make_session):
    session = make_session(
        {"/robots.txt": (404, ""), "/s/": (200, page_with_data_island({}))}
    )

    call_tool(
        _client(session),
        "airbnb_search",
        {
            "location": "Lisbon",
            "checkin": "2026-12-01",
            "adults": 2,
            "minPrice": 40,
            "roomType": "Private room",
            "cursor": "c1",
        },
    )

    url = session.urls()[-1]
    assert "/s/Lisbon/homes?" in url
    assert "checkin=2026-12-01" in url
    assert "adults=2" in url
    assert "price_min=40" in url
    assert "room_types%5B%5D=private_room" in url
    assert "cursor=c1" in url


def test_ignore_robots_text_argument(make_session):
    session = make_session(
        {
            "/robots.txt": (200, "User-agent: *\nDisallow: /rooms/\n"),
            "/rooms/": (200, page_with_data_island({})),
        }
    )
    client = _client(session)

    blocked = call_tool(client, "airbnb_listing_details", {"id": "9"})
    allowed = call_tool(
        client, "airbnb_listing_details", {"id": "9", "ignoreRobotsText": True}
    )

    assert blocked["isError"] is True
    assert allowed["isError"] is False


@pytest.mark.parametrize("flag", ["false", "False", "0", "", 0, 1, None, "nope"])
def test_ignore_robots_text_needs_explicit_true(make_session, flag):
    session = make_session(
        {
            "/robots.txt": (200, "User-agent: *\nDisallow: /rooms/\n"),
            "/rooms/": (200, page_with_data_island({})),
        }
    )

    result = call_tool(
        _client(session), "airbnb_listing_details", {"id": "9", "ignoreRobotsText": flag}
    )

    assert result["isError"] is True
    assert not any("/rooms/" in u for u in session.urls())


def test_ignore_robots_text_accepts_true_string(make_session):
    session = make_session(
        {
            "/robots.txt": (200, "User-agent: *\nDisallow: /rooms/\n"),
            "/rooms/": (200, page_with_data_island({})),
        }
    )

    result = call_tool(
        _client(session), "airbnb_listing_details", {"id": "9", "ignoreRobotsText": "true"}
    )

    assert result["isError"] is False


class _BrokenClient:
    def search(self, *args, **kwargs):
        raise KeyError("results")

    def listing_details(self, *args, **kwargs):
        raise ValueError("bad section")


def test_client_failures_are_not_reported_as_bad_arguments():
    """Only argument parsing is turned into error results."""
    with pytest.raises(KeyError):
        call_tool(_BrokenClient(), "airbnb_search", {"location": "Oslo"})
    with pytest.raises(ValueError, match="bad section"):
        call_tool(_BrokenClient(), "airbnb_listing_details", {"id": "1"})
