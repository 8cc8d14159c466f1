from __future__ import annotations

import json
from typing import Any, Final

from bs4 import BeautifulSoup

DATA_ISLAND_SELECTOR: Final = "#data-deferred-state-0"


class EmbeddedJsonNotFound(LookupError):
    """No element in the page matches the data island selector."""


class EmbeddedJsonError(ValueError):
    """The data island element exists but does not hold valid JSON."""


def extract_embedded_json(html: str, selector: str = DATA_ISLAND_SELECTOR) -> Any:
    """Parse the text of the first element matching ``selector`` as JSON.

    A present-but-empty element is malformed, not missing: it raises
    ``EmbeddedJsonError``. Only a missing element raises
    ``EmbeddedJsonNotFound``.
    """

    soup = BeautifulSoup(html, "html.parser")
    node = soup.select_one(selector)
    if node is None:
        raise EmbeddedJsonNotFound(f"No element matches {selector!r}")

    text = node.string if node.string is not None else node.get_text()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise EmbeddedJsonError(f"Invalid JSON in {selector!r}: {e}") from e


def dig(value: Any, *path: str | int) -> Any:
    """Walk ``path`` through nested dicts/lists; ``None`` when any step is missing."""

    for step in path:
        if isinstance(step, int):
            if not isinstance(value, list) or not -len(value) <= step < len(value):
                return None
            value = value[step]
        else:
            if not isinstance(value, dict) or step not in value:
                return None
            value = value[step]
    return value
