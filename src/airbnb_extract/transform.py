from __future__ import annotations

from typing import Any, Final, Mapping, Union

JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]

# A schema maps field names to KEEP (copy verbatim) or to a nested schema.
Schema = Mapping[str, Any]

KEEP: Final = True

METADATA_KEY: Final = "__typename"

FLATTEN_SEPARATOR: Final = ", "


def prune(value: JsonValue) -> None:
    """Drop falsy fields and ``__typename`` markers in place.

    Rules:
    - A dict key is removed when its value is falsy (``None``, ``""``, ``0``,
      ``False``, ``[]``, ``{}``) or when the key is ``__typename``.
    - Surviving dict and list values are recursed into; a dict left empty
      by that recursion is removed as well, so pruning is idempotent.
    - List elements are never removed, only the key holding an empty list.
    - Primitives are left untouched.
    """

    if isinstance(value, dict):
        for key in list(value.keys()):
            child = value[key]
            if not child or key == METADATA_KEY:
                del value[key]
            elif isinstance(child, (dict, list)):
                prune(child)
                # A container emptied by pruning is falsy too.
                if not child:
                    del value[key]
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, (dict, list)):
                prune(item)


def select_by_schema(value: JsonValue, schema: Schema) -> JsonValue:
    """Return a new tree holding only the fields named by ``schema``.

    Lists are mapped element-wise with the same schema. Keys missing from the
    input are skipped, and rules that are neither ``KEEP`` nor a nested
    mapping are ignored.
    """

    if isinstance(value, list):
        return [select_by_schema(item, schema) for item in value]
    if not isinstance(value, dict):
        return value

    result: dict[str, Any] = {}
    for key, rule in schema.items():
        if key not in value:
            continue
        if rule is KEEP:
            result[key] = value[key]
        elif isinstance(rule, Mapping):
            result[key] = select_by_schema(value[key], rule)
    return result


def _join_text(value: JsonValue) -> str:
    # Mirrors how the values read once serialized as JSON text.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def flatten(value: JsonValue, in_array: bool = False) -> JsonValue:
    """Collapse arrays (and objects inside arrays) into delimited strings.

    Top-level object shape is preserved; every list becomes a single string
    at its own position in the tree, joined with ``FLATTEN_SEPARATOR``.
    """

    if isinstance(value, list):
        parts = [flatten(item, True) for item in value]
        return FLATTEN_SEPARATOR.join(_join_text(p) for p in parts)

    if isinstance(value, dict):
        if in_array:
            parts = [flatten(v, True) for v in value.values()]
            return FLATTEN_SEPARATOR.join(_join_text(p) for p in parts)
        return {k: flatten(v, in_array) for k, v in value.items()}

    return value

