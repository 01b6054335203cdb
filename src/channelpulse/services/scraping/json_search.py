"""
Order-stable structural search over parsed JSON trees.

``ytInitialData`` layouts shift between page types and over time, so
fields are located by key name or by object shape rather than by a fixed
path. The traversal is an explicit-stack, pre-order depth-first walk that
visits each container at most once and can be abandoned early.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Any, Optional, Union

JsonValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]

ABOUT_META_KEY = "viewCountText"
ABOUT_META_COMPANION_KEYS: frozenset[str] = frozenset(
    {"joinedDateText", "country", "canonicalChannelUrl"}
)


class JsonKind(str, Enum):
    """Tag for each JSON value variant."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"


def json_kind(value: JsonValue) -> JsonKind:
    """
    Classify a parsed JSON value.

    Raises
    ------
    TypeError
        If ``value`` is not something ``json.loads`` can produce.
    """
    if isinstance(value, dict):
        return JsonKind.OBJECT
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, str):
        return JsonKind.STRING
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if value is None:
        return JsonKind.NULL
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _children(node: JsonValue) -> list[JsonValue]:
    kind = json_kind(node)
    if kind is JsonKind.OBJECT:
        return list(node.values())  # type: ignore[union-attr]
    if kind is JsonKind.ARRAY:
        return list(node)  # type: ignore[arg-type]
    return []


def walk(value: JsonValue) -> Iterator[dict[str, Any] | list[Any]]:
    """
    Yield every object and array in ``value`` in pre-order.

    Children are visited in their natural order (insertion order for
    objects, index order for arrays). A container reachable through more
    than one path is yielded once. Stop iterating to end the search.
    """
    stack: list[JsonValue] = [value]
    seen: set[int] = set()

    while stack:
        node = stack.pop()
        if json_kind(node) not in (JsonKind.OBJECT, JsonKind.ARRAY):
            continue
        if id(node) in seen:
            continue
        seen.add(id(node))

        yield node  # type: ignore[misc]

        stack.extend(reversed(_children(node)))


def find_by_key(value: JsonValue, key: str) -> Optional[JsonValue]:
    """
    Return the first non-null value stored under ``key`` at any depth.

    An object's own keys are checked before any of its descendants, so a
    shallower match in an earlier branch always wins.

    Examples
    --------
    >>> find_by_key({"a": {"k": 1}, "k": 2}, "k")
    2
    >>> find_by_key([{"x": {"k": "deep"}}, {"k": "later"}], "k")
    'deep'
    """
    for node in walk(value):
        if isinstance(node, dict):
            found = node.get(key)
            if found is not None:
                return found
    return None


def is_about_meta(node: dict[str, Any]) -> bool:
    """True if ``node`` looks like the channel "about" metadata block."""
    return ABOUT_META_KEY in node and not ABOUT_META_COMPANION_KEYS.isdisjoint(node)


def find_about_meta(value: JsonValue) -> Optional[dict[str, Any]]:
    """
    Return the first object shaped like the channel "about" metadata.

    The block is recognised by carrying ``viewCountText`` together with
    at least one of ``joinedDateText``, ``country`` or
    ``canonicalChannelUrl``; other renderers also use ``viewCountText``.
    """
    for node in walk(value):
        if isinstance(node, dict) and is_about_meta(node):
            return node
    return None
