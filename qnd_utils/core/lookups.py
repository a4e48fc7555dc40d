"""Lookups: safe nested access, reverse mappings, query strings and small list searches.

Invariants:
    - No function raises on missing keys or empty input: sentinels (None / default) instead
    - Inputs are never mutated
    - reverse_mapping keeps the FIRST key for a duplicated value

Design Decisions:
    - json_get descends through mappings, sequences (numeric segments) and attributes,
      so the same dotted path works on dicts, lists and plain objects
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any
from urllib.parse import unquote_plus

logger = logging.getLogger(__name__)

# value types that can become keys of a reverse mapping
_MAPPABLE_TYPES = (str, int, float, bool)


# ─── Nested Access ───────────────────────────────────────────────

def json_get(obj: Any, key: str | int, default: Any = None) -> Any:
    """Resolve a key that may contain dots ("user.address.city") without raising.

    Returns default when obj is None or any segment along the path is missing.
    """
    if obj is None:
        return default

    segments = key.split(".") if isinstance(key, str) else [key]
    current = obj
    for segment in segments:
        current = _get_segment(current, segment)
        if current is None:
            return default
    return current


def _get_segment(current: Any, segment: str | int) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        index = _as_index(segment)
        if index is None or index >= len(current):
            return None
        return current[index]
    if isinstance(segment, str):
        return getattr(current, segment, None)
    return None


def _as_index(segment: str | int) -> int | None:
    if isinstance(segment, int):
        return segment if segment >= 0 else None
    return int(segment) if segment.isascii() and segment.isdigit() else None


# ─── Reverse Mappings ────────────────────────────────────────────

def reverse_mapping(mapping: Mapping, show_warning: bool = True) -> dict:
    """Map every value of a flat mapping back to its key.

    Only str, int, float and bool values are mapped; other values are skipped.
    """
    result: dict = {}
    for key, value in mapping.items():
        if not isinstance(value, _MAPPABLE_TYPES):
            if show_warning:
                logger.warning(
                    f"Reverse mapping of value of type {type(value).__name__} "
                    f"is not possible. Ignoring key {key!r}",
                )
            continue
        if value in result:
            if show_warning:
                logger.warning(
                    f"Duplicate value {value!r} in reverse mapping. Ignoring key {key!r}",
                )
            continue
        result[value] = key
    return result


def key_lookup(mapping: Mapping, lookup_value: Any, show_warning: bool = True) -> Any:
    """Find the key for a value: key_lookup(MAP, MAP["foo"]) == "foo"."""
    return reverse_mapping(mapping, show_warning).get(lookup_value)


# ─── Query Strings ───────────────────────────────────────────────

def get_query_string_params(query: str | None) -> dict[str, str]:
    """Parse "?foo=bar&abc=def" into {"foo": "bar", "abc": "def"}. Values stay strings."""
    if not query:
        return {}
    if query[0] in "?#":
        query = query[1:]

    params: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params[key] = unquote_plus(value) if value else ""
    return params


# ─── List Searches ───────────────────────────────────────────────

def get_last(items: Any, default: Any = None) -> Any:
    """Last element of a list or tuple, or default when empty or not a list."""
    if not isinstance(items, (list, tuple)) or len(items) == 0:
        return default
    return items[-1]


def array_match(
    values: Iterable | None = None,
    match_against: Iterable | None = None,
    min_match: int = 1,
) -> bool:
    """True when at least min_match of values appear in match_against.

    Useful for filtering items that carry several values for one attribute.
    """
    selected = list(match_against or [])
    matches = sum(1 for value in (values or []) if value in selected)
    return matches >= min_match


def array_search(items: Iterable, predicate: Callable[[Any], bool]) -> Any:
    """First item matching predicate, or None."""
    return next((item for item in items if predicate(item)), None)


def unique_values(values: Iterable) -> list:
    """Values without duplicates, in first-seen order. The input is not modified."""
    seen: set = set()
    unhashable: list = []
    result = []
    for value in values:
        if is_hashable(value):
            if value in seen:
                continue
            seen.add(value)
        else:
            if value in unhashable:
                continue
            unhashable.append(value)
        result.append(value)
    return result


def is_hashable(value: Any) -> bool:
    # tuples holding lists pass isinstance(value, Hashable) but fail hash()
    try:
        hash(value)
    except TypeError:
        return False
    return True
