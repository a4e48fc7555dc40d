"""Grouping: bucket items by a derived key, count them, and rank the buckets.

Invariants:
    - group_objects values are always lists (or ints when counting)
    - map_list_to_key_object stores a single item per key until a second item arrives,
      then promotes the value to a list in input order; callers must handle both shapes
    - sort_grouping is stable for equal counts
    - Keys that cannot be hashed (lists, dicts) are replaced by their repr(), so
      grouping never raises TypeError

Design Decisions:
    - Promotion is tracked per key, not by isinstance(value, list), so items that are
      themselves lists are never mistaken for an already-promoted bucket
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from qnd_utils.core.lookups import is_hashable, json_get


def group_objects(
    objects: Iterable,
    key: Callable[[Any], Any] | None = None,
    count: bool = False,
) -> dict:
    """Group items by key(item) (or the item itself), collecting lists or counts."""
    result: dict = {}
    for item in objects:
        group_key = _as_key(item if key is None else key(item))
        if count:
            result[group_key] = result.get(group_key, 0) + 1
        else:
            result.setdefault(group_key, []).append(item)
    return result


def sort_grouping(
    grouping: Mapping,
    reverse: bool = True,
    count_key: str = "total",
    count_exec: Callable[[list], float] | None = None,
) -> list[dict]:
    """Rank the buckets of a grouping.

    Each entry is {"key": k, "value": v, count_key: n} where n is len(v) for list
    values (or count_exec(v) when given) and v itself for numeric values. Highest
    first unless reverse is False.
    """
    result = []
    for group_key, value in grouping.items():
        counter = value
        if isinstance(value, list):
            counter = len(value) if count_exec is None else count_exec(value)
        result.append({"key": group_key, "value": value, count_key: counter})

    return sorted(result, key=lambda entry: entry[count_key], reverse=reverse)


def map_list_to_key_object(
    items: Iterable | None,
    key_or_function: str | int | Callable[[Any], Any] | None,
) -> dict:
    """Index items by a key path or key function.

    A key shared by several items maps to a list of those items; a unique key
    maps to the item itself.
    """
    if items is None or key_or_function is None:
        return {}

    if callable(key_or_function):
        extract = key_or_function
    else:
        def extract(item):
            return json_get(item, key_or_function)

    result: dict = {}
    promoted: set = set()
    for item in items:
        item_key = _as_key(extract(item))
        if item_key not in result:
            result[item_key] = item
        elif item_key in promoted:
            result[item_key].append(item)
        else:
            result[item_key] = [result[item_key], item]
            promoted.add(item_key)
    return result


def _as_key(value: Any) -> Any:
    return value if is_hashable(value) else repr(value)

