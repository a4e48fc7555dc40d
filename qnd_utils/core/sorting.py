"""Sorting: sort definitions for UI state and comparators derived from them.

Invariants:
    - SortDefinition is immutable; update_sorting returns a new state dict holding
      a new definition and never touches the old one
    - Reselecting the current key flips the direction; a new key starts at the default
    - Comparators never raise on missing values: None sorts after present values
      in both directions
    - String keys compare locale-aware, boolean keys put True first when ascending,
      everything else compares by natural ordering
"""

import locale
from collections.abc import Callable, Collection, Iterable, Mapping
from dataclasses import dataclass, replace
from functools import cmp_to_key
from typing import Any

from qnd_utils.core.domain_types import SortDirection
from qnd_utils.core.lookups import json_get


DEFAULT_SORT_KEY: str = "date"
DEFAULT_STATE_KEY: str = "sorting"

Comparator = Callable[[Any, Any], int]


@dataclass(frozen=True)
class SortDefinition:
    """Which key to sort by and in which direction."""
    key: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        object.__setattr__(self, "direction", SortDirection(self.direction))

    @classmethod
    def from_value(cls, value: "SortDefinition | Mapping") -> "SortDefinition":
        """Accept a SortDefinition or a {"key": ..., "direction": ...} mapping."""
        if isinstance(value, SortDefinition):
            return value
        return cls(
            key=value["key"],
            direction=value.get("direction") or SortDirection.ASC,
        )

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "direction": self.direction.value}


def init_sorting(
    sort_key: str | None = None,
    default_direction: SortDirection | str | None = None,
) -> SortDefinition:
    """Initial sort definition: "date" ascending unless told otherwise."""
    return SortDefinition(
        key=sort_key if sort_key is not None else DEFAULT_SORT_KEY,
        direction=default_direction or SortDirection.ASC,
    )


def update_sorting(
    old_state: Mapping,
    sort_key: str,
    state_key: str | None = None,
    default_direction: SortDirection | str | None = None,
) -> dict:
    """New UI state after the user picked sort_key.

    The sort definition lives under state_key (default "sorting") and may be a
    SortDefinition or a plain mapping; the returned state always holds a
    SortDefinition.
    """
    state_key = state_key or DEFAULT_STATE_KEY
    direction = SortDirection(default_direction or SortDirection.ASC)

    new_state = dict(old_state)
    existing = old_state.get(state_key)
    if existing is None:
        new_state[state_key] = init_sorting(sort_key, direction)
        return new_state

    current = SortDefinition.from_value(existing)
    if current.key == sort_key:
        new_state[state_key] = replace(current, direction=current.direction.flipped())
    else:
        new_state[state_key] = SortDefinition(sort_key, direction)
    return new_state


def sort_comparator(
    sorting: SortDefinition | Mapping,
    string_keys: Collection[str] = (),
    boolean_keys: Collection[str] = (),
) -> Comparator:
    """Two-argument ordering function for the given sort definition.

    Dotted keys ("owner.name") are resolved through json_get. Use with
    functools.cmp_to_key, or call sort_items directly.
    """
    definition = SortDefinition.from_value(sorting)
    key = definition.key
    descending = definition.direction is SortDirection.DESC

    if key in string_keys:
        compare = _compare_strings
    elif key in boolean_keys:
        compare = _compare_booleans
    else:
        compare = _compare_values

    def comparator(a: Any, b: Any) -> int:
        a_val = json_get(a, key)
        b_val = json_get(b, key)
        if a_val is None or b_val is None:
            return _compare_missing(a_val, b_val)
        result = compare(a_val, b_val)
        return -result if descending else result

    return comparator


def sort_items(
    items: Iterable,
    sorting: SortDefinition | Mapping,
    string_keys: Collection[str] = (),
    boolean_keys: Collection[str] = (),
) -> list:
    """Sorted copy of items."""
    comparator = sort_comparator(sorting, string_keys, boolean_keys)
    return sorted(items, key=cmp_to_key(comparator))


def _compare_strings(a: Any, b: Any) -> int:
    return locale.strcoll(str(a), str(b))


def _compare_booleans(a: Any, b: Any) -> int:
    # True first: (True, False) -> -1
    return int(bool(b)) - int(bool(a))


def _compare_values(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_missing(a: Any, b: Any) -> int:
    if a is None and b is None:
        return 0
    return 1 if a is None else -1
