"""Domain Types: enums and aliases shared by the core helpers.

Invariants:
    - Sort directions are exactly "asc" and "desc"
    - RGB channels are ints in 0-255; a Tricolor is (low, mid, high)

Design Decisions:
    - str Enums: compare equal to their raw string values, so plain dict
      sort definitions ({"direction": "asc"}) keep working
"""

from datetime import date, datetime
from enum import Enum
from typing import Protocol, Union


class SortDirection(str, Enum):
    """Direction of a sort definition."""
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ActionTypeSuffix(str, Enum):
    """Suffixes appended to an action type by promise-style middleware."""
    PENDING = "_PENDING"
    FULFILLED = "_FULFILLED"
    REJECTED = "_REJECTED"

    def of(self, action_type: str) -> str:
        """Full action type name, e.g. ActionTypeSuffix.PENDING.of("LOAD") == "LOAD_PENDING"."""
        return f"{action_type}{self.value}"


RGB = tuple[int, int, int]
Tricolor = tuple[RGB, RGB, RGB]


class SupportsToPydatetime(Protocol):
    """External date-library instances (pandas.Timestamp and friends)."""

    def to_pydatetime(self) -> datetime: ...


# Anything format_date accepts: dates/datetimes, epoch numbers, strings
DateLike = Union[date, int, float, str, SupportsToPydatetime]
