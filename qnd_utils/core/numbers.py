"""Numeric Helpers: normalisation into [0, 1], inclusive ranges and simple aggregates.

Invariants:
    - normalise() always returns a float in [0.0, 1.0]
    - num_range() is inclusive of stop and never loops forever: a step that
      points away from stop (or a zero step) yields []
    - total() and mean() return 0 for empty input
"""

import math
from collections.abc import Iterable, Sequence

Number = int | float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def normalise(val: Number, min_value: Number, max_value: Number) -> float:
    """Position of val inside [min_value, max_value] as a fraction.

    Bounds given in the wrong order are swapped. Values below the range give
    0.0, values above give 1.0, and an empty range (min == max) gives 1.0.
    """
    if max_value < min_value:
        min_value, max_value = max_value, min_value
    if val < min_value:
        return 0.0
    if val > max_value:
        return 1.0
    if max_value == min_value:
        return 1.0
    return (val - min_value) / (max_value - min_value)


def num_range(start: Number, stop: Number, step: Number = 1) -> list[Number]:
    """Inclusive arithmetic sequence from start to stop.

    num_range(1, 5) == [1, 2, 3, 4, 5]
    num_range(5, 1, -1) == [5, 4, 3, 2, 1]
    num_range(1, 2, 0.5) == [1, 1.5, 2]
    """
    if step == 0 or (start > stop and step > 0) or (start < stop and step < 0):
        return []

    in_range = (lambda x: x <= stop) if step > 0 else (lambda x: x >= stop)
    result: list[Number] = []
    index = 0
    current = start
    # start + i * step instead of repeated addition: no float drift
    while in_range(current):
        result.append(current)
        index += 1
        current = start + index * step
    return result


def total(values: Iterable[Number]) -> Number:
    return sum(values, 0)


def mean(values: Sequence[Number]) -> float:
    if len(values) == 0:
        return 0
    return total(values) / len(values)
