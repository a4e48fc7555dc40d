"""List Helpers: add/replace/remove items for UI state updates.

Invariants:
    - Every helper returns a NEW list; the input list is never mutated
    - Items are matched by id through json_get, so dicts and objects both work
"""

from typing import Any

from qnd_utils.core.lookups import json_get


def toggle_item(items: list, item: Any) -> list:
    """Remove item (first occurrence) if present, otherwise append it."""
    result = list(items)
    if item in result:
        result.remove(item)
    else:
        result.append(item)
    return result


def integrate_db_item(items: list, item: Any, id_key: str = "_id") -> list:
    """Replace the element sharing item's id, or append item if none does."""
    item_id = json_get(item, id_key)
    result = list(items)
    for index, existing in enumerate(result):
        if json_get(existing, id_key) == item_id:
            result[index] = item
            return result
    result.append(item)
    return result


def remove_db_item(items: list, item_id: Any, id_key: str = "_id") -> list:
    return [item for item in items if json_get(item, id_key) != item_id]
