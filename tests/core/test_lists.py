"""List helpers: toggle_item, integrate_db_item, remove_db_item return new lists."""

from types import SimpleNamespace

from qnd_utils.core.lists import toggle_item, integrate_db_item, remove_db_item


def test_toggle_adds_missing_item():
    items = ["a", "b"]
    assert toggle_item(items, "c") == ["a", "b", "c"]
    assert items == ["a", "b"]


def test_toggle_removes_present_item():
    items = ["a", "b", "a"]
    assert toggle_item(items, "a") == ["b", "a"]
    assert items == ["a", "b", "a"]


def test_integrate_replaces_item_with_same_id():
    items = [{"_id": 1, "v": "old"}, {"_id": 2, "v": "other"}]
    result = integrate_db_item(items, {"_id": 1, "v": "new"})
    assert result == [{"_id": 1, "v": "new"}, {"_id": 2, "v": "other"}]
    assert items[0] == {"_id": 1, "v": "old"}


def test_integrate_appends_new_item():
    items = [{"_id": 1}]
    assert integrate_db_item(items, {"_id": 2}) == [{"_id": 1}, {"_id": 2}]
    assert items == [{"_id": 1}]


def test_integrate_with_custom_id_key_and_objects():
    items = [SimpleNamespace(pk=1, v="old")]
    result = integrate_db_item(items, SimpleNamespace(pk=1, v="new"), id_key="pk")
    assert result[0].v == "new"


def test_remove_db_item():
    items = [{"_id": 1}, {"_id": 2}, {"_id": 1}]
    assert remove_db_item(items, 1) == [{"_id": 2}]
    assert len(items) == 3


def test_remove_db_item_custom_id_key():
    items = [{"id": "a"}, {"id": "b"}]
    assert remove_db_item(items, "b", id_key="id") == [{"id": "a"}]
