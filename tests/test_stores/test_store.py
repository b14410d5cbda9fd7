"""Tests for Store — path access, flattening, permissions and snapshots."""

from typing import ClassVar

import pytest

from scoped_store import AccessDeniedError, PathConflictError, Store


class RestrictedStore(Store):
    permissions: ClassVar = {
        "ro": "r",
        "wo": "w",
        "hidden": "none",
        "open": "rw",
    }


@pytest.fixture
def restricted():
    s = RestrictedStore()
    s.set_entry("ro", "read-me")
    s.set_entry("wo", "write-me")
    s.set_entry("hidden", "secret")
    s.set_entry("open", "hello")
    return s


# ── basic read / write ───────────────────────────────────────


def test_default_policy_is_rw(store):
    assert store.default_policy == "rw"
    assert store.allowed_to_read("anything")
    assert store.allowed_to_write("anything")


def test_write_and_read(store):
    assert store.write("name", "alice") == "alice"
    assert store.read("name") == "alice"


def test_read_missing_key(store):
    assert store.read("missing") is None


def test_write_returns_terminal_value(store):
    assert store.write("a:b:c", 3) == 3


def test_overwrite_store_with_primitive(store):
    store.write("a:b", 1)
    store.write("a", 2)
    assert store.read("a") == 2


def test_trailing_segments_on_primitive_are_ignored(store):
    store.write("a", 5)
    assert store.read("a:b:c") == 5


def test_lists_are_stored_verbatim(store):
    store.write("tags", ["x", "y"])
    assert store.read("tags") == ["x", "y"]


def test_contains_and_repr(store):
    store.write("a", 1)
    assert "a" in store
    assert "b" not in store
    assert "a" in repr(store)


# ── auto-vivification ────────────────────────────────────────


def test_write_creates_intermediate_stores(store):
    store.write("p:q:r", 7)
    assert store.read("p:q:r") == 7

    p = store.read("p")
    assert isinstance(p, Store)
    assert p.entries() == {"q": {"r": 7}}


def test_intermediate_store_is_plain_rw(restricted):
    restricted.default_policy = "none"
    restricted.write("open", None)
    restricted.write("open:x", 1)

    created = restricted.read("open")
    assert type(created) is Store
    assert created.default_policy == "rw"


def test_none_entry_is_replaced_by_store(store):
    store.write("a", None)
    store.write("a:b", 1)
    assert store.read("a:b") == 1


def test_descending_through_primitive_raises(store):
    store.write("a", 5)
    with pytest.raises(PathConflictError) as exc_info:
        store.write("a:b", 1)
    assert exc_info.value.key == "a"
    assert store.read("a") == 5


def test_existing_nested_store_is_reused(store):
    store.write("a:x", 1)
    nested = store.read("a")
    store.write("a:y", 2)
    assert store.read("a") is nested
    assert nested.entries() == {"x": 1, "y": 2}


# ── structured writes ────────────────────────────────────────


def test_structured_write_is_batch_of_deep_writes(store):
    value = {"b": 1, "c": {"d": 2}}
    assert store.write("a", value) is value

    expected = Store()
    expected.write("a:b", 1)
    expected.write("a:c:d", 2)
    assert store.entries() == expected.entries()
    assert store.read("a:c:d") == 2


def test_structured_write_merges_with_existing(store):
    store.write("a:keep", True)
    store.write("a", {"new": 1})
    assert store.entries() == {"a": {"keep": True, "new": 1}}


def test_write_entries(store):
    store.write_entries({"x": {"y": 5}})
    assert store.read("x:y") == 5


def test_write_entries_keeps_lists_as_leaves(store):
    store.write_entries({"a": {"items": [1, {"x": 1}]}})
    assert store.read("a:items") == [1, {"x": 1}]


def test_write_entries_round_trip(store):
    data = {
        "a": 1,
        "b": {"c": "s", "d": [1, 2], "e": {"f": None, "g": True}},
        "h": {},
        "i": 2.5,
    }
    store.write_entries(data)
    assert store.entries() == data


def test_empty_nested_mapping_keeps_existing_store(store):
    store.write("a:b:keep", 1)
    store.write("a", {"b": {}})
    assert store.read("a:b:keep") == 1
    assert store.entries() == {"a": {"b": {"keep": 1}}}


def test_empty_nested_mapping_keeps_existing_value(store):
    store.write("a:b", 5)
    store.write_entries({"a": {"b": {}}})
    assert store.read("a:b") == 5


def test_empty_nested_mapping_replaces_none(store):
    store.write("a:b", None)
    store.write("a", {"b": {}})
    assert isinstance(store.read("a:b"), Store)
    assert store.entries() == {"a": {"b": {}}}


def test_empty_structured_write_is_noop(store):
    store.write("a", 1)
    store.write("a", {})
    store.write_entries({})
    assert store.entries() == {"a": 1}


# ── producers ────────────────────────────────────────────────


def test_producer_is_invoked_on_read(store):
    store.set_entry("answer", lambda: 42)
    assert store.read("answer") == 42


def test_producer_returning_store_is_traversed(store):
    nested = Store()
    nested.write("x", 1)
    store.set_entry("get", lambda: nested)
    assert store.read("get:x") == 1
    assert store.read("get") is nested


def test_entries_does_not_invoke_producers(store):
    calls = []

    def producer():
        calls.append(1)
        return "value"

    store.set_entry("lazy", producer)
    store.write("plain", 1)

    snapshot = store.entries()
    assert snapshot["lazy"] is producer
    assert snapshot["plain"] == 1
    assert calls == []


# ── permissions ──────────────────────────────────────────────


def test_capability_queries(restricted):
    assert restricted.allowed_to_read("ro") and not restricted.allowed_to_write("ro")
    assert restricted.allowed_to_write("wo") and not restricted.allowed_to_read("wo")
    assert not restricted.allowed_to_read("hidden")
    assert not restricted.allowed_to_write("hidden")
    assert restricted.allowed_to_read("open") and restricted.allowed_to_write("open")


def test_get_ability(restricted):
    assert restricted.get_ability("ro").permission == "r"
    assert restricted.get_ability("unknown").permission == "rw"


def test_read_only_key(restricted):
    assert restricted.read("ro") == "read-me"
    with pytest.raises(AccessDeniedError) as exc_info:
        restricted.write("ro", "changed")
    assert exc_info.value.key == "ro"
    assert exc_info.value.operation == "write"
    assert restricted.entries()["ro"] == "read-me"


def test_write_only_key(restricted):
    assert restricted.write("wo", "changed") == "changed"
    with pytest.raises(AccessDeniedError) as exc_info:
        restricted.read("wo")
    assert exc_info.value.operation == "read"


def test_none_key_denies_everything(restricted):
    with pytest.raises(AccessDeniedError):
        restricted.read("hidden")
    with pytest.raises(AccessDeniedError):
        restricted.write("hidden", "x")


def test_denied_intermediate_write_creates_nothing(store):
    store.default_policy = "r"
    with pytest.raises(AccessDeniedError):
        store.write("a:b", 1)
    assert "a" not in store


def test_unannotated_keys_follow_default_policy(restricted):
    restricted.write("extra", 1)
    assert restricted.read("extra") == 1

    restricted.default_policy = "none"
    with pytest.raises(AccessDeniedError):
        restricted.read("extra")
    with pytest.raises(AccessDeniedError):
        restricted.write("extra", 2)

    restricted.default_policy = "r"
    assert restricted.read("extra") == 1


def test_annotation_wins_over_default_policy(restricted):
    restricted.default_policy = "none"
    assert restricted.read("open") == "hello"
    assert restricted.write("open", "bye") == "bye"
    assert restricted.read("ro") == "read-me"


def test_entries_omits_unreadable_keys(restricted):
    assert restricted.entries() == {"ro": "read-me", "open": "hello"}


def test_entries_omits_unreadable_keys_in_nested_stores(store, restricted):
    store.set_entry("inner", restricted)
    store.write("top", 1)
    assert store.entries() == {"inner": {"ro": "read-me", "open": "hello"}, "top": 1}


def test_nested_read_checks_nested_permissions(store, restricted):
    store.set_entry("inner", restricted)
    assert store.read("inner:ro") == "read-me"
    with pytest.raises(AccessDeniedError) as exc_info:
        store.read("inner:hidden")
    assert exc_info.value.key == "hidden"


def test_batch_write_is_not_rolled_back():
    class LockedStore(Store):
        permissions: ClassVar = {"locked": "r"}

    s = LockedStore()
    with pytest.raises(AccessDeniedError):
        s.write_entries({"a": 1, "locked": 2, "z": 3})

    assert s.read("a") == 1
    assert "locked" not in s
    assert "z" not in s


def test_annotations_do_not_leak_into_nested_stores():
    class ParentStore(Store):
        permissions: ClassVar = {"child": "rw", "x": "none"}

    parent = ParentStore(default_policy="none")
    parent.write("child:x", 1)
    assert parent.read("child:x") == 1
    with pytest.raises(AccessDeniedError):
        parent.read("x")


def test_permission_tables_merge_down_the_hierarchy(restricted):
    class WiderStore(RestrictedStore):
        permissions: ClassVar = {"ro": "rw", "extra": "r"}

    wider = WiderStore()
    assert wider.allowed_to_write("ro")
    assert not wider.allowed_to_write("extra")
    assert not wider.allowed_to_read("hidden")
    assert not restricted.allowed_to_write("ro")
    assert Store().allowed_to_write("ro")


def test_permission_table_is_merged(restricted):
    class WiderStore(RestrictedStore):
        permissions: ClassVar = {"ro": "rw"}

    assert "hidden" not in WiderStore.permissions
    assert WiderStore.permission_table() == {
        "ro": "rw",
        "wo": "w",
        "hidden": "none",
        "open": "rw",
    }
    assert Store.permission_table() == {}

    table = WiderStore.permission_table()
    table["hidden"] = "rw"
    assert not WiderStore().allowed_to_read("hidden")
