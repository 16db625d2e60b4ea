"""
Tests for the in-memory object store.
"""

import json

import pytest

from store_crud.errors import KeyNotFoundError, StoreError
from store_crud.protocols import ObjectStore
from store_crud.repositories import InMemoryObjectStore


def keys(rows):
    return [row.key for row in rows]


def test_satisfies_protocol(store):
    """The memory store is an ObjectStore by structure."""
    assert isinstance(store, ObjectStore)


def test_get_missing_key(store):
    """Reading an absent key raises KeyNotFoundError."""
    with pytest.raises(KeyNotFoundError) as exc_info:
        store.get("nope", "items")
    assert exc_info.value.key == "nope"
    assert exc_info.value.bucket == "items"


def test_buckets_are_isolated(store):
    """The same key in two buckets holds two records."""
    store.save("k", b'{"a": 1}', "one")
    store.save("k", b'{"a": 2}', "two")
    assert store.get("k", "one").data == b'{"a": 1}'
    assert store.get("k", "two").data == b'{"a": 2}'
    assert store.stats("one") == {"KeyN": 1}


def test_update_merges_objects(store):
    """Update shallow-merges the new fields into the stored object."""
    store.save("k", b'{"a": 1, "b": 2}', "items")
    store.update("k", b'{"b": 3, "c": 4}', "items")
    assert json.loads(store.get("k", "items").data) == {"a": 1, "b": 3, "c": 4}


def test_update_missing_key(store):
    """Update does not create records."""
    with pytest.raises(KeyNotFoundError):
        store.update("k", b'{"a": 1}', "items")


def test_update_non_object(store):
    """Only JSON objects can be merged."""
    store.save("k", b"[1, 2]", "items")
    with pytest.raises(StoreError):
        store.update("k", b'{"a": 1}', "items")


def test_update_undecodable_bytes(store):
    """Stored bytes that are not UTF-8 fail the merge as a StoreError."""
    store.save("k", b"\x80abc", "items")
    with pytest.raises(StoreError):
        store.update("k", b'{"a": 1}', "items")
    assert store.get("k", "items").data == b"\x80abc"


def test_delete(store):
    """Delete removes the record and fails for unknown keys."""
    store.save("k", b"{}", "items")
    store.delete("k", "items")
    assert store.stats("items") == {"KeyN": 0}
    with pytest.raises(KeyNotFoundError):
        store.delete("k", "items")


def test_get_all_is_ascending(seeded_store):
    """Listing starts at the smallest key."""
    assert keys(seeded_store.get_all(3, 0, "items")) == ["a", "b", "c"]
    assert keys(seeded_store.get_all(3, 2, "items")) == ["c", "d", "e"]


def test_get_all_after(seeded_store):
    """After-listing excludes the cursor and walks forward."""
    assert keys(seeded_store.get_all_after("b", 2, 0, "items")) == ["c", "d"]
    assert keys(seeded_store.get_all_after("bb", 10, 0, "items")) == ["c", "d", "e"]
    assert keys(seeded_store.get_all_after("e", 2, 0, "items")) == []


def test_get_all_before(seeded_store):
    """Before-listing excludes the cursor and returns nearest first."""
    assert keys(seeded_store.get_all_before("d", 2, 0, "items")) == ["c", "b"]
    assert keys(seeded_store.get_all_before("d", 10, 0, "items")) == ["c", "b", "a"]
    assert keys(seeded_store.get_all_before("d", 10, 1, "items")) == ["b", "a"]
    assert keys(seeded_store.get_all_before("a", 2, 0, "items")) == []


def test_create_factory():
    """The factory returns a working empty store."""
    store = InMemoryObjectStore.create()
    assert store.health_check() is True
    assert store.get_all(10, 0, "anything") == []
