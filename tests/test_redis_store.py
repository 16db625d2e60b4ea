"""
Tests for the Redis object store.

These run against REDIS_URL and are skipped when Redis is not running.
"""

import json
import uuid

import pytest
import redis

from store_crud.config import get_redis_client, settings
from store_crud.errors import KeyNotFoundError, StoreError
from store_crud.repositories import RedisObjectStore


@pytest.fixture
def redis_store():
    """Create a store under a throwaway key prefix."""
    client = get_redis_client()
    try:
        client.ping()
    except redis.RedisError:
        pytest.skip("Redis is not running")

    store = RedisObjectStore.create(redis_client=client, key_prefix=f"test-{uuid.uuid4().hex}")
    yield store
    store.drop_bucket("items")


def test_save_and_get(redis_store):
    """A saved record reads back unchanged."""
    redis_store.save("k", b'{"a": 1}', "items")
    row = redis_store.get("k", "items")
    assert row.key == "k"
    assert row.data == b'{"a": 1}'


def test_get_missing_key(redis_store):
    """Reading an absent key raises KeyNotFoundError."""
    with pytest.raises(KeyNotFoundError):
        redis_store.get("nope", "items")


def test_update_and_delete(redis_store):
    """Update merges, delete removes and then fails."""
    redis_store.save("k", b'{"a": 1}', "items")
    redis_store.update("k", b'{"b": 2}', "items")
    assert json.loads(redis_store.get("k", "items").data) == {"a": 1, "b": 2}

    redis_store.delete("k", "items")
    assert redis_store.stats("items") == {"KeyN": 0}
    with pytest.raises(KeyNotFoundError):
        redis_store.delete("k", "items")


def test_cursor_listing(redis_store):
    """Listings follow lexicographic key order in both directions."""
    for key in "abcde":
        redis_store.save(key, b"{}", "items")

    assert [r.key for r in redis_store.get_all(2, 0, "items")] == ["a", "b"]
    assert [r.key for r in redis_store.get_all_after("b", 2, 0, "items")] == ["c", "d"]
    assert [r.key for r in redis_store.get_all_before("d", 2, 0, "items")] == ["c", "b"]
    assert redis_store.stats("items") == {"KeyN": 5}


def test_health_check(redis_store):
    """A reachable server is healthy."""
    assert redis_store.health_check() is True


def test_listing_with_decoding_client(redis_store):
    """A client built with decode_responses=True lists the same keys."""
    client = redis.from_url(
        settings.redis_url, password=settings.redis_password, decode_responses=True
    )
    store = RedisObjectStore.create(redis_client=client, key_prefix=redis_store._prefix)
    redis_store.save("a", b'{"n": 1}', "items")
    redis_store.save("b", b'{"n": 2}', "items")

    rows = store.get_all(10, 0, "items")
    assert [r.key for r in rows] == ["a", "b"]
    assert json.loads(rows[0].data) == {"n": 1}


def test_drop_bucket_unreachable_server():
    """Connection failures while dropping a bucket surface as StoreError."""
    client = redis.Redis(host="127.0.0.1", port=1, socket_connect_timeout=0.1)
    store = RedisObjectStore.create(redis_client=client, key_prefix="unreachable")
    with pytest.raises(StoreError):
        store.drop_bucket("items")
