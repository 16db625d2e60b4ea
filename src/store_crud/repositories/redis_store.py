"""Redis implementation of ObjectStore.

Each bucket maps to two Redis keys:
- ``{prefix}:{bucket}:data`` - hash of record key -> serialized record
- ``{prefix}:{bucket}:keys`` - sorted set with every member at score 0,
  so ZRANGEBYLEX walks keys in lexicographic order for cursor paging
"""

import logging

import redis

from store_crud.config import get_redis_client, settings
from store_crud.entities import StoreRow
from store_crud.errors import KeyNotFoundError, StoreError
from store_crud.utils import merge_json_objects

logger = logging.getLogger(__name__)


class RedisObjectStore:
    """Redis implementation of the ObjectStore protocol.

    This class satisfies the ObjectStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis object store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix for every Redis key. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.redis_key_prefix

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> "RedisObjectStore":
        """Factory method to create RedisObjectStore with defaults.

        Args:
            redis_client: Redis client. If None, uses settings.redis_url.
            key_prefix: Key prefix. If None, uses settings.

        Returns:
            Configured RedisObjectStore
        """
        return cls(redis_client=redis_client, key_prefix=key_prefix)

    def _data_key(self, bucket: str) -> str:
        return f"{self._prefix}:{bucket}:data"

    def _index_key(self, bucket: str) -> str:
        return f"{self._prefix}:{bucket}:keys"

    def _fetch(self, bucket: str, keys: list[bytes | str]) -> list[StoreRow]:
        """Load values for index members, keeping the index order."""
        if not keys:
            return []
        values = self._client.hmget(self._data_key(bucket), keys)
        rows = []
        for key, value in zip(keys, values):
            # Deleted between the index read and the hash read
            if value is None:
                continue
            if not isinstance(key, str):
                key = key.decode()
            rows.append(StoreRow(key=key, data=value))
        return rows

    def get(self, key: str, bucket: str) -> StoreRow:
        try:
            value = self._client.hget(self._data_key(bucket), key)
        except redis.RedisError as e:
            raise StoreError(f"Redis read failed: {e}", bucket=bucket, key=key) from e
        if value is None:
            raise KeyNotFoundError(key, bucket)
        return StoreRow(key=key, data=value)

    def save(self, key: str, data: bytes, bucket: str) -> None:
        try:
            pipe = self._client.pipeline()
            pipe.hset(self._data_key(bucket), key, data)
            pipe.zadd(self._index_key(bucket), {key: 0})
            pipe.execute()
        except redis.RedisError as e:
            raise StoreError(f"Redis write failed: {e}", bucket=bucket, key=key) from e

    def update(self, key: str, data: bytes, bucket: str) -> None:
        existing = self.get(key, bucket)
        merged = merge_json_objects(existing.data, data)
        try:
            self._client.hset(self._data_key(bucket), key, merged)
        except redis.RedisError as e:
            raise StoreError(f"Redis write failed: {e}", bucket=bucket, key=key) from e

    def delete(self, key: str, bucket: str) -> None:
        try:
            pipe = self._client.pipeline()
            pipe.hdel(self._data_key(bucket), key)
            pipe.zrem(self._index_key(bucket), key)
            removed, _ = pipe.execute()
        except redis.RedisError as e:
            raise StoreError(f"Redis delete failed: {e}", bucket=bucket, key=key) from e
        if not removed:
            raise KeyNotFoundError(key, bucket)

    def get_all(self, count: int, skip: int, bucket: str) -> list[StoreRow]:
        return self._range(bucket, b"-", b"+", count, skip)

    def get_all_after(self, key: str, count: int, skip: int, bucket: str) -> list[StoreRow]:
        return self._range(bucket, b"(" + key.encode(), b"+", count, skip)

    def get_all_before(self, key: str, count: int, skip: int, bucket: str) -> list[StoreRow]:
        try:
            keys = self._client.zrevrangebylex(
                self._index_key(bucket), b"(" + key.encode(), b"-", start=skip, num=count
            )
            return self._fetch(bucket, keys)
        except redis.RedisError as e:
            raise StoreError(f"Redis listing failed: {e}", bucket=bucket) from e

    def _range(
        self, bucket: str, lower: bytes, upper: bytes, count: int, skip: int
    ) -> list[StoreRow]:
        try:
            keys = self._client.zrangebylex(
                self._index_key(bucket), lower, upper, start=skip, num=count
            )
            return self._fetch(bucket, keys)
        except redis.RedisError as e:
            raise StoreError(f"Redis listing failed: {e}", bucket=bucket) from e

    def stats(self, bucket: str) -> dict:
        try:
            return {"KeyN": int(self._client.zcard(self._index_key(bucket)))}
        except redis.RedisError as e:
            raise StoreError(f"Redis stats failed: {e}", bucket=bucket) from e

    def drop_bucket(self, bucket: str) -> None:
        """Remove every record of a bucket."""
        try:
            self._client.delete(self._data_key(bucket), self._index_key(bucket))
        except redis.RedisError as e:
            raise StoreError(f"Redis delete failed: {e}", bucket=bucket) from e

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            result = self._client.ping()
            return bool(result)
        except redis.RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
