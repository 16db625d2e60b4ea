"""In-memory implementation of ObjectStore.

Buckets are plain dicts; listings sort the keys on demand. Good enough
for tests, demos and single-process services.
"""

import bisect

from store_crud.entities import StoreRow
from store_crud.errors import KeyNotFoundError
from store_crud.utils import merge_json_objects


class InMemoryObjectStore:
    """Dictionary-backed implementation of the ObjectStore protocol.

    This class satisfies the ObjectStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, dict[str, bytes]] = {}

    @classmethod
    def create(cls) -> "InMemoryObjectStore":
        """Factory method mirroring the other stores."""
        return cls()

    def _bucket(self, bucket: str) -> dict[str, bytes]:
        return self._buckets.setdefault(bucket, {})

    def _rows(self, bucket: str, keys: list[str]) -> list[StoreRow]:
        records = self._bucket(bucket)
        return [StoreRow(key=k, data=records[k]) for k in keys]

    def get(self, key: str, bucket: str) -> StoreRow:
        records = self._bucket(bucket)
        if key not in records:
            raise KeyNotFoundError(key, bucket)
        return StoreRow(key=key, data=records[key])

    def save(self, key: str, data: bytes, bucket: str) -> None:
        self._bucket(bucket)[key] = bytes(data)

    def update(self, key: str, data: bytes, bucket: str) -> None:
        existing = self.get(key, bucket)
        self._bucket(bucket)[key] = merge_json_objects(existing.data, data)

    def delete(self, key: str, bucket: str) -> None:
        records = self._bucket(bucket)
        if key not in records:
            raise KeyNotFoundError(key, bucket)
        del records[key]

    def get_all(self, count: int, skip: int, bucket: str) -> list[StoreRow]:
        keys = sorted(self._bucket(bucket))
        return self._rows(bucket, keys[skip : skip + count])

    def get_all_after(self, key: str, count: int, skip: int, bucket: str) -> list[StoreRow]:
        keys = sorted(self._bucket(bucket))
        start = bisect.bisect_right(keys, key) + skip
        return self._rows(bucket, keys[start : start + count])

    def get_all_before(self, key: str, count: int, skip: int, bucket: str) -> list[StoreRow]:
        keys = sorted(self._bucket(bucket))
        end = bisect.bisect_left(keys, key) - skip
        if end <= 0:
            return []
        start = max(0, end - count)
        return self._rows(bucket, list(reversed(keys[start:end])))

    def stats(self, bucket: str) -> dict:
        return {"KeyN": len(self._bucket(bucket))}

    def health_check(self) -> bool:
        return True
