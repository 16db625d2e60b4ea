"""Object store protocol.

Defines the interface for any key-value backend the CRUD handlers can
persist records into. Keys live inside named buckets and are ordered
lexicographically, which is what cursor paging walks over.

Implementations can include:
- In-memory dictionaries (default, tests)
- Redis (hash + sorted set per bucket)
- BoltDB/LevelDB style embedded stores
- Any other ordered key-value database
"""

from typing import Protocol, runtime_checkable

from store_crud.entities import StoreRow


@runtime_checkable
class ObjectStore(Protocol):
    """Protocol for bucketed object stores.

    Similar to Go's interface pattern - any type that implements these
    methods satisfies the protocol, no explicit inheritance needed.

    Example:
        ```python
        from store_crud.protocols import ObjectStore

        store: ObjectStore = InMemoryObjectStore()
        store: ObjectStore = RedisObjectStore.create()
        ```
    """

    def get(self, key: str, bucket: str) -> StoreRow:
        """Read a single record.

        Args:
            key: The record key
            bucket: The bucket to read from

        Returns:
            The stored row

        Raises:
            KeyNotFoundError: If the key does not exist
            StoreError: If the backend fails
        """
        ...

    def save(self, key: str, data: bytes, bucket: str) -> None:
        """Create or replace a record.

        Args:
            key: The record key
            data: Serialized record
            bucket: The bucket to write to

        Raises:
            StoreError: If the backend fails
        """
        ...

    def update(self, key: str, data: bytes, bucket: str) -> None:
        """Merge a JSON object into an existing record.

        Args:
            key: The record key
            data: Serialized partial record (a JSON object)
            bucket: The bucket to write to

        Raises:
            KeyNotFoundError: If the key does not exist
            StoreError: If the backend fails or either side is not a JSON object
        """
        ...

    def delete(self, key: str, bucket: str) -> None:
        """Delete a record.

        Raises:
            KeyNotFoundError: If the key does not exist
            StoreError: If the backend fails
        """
        ...

    def get_all(self, count: int, skip: int, bucket: str) -> list[StoreRow]:
        """List records from the start of the bucket, ascending by key."""
        ...

    def get_all_after(self, key: str, count: int, skip: int, bucket: str) -> list[StoreRow]:
        """List records with keys strictly greater than ``key``, ascending."""
        ...

    def get_all_before(self, key: str, count: int, skip: int, bucket: str) -> list[StoreRow]:
        """List records with keys strictly less than ``key``, nearest first."""
        ...

    def stats(self, bucket: str) -> dict:
        """Get bucket statistics.

        Returns:
            Dictionary with at least ``KeyN`` (number of keys in the bucket)
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is accessible."""
        ...
