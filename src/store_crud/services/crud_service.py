"""CRUD service for core record logic.

This service holds everything the handlers do that is not HTTP:
reading and writing the store, turning stored bytes into records and
assembling cursor pages. Results are returned; failures are raised.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel

from store_crud.entities import Page, StoreRow
from store_crud.errors import StoreError
from store_crud.pagination import Direction, PageRequest
from store_crud.protocols import ObjectStore

logger = logging.getLogger(__name__)


class CrudService:
    """Record operations over one bucket of an ObjectStore.

    The store is a PROTOCOL, not a concrete implementation, so the same
    service runs over memory, Redis or any other ordered key-value store.

    Example:
        ```python
        from store_crud.repositories import InMemoryObjectStore
        from store_crud.services import CrudService

        service = CrudService.create(store=InMemoryObjectStore(), bucket="notes")
        service.save("a", {"title": "first"})
        service.to_record(service.fetch("a"))  # {"title": "first", "key": "a"}
        ```
    """

    def __init__(
        self,
        store: ObjectStore,
        bucket: str,
        record_model: type[BaseModel] | None = None,
    ) -> None:
        """Initialize the CRUD service.

        Args:
            store: Backing object store (required).
            bucket: Bucket the records live in (required).
            record_model: Optional pydantic model records are validated against.
        """
        self._store = store
        self._bucket = bucket
        self._record_model = record_model

    @classmethod
    def create(
        cls,
        store: ObjectStore,
        bucket: str,
        record_model: type[BaseModel] | None = None,
    ) -> "CrudService":
        """Factory method to create a CrudService."""
        return cls(store=store, bucket=bucket, record_model=record_model)

    def validate(self, payload: Any) -> dict[str, Any]:
        """Turn a decoded request body into a record.

        Raises:
            ValueError: If the payload is not a JSON object, or the record
                model rejects it (pydantic's ValidationError is a ValueError)
        """
        if self._record_model is not None:
            return self._record_model.model_validate(payload).model_dump(mode="json")
        if not isinstance(payload, dict):
            raise ValueError("record must be a JSON object")
        return dict(payload)

    def validate_partial(self, payload: Any) -> dict[str, Any]:
        """Check a partial record for a merge; only the shape is enforced."""
        if not isinstance(payload, dict):
            raise ValueError("record must be a JSON object")
        return dict(payload)

    def to_record(self, row: StoreRow) -> dict[str, Any]:
        """Decode a stored row into a record carrying its key.

        Raises:
            ValueError: If the stored bytes are not a valid record
        """
        data = json.loads(row.data)
        if self._record_model is not None:
            data = self._record_model.model_validate(data).model_dump(mode="json")
        elif data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError(f"stored value for {row.key} is not a JSON object")
        data["key"] = row.key
        return data

    def serialize(self, record: dict[str, Any]) -> bytes:
        """Serialize a record for storage, without its key field."""
        body = {k: v for k, v in record.items() if k != "key"}
        return json.dumps(body, allow_nan=False).encode()

    def fetch(self, key: str) -> StoreRow:
        """Read one row; store errors propagate."""
        return self._store.get(key, self._bucket)

    def save(self, key: str, record: dict[str, Any]) -> None:
        """Create or replace a record.

        Raises:
            TypeError: If the record is not JSON serializable
            ValueError: If the record holds NaN or infinite floats
            StoreError: If the store rejects the write
        """
        data = self.serialize(record)
        self._store.save(key, data, self._bucket)
        logger.debug("Saved object bucket=%s key=%s", self._bucket, key)

    def merged(self, key: str, partial: dict[str, Any]) -> dict[str, Any]:
        """Merge a partial record into the stored one, without writing it.

        The merged record goes through the same validation as a full
        record, so the caller can reject it before anything is saved.

        Raises:
            KeyNotFoundError: If the key does not exist
            StoreError: If the stored value is not a JSON object
            ValueError: If the merged record is rejected by the record model
        """
        row = self.fetch(key)
        try:
            stored = json.loads(row.data)
        except ValueError as e:
            raise StoreError(f"Cannot merge non-JSON data: {e}", bucket=self._bucket, key=key) from e
        if not isinstance(stored, dict):
            raise StoreError("Only JSON objects can be merged", bucket=self._bucket, key=key)

        stored.update({k: v for k, v in partial.items() if k != "key"})
        return self.validate(stored)

    def merge(self, key: str, partial: dict[str, Any]) -> dict[str, Any]:
        """Merge, validate and save a partial record; return the stored result."""
        record = self.merged(key, partial)
        self.save(key, record)
        record["key"] = key
        return record

    def remove(self, key: str) -> None:
        """Delete a record; store errors propagate."""
        self._store.delete(key, self._bucket)

    def fetch_page(self, page: PageRequest) -> Page:
        """Read one page of rows around the page request's cursor.

        The store is asked for one sentinel row beyond the page size; it
        only decides ``has_more``. Backward pages come back from the
        store nearest-first and are flipped to ascending key order.
        """
        if page.direction is Direction.AFTER:
            rows = self._store.get_all_after(page.cursor, page.fetch_count, 0, self._bucket)
        elif page.direction is Direction.BEFORE:
            rows = self._store.get_all_before(page.cursor, page.fetch_count, 0, self._bucket)
        else:
            logger.debug("GetAll bucket=%s", self._bucket)
            rows = self._store.get_all(page.fetch_count, 0, self._bucket)

        has_more = len(rows) > page.per_page
        rows = list(rows[: page.per_page])
        if page.direction is Direction.BEFORE:
            rows.reverse()
        return Page(rows=rows, has_more=has_more)

    def total_count(self) -> int:
        """Number of keys in the bucket, from the store's stats."""
        stats = self._store.stats(self._bucket)
        return int(stats.get("KeyN", 0))

    @property
    def bucket(self) -> str:
        """Get the bucket name."""
        return self._bucket

    @property
    def store(self) -> ObjectStore:
        """Get the underlying store (for testing)."""
        return self._store
