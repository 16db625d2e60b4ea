"""Protocol interfaces for swappable implementations.

This package contains the store protocol (structural typing) and the
callback type aliases that calling code supplies per resource.

Usage:
    ```python
    from store_crud.protocols import ObjectStore

    store: ObjectStore = InMemoryObjectStore()  # works
    store: ObjectStore = RedisObjectStore()     # also works
    ```
"""

from .callbacks import GetKey, MarshalFn, OnError, OnSuccess, Record, UnmarshalFn
from .object_store import ObjectStore

__all__ = [
    "ObjectStore",
    "MarshalFn",
    "UnmarshalFn",
    "GetKey",
    "OnSuccess",
    "OnError",
    "Record",
]
