"""Store CRUD - CRUD request handlers over a pluggable object store.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (ObjectStore, callback types)
    - repositories: Store implementations (memory, Redis)
    - services: Record logic (paging, serialization)
    - handlers: HTTP request handlers
    - dto: Response bodies (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from store_crud import CrudHandler, InMemoryObjectStore

    notes = CrudHandler(bucket="notes", store=InMemoryObjectStore())
    ```

For the example HTTP API:
    ```python
    from store_crud.api.app import app
    ```
"""

from store_crud.config import get_redis_client, settings
from store_crud.decoding import decode, filter_flags
from store_crud.entities import (
    ChangeResult,
    CreateResult,
    ErrorContext,
    Page,
    StoreRow,
    SuccessContext,
)
from store_crud.errors import (
    JSONError,
    KeyNotFoundError,
    MalformedPayloadError,
    StoreError,
    UnknownContentError,
    ValidationFailed,
)
from store_crud.handlers import CrudHandler
from store_crud.logging_config import configure_logging
from store_crud.protocols import GetKey, MarshalFn, ObjectStore, OnError, OnSuccess, UnmarshalFn
from store_crud.repositories import InMemoryObjectStore, RedisObjectStore
from store_crud.services import CrudService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "configure_logging",
    # Protocols (interfaces)
    "ObjectStore",
    "MarshalFn",
    "UnmarshalFn",
    "GetKey",
    "OnSuccess",
    "OnError",
    # Services
    "CrudService",
    # Handlers (HTTP)
    "CrudHandler",
    "decode",
    "filter_flags",
    # Repositories (data access)
    "InMemoryObjectStore",
    "RedisObjectStore",
    # Entities (domain models)
    "StoreRow",
    "Page",
    "SuccessContext",
    "ErrorContext",
    "ChangeResult",
    "CreateResult",
    # Errors
    "UnknownContentError",
    "MalformedPayloadError",
    "StoreError",
    "KeyNotFoundError",
    "JSONError",
    "ValidationFailed",
]
