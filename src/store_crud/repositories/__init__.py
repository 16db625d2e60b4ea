"""Repository layer for data access.

This layer provides ObjectStore implementations. The stores are
protocol-based (structural typing), not inheritance-based: any class
implementing the required methods satisfies the protocol.
"""

from store_crud.protocols import ObjectStore

from .memory_store import InMemoryObjectStore
from .redis_store import RedisObjectStore

__all__ = [
    "ObjectStore",
    "InMemoryObjectStore",
    "RedisObjectStore",
]
