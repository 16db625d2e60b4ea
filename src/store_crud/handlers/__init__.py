"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (record logic), not directly on stores.

Architecture:
    Handler -> Service -> Store
    (HTTP)  -> (Records) -> (Data Access)
"""

from .crud_handler import CrudHandler

__all__ = [
    "CrudHandler",
]
