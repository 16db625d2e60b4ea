"""Service layer for record logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Store
    (HTTP)  -> (Records) -> (Data Access)
"""

from .crud_service import CrudService

__all__ = [
    "CrudService",
]
