"""Domain entities for internal representation.

These are plain dataclasses passed between the store, the service and
the user-supplied callbacks. They are NOT used for API contracts - use
DTOs from the dto package for that.
"""

from .callback_context import ErrorContext, SuccessContext
from .marshal_result import ChangeResult, CreateResult
from .page import Page
from .store_row import StoreRow

__all__ = [
    "StoreRow",
    "Page",
    "SuccessContext",
    "ErrorContext",
    "ChangeResult",
    "CreateResult",
]
