"""Data Transfer Objects for API contracts.

These Pydantic models define the JSON bodies the handlers write.
Records themselves stay plain dicts shaped by the resource's callbacks.
"""

from .responses import ErrorListResponse, FailureResponse, MessageResponse, PageResponse

__all__ = [
    "MessageResponse",
    "ErrorListResponse",
    "FailureResponse",
    "PageResponse",
]
