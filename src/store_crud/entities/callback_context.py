"""Contexts handed to on-success and on-error callbacks."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SuccessContext:
    """Passed to OnSuccess after a CRUD operation completes.

    Attributes:
        bucket: Bucket the operation ran against
        key: Key of the affected record (None for listings)
        result: The record (or page envelope) sent back to the client
        existing: Previous version of the record when the marshal callback
            returned a ChangeResult
        request: The incoming framework request
    """

    bucket: str
    key: str | None = None
    result: Any = None
    existing: dict[str, Any] | None = None
    request: Any = None


@dataclass(frozen=True)
class ErrorContext:
    """Passed to OnError together with the exception."""

    bucket: str
    key: str | None = None
    request: Any = None
