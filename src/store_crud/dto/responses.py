"""Response DTOs written by the CRUD handlers."""

from typing import Any

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain status message (not found, deleted, bind failures)."""

    msg: str = Field(..., description="Human-readable status message")


class ErrorListResponse(BaseModel):
    """400 body for marshal errors that serialize themselves."""

    msg: str = Field(..., description="Summary of the failure")
    error: dict[str, Any] = Field(
        default_factory=dict,
        description="Structured error details from the marshal callback",
    )


class FailureResponse(BaseModel):
    """500 body for unexpected failures inside a handler."""

    message: str = Field(..., description="What could not be done")


class PageResponse(BaseModel):
    """Envelope for a GetAll page.

    ``count`` and ``total_count`` are left out of the body when zero.
    """

    data: list[dict[str, Any]] = Field(default_factory=list, description="Records on this page")
    count: int = Field(0, description="Number of records on this page", ge=0)
    total_count: int = Field(0, description="Number of records in the bucket", ge=0)
    has_more: bool = Field(False, description="Whether another page follows in this direction")

    def to_body(self) -> dict[str, Any]:
        """Dump for the wire, omitting empty counters."""
        body = self.model_dump()
        for name in ("count", "total_count"):
            if not body[name]:
                del body[name]
        return body
