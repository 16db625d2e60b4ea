"""The ``notes`` resource served by the example app."""

from pydantic import BaseModel, Field

NOTES_BUCKET = "notes"


class Note(BaseModel):
    """Record model for a note."""

    title: str = Field(..., description="Note title", min_length=1)
    body: str = Field("", description="Note text")
    tags: list[str] = Field(default_factory=list, description="Free-form labels")
