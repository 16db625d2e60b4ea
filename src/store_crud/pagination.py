"""Query parameter parsing for cursor paged listings."""

from dataclasses import dataclass
from enum import Enum

from starlette.datastructures import QueryParams

from store_crud.config import settings

PER_PAGE_PARAM = "_perPage"
AFTER_KEY_PARAM = "afterKey"
BEFORE_KEY_PARAM = "beforeKey"


class Direction(str, Enum):
    """Which way a listing walks from its cursor."""

    FIRST = "first"
    AFTER = "after"
    BEFORE = "before"


@dataclass(frozen=True)
class PageRequest:
    """A resolved page request.

    Attributes:
        per_page: Number of rows to return
        direction: Cursor direction
        cursor: The afterKey/beforeKey marker (None for the first page)
    """

    per_page: int
    direction: Direction = Direction.FIRST
    cursor: str | None = None

    @property
    def fetch_count(self) -> int:
        """Rows to ask the store for, including the sentinel row."""
        return self.per_page + 1


def parse_per_page(raw: str | None, default: int | None = None) -> int:
    """Parse ``_perPage``, falling back to the default for junk values."""
    fallback = default or settings.default_page_size
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


def page_request_from_query(query: QueryParams, default_page_size: int | None = None) -> PageRequest:
    """Build a PageRequest from request query parameters.

    ``afterKey`` wins over ``beforeKey`` when both are given.
    """
    per_page = parse_per_page(query.get(PER_PAGE_PARAM), default_page_size)

    if AFTER_KEY_PARAM in query:
        return PageRequest(per_page, Direction.AFTER, query[AFTER_KEY_PARAM])
    if BEFORE_KEY_PARAM in query:
        return PageRequest(per_page, Direction.BEFORE, query[BEFORE_KEY_PARAM])
    return PageRequest(per_page)
