"""Page domain entity."""

from dataclasses import dataclass, field

from .store_row import StoreRow


@dataclass(frozen=True)
class Page:
    """One page of rows read from a bucket.

    Attributes:
        rows: Rows in ascending key order, at most the requested page size
        has_more: Whether the store returned a row beyond the page
    """

    rows: list[StoreRow] = field(default_factory=list)
    has_more: bool = False
