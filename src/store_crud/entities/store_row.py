"""Store row domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoreRow:
    """A single key/value pair read from a bucket.

    Attributes:
        key: The record key within its bucket
        data: The raw stored bytes (JSON for records written by the handlers)
    """

    key: str
    data: bytes
