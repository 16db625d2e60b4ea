"""Wrapper results a marshal callback may return instead of a plain dict."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ChangeResult:
    """Record update carrying the previous version.

    ``old`` is exposed to OnSuccess as ``SuccessContext.existing``.
    """

    new: dict[str, Any]
    old: dict[str, Any] | None = field(default=None)


@dataclass(frozen=True)
class CreateResult:
    """Newly created record."""

    new: dict[str, Any]
