"""Paginated result wrapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a larger result set.

    The engine translates ``items`` as a single collection, so every item on
    the page shares one batch per translatable field.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    size: int | None = None

    @property
    def pages(self) -> int:
        """Number of pages for ``total`` items, or 1 when unsized."""
        if not self.size:
            return 1
        return max(1, -(-self.total // self.size))
