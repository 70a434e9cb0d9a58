"""
Pagination - Page windows and result envelopes.

Out-of-range ``page``/``limit`` values are rejected by validation rather
than clamped. A page past the last result is valid and comes back empty with
the real total.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

MAX_PAGE_SIZE = 100

__all__ = ["MAX_PAGE_SIZE", "Page", "PageRequest"]


class PageRequest(BaseModel):
    """1-based page number and page size."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=MAX_PAGE_SIZE)

    model_config = {"frozen": True}

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def past_end(self, total: int) -> bool:
        """True when the window starts at or beyond ``total``."""
        return self.offset >= total


class Page(BaseModel, Generic[T]):
    """A window of results plus the unpaginated total."""

    items: list[T] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = 1
    limit: int = 20

    @property
    def pages(self) -> int:
        """Number of non-empty pages."""
        return -(-self.total // self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages
