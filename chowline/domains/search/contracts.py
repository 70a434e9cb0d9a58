"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .geo import SearchArea
from .models import SearchCriteria, SearchPage
from .ranking import SortKey


@runtime_checkable
class MenuStore(Protocol):
    """Read contract the search engine needs from a menu item store."""

    async def count_menu_items(
        self,
        criteria: SearchCriteria,
        area: SearchArea | None = None,
    ) -> int:
        """Count items matching the filters (no distance column, no ordering)."""
        ...

    async def find_menu_items(
        self,
        criteria: SearchCriteria,
        area: SearchArea | None,
        sort_keys: list[SortKey],
        offset: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        """Fetch one ordered window of matching rows with a ``distance`` column."""
        ...

    async def get_address(self, address_id: str) -> dict[str, Any] | None:
        """Fetch a stored address."""
        ...


@runtime_checkable
class SearchEngine(Protocol):
    """Contract for search implementations."""

    async def search(self, criteria: SearchCriteria) -> SearchPage:
        """Execute search and return one page of results."""
        ...
