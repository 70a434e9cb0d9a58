"""
Catalog Contracts - Interfaces for catalog domain.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CatalogStore(Protocol):
    """Contract for menu item storage backends."""

    async def get_menu_item(self, item_id: str) -> dict[str, Any] | None:
        """Fetch one menu item row (vendor/category names joined)."""
        ...

    async def list_menu_items_by_vendor(self, vendor_id: str) -> list[dict[str, Any]]:
        """All items of a vendor, name ascending."""
        ...

    async def list_available_by_category(self, category_id: str) -> list[dict[str, Any]]:
        """Available items in a category, name ascending."""
        ...

    async def toggle_menu_item_availability(self, item_id: str) -> bool:
        """Flip availability. Returns False if the item does not exist."""
        ...
