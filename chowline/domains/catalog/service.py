"""
Menu Catalog - Read-side menu lookups next to search.

Covers the item detail, vendor menu and category menu views plus the
availability toggle vendors use when an item runs out.
"""

from __future__ import annotations

import logging

from chowline.config.errors import ErrorCode, NotFoundError

from .contracts import CatalogStore
from .models import MenuItem

logger = logging.getLogger(__name__)

__all__ = ["MenuCatalog"]


class MenuCatalog:
    """
    Menu item lookups backed by a catalog store.

    Example:
        >>> catalog = MenuCatalog(repo)
        >>> item = await catalog.get_menu_item("6f1c...")
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    async def get_menu_item(self, item_id: str) -> MenuItem:
        """
        Get a single menu item.

        Raises:
            NotFoundError: If no item has this ID
        """
        row = await self._store.get_menu_item(item_id)
        if row is None:
            raise NotFoundError(
                f"Menu item with ID {item_id} not found",
                details={"item_id": item_id},
                code=ErrorCode.MENU_ITEM_NOT_FOUND,
            )
        return MenuItem.from_row(row)

    async def get_vendor_menu(self, vendor_id: str) -> list[MenuItem]:
        """Full menu of a vendor, including unavailable items."""
        logger.info("Fetching menu for vendor %s", vendor_id)
        rows = await self._store.list_menu_items_by_vendor(vendor_id)
        return [MenuItem.from_row(row) for row in rows]

    async def get_category_menu(self, category_id: str) -> list[MenuItem]:
        """Available items in a category."""
        logger.info("Fetching menu items for category %s", category_id)
        rows = await self._store.list_available_by_category(category_id)
        return [MenuItem.from_row(row) for row in rows]

    async def toggle_availability(self, item_id: str) -> MenuItem:
        """Flip an item's availability and return the updated item."""
        if not await self._store.toggle_menu_item_availability(item_id):
            raise NotFoundError(
                f"Menu item with ID {item_id} not found",
                details={"item_id": item_id},
                code=ErrorCode.MENU_ITEM_NOT_FOUND,
            )
        item = await self.get_menu_item(item_id)
        logger.info("Menu item %s availability -> %s", item_id, item.is_available)
        return item
