"""
Catalog Domain - Addresses and menu items.

This domain handles:
- Catalog data models
- Menu item detail lookups
- Vendor and category menus
- Availability toggling
"""

from .contracts import CatalogStore
from .models import Address, Coordinates, MenuItem
from .service import MenuCatalog

__all__ = [
    # Contracts
    "CatalogStore",
    # Models
    "Address",
    "MenuItem",
    "Coordinates",
    # Implementations
    "MenuCatalog",
]
