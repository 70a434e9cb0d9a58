"""
Search Domain - Location-aware menu item search.

This domain handles:
- Bounding-box pre-filtering
- Haversine distance
- Distance-first ranking with secondary sort keys
- Pagination with a window-independent total
"""

from .contracts import MenuStore, SearchEngine
from .geo import BoundingBox, SearchArea, bounding_box, great_circle_km, haversine_km
from .models import (
    MenuItemHit,
    SearchCriteria,
    SearchPage,
    SortField,
    SortOrder,
)
from .pagination import Page, PageRequest
from .proximity_search import ProximitySearchEngine
from .ranking import SortKey, compose_sort

__all__ = [
    # Contracts
    "MenuStore",
    "SearchEngine",
    # Models
    "SearchCriteria",
    "SortField",
    "SortOrder",
    "MenuItemHit",
    "SearchPage",
    "Page",
    "PageRequest",
    "SortKey",
    # Geo
    "BoundingBox",
    "SearchArea",
    "bounding_box",
    "great_circle_km",
    "haversine_km",
    # Implementations
    "ProximitySearchEngine",
    "compose_sort",
]
