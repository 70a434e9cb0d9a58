"""
Menu Routes - Menu item search and lookup endpoints.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from chowline.domains.catalog import MenuCatalog, MenuItem
from chowline.domains.search import ProximitySearchEngine, SearchCriteria
from chowline.interfaces.api.deps import get_menu_catalog, get_search_engine

router = APIRouter()


@router.get("")
async def search_menu_items(
    criteria: Annotated[SearchCriteria, Query()],
    engine: ProximitySearchEngine = Depends(get_search_engine),
) -> dict[str, Any]:
    """
    Search menu items, optionally around a location.

    - **query**: Case-insensitive match on name or description
    - **category_id** / **vendor_id**: Exact filters
    - **min_price** / **max_price**: Inclusive price range
    - **latitude** + **longitude**, or **address_id**: Search origin
    - **max_distance**: Radius in km (0.5-50, default 10)
    - **prioritize_distance**: Nearest first (default true)
    - **sort_by** / **sort_order**: name, price, created_at, distance / ASC, DESC
    - **page** / **limit**: 1-based page, 1-100 per page

    Items carry `distance` (km) only when an origin was given.
    """
    page = await engine.search(criteria)
    return page.to_response()


@router.get("/vendor/{vendor_id}", response_model=list[MenuItem])
async def get_vendor_menu(
    vendor_id: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Full menu of a vendor, sorted by name."""
    return await catalog.get_vendor_menu(vendor_id)


@router.get("/category/{category_id}", response_model=list[MenuItem])
async def get_category_menu(
    category_id: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Available items in a category, sorted by name."""
    return await catalog.get_category_menu(category_id)


@router.get("/{item_id}", response_model=MenuItem)
async def get_menu_item(
    item_id: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Get a single menu item."""
    return await catalog.get_menu_item(item_id)


@router.put("/{item_id}/availability", response_model=MenuItem)
async def toggle_availability(
    item_id: str,
    catalog: MenuCatalog = Depends(get_menu_catalog),
):
    """Toggle whether a menu item can be ordered."""
    return await catalog.toggle_availability(item_id)
