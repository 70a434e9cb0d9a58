"""
Seed Import - Load vendors, categories and menu items from JSON.

Expected shape::

    {
      "categories": [{"name": "Rice", "description": "..."}],
      "vendors": [
        {
          "business_name": "Mama Put",
          "address": {"address_line_1": "...", "city": "Lagos", "state": "Lagos",
                      "latitude": 6.5244, "longitude": 3.3792},
          "items": [{"name": "Jollof Rice", "price": 1500, "category": "Rice"}]
        }
      ]
    }

Vendors may omit ``address`` (or its coordinates); their items are then
only reachable through searches without a location.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from chowline.config.errors import ChowlineError, ErrorCode

from .repository import SQLiteMenuRepository

logger = logging.getLogger(__name__)

__all__ = ["import_seed", "load_seed_file"]


def load_seed_file(path: str | Path) -> dict[str, Any]:
    """Read and parse a seed JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ChowlineError(ErrorCode.VALIDATION_ERROR, "Seed file must contain a JSON object")
    return data


async def import_seed(repo: SQLiteMenuRepository, data: dict[str, Any]) -> dict[str, int]:
    """
    Import seed data into the repository.

    Categories are matched by name (case-insensitive) and created on first
    use, so re-running an import never duplicates them.

    Args:
        repo: Initialized repository
        data: Parsed seed document

    Returns:
        Stats dict with category/vendor/item counts created
    """
    stats = {"categories": 0, "vendors": 0, "items": 0}
    category_ids: dict[str, str] = {}

    async def category_id_for(name: str, description: str | None = None) -> str:
        key = name.strip().lower()
        if key not in category_ids:
            existing = await repo.get_category_by_name(name.strip())
            if existing:
                category_ids[key] = existing["id"]
            else:
                category_ids[key] = await repo.insert_category(name.strip(), description)
                stats["categories"] += 1
        return category_ids[key]

    for category in data.get("categories", []):
        await category_id_for(category["name"], category.get("description"))

    for vendor in data.get("vendors", []):
        address_id = None
        address = vendor.get("address")
        if address:
            address_id = await repo.insert_address(
                address_line_1=address["address_line_1"],
                city=address["city"],
                state=address["state"],
                latitude=address.get("latitude"),
                longitude=address.get("longitude"),
                country=address.get("country", "NG"),
            )

        vendor_id = await repo.insert_vendor(
            vendor["business_name"],
            address_id=address_id,
            is_active=vendor.get("is_active", True),
        )
        stats["vendors"] += 1

        for item in vendor.get("items", []):
            await repo.insert_menu_item(
                vendor_id=vendor_id,
                category_id=await category_id_for(item.get("category", "Uncategorized")),
                name=item["name"],
                price=float(item["price"]),
                description=item.get("description"),
                preparation_time_minutes=item.get("preparation_time_minutes", 15),
                image_url=item.get("image_url"),
                is_available=item.get("is_available", True),
            )
            stats["items"] += 1

    logger.info(
        "Imported %d categories, %d vendors, %d items",
        stats["categories"],
        stats["vendors"],
        stats["items"],
    )
    return stats
