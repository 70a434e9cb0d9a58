"""
Catalog Models - Data types for vendors, addresses and menu items.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """A latitude/longitude pair in degrees."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    model_config = {"frozen": True}


class Address(BaseModel):
    """Stored postal address, optionally geocoded."""

    id: str
    user_id: str | None = None
    address_line_1: str
    city: str
    state: str
    country: str = "NG"
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    created_at: datetime | None = None

    @property
    def coordinates(self) -> Coordinates | None:
        """Return coordinates only when both halves are present."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    @property
    def full_address(self) -> str:
        parts = [self.address_line_1, self.city, self.state, self.country]
        return ", ".join(p for p in parts if p)


class MenuItem(BaseModel):
    """Orderable menu item with its vendor and category names joined in."""

    id: str
    vendor_id: str
    category_id: str
    name: str
    description: str | None = None
    price: float = Field(..., ge=0)
    preparation_time_minutes: int = Field(default=15, ge=1, le=480)
    image_url: str | None = None
    is_available: bool = True
    created_at: datetime | None = None
    vendor_name: str | None = None
    category_name: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> MenuItem:
        """Build from a store row, ignoring columns the model doesn't know."""
        return cls.model_validate({k: v for k, v in row.items() if k in cls.model_fields})
