"""
Search Models - Data types for search domain.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chowline.domains.catalog.models import Coordinates, MenuItem

from .pagination import Page, PageRequest

DEFAULT_RADIUS_KM = 10.0
MIN_RADIUS_KM = 0.5
MAX_RADIUS_KM = 50.0


class SortField(str, Enum):
    """Fields a search can be ordered by."""

    NAME = "name"
    PRICE = "price"
    CREATED_AT = "created_at"
    DISTANCE = "distance"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


class SearchCriteria(BaseModel):
    """
    Menu item search request.

    An origin is either a latitude/longitude pair or a stored address
    (``address_id``). Without an origin, ``max_distance`` and distance
    sorting have no effect.
    """

    query: str | None = Field(default=None, max_length=200)
    category_id: str | None = None
    vendor_id: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    is_available: bool | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    address_id: str | None = None
    max_distance: float = Field(default=DEFAULT_RADIUS_KM, ge=MIN_RADIUS_KM, le=MAX_RADIUS_KM)
    prioritize_distance: bool = True
    sort_by: SortField | None = None
    sort_order: SortOrder | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    model_config = {"frozen": True}

    @field_validator("query")
    @classmethod
    def _blank_query_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @model_validator(mode="after")
    def _check_consistency(self) -> SearchCriteria:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be supplied together")
        if self.latitude is not None and self.address_id is not None:
            raise ValueError("supply either latitude/longitude or address_id, not both")
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must not exceed max_price")
        return self

    @property
    def coordinates(self) -> Coordinates | None:
        """Origin given directly in the request, if any."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    @property
    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, limit=self.limit)


class MenuItemHit(MenuItem):
    """Menu item annotated with its distance from the search origin."""

    distance: float | None = None


class SearchPage(Page[MenuItemHit]):
    """One page of search results."""

    with_distance: bool = Field(default=False, exclude=True)

    def to_response(self) -> dict[str, Any]:
        """
        Serialize as ``{items, total, page, limit}``.

        ``distance`` appears on every item (possibly null) when the search
        had an origin, and is left out entirely otherwise.
        """
        exclude = None if self.with_distance else {"items": {"__all__": {"distance"}}}
        return self.model_dump(mode="json", exclude=exclude)
