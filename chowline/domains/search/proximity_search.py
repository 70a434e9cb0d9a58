"""
Proximity Search Engine - Location-aware menu item search.

Features:
- Origin from coordinates or a saved address
- Bounding-box pre-filter plus exact haversine radius
- Distance-first ranking with an opt-out
- Count-then-page query split
"""

from __future__ import annotations

import logging

from chowline.config.errors import ErrorCode, NotFoundError
from chowline.domains.catalog.models import Address, Coordinates

from .contracts import MenuStore
from .geo import SearchArea
from .models import MenuItemHit, SearchCriteria, SearchPage
from .ranking import compose_sort

logger = logging.getLogger(__name__)

__all__ = ["ProximitySearchEngine"]


class ProximitySearchEngine:
    """
    Menu item search with optional proximity filtering and ranking.

    Holds nothing but a reference to the store, so one instance can serve
    any number of concurrent searches.

    Example:
        >>> engine = ProximitySearchEngine(repo)
        >>> page = await engine.search(
        ...     SearchCriteria(query="jollof", latitude=6.5244, longitude=3.3792, max_distance=5)
        ... )
        >>> page.total, [hit.distance for hit in page.items]
    """

    def __init__(self, store: MenuStore) -> None:
        """
        Initialize search engine.

        Args:
            store: Menu store providing count/find/address lookups
        """
        self._store = store

    async def search(self, criteria: SearchCriteria) -> SearchPage:
        """
        Execute a menu item search.

        The count query runs first and never selects or sorts by distance.
        The page query runs only when the requested window overlaps the
        result set.

        Args:
            criteria: Validated search criteria

        Returns:
            One page of hits plus the total number of matches

        Raises:
            NotFoundError: If ``address_id`` does not exist
            StorageError: If the store fails
        """
        origin = await self._resolve_origin(criteria)
        area = SearchArea.around(origin, criteria.max_distance) if origin else None
        sort_keys = compose_sort(criteria, has_origin=area is not None)
        request = criteria.page_request

        if area is not None:
            logger.info(
                "Distance search: origin=(%.5f, %.5f) radius=%.1fkm prioritize=%s",
                area.origin.latitude,
                area.origin.longitude,
                area.radius_km,
                criteria.prioritize_distance,
            )

        total = await self._store.count_menu_items(criteria, area)

        hits: list[MenuItemHit] = []
        if not request.past_end(total):
            rows = await self._store.find_menu_items(
                criteria,
                area,
                sort_keys,
                offset=request.offset,
                limit=request.limit,
            )
            hits = [MenuItemHit.from_row(row) for row in rows]

        self._log_summary(criteria, total, hits, area is not None)

        return SearchPage(
            items=hits,
            total=total,
            page=request.page,
            limit=request.limit,
            with_distance=area is not None,
        )

    async def _resolve_origin(self, criteria: SearchCriteria) -> Coordinates | None:
        """Pick the origin from the request or from the referenced address."""
        if criteria.coordinates is not None:
            return criteria.coordinates

        if criteria.address_id is None:
            return None

        row = await self._store.get_address(criteria.address_id)
        if row is None:
            raise NotFoundError(
                f"Address with ID {criteria.address_id} not found",
                details={"address_id": criteria.address_id},
                code=ErrorCode.ADDRESS_NOT_FOUND,
            )

        address = Address.model_validate(row)
        if address.coordinates is None:
            logger.warning(
                "Address %s has no coordinates; searching without location",
                address.id,
            )
        return address.coordinates

    @staticmethod
    def _log_summary(
        criteria: SearchCriteria,
        total: int,
        hits: list[MenuItemHit],
        with_distance: bool,
    ) -> None:
        distances = [h.distance for h in hits if h.distance is not None]
        if with_distance and distances:
            logger.info(
                "Search: query='%s' -> total=%d page=%d (%d items, %.2f-%.2f km)",
                (criteria.query or "*")[:50],
                total,
                criteria.page,
                len(hits),
                min(distances),
                max(distances),
            )
        else:
            logger.info(
                "Search: query='%s' -> total=%d page=%d (%d items)",
                (criteria.query or "*")[:50],
                total,
                criteria.page,
                len(hits),
            )
