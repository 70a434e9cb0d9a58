"""
Tests for search criteria and the proximity search engine.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from chowline.config.errors import ErrorCode, NotFoundError, StorageError

from .geo import SearchArea
from .models import MenuItemHit, SearchCriteria, SearchPage, SortField
from .proximity_search import ProximitySearchEngine
from .ranking import INSERTION_ORDER, SortKey


def _row(item_id: str, name: str, price: float, distance: float | None = None) -> dict:
    return {
        "id": item_id,
        "vendor_id": "v1",
        "category_id": "c1",
        "name": name,
        "description": None,
        "price": price,
        "preparation_time_minutes": 15,
        "image_url": None,
        "is_available": 1,
        "created_at": "2024-01-01T12:00:00+00:00",
        "vendor_name": "Mama Put",
        "category_name": "Rice",
        "distance": distance,
    }


# --- SearchCriteria Tests ---


def test_criteria_defaults() -> None:
    """Defaults: page 1, 20 per page, 10 km, distance first."""
    criteria = SearchCriteria()
    assert criteria.page == 1
    assert criteria.limit == 20
    assert criteria.max_distance == 10.0
    assert criteria.prioritize_distance is True
    assert criteria.is_available is None
    assert criteria.coordinates is None


def test_criteria_blank_query_is_none() -> None:
    """Whitespace-only query means no text filter."""
    assert SearchCriteria(query="   ").query is None
    assert SearchCriteria(query="  jollof ").query == "jollof"


def test_criteria_coordinates() -> None:
    """Coordinates built from latitude/longitude."""
    criteria = SearchCriteria(latitude=6.5244, longitude=3.3792)
    assert criteria.coordinates is not None
    assert criteria.coordinates.latitude == 6.5244
    assert criteria.page_request.offset == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"latitude": 6.5},
        {"longitude": 3.3},
        {"latitude": 91, "longitude": 0},
        {"latitude": 0, "longitude": -181},
        {"latitude": 6.5, "longitude": 3.3, "address_id": "a1"},
        {"max_distance": 0.4},
        {"max_distance": 50.1},
        {"page": 0},
        {"limit": 0},
        {"limit": 101},
        {"min_price": -1},
        {"min_price": 5000, "max_price": 1000},
        {"query": "x" * 201},
        {"sort_by": "rating"},
        {"sort_order": "UP"},
    ],
)
def test_criteria_rejects_invalid_input(kwargs: dict) -> None:
    """Invalid criteria fail validation instead of being clamped."""
    with pytest.raises(ValidationError):
        SearchCriteria(**kwargs)


def test_criteria_boundaries_accepted() -> None:
    """Edge values of each range are valid."""
    SearchCriteria(max_distance=0.5, limit=1)
    SearchCriteria(max_distance=50, limit=100)
    SearchCriteria(latitude=-90, longitude=180)
    SearchCriteria(min_price=1000, max_price=1000)


# --- SearchPage Tests ---


def test_search_page_response_with_distance() -> None:
    """Origin searches serialize distance on every item."""
    page = SearchPage(
        items=[MenuItemHit.from_row(_row("i1", "Jollof Rice", 1500, 2.0))],
        total=1,
        page=1,
        limit=20,
        with_distance=True,
    )
    body = page.to_response()
    assert set(body) == {"items", "total", "page", "limit"}
    assert body["items"][0]["distance"] == 2.0


def test_search_page_response_without_distance() -> None:
    """Searches without an origin omit the distance key."""
    page = SearchPage(
        items=[MenuItemHit.from_row(_row("i1", "Jollof Rice", 1500))],
        total=1,
        page=1,
        limit=20,
    )
    body = page.to_response()
    assert "distance" not in body["items"][0]
    assert body["items"][0]["name"] == "Jollof Rice"
    assert body["total"] == 1


# --- ProximitySearchEngine Tests ---


@pytest.fixture
def mock_store() -> AsyncMock:
    """Create a mock menu store."""
    mock = AsyncMock()
    mock.count_menu_items.return_value = 2
    mock.find_menu_items.return_value = [
        _row("i1", "Jollof Rice", 1500, 2.0),
        _row("i2", "Jollof Special", 1800, 8.0),
    ]
    mock.get_address.return_value = None
    return mock


@pytest.fixture
def engine(mock_store: AsyncMock) -> ProximitySearchEngine:
    return ProximitySearchEngine(mock_store)


async def test_search_with_coordinates(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """Coordinates produce an area and distance-first ordering."""
    criteria = SearchCriteria(query="jollof", latitude=6.5244, longitude=3.3792, max_distance=5)
    page = await engine.search(criteria)

    assert page.total == 2
    assert page.with_distance
    assert [hit.distance for hit in page.items] == [2.0, 8.0]

    count_args = mock_store.count_menu_items.await_args.args
    area = count_args[1]
    assert isinstance(area, SearchArea)
    assert area.radius_km == 5
    assert area.origin.latitude == 6.5244

    find_call = mock_store.find_menu_items.await_args
    assert find_call.args[1] == area
    assert find_call.args[2] == [SortKey("distance"), SortKey(INSERTION_ORDER)]
    assert find_call.kwargs == {"offset": 0, "limit": 20}
    mock_store.get_address.assert_not_awaited()


async def test_search_without_origin(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """No origin: no area, distances null, newest first."""
    mock_store.find_menu_items.return_value = [_row("i1", "Jollof Rice", 1500)]
    mock_store.count_menu_items.return_value = 1

    page = await engine.search(SearchCriteria(query="jollof"))

    assert not page.with_distance
    assert page.items[0].distance is None
    assert mock_store.count_menu_items.await_args.args[1] is None
    assert mock_store.find_menu_items.await_args.args[2] == [
        SortKey("created_at", descending=True),
        SortKey(INSERTION_ORDER),
    ]
    assert "distance" not in page.to_response()["items"][0]


async def test_search_passes_page_window(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """page/limit translate into offset/limit for the store."""
    mock_store.count_menu_items.return_value = 50
    await engine.search(SearchCriteria(page=3, limit=10, sort_by=SortField.PRICE))

    find_call = mock_store.find_menu_items.await_args
    assert find_call.kwargs == {"offset": 20, "limit": 10}


async def test_search_skips_find_when_nothing_matches(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """Zero matches: the page query never runs."""
    mock_store.count_menu_items.return_value = 0

    page = await engine.search(SearchCriteria(latitude=6.5, longitude=3.3))

    assert page.total == 0
    assert page.items == []
    mock_store.find_menu_items.assert_not_awaited()


async def test_search_page_past_end(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """A page beyond the last one is empty but reports the true total."""
    mock_store.count_menu_items.return_value = 10

    page = await engine.search(SearchCriteria(page=3, limit=20))

    assert page.total == 10
    assert page.page == 3
    assert page.items == []
    mock_store.find_menu_items.assert_not_awaited()


async def test_search_with_address_origin(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """address_id resolves to the address coordinates."""
    mock_store.get_address.return_value = {
        "id": "a1",
        "address_line_1": "12 Allen Avenue",
        "city": "Ikeja",
        "state": "Lagos",
        "country": "NG",
        "latitude": 6.6018,
        "longitude": 3.3515,
        "created_at": "2024-01-01T00:00:00+00:00",
    }

    page = await engine.search(SearchCriteria(address_id="a1", max_distance=3))

    mock_store.get_address.assert_awaited_once_with("a1")
    area = mock_store.count_menu_items.await_args.args[1]
    assert area.origin.latitude == 6.6018
    assert area.origin.longitude == 3.3515
    assert area.radius_km == 3
    assert page.with_distance


async def test_search_unknown_address(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """Unknown address_id raises a not-found error before any query."""
    with pytest.raises(NotFoundError) as exc_info:
        await engine.search(SearchCriteria(address_id="missing"))

    assert exc_info.value.code == ErrorCode.ADDRESS_NOT_FOUND
    assert exc_info.value.details == {"address_id": "missing"}
    mock_store.count_menu_items.assert_not_awaited()


async def test_search_address_without_coordinates(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """An address that was never geocoded gives a search without origin."""
    mock_store.get_address.return_value = {
        "id": "a2",
        "address_line_1": "Unknown street",
        "city": "Lagos",
        "state": "Lagos",
        "latitude": None,
        "longitude": None,
    }

    page = await engine.search(SearchCriteria(address_id="a2"))

    assert mock_store.count_menu_items.await_args.args[1] is None
    assert not page.with_distance


async def test_search_propagates_storage_errors(
    engine: ProximitySearchEngine, mock_store: AsyncMock
) -> None:
    """Store failures surface unchanged."""
    mock_store.count_menu_items.side_effect = StorageError(
        "Read failed: disk I/O error", code=ErrorCode.STORAGE_READ_FAILED
    )

    with pytest.raises(StorageError) as exc_info:
        await engine.search(SearchCriteria(query="rice"))

    assert exc_info.value.code == ErrorCode.STORAGE_READ_FAILED
    mock_store.find_menu_items.assert_not_awaited()
