"""Tests for sort composition."""

from __future__ import annotations

from .models import SearchCriteria, SortField, SortOrder
from .ranking import INSERTION_ORDER, SortKey, compose_sort


def _fields(keys: list[SortKey]) -> list[tuple[str, bool]]:
    return [(k.field, k.descending) for k in keys]


def test_no_origin_defaults_to_newest_first() -> None:
    """Without origin or sort_by, newest items come first."""
    keys = compose_sort(SearchCriteria(), has_origin=False)
    assert _fields(keys) == [("created_at", True), (INSERTION_ORDER, False)]


def test_no_origin_sort_by_defaults_to_descending() -> None:
    """sort_by without sort_order sorts descending."""
    keys = compose_sort(SearchCriteria(sort_by=SortField.PRICE), has_origin=False)
    assert _fields(keys) == [("price", True), (INSERTION_ORDER, False)]


def test_no_origin_explicit_sort_order() -> None:
    """sort_order is honoured."""
    criteria = SearchCriteria(sort_by=SortField.NAME, sort_order=SortOrder.ASC)
    keys = compose_sort(criteria, has_origin=False)
    assert _fields(keys) == [("name", False), (INSERTION_ORDER, False)]


def test_no_origin_ignores_distance_sort() -> None:
    """Distance sort is inert without an origin."""
    criteria = SearchCriteria(sort_by=SortField.DISTANCE, sort_order=SortOrder.ASC)
    keys = compose_sort(criteria, has_origin=False)
    assert _fields(keys) == [("created_at", True), (INSERTION_ORDER, False)]


def test_origin_prioritized_distance_first() -> None:
    """Origin + priority: distance ascending leads."""
    keys = compose_sort(SearchCriteria(latitude=6.5, longitude=3.3), has_origin=True)
    assert _fields(keys) == [("distance", False), (INSERTION_ORDER, False)]


def test_origin_prioritized_secondary_sort_defaults_ascending() -> None:
    """Secondary key breaks distance ties, ascending by default."""
    criteria = SearchCriteria(latitude=6.5, longitude=3.3, sort_by=SortField.PRICE)
    keys = compose_sort(criteria, has_origin=True)
    assert _fields(keys) == [
        ("distance", False),
        ("price", False),
        (INSERTION_ORDER, False),
    ]


def test_origin_prioritized_secondary_sort_descending() -> None:
    """Secondary key direction follows sort_order."""
    criteria = SearchCriteria(
        latitude=6.5, longitude=3.3, sort_by=SortField.NAME, sort_order=SortOrder.DESC
    )
    keys = compose_sort(criteria, has_origin=True)
    assert _fields(keys)[1] == ("name", True)


def test_origin_prioritized_sort_by_distance_is_not_duplicated() -> None:
    """sort_by=distance under priority adds no extra key."""
    criteria = SearchCriteria(latitude=6.5, longitude=3.3, sort_by=SortField.DISTANCE)
    keys = compose_sort(criteria, has_origin=True)
    assert _fields(keys) == [("distance", False), (INSERTION_ORDER, False)]


def test_origin_without_priority_uses_sort_by_only() -> None:
    """Priority off: sort_by drives ordering, distance is not a key."""
    criteria = SearchCriteria(
        latitude=6.5,
        longitude=3.3,
        prioritize_distance=False,
        sort_by=SortField.PRICE,
        sort_order=SortOrder.ASC,
    )
    keys = compose_sort(criteria, has_origin=True)
    assert _fields(keys) == [("price", False), (INSERTION_ORDER, False)]


def test_origin_without_priority_or_sort_by_defaults_to_newest() -> None:
    """Priority off and no sort_by: newest first."""
    criteria = SearchCriteria(latitude=6.5, longitude=3.3, prioritize_distance=False)
    keys = compose_sort(criteria, has_origin=True)
    assert _fields(keys) == [("created_at", True), (INSERTION_ORDER, False)]


def test_origin_without_priority_can_sort_by_distance() -> None:
    """Distance is still an explicit sort option when priority is off."""
    criteria = SearchCriteria(
        latitude=6.5,
        longitude=3.3,
        prioritize_distance=False,
        sort_by=SortField.DISTANCE,
        sort_order=SortOrder.DESC,
    )
    keys = compose_sort(criteria, has_origin=True)
    assert _fields(keys) == [("distance", True), (INSERTION_ORDER, False)]


def test_insertion_order_always_last() -> None:
    """Every composition ends with the stable tie-break."""
    for has_origin in (True, False):
        for sort_by in (None, *SortField):
            criteria = SearchCriteria(latitude=1.0, longitude=1.0, sort_by=sort_by)
            assert compose_sort(criteria, has_origin=has_origin)[-1] == SortKey(INSERTION_ORDER)
