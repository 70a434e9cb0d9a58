"""
Ranking - Compose the ordering of a menu item search.

The composed keys are store-agnostic. The SQLite adapter maps each field to
a whitelisted column.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import SearchCriteria, SortField, SortOrder

INSERTION_ORDER = "insertion_order"

__all__ = ["INSERTION_ORDER", "SortKey", "compose_sort"]


@dataclass(frozen=True)
class SortKey:
    """One ORDER BY term."""

    field: str
    descending: bool = False


_DEFAULT_KEY = SortKey(SortField.CREATED_AT.value, descending=True)
_TIE_BREAK = SortKey(INSERTION_ORDER)


def compose_sort(criteria: SearchCriteria, has_origin: bool) -> list[SortKey]:
    """
    Build the ordered sort keys for a search.

    Rules:
    - Origin + ``prioritize_distance``: distance ascending first, then the
      requested ``sort_by`` (default ASC) as a tie-break.
    - Origin without priority: the requested ``sort_by`` (default DESC)
      drives the order; distance is display-only unless asked for.
    - No origin: the requested ``sort_by`` (default DESC); ``distance`` is
      ignored.
    - With no usable ``sort_by``, fall back to newest first.
    - Insertion order always closes the list so equal rows stay stable.

    Args:
        criteria: Validated search criteria
        has_origin: Whether an origin was resolved for this search

    Returns:
        Sort keys, most significant first
    """
    keys: list[SortKey] = []
    sort_by = criteria.sort_by

    if not has_origin and sort_by is SortField.DISTANCE:
        sort_by = None

    if has_origin and criteria.prioritize_distance:
        keys.append(SortKey(SortField.DISTANCE.value))
        if sort_by is not None and sort_by is not SortField.DISTANCE:
            order = criteria.sort_order or SortOrder.ASC
            keys.append(SortKey(sort_by.value, descending=order is SortOrder.DESC))
    elif sort_by is not None:
        order = criteria.sort_order or SortOrder.DESC
        keys.append(SortKey(sort_by.value, descending=order is SortOrder.DESC))
    else:
        keys.append(_DEFAULT_KEY)

    keys.append(_TIE_BREAK)
    return keys
