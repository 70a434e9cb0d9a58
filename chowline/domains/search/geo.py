"""
Geo helpers - Bounding-box pre-filter and haversine distance.

The bounding box uses 111 km per degree of latitude. The longitude span is
the widest longitude reached by a circle of that angular radius,
asin(sin(r) / cos(latitude)), so the box never cuts off points that are
inside the radius. Boxes are not wrapped across the antimeridian.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from chowline.domains.catalog.models import Coordinates

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0

__all__ = [
    "EARTH_RADIUS_KM",
    "KM_PER_DEGREE",
    "BoundingBox",
    "SearchArea",
    "bounding_box",
    "great_circle_km",
    "haversine_km",
]


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular lat/lon window around a search origin."""

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, latitude: float | None, longitude: float | None) -> bool:
        """Missing coordinates are never inside the box."""
        if latitude is None or longitude is None:
            return False
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


def bounding_box(origin: Coordinates, radius_km: float) -> BoundingBox:
    """
    Compute the pre-filter box for a radius search.

    Args:
        origin: Search center
        radius_km: Search radius in kilometers

    Returns:
        Box spanning radius/111 degrees of latitude on each side of the
        origin, and asin(sin(radius/111) / cos(lat)) degrees of longitude
    """
    lat_delta = radius_km / KM_PER_DEGREE

    # Angular radius, padded the same way as the latitude span
    sin_r = math.sin(math.radians(lat_delta))
    cos_lat = math.cos(math.radians(origin.latitude))
    if sin_r >= cos_lat:
        # Circle reaches around the pole; every longitude qualifies
        lon_delta = 360.0
    else:
        lon_delta = math.degrees(math.asin(sin_r / cos_lat))

    return BoundingBox(
        min_latitude=origin.latitude - lat_delta,
        max_latitude=origin.latitude + lat_delta,
        min_longitude=origin.longitude - lon_delta,
        max_longitude=origin.longitude + lon_delta,
    )


def great_circle_km(
    lat1: float | None,
    lon1: float | None,
    lat2: float | None,
    lon2: float | None,
) -> float | None:
    """
    Unrounded haversine distance in kilometers.

    Registered as a SQL function, so any NULL argument yields NULL.
    """
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return None

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Float error can push a slightly past 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points, rounded to 2 decimals."""
    distance = great_circle_km(a.latitude, a.longitude, b.latitude, b.longitude)
    return round(distance or 0.0, 2)


@dataclass(frozen=True)
class SearchArea:
    """Resolved origin, radius and pre-filter box for one search."""

    origin: Coordinates
    radius_km: float
    box: BoundingBox

    @classmethod
    def around(cls, origin: Coordinates, radius_km: float) -> SearchArea:
        return cls(origin=origin, radius_km=radius_km, box=bounding_box(origin, radius_km))

    def includes(self, latitude: float | None, longitude: float | None) -> bool:
        """Exact membership: inside the box and within the radius."""
        if not self.box.contains(latitude, longitude):
            return False
        distance = great_circle_km(
            self.origin.latitude, self.origin.longitude, latitude, longitude
        )
        return distance is not None and distance <= self.radius_km
