"""
Location utilities - great-circle distance and proximity sorting.

Pure functions, no I/O. Works with domain models exposing ``coordinate`` and
with raw rows (dicts) carrying ``location_latitude`` / ``location_longitude``.
"""

import math
from typing import Any, Iterable, List, Optional, TypeVar

from core.domain.constants import EARTH_RADIUS_MILES, FEET_PER_MILE
from core.domain.models import Coordinate, Nearby
from locales import t

T = TypeVar("T")


def calculate_distance(point1: Coordinate, point2: Coordinate) -> float:
    """
    Distance in miles between two points (Haversine formula).

    Rounded to one decimal place, halves rounded up. Inputs are not
    validated; out-of-range degrees give a number, not an error, and
    NaN or infinite degrees give NaN.
    """
    values = (point1.latitude, point1.longitude, point2.latitude, point2.longitude)
    if not all(math.isfinite(v) for v in values):
        return math.nan

    d_lat = math.radians(point2.latitude - point1.latitude)
    d_lon = math.radians(point2.longitude - point1.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(point1.latitude))
        * math.cos(math.radians(point2.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    # Float error can push antipodal points just past 1
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return _round_tenth(EARTH_RADIUS_MILES * c)


def _round_tenth(value: float) -> float:
    if not math.isfinite(value):
        return math.nan
    # round() is banker's rounding; x.x5 must go up
    return math.floor(value * 10 + 0.5) / 10


def coordinate_of(item: Any) -> Optional[Coordinate]:
    """Extract a coordinate from a model or a row dict, None when unset."""
    if isinstance(item, dict):
        lat = item.get("location_latitude")
        lon = item.get("location_longitude")
        if lat is None or lon is None:
            return None
        return Coordinate(latitude=lat, longitude=lon)
    return getattr(item, "coordinate", None)


def sort_by_distance(
    items: Iterable[T],
    reference: Optional[Coordinate],
    max_radius: Optional[float] = None,
) -> List[Nearby[T]]:
    """
    Order items nearest-first from ``reference``.

    - No reference: every item, input order, no distance.
    - Items without a coordinate get no distance, are never dropped by
      ``max_radius`` and come after all items with a distance, keeping
      their relative input order.
    - Items farther than ``max_radius`` miles are dropped.
    """
    if reference is None:
        return [Nearby(item=item) for item in items]

    located: List[Nearby[T]] = []
    unlocated: List[Nearby[T]] = []

    for item in items:
        coordinate = coordinate_of(item)
        if coordinate is None:
            unlocated.append(Nearby(item=item))
            continue

        distance = calculate_distance(reference, coordinate)
        if max_radius is not None and distance > max_radius:
            continue
        located.append(Nearby(item=item, distance=distance))

    # sort() is stable, so equal distances keep input order; NaN sorts after numbers
    located.sort(key=lambda entry: (math.isnan(entry.distance), entry.distance))
    return located + unlocated


def format_distance(distance: Optional[float]) -> str:
    """Human label: feet under a mile, miles otherwise."""
    if distance is None or math.isnan(distance):
        return t("distance_unknown")

    if distance < 1:
        return t("distance_feet", feet=f"{distance * FEET_PER_MILE:.0f}")

    return t("distance_miles", miles=f"{distance:g}")
