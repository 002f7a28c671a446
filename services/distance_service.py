# -*- coding: utf-8 -*-
"""
Great-circle distance helpers (Haversine) and distance formatting.
"""

import math
from typing import Optional

from models.coordinate import Coordinate

EARTH_RADIUS_KM = 6371.0
KM_TO_MILES = 0.621371


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate the distance between two coordinates using the Haversine formula.

    Callers with an unresolvable coordinate must use ``math.inf`` instead of
    calling this function.
    """
    if a == b:
        return 0.0

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    # rounding can push h just outside [0, 1] for near-antipodal points
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def distance_miles(a: Coordinate, b: Coordinate) -> float:
    return distance_km(a, b) * KM_TO_MILES


def is_within_radius(center: Coordinate, point: Optional[Coordinate], radius_km: float) -> bool:
    """Check if ``point`` lies within ``radius_km`` of ``center``."""
    if point is None:
        return False
    return distance_km(center, point) <= radius_km


def format_distance(km: Optional[float], metric: bool = True) -> str:
    """
    Format a distance for list display.

    Args:
        km: Distance in kilometers (None / inf means unknown)
        metric: Metric units when True, miles otherwise

    Returns:
        Human readable distance
    """
    if km is None or km < 0 or math.isinf(km):
        return "Distance unknown"

    if metric:
        if km < 0.1:
            return "Less than 100m"
        if km < 1:
            return f"{round(km * 1000)}m"
        if km < 10:
            return f"{round(km, 1)} km"
        return f"{round(km)} km"

    miles = km * KM_TO_MILES
    if miles < 0.1:
        return "Less than 0.1 mi"
    if miles < 1:
        return f"{round(miles, 1)} mi"
    return f"{round(miles)} mi"


def distance_category(km: Optional[float]) -> str:
    """Bucket a distance for filtering and badges."""
    if km is None or math.isinf(km):
        return "unknown"
    if km < 1:
        return "very_close"
    if km < 5:
        return "close"
    if km < 15:
        return "nearby"
    if km < 50:
        return "moderate"
    return "far"
