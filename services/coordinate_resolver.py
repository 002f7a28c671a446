# -*- coding: utf-8 -*-
"""
Coordinate Resolver.

Extracts a normalized Coordinate from the location shapes the backend and
the map layer use:
- flat ``{"latitude": .., "longitude": ..}``
- nested ``{"location": {"latitude": .., "longitude": ..}}``
- short ``{"lat": .., "lng": ..}``
- any object exposing those attributes

A missing or malformed location is a normal outcome (the entity is simply
not plottable), so nothing here raises.
"""

from numbers import Real
from typing import Any, Iterable, List, Optional

from models.coordinate import Coordinate

_KEY_PAIRS = (("latitude", "longitude"), ("lat", "lng"))


def _as_number(value: Any) -> Optional[float]:
    """Return a float for real numbers and numeric strings, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _get(source: Any, key: str) -> Any:
    if isinstance(source, dict):
        return source.get(key)
    return getattr(source, key, None)


def _from_pair(source: Any) -> Optional[Coordinate]:
    for lat_key, lng_key in _KEY_PAIRS:
        lat = _as_number(_get(source, lat_key))
        lng = _as_number(_get(source, lng_key))
        if lat is not None and lng is not None:
            if Coordinate.is_valid(lat, lng):
                return Coordinate(lat=lat, lng=lng)
            return None
    return None


def resolve_coordinate(raw_location: Any) -> Optional[Coordinate]:
    """
    Resolve a raw location into a Coordinate.

    Args:
        raw_location: Backend payload, nested location object or Coordinate

    Returns:
        Coordinate, or None when the location is absent or invalid
    """
    if raw_location is None:
        return None
    if isinstance(raw_location, Coordinate):
        return raw_location

    coord = _from_pair(raw_location)
    if coord is not None:
        return coord

    nested = _get(raw_location, "location")
    if nested is not None and nested is not raw_location:
        return _from_pair(nested)

    return None


def entity_coordinate(entity: Any) -> Optional[Coordinate]:
    """Resolve the coordinate of a Property / AdvertisingArea (or a raw dict)."""
    raw = getattr(entity, "raw_location", entity)
    return resolve_coordinate(raw)


def is_locatable(entity: Any) -> bool:
    return entity_coordinate(entity) is not None


def locatable_only(entities: Iterable[Any]) -> List[Any]:
    """Drop entities without a resolvable coordinate, keeping input order."""
    return [entity for entity in entities if is_locatable(entity)]
