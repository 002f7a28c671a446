# -*- coding: utf-8 -*-
"""
Entity-field search filter.

A generic, case-insensitive substring filter over configurable text fields.
The same implementation serves properties and advertising areas; only the
field accessor sets differ.
"""

from typing import Any, Callable, List, Optional, Sequence, TypeVar

from services.display_mappings import (
    area_daily_price,
    area_display_name,
    area_type_label,
    property_address,
    property_display_name,
    property_type_label,
)

T = TypeVar("T")

FieldAccessor = Callable[[Any], Optional[str]]

PROPERTY_SEARCH_FIELDS: Sequence[FieldAccessor] = (
    property_display_name,
    property_address,
    property_type_label,
)

AREA_SEARCH_FIELDS: Sequence[FieldAccessor] = (
    area_display_name,
    area_type_label,
)


def filter_by_term(entities: Sequence[T], term: str, fields: Sequence[FieldAccessor]) -> List[T]:
    """
    Keep entities where any field contains the search term.

    Args:
        entities: Entities to filter
        term: Search text; empty or whitespace-only disables filtering
        fields: Pure accessors returning the text to match against

    Returns:
        Matching entities in input order
    """
    if not term or not term.strip():
        return list(entities)

    needle = term.strip().lower()
    matches = []
    for entity in entities:
        for accessor in fields:
            value = accessor(entity)
            if value and needle in str(value).lower():
                matches.append(entity)
                break
    return matches


# ============ Attribute filters (areas) ============

PRICE_RANGE_LIMITS = {
    "under200": 200,
    "under350": 350,
    "under500": 500,
    "under1000": 1000,
    "under2000": 2000,
}

SPACE_TYPE_CATEGORIES = {
    "digital": ["digital_display", "digital_marquee", "luxury_video_wall", "elevator_display", "concourse_display"],
    "outdoor": ["billboard", "coastal_billboard", "building_wrap", "parking_totem", "bus_shelter",
                "pole_mount", "building_exterior"],
    "retail": ["mall_kiosk", "window_display", "gallery_storefront", "lobby_display",
               "storefront_window", "retail_frontage"],
    "transit": ["platform_display", "bus_shelter", "parking_structure"],
    "indoor": ["wall_graphic", "floor_graphic", "other"],
}


def filter_by_price_range(areas: Sequence[T], price_range: str) -> List[T]:
    """
    Filter areas by normalized daily price.

    ``premium`` keeps areas above 500/day; unpriced areas only survive ``all``.
    """
    if not price_range or price_range == "all":
        return list(areas)

    result = []
    for area in areas:
        price = area_daily_price(area)
        if price is None:
            continue
        if price_range == "premium":
            if price > 500:
                result.append(area)
        elif price_range in PRICE_RANGE_LIMITS:
            if price <= PRICE_RANGE_LIMITS[price_range]:
                result.append(area)
        else:
            result.append(area)
    return result


def filter_by_space_type(areas: Sequence[T], space_type: str) -> List[T]:
    """Filter areas whose category belongs to a space type group."""
    if not space_type or space_type == "all":
        return list(areas)

    category_types = SPACE_TYPE_CATEGORIES.get(space_type)
    if not category_types:
        return []

    return [
        area for area in areas
        if any(category in (area.category or "").lower() for category in category_types)
    ]
