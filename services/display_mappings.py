# -*- coding: utf-8 -*-
"""
Centralized display mappings for property/area labels and prices (DRY).

These functions double as search field accessors: the search filter calls
them to build the text a search term is matched against.
"""

from typing import Optional

from models.advertising_area import AdvertisingArea, RateInfo
from models.property import Property


# ============ Property ============

PROPERTY_TYPE_LABELS = {
    "BUILDING": "Building",
    "OFFICE": "Office Building",
    "RETAIL": "Retail Space",
    "COMMERCIAL": "Commercial",
    "WAREHOUSE": "Warehouse",
    "OTHER": "Other",
}


def property_display_name(prop: Property) -> str:
    return prop.display_name


def property_address(prop: Property) -> str:
    """Compose 'address, city, state' with a city/state fallback."""
    if prop.address:
        return ", ".join(prop.address_parts)
    if prop.city and prop.state:
        return f"{prop.city}, {prop.state}"
    return "Address not available"


def property_type_label(prop: Property) -> str:
    type_key = prop.property_type
    if type_key in PROPERTY_TYPE_LABELS:
        return PROPERTY_TYPE_LABELS[type_key]
    if type_key:
        return type_key[:1].upper() + type_key[1:].lower()
    return "Property"


# ============ Advertising Area ============

AREA_TYPE_LABELS = {
    "storefront_window": "Storefront Window",
    "building_exterior": "Building Exterior",
    "retail_frontage": "Retail Frontage",
    "pole_mount": "Billboard",
    "billboard": "Billboard",
    "digital_display": "Digital Display",
    "digital_marquee": "Digital Marquee",
    "luxury_video_wall": "Luxury Video Wall",
    "wall_graphic": "Wall Graphic",
    "floor_graphic": "Floor Graphic",
    "window_display": "Window Display",
    "mall_kiosk": "Mall Kiosk",
    "building_wrap": "Building Wrap",
    "elevator_display": "Elevator Display",
    "parking_totem": "Parking Totem",
    "platform_display": "Platform Display",
    "bus_shelter": "Bus Shelter",
    "gallery_storefront": "Gallery Storefront",
    "coastal_billboard": "Coastal Billboard",
    "lobby_display": "Lobby Display",
    "concourse_display": "Concourse Display",
    "other": "Other",
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "ILS": "₪",
    "EUR": "€",
}

RATE_SUFFIXES = {
    "HOURLY": "/hr",
    "DAILY": "/day",
    "WEEKLY": "/week",
    "MONTHLY": "/month",
    "YEARLY": "/year",
}


def area_display_name(area: AdvertisingArea) -> str:
    return area.display_name


def area_type_label(area: AdvertisingArea) -> str:
    category = area.category
    if category in AREA_TYPE_LABELS:
        return AREA_TYPE_LABELS[category]
    if category:
        return (category[:1].upper() + category[1:]).replace("_", " ")
    return "Advertising Area"


def _format_amount(amount: float, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{round(amount)}"
    return f"{currency} {round(amount)}"


def area_price_display(area: AdvertisingArea) -> str:
    """
    Format the area's price for display.

    Uses the base rate with its rate-type suffix; falls back to the
    daily, weekly, then monthly price of the legacy pricing object.
    """
    rate: Optional[RateInfo] = area.rate_info
    if rate is None:
        return "Price on request"

    if rate.base_rate:
        suffix = RATE_SUFFIXES.get(rate.rate_type, "/day")
        return f"{_format_amount(rate.base_rate, rate.currency)}{suffix}"

    for amount, suffix in ((rate.daily, "/day"), (rate.weekly, "/week"), (rate.monthly, "/month")):
        if amount:
            return f"{_format_amount(amount, rate.currency)}{suffix}"

    return "Price on request"


def area_daily_price(area: AdvertisingArea) -> Optional[float]:
    """
    Normalize the area's price to a daily rate.

    Returns:
        Daily price in the area's currency, or None when unpriced
    """
    rate = area.rate_info
    if rate is None:
        return None

    if rate.base_rate:
        if rate.rate_type == "WEEKLY":
            return round(rate.base_rate / 7)
        if rate.rate_type == "MONTHLY":
            return round(rate.base_rate / 30)
        if rate.rate_type == "YEARLY":
            return round(rate.base_rate / 365)
        if rate.rate_type == "HOURLY":
            return rate.base_rate * 8  # 8 billable hours per day
        return rate.base_rate

    if rate.daily:
        return rate.daily
    if rate.weekly:
        return round(rate.weekly / 7)
    if rate.monthly:
        return round(rate.monthly / 30)
    return None
