# -*- coding: utf-8 -*-
"""
Advertising area entity model.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RateInfo:
    """
    Pricing attached to an advertising area.

    The backend sends either a base rate with a rate type (HOURLY, DAILY,
    WEEKLY, MONTHLY, YEARLY) or a legacy ``pricing`` object holding
    daily/weekly/monthly prices. Both are kept so display code can fall
    back from one to the other.
    """
    base_rate: Optional[float] = None
    rate_type: str = "DAILY"
    currency: str = "USD"
    daily: Optional[float] = None
    weekly: Optional[float] = None
    monthly: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.base_rate, self.daily, self.weekly, self.monthly))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional['RateInfo']:
        """Build from a backend area payload; None when no price is present."""
        pricing = data.get("pricing") or {}
        if isinstance(pricing, str):
            try:
                pricing = json.loads(pricing)
            except ValueError as e:
                logger.warning(f"Error parsing area pricing: {e}")
                pricing = {}
        if not isinstance(pricing, dict):
            pricing = {}

        rate = cls(
            base_rate=_to_float(data.get("baseRate", data.get("base_rate"))),
            rate_type=str(data.get("rateType") or data.get("rate_type") or "DAILY").upper(),
            currency=str(data.get("currency") or "USD").upper(),
            daily=_to_float(pricing.get("daily")),
            weekly=_to_float(pricing.get("weekly")),
            monthly=_to_float(pricing.get("monthly", data.get("monthly_rate"))),
        )
        return None if rate.is_empty else rate


@dataclass
class AdvertisingArea:
    """
    Advertising area entity: a bookable space inside exactly one property.

    ``category`` is the backend ``type`` tag (billboard, digital_display,
    storefront_window, ...) used both for search and for iconography.
    """

    id: str
    property_id: Optional[str] = None
    name: str = ""
    title: str = ""
    category: str = ""
    description: str = ""
    is_active: bool = True
    rate_info: Optional[RateInfo] = None
    features: List[str] = field(default_factory=list)
    raw_location: Dict[str, Any] = field(default_factory=dict)

    kind = "area"

    @property
    def display_name(self) -> str:
        return self.name or self.title or "Unnamed Advertising Area"

    @property
    def address_parts(self) -> List[str]:
        """Areas are addressed by their property; only a location note is kept."""
        note = self.raw_location.get("location_description") if self.raw_location else None
        return [note] if note else []

    @classmethod
    def from_dict(cls, data: Dict[str, Any], property_id: Optional[str] = None) -> 'AdvertisingArea':
        """Create from a backend payload (camelCase or snake_case keys)."""
        features = data.get("features") or []
        if isinstance(features, dict):
            features = list(features.keys())

        owner = data.get("propertyId", data.get("property_id", property_id))

        return cls(
            id=_to_id(data.get("id")),
            property_id=str(owner) if owner is not None else None,
            name=data.get("name") or "",
            title=data.get("title") or "",
            category=(data.get("type") or data.get("category") or "").lower(),
            description=data.get("description") or "",
            is_active=bool(data.get("isActive", data.get("is_active", True))),
            rate_info=RateInfo.from_dict(data),
            features=list(features),
            raw_location=data,
        )


def _to_float(value: Any) -> Optional[float]:
    """Parse backend numbers (Decimal columns arrive as strings)."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_id(value: Any) -> str:
    """Backend ids as strings; a missing or null id becomes ""."""
    return "" if value is None else str(value)
