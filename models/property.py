# -*- coding: utf-8 -*-
"""
Property entity model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.advertising_area import AdvertisingArea, _to_id


@dataclass
class Property:
    """
    Property entity: a site owned by a space owner that hosts advertising areas.

    ``raw_location`` keeps the backend payload as received; coordinates are
    read from it lazily because the backend uses more than one shape
    (flat latitude/longitude or a nested ``location`` object).

    ``advertising_areas`` is None when the payload did not embed areas and
    a list (possibly empty) when it did.
    """

    id: str
    title: str = ""
    name: str = ""
    property_type: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    description: str = ""
    raw_location: Dict[str, Any] = field(default_factory=dict)
    advertising_areas: Optional[List[AdvertisingArea]] = None

    kind = "property"

    def __post_init__(self):
        """Keep areas composed under this property."""
        if self.advertising_areas:
            for area in self.advertising_areas:
                if area.property_id is None:
                    area.property_id = self.id

    @property
    def display_name(self) -> str:
        return self.title or self.name or "Unnamed Property"

    @property
    def address_parts(self) -> List[str]:
        """Ordered, non-empty address components."""
        return [part for part in (self.address, self.city, self.state) if part]

    @property
    def has_embedded_areas(self) -> bool:
        return self.advertising_areas is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Property':
        """Create from a backend payload (camelCase or snake_case keys)."""
        location = data.get("location") if isinstance(data.get("location"), dict) else {}
        property_id = _to_id(data.get("id"))

        areas = None
        if data.get("advertising_areas") is not None:
            areas = [
                AdvertisingArea.from_dict(item, property_id=property_id)
                for item in data["advertising_areas"]
            ]

        return cls(
            id=property_id,
            title=data.get("title") or data.get("property_name") or "",
            name=data.get("name") or "",
            property_type=data.get("propertyType") or data.get("property_type") or data.get("type") or "",
            address=data.get("address") or location.get("address") or "",
            city=data.get("city") or location.get("city") or "",
            state=data.get("state") or location.get("state") or "",
            zipcode=data.get("zipcode") or location.get("zipcode") or "",
            description=data.get("description") or "",
            raw_location=data,
            advertising_areas=areas,
        )
