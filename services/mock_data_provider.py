# -*- coding: utf-8 -*-
"""
In-memory Data Provider for development, demos and tests.

Serves a small seeded Orange County catalog. Selecting this provider is a
configuration decision (DATA_PROVIDER=mock); the discovery engine never
substitutes it for a failing backend.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional

from models.advertising_area import AdvertisingArea
from models.property import Property
from services.data_provider import DataProviderType, PropertyRepository
from utils.logger import get_logger

logger = get_logger(__name__)


SAMPLE_PROPERTIES: List[Dict[str, Any]] = [
    {
        "id": "prop_1_fashion_island",
        "title": "Newport Beach Fashion Island",
        "name": "Fashion Island Shopping Center",
        "address": "1145 Newport Center Dr",
        "city": "Newport Beach",
        "state": "CA",
        "latitude": 33.6169,
        "longitude": -117.8742,
        "propertyType": "RETAIL",
    },
    {
        "id": "prop_2_irvine_tech",
        "title": "Irvine Tech Campus",
        "name": "Irvine Company Tech Center",
        "address": "18400 Von Karman Ave",
        "city": "Irvine",
        "state": "CA",
        "latitude": 33.6846,
        "longitude": -117.8265,
        "propertyType": "OFFICE",
    },
    {
        "id": "prop_3_anaheim_convention",
        "title": "Anaheim Convention Center",
        "address": "800 W Katella Ave",
        "city": "Anaheim",
        "state": "CA",
        "location": {"latitude": 33.8003, "longitude": -117.9195},
        "propertyType": "COMMERCIAL",
    },
    {
        "id": "prop_4_unmapped",
        "title": "Costa Mesa Warehouse Lofts",
        "city": "Costa Mesa",
        "state": "CA",
        "latitude": None,
        "longitude": None,
        "propertyType": "WAREHOUSE",
    },
]

SAMPLE_AREAS: Dict[str, List[Dict[str, Any]]] = {
    "prop_1_fashion_island": [
        {"id": "area_fi_1", "name": "Main Entrance Digital Display", "type": "digital_display",
         "baseRate": 350, "rateType": "DAILY", "currency": "USD"},
        {"id": "area_fi_2", "name": "Parking Structure Totem", "type": "parking_totem",
         "pricing": '{"weekly": 1400}'},
    ],
    "prop_2_irvine_tech": [
        {"id": "area_it_1", "name": "Lobby Video Wall", "type": "luxury_video_wall",
         "baseRate": 6800, "rateType": "MONTHLY"},
    ],
    "prop_3_anaheim_convention": [],
}


class InMemoryPropertyRepository(PropertyRepository):
    """
    Repository serving properties and areas from memory.

    Args:
        properties: Backend-shaped property payloads (defaults to the sample catalog)
        areas: Backend-shaped area payloads keyed by property id
        embed_areas: Embed areas in the property payloads like the list endpoint can
    """

    def __init__(
        self,
        properties: Optional[Iterable[Dict[str, Any]]] = None,
        areas: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        embed_areas: bool = False
    ):
        self._properties = copy.deepcopy(list(properties if properties is not None else SAMPLE_PROPERTIES))
        self._areas = copy.deepcopy(areas if areas is not None else SAMPLE_AREAS)
        self.embed_areas = embed_areas
        self.area_requests: List[str] = []

    @property
    def provider_type(self) -> DataProviderType:
        return DataProviderType.MOCK

    def list_properties(self) -> List[Property]:
        result = []
        for item in self._properties:
            payload = dict(item)
            if self.embed_areas:
                payload["advertising_areas"] = self._areas.get(str(item.get("id")), [])
            result.append(Property.from_dict(payload))
        logger.debug(f"Serving {len(result)} properties from memory")
        return result

    def list_areas(self, property_id: str) -> List[AdvertisingArea]:
        self.area_requests.append(property_id)
        return [
            AdvertisingArea.from_dict(item, property_id=property_id)
            for item in self._areas.get(property_id, [])
        ]
