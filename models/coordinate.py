# -*- coding: utf-8 -*-
"""
Geographic coordinate value object.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Coordinate:
    """WGS84 point used by every spatial operation of the discovery engine."""
    lat: float
    lng: float

    @staticmethod
    def is_valid(lat: float, lng: float) -> bool:
        """Check that both values are finite and inside geographic ranges."""
        return (
            math.isfinite(lat) and math.isfinite(lng) and
            -90 <= lat <= 90 and
            -180 <= lng <= 180
        )

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    def to_geojson(self) -> Dict[str, Any]:
        """Convert to GeoJSON format."""
        return {
            "type": "Point",
            "coordinates": [self.lng, self.lat]
        }
