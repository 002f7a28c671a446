# -*- coding: utf-8 -*-
"""
Device geolocation providers.

Geolocation is best effort: a provider raises GeolocationUnavailable when
the position is denied or unknown and the caller keeps its default center.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.config import Config
from models.coordinate import Coordinate
from services.coordinate_resolver import resolve_coordinate
from services.exceptions import GeolocationUnavailable
from utils.logger import get_logger

logger = get_logger(__name__)


class GeolocationProvider(ABC):
    """Source of the current device position."""

    @abstractmethod
    def get_current_position(self) -> Coordinate:
        """Return the device position or raise GeolocationUnavailable."""
        pass


class StaticGeolocationProvider(GeolocationProvider):
    """Provider returning a fixed, configured position."""

    def __init__(self, position: Coordinate):
        self.position = position

    def get_current_position(self) -> Coordinate:
        return self.position


class UnavailableGeolocationProvider(GeolocationProvider):
    """Provider for devices without location access (always denied)."""

    def get_current_position(self) -> Coordinate:
        raise GeolocationUnavailable("Location access is not available")


def create_geolocation_provider() -> GeolocationProvider:
    """Build a provider from DEVICE_LAT / DEVICE_LNG, if configured."""
    position: Optional[Coordinate] = resolve_coordinate(
        {"lat": Config.DEVICE_LAT, "lng": Config.DEVICE_LNG}
    )
    if position is None:
        logger.debug("No device position configured")
        return UnavailableGeolocationProvider()
    return StaticGeolocationProvider(position)
