# -*- coding: utf-8 -*-
"""
Viewport Controller
===================
Owns the map center and zoom level.

Handles:
- Recentering (the only way the viewport changes)
- Zoom policy for browse, drill-down and user-location views
- Remembering the zoom level to restore after a drill-down
"""

from dataclasses import dataclass
from typing import Optional

from PyQt5.QtCore import pyqtSignal

from app.config import Config
from controllers.base_controller import BaseController, OperationResult
from models.coordinate import Coordinate
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ViewportState:
    """Current map viewport."""
    center: Coordinate
    zoom: int


@dataclass(frozen=True)
class ZoomPolicy:
    """Zoom levels used for each kind of recentering."""
    browse_zoom: int = 12  # city scale
    drill_down_zoom: int = 15  # block scale
    user_location_zoom: int = 12
    min_zoom: int = 1
    max_zoom: int = 20

    @classmethod
    def from_config(cls) -> 'ZoomPolicy':
        return cls(
            browse_zoom=Config.MAP_BROWSE_ZOOM,
            drill_down_zoom=Config.MAP_DRILL_DOWN_ZOOM,
            user_location_zoom=Config.MAP_USER_LOCATION_ZOOM,
            min_zoom=Config.MAP_MIN_ZOOM,
            max_zoom=Config.MAP_MAX_ZOOM,
        )

    def clamp(self, zoom: int) -> int:
        return max(self.min_zoom, min(self.max_zoom, int(zoom)))


def default_center() -> Coordinate:
    """Configured default map center."""
    return Coordinate(lat=Config.MAP_CENTER_LAT, lng=Config.MAP_CENTER_LNG)


class ViewportController(BaseController):
    """
    Controller for the map viewport.

    The viewport is a pure value; nothing here touches the map widget.
    Views listen to ``viewport_changed`` and pan/zoom accordingly.
    """

    viewport_changed = pyqtSignal(object)  # ViewportState

    def __init__(
        self,
        policy: Optional[ZoomPolicy] = None,
        center: Optional[Coordinate] = None,
        parent=None
    ):
        super().__init__(parent)
        self.policy = policy or ZoomPolicy.from_config()
        self._initial_center = center or default_center()
        self._state = ViewportState(
            center=self._initial_center,
            zoom=self.policy.clamp(self.policy.browse_zoom)
        )
        self._saved_zoom: Optional[int] = None

    # ==================== Properties ====================

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def center(self) -> Coordinate:
        return self._state.center

    @property
    def zoom(self) -> int:
        return self._state.zoom

    @property
    def saved_zoom(self) -> Optional[int]:
        """Zoom remembered before the last drill-down, if any."""
        return self._saved_zoom

    # ==================== Mutation ====================

    def recenter(self, center: Coordinate, zoom: Optional[int] = None) -> OperationResult:
        """
        Move the viewport.

        Args:
            center: New center
            zoom: New zoom level (clamped); None keeps the current zoom

        Returns:
            OperationResult with the new ViewportState
        """
        if center is None or not Coordinate.is_valid(center.lat, center.lng):
            return OperationResult.fail(message="Invalid coordinates")

        new_zoom = self._state.zoom if zoom is None else self.policy.clamp(zoom)
        new_state = ViewportState(center=center, zoom=new_zoom)
        if new_state != self._state:
            self._state = new_state
            logger.debug(f"Viewport -> ({center.lat:.5f}, {center.lng:.5f}) z{new_zoom}")
            self.viewport_changed.emit(new_state)
            self._trigger_callbacks("on_viewport_changed", new_state)
        return OperationResult.ok(data=self._state)

    def focus_property(self, coord: Coordinate, remember_zoom: bool = True) -> OperationResult:
        """Center on a property at drill-down zoom."""
        if remember_zoom:
            self._saved_zoom = self._state.zoom
        return self.recenter(coord, self.policy.drill_down_zoom)

    def focus_area(self, coord: Coordinate) -> OperationResult:
        """Center on an area without changing zoom."""
        return self.recenter(coord)

    def focus_user_location(self, coord: Coordinate) -> OperationResult:
        return self.recenter(coord, self.policy.user_location_zoom)

    def restore_zoom(self) -> OperationResult:
        """Return to the zoom level saved before the drill-down."""
        zoom = self._saved_zoom if self._saved_zoom is not None else self.policy.browse_zoom
        self._saved_zoom = None
        return self.recenter(self._state.center, zoom)

    def reset(self):
        """Back to the initial center at browse zoom."""
        self._saved_zoom = None
        self.recenter(self._initial_center, self.policy.browse_zoom)
