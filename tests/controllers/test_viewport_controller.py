# -*- coding: utf-8 -*-
"""
Tests for the Viewport Controller.
"""

import pytest

from controllers.viewport_controller import ViewportController, ViewportState, ZoomPolicy
from models.coordinate import Coordinate

HOME = Coordinate(33.7175, -117.8311)
PROPERTY = Coordinate(33.6169, -117.8742)


@pytest.fixture
def viewport(qapp):
    return ViewportController(policy=ZoomPolicy(), center=HOME)


class TestViewportController:
    """Test recentering and zoom policy."""

    def test_initial_state(self, viewport):
        assert viewport.state == ViewportState(center=HOME, zoom=12)
        assert viewport.saved_zoom is None

    def test_recenter_keeps_zoom_by_default(self, viewport):
        result = viewport.recenter(PROPERTY)

        assert result.success is True
        assert viewport.center == PROPERTY
        assert viewport.zoom == 12

    @pytest.mark.parametrize("zoom, expected", [(0, 1), (-5, 1), (25, 20), (17, 17)])
    def test_zoom_is_clamped(self, viewport, zoom, expected):
        viewport.recenter(PROPERTY, zoom)
        assert viewport.zoom == expected

    def test_invalid_center_rejected(self, viewport):
        result = viewport.recenter(Coordinate(120.0, 0.0))

        assert result.success is False
        assert viewport.center == HOME

    def test_signal_only_on_change(self, viewport):
        emitted = []
        viewport.viewport_changed.connect(emitted.append)

        viewport.recenter(PROPERTY, 15)
        viewport.recenter(PROPERTY, 15)

        assert emitted == [ViewportState(center=PROPERTY, zoom=15)]

    def test_focus_property_and_restore(self, viewport):
        viewport.recenter(HOME, 10)
        viewport.focus_property(PROPERTY)

        assert viewport.zoom == 15
        assert viewport.saved_zoom == 10

        viewport.restore_zoom()

        assert viewport.zoom == 10
        assert viewport.center == PROPERTY
        assert viewport.saved_zoom is None

    def test_focus_property_without_remembering(self, viewport):
        viewport.focus_property(PROPERTY)
        viewport.recenter(PROPERTY, 18)
        viewport.focus_property(HOME, remember_zoom=False)

        assert viewport.saved_zoom == 12

    def test_restore_without_saved_zoom_uses_browse_zoom(self, viewport):
        viewport.recenter(PROPERTY, 18)
        viewport.restore_zoom()
        assert viewport.zoom == 12

    def test_focus_area_keeps_zoom(self, viewport):
        viewport.focus_property(PROPERTY)
        viewport.focus_area(Coordinate(33.6170, -117.8740))
        assert viewport.zoom == 15

    def test_user_location_zoom(self, qapp):
        viewport = ViewportController(policy=ZoomPolicy(user_location_zoom=13), center=HOME)
        viewport.focus_user_location(PROPERTY)
        assert viewport.state == ViewportState(center=PROPERTY, zoom=13)

    def test_reset(self, viewport):
        viewport.focus_property(PROPERTY)
        viewport.reset()

        assert viewport.state == ViewportState(center=HOME, zoom=12)
        assert viewport.saved_zoom is None

    def test_callbacks(self, viewport):
        seen = []
        viewport.register_callback("on_viewport_changed", seen.append)
        viewport.recenter(PROPERTY)
        assert seen == [ViewportState(center=PROPERTY, zoom=12)]
