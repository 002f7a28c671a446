# -*- coding: utf-8 -*-
"""
AdSpace Discovery Controllers
=============================
Controller layer driving the browse map.

Controllers provide:
- Standardized results via OperationResult
- Qt signals for view updates
- Selection, search and viewport state

Usage:
    from controllers import DiscoveryController
    from services.mock_data_provider import InMemoryPropertyRepository

    controller = DiscoveryController(InMemoryPropertyRepository())
    controller.mount()
    for item in controller.snapshot().visible_entities:
        print(item.entity.display_name, item.distance_km)
"""

# Base controller and result types
from controllers.base_controller import (
    BaseController,
    OperationResult,
)

# Viewport
from controllers.viewport_controller import (
    ViewportController,
    ViewportState,
    ZoomPolicy,
)

# Discovery
from controllers.discovery_controller import (
    AreaFilters,
    DiscoveryController,
    DiscoverySnapshot,
    SearchState,
    SelectionState,
    ViewMode,
)

# All public exports
__all__ = [
    # Base
    "BaseController",
    "OperationResult",

    # Viewport
    "ViewportController",
    "ViewportState",
    "ZoomPolicy",

    # Discovery
    "AreaFilters",
    "DiscoveryController",
    "DiscoverySnapshot",
    "SearchState",
    "SelectionState",
    "ViewMode",
]
