# -*- coding: utf-8 -*-
"""
Discovery Controller
====================
Drives the browse map: which properties or advertising areas are visible,
in which order, and what is selected.

Handles:
- Loading the property collection once per mount
- Search term filtering and proximity ranking of the visible list
- Drill-down from a property to its advertising areas and back
- Lazy, per-property areas cache
- Best-effort recentering on the device position
- Discarding async results that arrive after unmount or after the
  selection moved on
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple

from PyQt5.QtCore import pyqtSignal

from app.config import Config
from controllers.base_controller import BaseController, OperationResult
from controllers.viewport_controller import ViewportController, ViewportState
from models.advertising_area import AdvertisingArea
from models.coordinate import Coordinate
from models.property import Property
from services.coordinate_resolver import entity_coordinate, locatable_only
from services.data_provider import PropertyRepository
from services.geolocation_service import GeolocationProvider
from services.proximity_ranker import RankedEntity, RankingCache, rank_by_proximity
from services.search_filter import (
    AREA_SEARCH_FIELDS, PROPERTY_SEARCH_FIELDS,
    filter_by_price_range, filter_by_space_type, filter_by_term
)
from services.task_runner import CancellationToken, ImmediateTaskRunner, TaskRunner
from utils.logger import get_logger

logger = get_logger(__name__)


class ViewMode(Enum):
    """Navigation level of the browse map."""
    PROPERTIES = "properties"
    AREAS = "areas"


@dataclass(frozen=True)
class SelectionState:
    """
    Current selection.

    AREAS mode always has a selected property, and an area can only be
    selected in AREAS mode.
    """
    mode: ViewMode = ViewMode.PROPERTIES
    selected_property: Optional[Property] = None
    selected_area: Optional[AdvertisingArea] = None


@dataclass(frozen=True)
class SearchState:
    """Search term applied to the collection of the current mode."""
    term: str = ""


@dataclass(frozen=True)
class AreaFilters:
    """Attribute filters applied to the areas working set."""
    price_range: str = "all"
    space_type: str = "all"


@dataclass(frozen=True)
class DiscoverySnapshot:
    """Complete observable output of the engine after an event."""
    visible_entities: Tuple[RankedEntity, ...]
    selection: SelectionState
    viewport: ViewportState
    search_term: str = ""
    is_loading: bool = False
    is_loading_areas: bool = False

    @property
    def visible_ids(self) -> List[str]:
        return [item.id for item in self.visible_entities]


class DiscoveryController(BaseController):
    """
    Controller for property/area discovery on the browse map.

    Every public method runs on the GUI thread. Data loads go through the
    task runner; their completions are applied only while the mount token
    is live, and area results only while they match the selected property.
    """

    # Signals
    snapshot_changed = pyqtSignal(object)  # DiscoverySnapshot
    selection_changed = pyqtSignal(object)  # SelectionState
    properties_loaded = pyqtSignal(list)  # List[Property]
    properties_load_failed = pyqtSignal(str)  # error message
    areas_loaded = pyqtSignal(str, list)  # property_id, List[AdvertisingArea]
    areas_load_failed = pyqtSignal(str, str)  # property_id, error message
    user_location_changed = pyqtSignal(object)  # Coordinate

    def __init__(
        self,
        repository: PropertyRepository,
        geolocation: Optional[GeolocationProvider] = None,
        task_runner: Optional[TaskRunner] = None,
        viewport: Optional[ViewportController] = None,
        nearby_limit: Optional[int] = None,
        parent=None
    ):
        super().__init__(parent)
        self.repository = repository
        self.geolocation = geolocation
        self.task_runner = task_runner or ImmediateTaskRunner()
        self.viewport = viewport or ViewportController(parent=self)
        self.nearby_limit = Config.NEARBY_LIMIT if nearby_limit is None else nearby_limit

        self._ranking_cache = RankingCache()
        self._mount_token: Optional[CancellationToken] = None
        self._generation = 0
        self._reset_state()

    def _reset_state(self):
        self._properties: List[Property] = []
        self._areas: List[AdvertisingArea] = []
        self._areas_cache: Dict[str, List[AdvertisingArea]] = {}
        self._pending_area_loads: Set[str] = set()
        self._awaiting_areas: Optional[Tuple[str, int]] = None  # (property_id, generation)
        self._selection = SelectionState()
        self._search = SearchState()
        self._area_filters = AreaFilters()
        self._user_location: Optional[Coordinate] = None
        self._ranking_cache.clear()

    # ==================== Properties ====================

    @property
    def is_mounted(self) -> bool:
        return self._mount_token is not None and not self._mount_token.is_cancelled

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def mode(self) -> ViewMode:
        return self._selection.mode

    @property
    def search_term(self) -> str:
        return self._search.term

    @property
    def properties(self) -> List[Property]:
        return list(self._properties)

    @property
    def areas(self) -> List[AdvertisingArea]:
        """Areas working set of the selected property."""
        return list(self._areas)

    @property
    def user_location(self) -> Optional[Coordinate]:
        return self._user_location

    @property
    def is_loading_areas(self) -> bool:
        return self._awaiting_areas is not None

    @property
    def generation(self) -> int:
        return self._generation

    def cached_area_property_ids(self) -> List[str]:
        return list(self._areas_cache.keys())

    def get_cache_stats(self) -> Dict[str, int]:
        return self._ranking_cache.get_cache_stats()

    # ==================== Lifecycle ====================

    def mount(self) -> OperationResult:
        """Start a browse session: load properties and look up the device position."""
        if self.is_mounted:
            logger.warning("Discovery engine already mounted")
            return OperationResult.fail(message="Already mounted")

        self._reset_state()
        self._mount_token = CancellationToken(tag="mount")
        self._log_operation("mount")
        self._publish()

        self.load_properties()
        self.request_user_location()
        return OperationResult.ok()

    def unmount(self):
        """
        Tear down the session.

        In-flight loads are discarded when they complete; selection,
        viewport and caches go back to their initial values.
        """
        if self._mount_token is not None:
            self._mount_token.cancel()
        self._mount_token = None
        self._generation += 1
        self._reset_state()
        self._set_loading(False)
        self.viewport.reset()
        self._log_operation("unmount")
        self._publish()

    def _child_token(self, tag) -> Optional[CancellationToken]:
        if not self.is_mounted:
            logger.warning(f"Ignoring {tag!r}: discovery engine is not mounted")
            return None
        return self._mount_token.child(tag=tag)

    # ==================== Loading ====================

    def load_properties(self) -> OperationResult:
        """Issue the property collection load."""
        token = self._child_token("properties")
        if token is None:
            return OperationResult.fail(message="Not mounted")

        self._emit_started("load_properties")
        self.task_runner.submit(
            "load_properties",
            self.repository.list_properties,
            self._on_properties_result,
            token
        )
        return OperationResult.ok()

    def _on_properties_result(self, result: OperationResult):
        if result.success:
            self._properties = list(result.data or [])
            self._ranking_cache.clear()
            logger.info(f"Loaded {len(self._properties)} properties")
            self.properties_loaded.emit(self.properties)
            self._center_on_first_property()
        else:
            self._properties = []
            self._emit_error("load_properties", result.message)
            self.properties_load_failed.emit(result.message)

        self._emit_completed("load_properties", result.success)
        self._trigger_callbacks("on_properties_loaded", result)
        self._publish()

    def _center_on_first_property(self):
        """Without a device position, start the map on the first plottable property."""
        if self._user_location is not None or self._selection.selected_property is not None:
            return
        for prop in self._properties:
            coord = entity_coordinate(prop)
            if coord is not None:
                self.viewport.recenter(coord)
                return

    def request_user_location(self) -> OperationResult:
        """Best-effort device position lookup; denial keeps the default center."""
        if self.geolocation is None:
            return OperationResult.fail(message="No geolocation provider")
        token = self._child_token("geolocation")
        if token is None:
            return OperationResult.fail(message="Not mounted")

        self.task_runner.submit(
            "user_location",
            self.geolocation.get_current_position,
            self._on_user_location_result,
            token
        )
        return OperationResult.ok()

    def _on_user_location_result(self, result: OperationResult):
        if not result.success or result.data is None:
            logger.debug(f"Device position unavailable: {result.message}")
            return

        self._user_location = result.data
        self.user_location_changed.emit(result.data)
        if self._selection.selected_property is None:
            self.viewport.focus_user_location(result.data)
        self._publish()

    # ==================== Search ====================

    def set_search_term(self, term: str):
        """Filter the visible collection of the current mode."""
        term = term or ""
        if term == self._search.term:
            return
        self._search = SearchState(term=term)
        self._publish()

    def set_area_filters(self, price_range: str = "all", space_type: str = "all"):
        """Filter the areas working set by daily price range and space type."""
        filters = AreaFilters(price_range=price_range, space_type=space_type)
        if filters == self._area_filters:
            return
        self._area_filters = filters
        self._publish()

    # ==================== Navigation ====================

    def select_property(self, prop: Property) -> OperationResult:
        """
        Drill down into a property.

        Allowed from both modes. The engine enters AREAS once the property's
        areas are available, even when the load fails or is empty.
        """
        coord = entity_coordinate(prop) if prop is not None else None
        if coord is None:
            logger.warning(f"Ignoring selection of unlocatable property {getattr(prop, 'id', None)!r}")
            return OperationResult.fail(message="Property has no location")

        token = self._child_token(("areas", prop.id))
        if token is None:
            return OperationResult.fail(message="Not mounted")

        self._log_operation("select_property", property_id=prop.id)
        remember_zoom = self._selection.selected_property is None

        self._generation += 1
        self._selection = SelectionState(
            mode=self._selection.mode,
            selected_property=prop,
            selected_area=None
        )
        self._areas = []
        self._awaiting_areas = None

        self.viewport.focus_property(coord, remember_zoom=remember_zoom)

        if prop.id in self._areas_cache:
            logger.debug(f"Reusing cached areas for property {prop.id}")
            self._enter_areas(prop, self._areas_cache[prop.id])
        elif prop.advertising_areas is not None:
            self._areas_cache[prop.id] = list(prop.advertising_areas)
            self._enter_areas(prop, self._areas_cache[prop.id])
        else:
            self._request_areas(prop, token)

        self.selection_changed.emit(self._selection)
        self._publish()
        return OperationResult.ok(data=self._selection)

    def _request_areas(self, prop: Property, token: CancellationToken):
        self._awaiting_areas = (prop.id, self._generation)

        if prop.id in self._pending_area_loads:
            logger.debug(f"Joining in-flight areas load for property {prop.id}")
            return

        self._pending_area_loads.add(prop.id)
        self.operation_started.emit("load_areas")
        self.task_runner.submit(
            "load_areas",
            lambda: self.repository.list_areas(prop.id),
            lambda result, property_id=prop.id: self._on_areas_result(property_id, result),
            token
        )

    def _on_areas_result(self, property_id: str, result: OperationResult):
        self._pending_area_loads.discard(property_id)
        self.operation_completed.emit("load_areas", result.success)

        if result.success:
            self._areas_cache[property_id] = list(result.data or [])
        else:
            logger.error(f"Failed to load areas for property {property_id}: {result.message}")

        awaiting = self._awaiting_areas
        selected = self._selection.selected_property
        if awaiting is None or awaiting[0] != property_id or selected is None or selected.id != property_id:
            logger.debug(
                f"Discarding areas of property {property_id} "
                f"(selection is {selected.id if selected else None})"
            )
            return

        if result.success:
            self._enter_areas(selected, self._areas_cache[property_id])
        else:
            self._set_error(result.message)
            self._enter_areas(selected, [], error=result.message)
        self.selection_changed.emit(self._selection)
        self._publish()

    def _enter_areas(self, prop: Property, areas: List[AdvertisingArea], error: Optional[str] = None):
        self._awaiting_areas = None
        self._areas = areas
        self._selection = SelectionState(mode=ViewMode.AREAS, selected_property=prop, selected_area=None)
        if error is None:
            self.areas_loaded.emit(prop.id, list(areas))
        else:
            self.areas_load_failed.emit(prop.id, error)

    def select_area(self, area: AdvertisingArea) -> OperationResult:
        """Select an area of the drilled-down property (zoom unchanged)."""
        prop = self._selection.selected_property
        if self._selection.mode != ViewMode.AREAS or prop is None:
            logger.warning("Area selection outside of areas mode ignored")
            return OperationResult.fail(message="Not in areas mode")
        if area is None or area.property_id != prop.id:
            logger.warning(f"Area {getattr(area, 'id', None)!r} does not belong to property {prop.id}")
            return OperationResult.fail(message="Area does not belong to the selected property")

        self._log_operation("select_area", area_id=area.id)
        self._selection = SelectionState(mode=ViewMode.AREAS, selected_property=prop, selected_area=area)

        area_coord = entity_coordinate(area)
        if area_coord is not None and area_coord != entity_coordinate(prop):
            self.viewport.focus_area(area_coord)

        self.selection_changed.emit(self._selection)
        self._publish()
        return OperationResult.ok(data=self._selection)

    def clear_area_selection(self):
        """Deselect the area and stay on the property's areas."""
        if self._selection.selected_area is None:
            return
        self._selection = SelectionState(
            mode=self._selection.mode,
            selected_property=self._selection.selected_property,
            selected_area=None
        )
        self.selection_changed.emit(self._selection)
        self._publish()

    def back(self) -> OperationResult:
        """Return to properties mode; the areas cache is kept."""
        if self._selection.selected_property is None and self._selection.mode == ViewMode.PROPERTIES:
            return OperationResult.ok(data=self._selection)

        self._log_operation("back")
        self._generation += 1
        self._selection = SelectionState()
        self._areas = []
        self._awaiting_areas = None
        self.viewport.restore_zoom()

        self.selection_changed.emit(self._selection)
        self._publish()
        return OperationResult.ok(data=self._selection)

    # ==================== Output ====================

    def visible_entities(self) -> List[RankedEntity]:
        """Filtered and ranked list for the current mode."""
        origin = self.viewport.center
        term = self._search.term

        if self._selection.mode == ViewMode.PROPERTIES:
            collection = self._properties
            return self._ranking_cache.get_or_compute(
                collection, term, origin, self.nearby_limit,
                lambda: rank_by_proximity(
                    filter_by_term(locatable_only(collection), term, PROPERTY_SEARCH_FIELDS),
                    origin,
                    self.nearby_limit
                ),
                scope="properties"
            )

        prop = self._selection.selected_property
        collection = self._areas
        filters = self._area_filters
        limit = len(collection)

        def compute():
            areas = filter_by_space_type(filter_by_price_range(collection, filters.price_range), filters.space_type)
            areas = filter_by_term(areas, term, AREA_SEARCH_FIELDS)
            return rank_by_proximity(areas, origin, limit, locate=self._area_locator(prop))

        return self._ranking_cache.get_or_compute(
            collection, term, origin, limit, compute,
            scope=("areas", prop.id, filters.price_range, filters.space_type)
        )

    @staticmethod
    def _area_locator(prop: Property):
        """Areas without their own coordinate sit at their property's location."""
        fallback = entity_coordinate(prop)

        def locate(area):
            return entity_coordinate(area) or fallback

        return locate

    def snapshot(self) -> DiscoverySnapshot:
        return DiscoverySnapshot(
            visible_entities=tuple(self.visible_entities()),
            selection=self._selection,
            viewport=self.viewport.state,
            search_term=self._search.term,
            is_loading=self.is_loading,
            is_loading_areas=self.is_loading_areas,
        )

    def _publish(self):
        self.snapshot_changed.emit(self.snapshot())
