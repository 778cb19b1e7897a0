# controllers/session.py
"""
Wiring root for one map surface: store, geometry, click dispatch, mode and
measurements.
"""

from typing import Callable, List, Optional, Tuple

from controllers.click_dispatcher import MapClickDispatcher
from controllers.map_controller import MapController
from controllers.measurement_controller import MeasurementController
from controllers.mode_controller import InteractionModeController, ToolFactory
from core.exceptions import InvalidFieldError
from core.geometry import GeometrySynchronizer
from core.modes import Mode
from core.point_sequence import Point, PointSequenceStore, Snapshot
from core.units import UnitPreference
from utils.logger import get_logger
from utils.validators import check_coordinate_range, parse_coordinate_text

logger = get_logger(__name__)


class MeasurementSession:
    """
    Owns every core component for one map surface.

    The map surface is injected once and lives as long as the session; the
    mode controller mounts and unmounts gesture tools on it.
    """

    def __init__(self, map_surface, units: Optional[UnitPreference] = None,
                 map_controller: Optional[MapController] = None,
                 tool_factory: Optional[ToolFactory] = None):
        self.map_surface = map_surface
        self.map_controller = map_controller or MapController()
        self.store = PointSequenceStore()
        self.synchronizer = GeometrySynchronizer(
            map_surface, project=self.map_controller.geographic_to_map
        )
        self.mode_controller = InteractionModeController(
            self.store, self.synchronizer, map_surface, tool_factory=tool_factory
        )
        self.dispatcher = MapClickDispatcher(
            self.store, self.map_controller, self.mode_controller
        )
        self.measurements = MeasurementController(units)
        self._listeners: List[Callable[[Snapshot], None]] = []

        self.mode_controller.bind_click_handler(self.dispatcher.on_map_click)
        # Registered first so geometry is current before anyone else reads
        self.store.subscribe(self.synchronizer.redraw)
        self.store.subscribe(self._on_store_changed)
        self.measurements.units.subscribe(self._on_units_changed)
        self.mode_controller.subscribe(self._on_mode_changed)

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[Snapshot], None]) -> None:
        """Called with the current snapshot after any visible change."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def _emit(self):
        snapshot = self.store.get_all()
        for callback in list(self._listeners):
            callback(snapshot)

    def _on_store_changed(self, snapshot):
        self._emit()

    def _on_units_changed(self, units):
        self._emit()

    def _on_mode_changed(self, mode):
        self._emit()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @property
    def units(self) -> UnitPreference:
        return self.measurements.units

    @property
    def mode(self) -> Optional[Mode]:
        return self.mode_controller.mode

    def snapshot(self) -> Snapshot:
        return self.store.get_all()

    def set_mode(self, mode) -> Mode:
        return self.mode_controller.set_mode(mode)

    def on_map_click(self, coordinate: Tuple[float, float]) -> bool:
        """
        Feed a click through the mounted gesture tool.

        Returns:
            True if a point was appended; False when idle or dropped
        """
        tool = self.mode_controller.active_tool
        if tool is None:
            logger.debug(f"Ignoring click at {coordinate}: no mode selected")
            return False
        return tool.click(coordinate)

    def on_map_double_click(self, coordinate: Tuple[float, float] = None) -> bool:
        return self.mode_controller.finish_gesture()

    def add_empty_point(self) -> int:
        """Append a point with no coordinates, to be typed in."""
        return self.store.append(Point())

    def update_point_text(self, index: int, field: str, text: str) -> Snapshot:
        """
        Store the parsed value of a manual coordinate edit.

        Unparsable text is stored as NaN; out-of-range values are stored
        unchanged and only logged.

        Raises:
            InvalidFieldError: If field is not 'lat' or 'long'
        """
        if field not in Point.FIELDS:
            raise InvalidFieldError(field)
        value = parse_coordinate_text(text)
        in_range, warning = check_coordinate_range(field, value)
        if not in_range:
            logger.warning(f"Point #{index}: {warning}")
        return self.store.update(index, field, value)

    def delete_point(self, index: int) -> Snapshot:
        return self.store.delete(index)

    def reset(self) -> Snapshot:
        """Clear the sequence and start the next click as a new gesture."""
        self.mode_controller.cancel_gesture()
        snapshot = self.store.reset()
        self.synchronizer.clear()
        return snapshot

    def formatted_measurements(self, snapshot: Optional[Snapshot] = None):
        """Formatted rows and total for snapshot, or for the current sequence."""
        if snapshot is None:
            snapshot = self.store.get_all()
        return self.measurements.get_formatted_measurements(snapshot)
