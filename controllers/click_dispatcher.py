# controllers/click_dispatcher.py
"""
Turns raw map clicks into points appended to the store.
"""

from typing import TYPE_CHECKING, Optional, Tuple

from constants import CLICK_ROUND_DECIMALS
from core.exceptions import CoordinateTransformError
from core.point_sequence import Point, PointSequenceStore
from utils.logger import get_logger

if TYPE_CHECKING:
    from controllers.map_controller import MapController
    from controllers.mode_controller import InteractionModeController

logger = get_logger(__name__)


class MapClickDispatcher:
    """
    Converts a projected click to (lat, long) and appends it, unless it
    repeats the previous point (double fire of the same click). A click that
    follows a completed gesture resets the store and starts a new sequence.
    """

    def __init__(self, store: PointSequenceStore, map_controller: 'MapController',
                 mode_controller: Optional['InteractionModeController'] = None,
                 decimals: int = CLICK_ROUND_DECIMALS):
        self.store = store
        self.map_controller = map_controller
        self.mode_controller = mode_controller
        self.decimals = decimals

    def _rounded(self, point: Point) -> Tuple[float, float]:
        return round(point.lat, self.decimals), round(point.long, self.decimals)

    def is_duplicate(self, point: Point) -> bool:
        """True if point matches the last point of the sequence once rounded."""
        previous = self.store.last()
        if previous is None or not previous.is_finite:
            return False
        return self._rounded(previous) == self._rounded(point)

    def _suppresses_duplicates(self) -> bool:
        if self.mode_controller is None or self.mode_controller.rule is None:
            return True
        return self.mode_controller.rule.suppress_duplicates

    def on_map_click(self, coordinate: Tuple[float, float]) -> bool:
        """
        Handle one click in map units.

        Returns:
            True if a point was appended
        """
        try:
            lat, long = self.map_controller.map_to_geographic(coordinate)
        except CoordinateTransformError as e:
            logger.error(f"Dropping click at {coordinate}: {e}")
            return False

        point = Point(lat, long)

        if self.mode_controller is not None and self.mode_controller.sequence_complete:
            self.store.reset()
            self.mode_controller.begin_new_sequence()
            self.store.append(point)
            logger.debug(f"Started new sequence at {point}")
            return True

        if self._suppresses_duplicates() and self.is_duplicate(point):
            logger.debug(f"Dropped duplicate click at {point}")
            return False

        self.store.append(point)
        return True
