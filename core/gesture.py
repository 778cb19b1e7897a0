# core/gesture.py
"""
Headless gesture tool.

A gesture tool is mounted on one map surface at a time. While mounted it
receives clicks, forwards each one to its point handler, and raises a start
signal on the first point of a gesture and a complete signal when the
gesture ends (max points reached, or finish() on double click).
"""

from typing import Callable, List, Optional, Tuple

from core.exceptions import GestureToolError
from core.modes import ModeRule
from utils.logger import get_logger

logger = get_logger(__name__)

Coordinate = Tuple[float, float]


class GestureTool:
    """
    Click-sequence capture for one interaction mode.

    Subclasses hook into a concrete map widget through _on_mount() and
    _on_unmount(); the state machine itself lives here.
    """

    def __init__(self, rule: ModeRule):
        self.rule = rule
        self.surface = None
        self._point_handler: Optional[Callable[[Coordinate], bool]] = None
        self._start_listeners: List[Callable[[], None]] = []
        self._complete_listeners: List[Callable[[int], None]] = []
        self._in_gesture = False
        self._point_count = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def mounted(self) -> bool:
        return self.surface is not None

    @property
    def in_gesture(self) -> bool:
        return self._in_gesture

    @property
    def point_count(self) -> int:
        return self._point_count

    def mount(self, surface) -> None:
        """
        Attach the tool to a map surface.

        Raises:
            GestureToolError: If the tool is already mounted
        """
        if self.mounted:
            raise GestureToolError(
                "La herramienta de dibujo ya está montada",
                details=repr(self.rule)
            )
        self.surface = surface
        self._on_mount(surface)
        logger.debug(f"Gesture tool mounted: {self.rule}")

    def unmount(self) -> None:
        """Detach from the surface, cancelling any gesture in progress."""
        if not self.mounted:
            return
        self.cancel()
        self._on_unmount(self.surface)
        self.surface = None
        logger.debug(f"Gesture tool unmounted: {self.rule}")

    def _on_mount(self, surface) -> None:
        pass

    def _on_unmount(self, surface) -> None:
        pass

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def set_point_handler(self, handler: Optional[Callable[[Coordinate], bool]]) -> None:
        self._point_handler = handler

    def on_start(self, callback: Callable[[], None]) -> None:
        self._start_listeners.append(callback)

    def on_complete(self, callback: Callable[[int], None]) -> None:
        self._complete_listeners.append(callback)

    def clear_listeners(self) -> None:
        self._point_handler = None
        self._start_listeners.clear()
        self._complete_listeners.clear()

    # ------------------------------------------------------------------
    # Gesture
    # ------------------------------------------------------------------

    def click(self, coordinate: Coordinate) -> bool:
        """
        Feed one map click into the gesture.

        Returns:
            True if the point handler accepted the click

        Raises:
            GestureToolError: If the tool is not mounted
        """
        if not self.mounted:
            raise GestureToolError("La herramienta de dibujo no está montada")

        if not self._in_gesture:
            self._in_gesture = True
            self._point_count = 0
            for callback in list(self._start_listeners):
                callback()

        accepted = self._point_handler(coordinate) if self._point_handler else True
        if accepted:
            self._point_count += 1
            max_points = self.rule.max_points
            if max_points is not None and self._point_count >= max_points:
                self._complete()
        return accepted

    def finish(self) -> bool:
        """
        End the current gesture (double click).

        Returns:
            True if a gesture was completed
        """
        if not self._in_gesture:
            return False
        if self._point_count < self.rule.min_points:
            logger.debug(
                f"Ignoring finish with {self._point_count} point(s), "
                f"{self.rule.min_points} required"
            )
            return False
        self._complete()
        return True

    def cancel(self) -> None:
        self._in_gesture = False
        self._point_count = 0

    def _complete(self) -> None:
        count = self._point_count
        self._in_gesture = False
        self._point_count = 0
        for callback in list(self._complete_listeners):
            callback(count)
