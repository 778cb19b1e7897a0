# core/point_sequence.py
"""
Ordered point sequence and its single owning store.
"""

import math
from typing import Callable, List, NamedTuple, Optional, Tuple

from core.exceptions import InvalidFieldError
from utils.logger import get_logger

logger = get_logger(__name__)


class Point(NamedTuple):
    """Possibly-incomplete geographic coordinate."""

    lat: Optional[float] = None
    long: Optional[float] = None

    FIELDS = ("lat", "long")

    @property
    def is_complete(self) -> bool:
        """Both coordinates present. NaN counts as present."""
        return self.lat is not None and self.long is not None

    @property
    def is_finite(self) -> bool:
        return self.is_complete and math.isfinite(self.lat) and math.isfinite(self.long)


Snapshot = Tuple[Point, ...]
Listener = Callable[[Snapshot], None]


class PointSequenceStore:
    """
    Single writable copy of the point sequence.

    Every other component reads through get_all() and writes through
    append/update/delete/reset. Snapshots are tuples of immutable Points,
    so nobody can hold a second mutable copy of the list.

    Listeners are called synchronously with the new snapshot after every
    mutation that changes the list.
    """

    def __init__(self):
        self._points: List[Point] = []
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, callback: Listener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def _notify(self) -> Snapshot:
        snapshot = self.get_all()
        for callback in list(self._listeners):
            callback(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def append(self, point: Point) -> int:
        """
        Add a point to the end of the sequence.

        Args:
            point: Point (or any (lat, long) pair) to append

        Returns:
            The new sequence length
        """
        if not isinstance(point, Point):
            point = Point(*point)
        self._points.append(point)
        logger.debug(f"Appended point #{len(self._points) - 1}: {point}")
        self._notify()
        return len(self._points)

    def update(self, index: int, field: str, value: Optional[float]) -> Snapshot:
        """
        Set 'lat' or 'long' of the point at index.

        Out-of-range indices are ignored. The value is stored as-is,
        including NaN and out-of-range degrees.

        Raises:
            InvalidFieldError: If field is not 'lat' or 'long'
        """
        if field not in Point.FIELDS:
            raise InvalidFieldError(field)

        if not 0 <= index < len(self._points):
            logger.debug(f"Ignoring update of missing index {index}")
            return self.get_all()

        current = self._points[index]
        if getattr(current, field) == value:
            return self.get_all()

        self._points[index] = current._replace(**{field: value})
        logger.debug(f"Updated point #{index}.{field} = {value}")
        return self._notify()

    def delete(self, index: int) -> Snapshot:
        """Remove the point at index; later points shift down by one."""
        if not 0 <= index < len(self._points):
            logger.debug(f"Ignoring delete of missing index {index}")
            return self.get_all()

        removed = self._points.pop(index)
        logger.debug(f"Deleted point #{index}: {removed}")
        return self._notify()

    def reset(self) -> Snapshot:
        """Clear to an empty sequence."""
        had_points = bool(self._points)
        self._points.clear()
        if had_points:
            logger.debug("Point sequence reset")
            return self._notify()
        return self.get_all()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> Snapshot:
        return tuple(self._points)

    def last(self) -> Optional[Point]:
        return self._points[-1] if self._points else None

    def __len__(self) -> int:
        return len(self._points)
