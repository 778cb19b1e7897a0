# core/units.py
"""
Process-wide unit preference for displayed metrics.
"""

from typing import Callable, List

from constants import (
    AngleUnit,
    DistanceUnit,
    DEFAULT_ANGLE_UNIT,
    DEFAULT_DISTANCE_UNIT,
)
from core.exceptions import InvalidUnitError
from utils.logger import get_logger

logger = get_logger(__name__)


class UnitPreference:
    """
    Distance and angle units used when rendering metrics.

    Changing a unit never touches the point sequence; listeners are told so
    they can re-render.
    """

    def __init__(self, distance_unit: str = DEFAULT_DISTANCE_UNIT,
                 angle_unit: str = DEFAULT_ANGLE_UNIT):
        self._check(distance_unit, DistanceUnit.VALID_UNITS)
        self._check(angle_unit, AngleUnit.VALID_UNITS)
        self.distance_unit = distance_unit
        self.angle_unit = angle_unit
        self._listeners: List[Callable[["UnitPreference"], None]] = []

    @staticmethod
    def _check(unit, valid_units):
        if unit not in valid_units:
            raise InvalidUnitError(unit, valid_units)

    def subscribe(self, callback: Callable[["UnitPreference"], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback(self)

    def set_distance_unit(self, unit: str) -> None:
        self._check(unit, DistanceUnit.VALID_UNITS)
        if unit != self.distance_unit:
            self.distance_unit = unit
            logger.info(f"Distance unit set to {unit}")
            self._notify()

    def set_angle_unit(self, unit: str) -> None:
        self._check(unit, AngleUnit.VALID_UNITS)
        if unit != self.angle_unit:
            self.angle_unit = unit
            logger.info(f"Angle unit set to {unit}")
            self._notify()

    def __repr__(self):
        return f"UnitPreference({self.distance_unit!r}, {self.angle_unit!r})"
