# utils/settings.py
"""
Persistent application settings (unit preferences, default mode).

Point sequences are never stored here.
"""

from PySide6.QtCore import QSettings

from constants import (
    APP_NAME,
    ORGANIZATION,
    AngleUnit,
    DistanceUnit,
    DEFAULT_ANGLE_UNIT,
    DEFAULT_DISTANCE_UNIT,
    SETTINGS_ANGLE_UNIT,
    SETTINGS_DEFAULT_MODE,
    SETTINGS_DISTANCE_UNIT,
)
from core.modes import Mode, parse_mode
from core.exceptions import InvalidModeError
from core.units import UnitPreference
from utils.exceptions import SettingsError
from utils.logger import get_logger

logger = get_logger(__name__)


class AppSettings:
    """Thin wrapper over QSettings with typed accessors."""

    def __init__(self, settings: QSettings = None):
        self._settings = settings if settings is not None else QSettings(ORGANIZATION, APP_NAME)

    def _read_choice(self, key, default, valid):
        value = self._settings.value(key, default)
        if value not in valid:
            logger.warning(str(SettingsError(key, value, "se usa el valor por defecto")))
            return default
        return value

    def load_units(self) -> UnitPreference:
        distance_unit = self._read_choice(
            SETTINGS_DISTANCE_UNIT, DEFAULT_DISTANCE_UNIT, DistanceUnit.VALID_UNITS
        )
        angle_unit = self._read_choice(
            SETTINGS_ANGLE_UNIT, DEFAULT_ANGLE_UNIT, AngleUnit.VALID_UNITS
        )
        return UnitPreference(distance_unit, angle_unit)

    def save_units(self, units: UnitPreference) -> None:
        self._settings.setValue(SETTINGS_DISTANCE_UNIT, units.distance_unit)
        self._settings.setValue(SETTINGS_ANGLE_UNIT, units.angle_unit)
        logger.debug(f"Saved unit preference {units}")

    def load_default_mode(self) -> Mode:
        value = self._settings.value(SETTINGS_DEFAULT_MODE, Mode.LINE_MEASUREMENT.value)
        try:
            return parse_mode(value)
        except InvalidModeError:
            logger.warning(str(SettingsError(SETTINGS_DEFAULT_MODE, value)))
            return Mode.LINE_MEASUREMENT

    def save_default_mode(self, mode: Mode) -> None:
        self._settings.setValue(SETTINGS_DEFAULT_MODE, parse_mode(mode).value)

    def value(self, key, default=None):
        return self._settings.value(key, default)

    def set_value(self, key, value) -> None:
        self._settings.setValue(key, value)
