# utils/validators.py
"""
Validation utilities for GeoMeasure application.
Parses manual coordinate input and reports (without rejecting) values that
fall outside the geographic range.
"""

import math
from typing import Tuple, Optional

from constants import LATITUDE_RANGE, LONGITUDE_RANGE
from .exceptions import ValidationError


COORDINATE_RANGES = {
    "lat": LATITUDE_RANGE,
    "long": LONGITUDE_RANGE,
}


def parse_coordinate_text(value: Optional[str]) -> Optional[float]:
    """
    Parse the text of a coordinate input field.

    Args:
        value: Raw text from the field

    Returns:
        None for empty text, the parsed float otherwise. Text that does not
        parse becomes NaN; it is not rejected.
    """
    if value is None or not value.strip():
        return None

    value = value.strip().replace(',', '.')
    try:
        return float(value)
    except ValueError:
        return math.nan


def check_coordinate_range(field: str, value: Optional[float]) -> Tuple[bool, Optional[str]]:
    """
    Check a coordinate against the latitude/longitude range.

    The value is never clamped; callers only use the result to flag it.

    Args:
        field: 'lat' or 'long'
        value: Parsed value (None and NaN are reported as in range)

    Returns:
        Tuple of (in_range, warning_message)

    Raises:
        ValidationError: If field is unknown
    """
    if field not in COORDINATE_RANGES:
        raise ValidationError(field, value, "Campo desconocido")

    if value is None or math.isnan(value):
        return True, None

    low, high = COORDINATE_RANGES[field]
    if low <= value <= high:
        return True, None

    name = "Latitud" if field == "lat" else "Longitud"
    return False, f"{name} fuera de rango ({low:g} a {high:g}): {value}"


def is_invalid_number(value: Optional[float]) -> bool:
    """True when the value came from unparsable text."""
    return value is not None and math.isnan(value)
