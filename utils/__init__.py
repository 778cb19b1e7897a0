# utils/__init__.py
"""
Utility modules for GeoMeasure application.
"""

from .logger import get_logger, setup_logging
from .validators import (
    parse_coordinate_text,
    check_coordinate_range,
    is_invalid_number
)
from .exceptions import (
    ValidationError,
    SettingsError
)

# Export measurement utilities
from .measurements import (
    distance,
    angle,
    total_distance,
    segment_distances,
    vertex_angles,
    convert_distance,
    convert_angle,
    format_distance,
    format_angle
)

__all__ = [
    # Logger
    'get_logger',
    'setup_logging',
    # Validators
    'parse_coordinate_text',
    'check_coordinate_range',
    'is_invalid_number',
    # Exceptions
    'ValidationError',
    'SettingsError',
    # Measurements
    'distance',
    'angle',
    'total_distance',
    'segment_distances',
    'vertex_angles',
    'convert_distance',
    'convert_angle',
    'format_distance',
    'format_angle'
]
