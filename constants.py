# constants.py
"""
Application-wide constants for GeoMeasure.
Centralizes configuration values, color schemes, and default settings.
"""

# Application Information
APP_NAME = "GeoMeasure"
APP_VERSION = "1.0.0"
ORGANIZATION = "TellusConsultoria"
ORGANIZATION_DOMAIN = "geomeasure.local"

# Coordinate Reference Systems
WGS84_EPSG = 4326
WEB_MERCATOR_EPSG = 3857

# Measurement Configuration
EARTH_RADIUS_M = 6371008.8  # Mean radius used by web map measuring tools
CLICK_ROUND_DECIMALS = 2    # Precision used for duplicate-click comparison
DISPLAY_DECIMALS = 2
COORDINATE_DECIMALS = 6

METERS_TO_KILOMETERS = 0.001
METERS_TO_MILES = 0.0006213711922

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# Units
class DistanceUnit:
    KILOMETERS = "km"
    MILES = "mi"
    VALID_UNITS = [KILOMETERS, MILES]


class AngleUnit:
    DEGREES = "deg"
    RADIANS = "rad"
    VALID_UNITS = [DEGREES, RADIANS]


DEFAULT_DISTANCE_UNIT = DistanceUnit.KILOMETERS
DEFAULT_ANGLE_UNIT = AngleUnit.DEGREES

# Placeholders shown when a metric cannot be computed
PLACEHOLDER_NOT_AVAILABLE = "N/A"
PLACEHOLDER_NAN = "NaN"

# Gesture Configuration
# Points per gesture; None = unbounded, finished by double click
LINE_GESTURE_MAX_POINTS = 2
FREE_DRAW_MAX_POINTS = None

# Default Map View
DEFAULT_SCENE_HALF_EXTENT = 20037508.34  # Web Mercator world half-width (m)

# Canvas Configuration
CANVAS_ZOOM_FACTOR = 1.15
CANVAS_MIN_ZOOM = 0.5
CANVAS_MAX_ZOOM = 100000.0  # relative to the whole-world view
DEFAULT_POINT_SIZE = 6

# Color Schemes
class Colors:
    """Color definitions for rendered geometry and panel highlights"""

    LINE_COLOR = "#FFCC33"
    FREE_DRAW_COLOR = "#0078D4"
    FREE_DRAW_FILL = "#FFFFFF33"
    VERTEX_FILL = "#FFFFFF33"
    VERTEX_STROKE = "#000000B3"
    WARNING_CELL = "#FFF4CE"
    INVALID_CELL = "#FDE7E9"
    GRID_COLOR = "#CCCCCC"

# Panel Configuration
TABLE_HEADER_LABELS = ["#", "Latitud", "Longitud", "Distancia", "Ángulo", ""]

# UI Messages
MSG_WARNING = "Advertencia"

# Logging Configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "geomeasure.log"
LOG_DIR_NAME = ".geomeasure"
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 3

# Settings keys (QSettings)
SETTINGS_DISTANCE_UNIT = "units/distance"
SETTINGS_ANGLE_UNIT = "units/angle"
SETTINGS_DEFAULT_MODE = "interaction/defaultMode"

# Keyboard Shortcuts
SHORTCUT_RESET = "Ctrl+N"
SHORTCUT_FIT_VIEW = "Ctrl+0"
SHORTCUT_QUIT = "Ctrl+Q"
SHORTCUT_ZOOM_IN = "Ctrl++"
SHORTCUT_ZOOM_OUT = "Ctrl+-"
