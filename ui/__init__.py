# ui/__init__.py
"""
UI components for GeoMeasure application.
"""

from .map_canvas import CanvasView, MapCanvas
from .gesture_tools import QtGestureTool
from .measurement_panel import MeasurementPanel

__all__ = [
    'CanvasView',
    'MapCanvas',
    'QtGestureTool',
    'MeasurementPanel'
]
