"""
Controllers package for GeoMeasure.
Provides controller classes for map clicks, interaction modes and measurements.
"""

from controllers.map_controller import MapController
from controllers.click_dispatcher import MapClickDispatcher
from controllers.mode_controller import InteractionModeController
from controllers.measurement_controller import MeasurementController
from controllers.session import MeasurementSession

__all__ = [
    'MapController',
    'MapClickDispatcher',
    'InteractionModeController',
    'MeasurementController',
    'MeasurementSession'
]
