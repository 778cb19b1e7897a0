# utils/exceptions.py
"""
Input validation exceptions for GeoMeasure application.
Shares the GeoMeasureError base so handlers can catch both families.
"""

from core.exceptions import GeoMeasureError


class ValidationError(GeoMeasureError):
    """Raised when input validation fails."""

    def __init__(self, field_name: str, value, reason: str = None):
        message = f"Validación fallida para '{field_name}': {value}"
        if reason:
            message += f". {reason}"
        super().__init__(message, details=f"{field_name}={value}")


class SettingsError(GeoMeasureError):
    """Raised when a stored setting cannot be interpreted."""

    def __init__(self, key: str, value, reason: str = None):
        message = f"Configuración inválida '{key}': {value}"
        if reason:
            message += f". {reason}"
        super().__init__(message, details=key)
