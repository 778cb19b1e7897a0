"""
Custom exception classes for GeoMeasure application.

These exceptions provide better error categorization and enable
more specific error handling throughout the application.
"""


class GeoMeasureError(Exception):
    """Base exception for all GeoMeasure errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message}\nDetalles: {self.details}"
        return self.message


class InvalidFieldError(GeoMeasureError):
    """Raised when a point field other than 'lat' or 'long' is addressed."""

    def __init__(self, field):
        super().__init__(
            f"Campo de coordenada inválido: {field!r}",
            details="Campos válidos: 'lat', 'long'"
        )


class CoordinateTransformError(GeoMeasureError):
    """Raised when coordinate transformation fails."""

    def __init__(self, from_crs: str, to_crs: str, reason: str = None):
        message = f"Error transformando coordenadas de {from_crs} a {to_crs}"
        if reason:
            message += f": {reason}"
        super().__init__(message, details=f"{from_crs} -> {to_crs}")


class InvalidModeError(GeoMeasureError):
    """Raised when an unknown interaction mode is requested."""

    def __init__(self, mode):
        super().__init__(f"Modo de interacción desconocido: {mode!r}")


class InvalidTransitionError(GeoMeasureError):
    """Raised when the mode transition table forbids a state change."""

    def __init__(self, from_state, to_state):
        super().__init__(
            f"Transición no permitida: {from_state} -> {to_state}",
            details=f"{from_state}->{to_state}"
        )


class GestureToolError(GeoMeasureError):
    """Raised when a gesture tool is mounted twice or used while unmounted."""
    pass


class InvalidUnitError(GeoMeasureError):
    """Raised when a distance or angle unit is not recognized."""

    def __init__(self, unit, valid_units):
        super().__init__(
            f"Unidad inválida: {unit!r}",
            details=f"Válidas: {', '.join(valid_units)}"
        )
