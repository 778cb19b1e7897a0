"""
User-friendly error messages for GeoMeasure application.

Maps exception types to localized, helpful error messages in Spanish.
"""

from core.exceptions import (
    GeoMeasureError,
    InvalidFieldError,
    CoordinateTransformError,
    InvalidModeError,
    InvalidTransitionError,
    GestureToolError,
    InvalidUnitError,
)
from utils.exceptions import ValidationError, SettingsError


ERROR_MESSAGES = {
    CoordinateTransformError: {
        "title": "Error de Proyección",
        "message": "No se pudo convertir el clic del mapa a latitud/longitud.",
        "suggestions": [
            "Haga clic dentro de los límites del mapa",
            "Evite las zonas polares, fuera del rango de Web Mercator"
        ]
    },

    InvalidFieldError: {
        "title": "Campo de Coordenada Inválido",
        "message": "Solo se pueden editar los campos de latitud y longitud.",
        "suggestions": []
    },

    InvalidModeError: {
        "title": "Modo Desconocido",
        "message": "El modo de interacción seleccionado no existe.",
        "suggestions": [
            "Seleccione 'Medir línea' o 'Dibujo libre'"
        ]
    },

    InvalidTransitionError: {
        "title": "Cambio de Modo no Permitido",
        "message": "No se puede cambiar al modo solicitado desde el estado actual.",
        "suggestions": [
            "Seleccione un modo de interacción antes de desactivarlo"
        ]
    },

    GestureToolError: {
        "title": "Error de Herramienta de Dibujo",
        "message": "La herramienta de dibujo no está disponible.",
        "suggestions": [
            "Vuelva a seleccionar el modo de interacción"
        ]
    },

    InvalidUnitError: {
        "title": "Unidad Inválida",
        "message": "La unidad seleccionada no es compatible.",
        "suggestions": [
            "Distancia: kilómetros o millas",
            "Ángulo: grados o radianes"
        ]
    },

    ValidationError: {
        "title": "Error de Validación",
        "message": "El valor ingresado no es válido.",
        "suggestions": [
            "Verifique el formato del número",
            "Use punto o coma como separador decimal"
        ]
    },

    SettingsError: {
        "title": "Configuración Inválida",
        "message": "Se ignoró un valor de configuración guardado.",
        "suggestions": [
            "Se usarán los valores por defecto"
        ]
    },

    GeoMeasureError: {
        "title": "Error",
        "message": "No se pudo completar la operación.",
        "suggestions": [
            "Intente la operación nuevamente"
        ]
    },

    # Generic fallback
    Exception: {
        "title": "Error Inesperado",
        "message": "Ocurrió un error inesperado.",
        "suggestions": [
            "Intente la operación nuevamente",
            "Si el problema persiste, consulte los registros de la aplicación"
        ]
    }
}


def get_error_message(exception: Exception) -> dict:
    """
    Get user-friendly error message for an exception.

    Returns:
        Dictionary with title, message, suggestions and optional details
    """
    # Walk the MRO so subclasses inherit their parent's message
    for exc_class in type(exception).__mro__:
        if exc_class in ERROR_MESSAGES:
            error_info = dict(ERROR_MESSAGES[exc_class])
            break
    else:
        error_info = dict(ERROR_MESSAGES[Exception])

    error_info['suggestions'] = list(error_info['suggestions'])

    if getattr(exception, 'details', None):
        error_info['details'] = exception.details
    elif str(exception):
        error_info['details'] = str(exception)

    return error_info
