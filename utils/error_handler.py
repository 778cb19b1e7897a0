"""
Error handling utilities for GeoMeasure application.

Event handlers run inside the Qt event loop; an exception escaping one of
them must be logged and turned into a displayable message instead.
"""

import functools
from typing import Callable, Type
from utils.logger import get_logger
from utils.error_messages import get_error_message
from core.exceptions import GeoMeasureError


logger = get_logger(__name__)


def handle_errors(
    error_type: Type[Exception] = Exception,
    user_message: str = None,
    log_level: str = "ERROR",
    reraise: bool = False,
    default_return=None,
    on_error: Callable[[dict], None] = None
):
    """
    Decorator for consistent error handling.

    Args:
        error_type: Type of exception to catch (default: Exception for all)
        user_message: Custom user message (overrides default)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        reraise: Whether to re-raise the exception after handling
        default_return: Value to return if exception occurs and not reraising
        on_error: Optional callback receiving the error info dict

    Example:
        @handle_errors(
            error_type=CoordinateTransformError,
            user_message="No se pudo proyectar el clic",
            log_level="WARNING"
        )
        def on_map_click(...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except error_type as e:
                log_func = getattr(logger, log_level.lower(), logger.error)
                log_func(
                    f"Error in {func.__name__}: {type(e).__name__}: {str(e)}",
                    exc_info=True
                )

                error_info = get_error_message(e)
                if user_message:
                    error_info['message'] = user_message

                # Attach error info to exception for UI to use
                if isinstance(e, GeoMeasureError):
                    e.user_message = error_info['message']
                    e.suggestions = error_info.get('suggestions', [])

                if on_error is not None:
                    on_error(error_info)

                if reraise:
                    raise

                return default_return

        return wrapper
    return decorator
