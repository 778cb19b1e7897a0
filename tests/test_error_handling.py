# tests/test_error_handling.py
"""
Unit tests for user-facing error messages and the handle_errors decorator.
"""

import unittest
import sys
import os

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.exceptions import (
    CoordinateTransformError,
    GeoMeasureError,
    GestureToolError,
    InvalidModeError,
)
from utils.error_handler import handle_errors
from utils.error_messages import get_error_message
from utils.exceptions import ValidationError


class TestErrorMessages(unittest.TestCase):

    def test_specific_message(self):
        info = get_error_message(InvalidModeError("Polygon"))
        self.assertEqual(info["title"], "Modo Desconocido")
        self.assertIn("Polygon", info["details"])

    def test_subclass_falls_back_to_base(self):
        class CustomError(GeoMeasureError):
            pass

        info = get_error_message(CustomError("boom"))
        self.assertEqual(info["title"], "Error")

    def test_unknown_exception(self):
        info = get_error_message(RuntimeError("boom"))
        self.assertEqual(info["title"], "Error Inesperado")
        self.assertEqual(info["details"], "boom")

    def test_details_from_exception(self):
        info = get_error_message(CoordinateTransformError("EPSG:3857", "EPSG:4326"))
        self.assertEqual(info["details"], "EPSG:3857 -> EPSG:4326")

    def test_suggestions_are_copied(self):
        info = get_error_message(ValidationError("lat", "x"))
        info["suggestions"].append("extra")
        self.assertNotIn("extra", get_error_message(ValidationError("lat", "x"))["suggestions"])


class TestHandleErrors(unittest.TestCase):

    def test_returns_value_when_no_error(self):
        @handle_errors()
        def ok():
            return 42

        self.assertEqual(ok(), 42)

    def test_default_return(self):
        @handle_errors(default_return=False)
        def fails():
            raise InvalidModeError("x")

        self.assertIs(fails(), False)

    def test_reraise(self):
        @handle_errors(reraise=True)
        def fails():
            raise InvalidModeError("x")

        with self.assertRaises(InvalidModeError):
            fails()

    def test_only_catches_error_type(self):
        @handle_errors(error_type=GeoMeasureError)
        def fails():
            raise KeyError("x")

        with self.assertRaises(KeyError):
            fails()

    def test_on_error_callback_and_user_message(self):
        received = []

        @handle_errors(user_message="Mensaje propio", on_error=received.append)
        def fails():
            raise GestureToolError("sin montar")

        fails()
        self.assertEqual(len(received), 1)
        self.assertEqual(received[0]["message"], "Mensaje propio")

    def test_user_message_attached_to_exception(self):
        error = InvalidModeError("x")

        @handle_errors(reraise=True)
        def fails():
            raise error

        with self.assertRaises(InvalidModeError):
            fails()
        self.assertEqual(error.user_message, "El modo de interacción seleccionado no existe.")


if __name__ == '__main__':
    unittest.main()
