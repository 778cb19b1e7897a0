# ui/gesture_tools.py
"""
Qt adaptor mounting the headless gesture tool on a MapCanvas.
"""

from PySide6.QtCore import Qt

from core.gesture import GestureTool
from utils.error_handler import handle_errors
from utils.logger import get_logger

logger = get_logger(__name__)


class QtGestureTool(GestureTool):
    """
    Gesture tool driven by a MapCanvas' click signals.

    Mounting connects to mapClicked / mapDoubleClicked; unmounting
    disconnects, so an unmounted tool never sees another click.
    """

    def _on_mount(self, canvas):
        canvas.mapClicked.connect(self._on_canvas_click)
        canvas.mapDoubleClicked.connect(self._on_canvas_double_click)
        canvas.viewport().setCursor(Qt.CrossCursor)

    def _on_unmount(self, canvas):
        canvas.mapClicked.disconnect(self._on_canvas_click)
        canvas.mapDoubleClicked.disconnect(self._on_canvas_double_click)
        canvas.viewport().unsetCursor()

    @handle_errors(log_level="ERROR")
    def _on_canvas_click(self, x, y):
        self.click((x, y))

    @handle_errors(log_level="ERROR")
    def _on_canvas_double_click(self, x, y):
        if not self.in_gesture:
            return
        if self.finish():
            logger.debug(f"Gesture finished by double click at ({x:.1f}, {y:.1f})")
