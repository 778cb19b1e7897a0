"""
Main window: map canvas on the left, measurement panel on the right.
"""

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMessageBox, QSplitter

from constants import (
    APP_NAME,
    APP_VERSION,
    MSG_WARNING,
    SHORTCUT_FIT_VIEW,
    SHORTCUT_QUIT,
    SHORTCUT_RESET,
    SHORTCUT_ZOOM_IN,
    SHORTCUT_ZOOM_OUT,
)
from controllers.session import MeasurementSession
from core.exceptions import CoordinateTransformError
from ui.gesture_tools import QtGestureTool
from ui.map_canvas import MapCanvas
from ui.measurement_panel import MeasurementPanel
from utils.error_handler import handle_errors
from utils.logger import get_logger
from utils.settings import AppSettings

logger = get_logger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: AppSettings = None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} {APP_VERSION}")
        self.resize(1200, 760)

        self.settings = settings or AppSettings()

        # Single map object for the whole window lifetime
        self.canvas = MapCanvas()
        self.session = MeasurementSession(
            self.canvas,
            units=self.settings.load_units(),
            tool_factory=QtGestureTool
        )
        self.panel = MeasurementPanel(self.session)
        self.panel.errorOccurred.connect(self._show_error)

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.panel)
        splitter.setSizes([820, 380])
        self.setCentralWidget(splitter)

        self._create_actions()
        self.canvas.pointerMoved.connect(self._on_pointer_moved)
        self.statusBar().showMessage("Seleccione un modo y haga clic en el mapa")

        self._restore_window_state()
        self._activate_default_mode()

    def _create_actions(self):
        toolbar = self.addToolBar("Mapa")
        toolbar.setObjectName("mapToolbar")
        for text, shortcut, slot in (
            ("Acercar", SHORTCUT_ZOOM_IN, self.canvas.zoom_in),
            ("Alejar", SHORTCUT_ZOOM_OUT, self.canvas.zoom_out),
            ("Vista completa", SHORTCUT_FIT_VIEW, self.canvas.reset_zoom),
            ("Reiniciar", SHORTCUT_RESET, self.session.reset),
            ("Salir", SHORTCUT_QUIT, self.close),
        ):
            action = QAction(text, self)
            action.setShortcut(QKeySequence(shortcut))
            action.triggered.connect(slot)
            toolbar.addAction(action)

    @handle_errors(log_level="ERROR")
    def _activate_default_mode(self):
        self.session.set_mode(self.settings.load_default_mode())

    def _on_pointer_moved(self, x, y):
        try:
            lat, lon = self.session.map_controller.map_to_geographic((x, y))
        except CoordinateTransformError:
            self.statusBar().clearMessage()
            return
        self.statusBar().showMessage(f"Lat: {lat:.5f}  Lon: {lon:.5f}")

    def _show_error(self, error_info):
        text = error_info.get("message", "")
        if error_info.get("details"):
            text += f"\n\nDetalles: {error_info['details']}"
        QMessageBox.warning(self, error_info.get("title", MSG_WARNING), text)

    def closeEvent(self, event):
        self._save_window_state()
        super().closeEvent(event)

    def _save_window_state(self):
        """Save window geometry, units and mode."""
        self.settings.set_value("geometry", self.saveGeometry())
        self.settings.set_value("windowState", self.saveState())
        self.settings.save_units(self.session.units)
        if self.session.mode is not None:
            self.settings.save_default_mode(self.session.mode)
        logger.info("Window state saved")

    def _restore_window_state(self):

        geometry = self.settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

        state = self.settings.value("windowState")
        if state:
            self.restoreState(state)

        logger.info("Window state restored")
