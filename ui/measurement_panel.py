# ui/measurement_panel.py
"""
MeasurementPanel - point list, per-point coordinate inputs and metrics.
Every edit goes through the session; the table is rebuilt from the session
snapshot after each change.
"""

import json
import math
from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from constants import (
    AngleUnit,
    COORDINATE_DECIMALS,
    Colors,
    DistanceUnit,
    TABLE_HEADER_LABELS,
)
from core.modes import MODE_RULES, Mode
from utils.error_handler import handle_errors
from utils.logger import get_logger
from utils.validators import check_coordinate_range, is_invalid_number

if TYPE_CHECKING:
    from controllers.session import MeasurementSession

logger = get_logger(__name__)

COL_INDEX, COL_LAT, COL_LONG, COL_DISTANCE, COL_ANGLE, COL_DELETE = range(6)
FIELD_FOR_COLUMN = {COL_LAT: "lat", COL_LONG: "long"}


def format_coordinate(value) -> str:
    if value is None:
        return ""
    if math.isnan(value):
        return "NaN"
    return f"{value:.{COORDINATE_DECIMALS}f}"


class MeasurementPanel(QWidget):
    """
    Side panel for the measurement session.

    Shows one row per point with editable latitude/longitude, the distance
    from the previous point and the angle closing at that point, plus the
    total length and the unit toggles.
    """

    # Emitted with a user-facing error dict when an edit fails
    errorOccurred = Signal(dict)

    def __init__(self, session: 'MeasurementSession', parent=None):
        super().__init__(parent)
        self.session = session
        self._refreshing = False

        self._build_ui()
        self.session.subscribe(self.refresh)
        self.refresh(self.session.snapshot())

    # ═══════════════════════════════════════════════════════════════════════════
    # UI
    # ═══════════════════════════════════════════════════════════════════════════

    def _build_ui(self):
        layout = QVBoxLayout(self)

        mode_row = QHBoxLayout()
        mode_row.addWidget(QLabel("Modo:"))
        self.cb_mode = QComboBox()
        for mode in Mode:
            self.cb_mode.addItem(MODE_RULES[mode].label, mode.value)
        self.cb_mode.setCurrentIndex(-1)
        self.cb_mode.activated.connect(self._on_mode_activated)
        mode_row.addWidget(self.cb_mode, 1)
        layout.addLayout(mode_row)

        units_row = QHBoxLayout()
        self.chk_miles = QCheckBox("Distancia en millas")
        self.chk_radians = QCheckBox("Ángulo en radianes")
        units_row.addWidget(self.chk_miles)
        units_row.addWidget(self.chk_radians)
        layout.addLayout(units_row)
        self._sync_unit_toggles()
        self.chk_miles.toggled.connect(self._on_miles_toggled)
        self.chk_radians.toggled.connect(self._on_radians_toggled)

        self.table = QTableWidget(0, len(TABLE_HEADER_LABELS))
        self.table.setHorizontalHeaderLabels(TABLE_HEADER_LABELS)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeToContents)
        header.setSectionResizeMode(COL_LAT, QHeaderView.Stretch)
        header.setSectionResizeMode(COL_LONG, QHeaderView.Stretch)
        self.table.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self.table, 1)

        self.lbl_total = QLabel()
        self.lbl_total.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        layout.addWidget(self.lbl_total)

        buttons = QHBoxLayout()
        self.btn_add = QPushButton("Agregar punto")
        self.btn_add.clicked.connect(self._on_add_point)
        self.btn_reset = QPushButton("Reiniciar")
        self.btn_reset.clicked.connect(self._on_reset)
        self.btn_copy = QPushButton("Copiar GeoJSON")
        self.btn_copy.clicked.connect(self._on_copy_geojson)
        buttons.addWidget(self.btn_add)
        buttons.addWidget(self.btn_reset)
        buttons.addWidget(self.btn_copy)
        layout.addLayout(buttons)

    def _sync_unit_toggles(self):
        units = self.session.units
        for checkbox, checked in (
            (self.chk_miles, units.distance_unit == DistanceUnit.MILES),
            (self.chk_radians, units.angle_unit == AngleUnit.RADIANS),
        ):
            checkbox.blockSignals(True)
            checkbox.setChecked(checked)
            checkbox.blockSignals(False)

    def _sync_mode_combo(self):
        mode = self.session.mode
        index = self.cb_mode.findData(mode.value) if mode is not None else -1
        if index != self.cb_mode.currentIndex():
            self.cb_mode.blockSignals(True)
            self.cb_mode.setCurrentIndex(index)
            self.cb_mode.blockSignals(False)

    # ═══════════════════════════════════════════════════════════════════════════
    # RENDERING
    # ═══════════════════════════════════════════════════════════════════════════

    def refresh(self, snapshot):
        """Rebuild the table and totals from a snapshot."""
        self._refreshing = True
        self.table.blockSignals(True)
        try:
            measurements = self.session.formatted_measurements(snapshot)
            self.table.setRowCount(len(snapshot))

            for row, (point, metrics) in enumerate(zip(snapshot, measurements["rows"])):
                self._cell(row, COL_INDEX, editable=False).setText(str(row + 1))

                for col, field in FIELD_FOR_COLUMN.items():
                    value = getattr(point, field)
                    item = self._cell(row, col, editable=True)
                    item.setText(format_coordinate(value))
                    self._decorate_coordinate(item, field, value)

                for col, key in ((COL_DISTANCE, "distance"), (COL_ANGLE, "angle")):
                    item = self._cell(row, col, editable=False)
                    item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
                    item.setText(metrics[key])

                self._delete_button(row).setProperty("row", row)

            self.lbl_total.setText(f"Distancia total: {measurements['total']}")
            self._sync_unit_toggles()
            self._sync_mode_combo()
        finally:
            self.table.blockSignals(False)
            self._refreshing = False

    def _cell(self, row, col, editable):
        """Existing item of a cell, created on first use. Items are reused
        so an edit in progress never has its item replaced underneath it."""
        item = self.table.item(row, col)
        if item is None:
            item = QTableWidgetItem()
            if not editable:
                item.setFlags(Qt.ItemIsEnabled)
            self.table.setItem(row, col, item)
        return item

    def _delete_button(self, row):
        button = self.table.cellWidget(row, COL_DELETE)
        if button is None:
            button = QPushButton("✕")
            button.setToolTip("Eliminar punto")
            button.clicked.connect(
                lambda _checked=False, b=button: self._on_delete_point(b.property("row"))
            )
            self.table.setCellWidget(row, COL_DELETE, button)
        return button

    @staticmethod
    def _decorate_coordinate(item, field, value):
        item.setBackground(QBrush())
        item.setToolTip("")
        if is_invalid_number(value):
            item.setBackground(QBrush(QColor(Colors.INVALID_CELL)))
            item.setToolTip("Valor no numérico")
            return
        in_range, warning = check_coordinate_range(field, value)
        if not in_range:
            item.setBackground(QBrush(QColor(Colors.WARNING_CELL)))
            item.setToolTip(warning)

    # ═══════════════════════════════════════════════════════════════════════════
    # HANDLERS
    # ═══════════════════════════════════════════════════════════════════════════

    def _report(self, error_info):
        self.errorOccurred.emit(error_info)

    def _on_item_changed(self, item):
        if self._refreshing:
            return
        field = FIELD_FOR_COLUMN.get(item.column())
        if field is None:
            return
        self._apply_edit(item.row(), field, item.text())

    def _apply_edit(self, row, field, text):
        @handle_errors(on_error=self._report)
        def apply():
            self.session.update_point_text(row, field, text)
        apply()

    def _on_delete_point(self, index):
        @handle_errors(on_error=self._report)
        def delete():
            self.session.delete_point(index)
        delete()

    def _on_add_point(self):
        self.session.add_empty_point()
        new_row = self.table.rowCount() - 1
        if new_row >= 0:
            self.table.setCurrentCell(new_row, COL_LAT)
            self.table.editItem(self.table.item(new_row, COL_LAT))

    def _on_reset(self):
        self.session.reset()

    def _on_mode_activated(self, index):
        @handle_errors(on_error=self._report)
        def activate():
            self.session.set_mode(self.cb_mode.itemData(index))
        activate()

    def _on_miles_toggled(self, checked):
        self.session.units.set_distance_unit(
            DistanceUnit.MILES if checked else DistanceUnit.KILOMETERS
        )

    def _on_radians_toggled(self, checked):
        self.session.units.set_angle_unit(
            AngleUnit.RADIANS if checked else AngleUnit.DEGREES
        )

    def _on_copy_geojson(self):
        geojson = self.session.map_controller.build_geojson_from_sequence(
            self.session.snapshot()
        )
        text = json.dumps(geojson, indent=2)
        QApplication.clipboard().setText(text)
        logger.debug(f"Copied GeoJSON with {len(geojson['features'])} features")
        return text
