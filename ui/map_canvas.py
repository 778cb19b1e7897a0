# ui/map_canvas.py
"""
Map canvas: graphics view with zoom, click signals in map units, and the
vector rendering surface for the single managed feature.
"""

import math

from PySide6.QtCore import Qt, Signal, QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QPainterPath, QPen
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsPathItem,
    QGraphicsScene,
    QGraphicsView,
)

from constants import (
    CANVAS_MAX_ZOOM,
    CANVAS_MIN_ZOOM,
    CANVAS_ZOOM_FACTOR,
    DEFAULT_POINT_SIZE,
    DEFAULT_SCENE_HALF_EXTENT,
    Colors,
)
from utils.logger import get_logger

logger = get_logger(__name__)

# Pixels the mouse may move between press and release and still count as a click
CLICK_TOLERANCE_PX = 4


class CanvasView(QGraphicsView):
    """
    Custom graphics view with mouse wheel zoom functionality.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._zoom_factor = CANVAS_ZOOM_FACTOR
        self._zoom = 1.0

    def _apply_zoom(self, factor):
        new_zoom = self._zoom * factor
        if not CANVAS_MIN_ZOOM <= new_zoom <= CANVAS_MAX_ZOOM:
            return
        self._zoom = new_zoom
        self.scale(factor, factor)

    def wheelEvent(self, event):
        """
        Handle mouse wheel events for zooming.
        Scroll up: zoom in
        Scroll down: zoom out
        """
        if event.angleDelta().y() > 0:
            self._apply_zoom(self._zoom_factor)
        else:
            self._apply_zoom(1 / self._zoom_factor)

        event.accept()

    def zoom_in(self):
        """Programmatically zoom in."""
        self._apply_zoom(self._zoom_factor)

    def zoom_out(self):
        """Programmatically zoom out."""
        self._apply_zoom(1 / self._zoom_factor)

    def reset_zoom(self):
        """Fit the whole scene in the view and restart the zoom count."""
        self._zoom = 1.0
        self.resetTransform()
        self.fitInView(self.sceneRect(), Qt.KeepAspectRatio)


def map_to_scene(x: float, y: float) -> QPointF:
    """Map units have y up, the scene has y down."""
    return QPointF(x, -y)


def scene_to_map(point: QPointF):
    return point.x(), -point.y()


class MapCanvas(CanvasView):
    """
    Long-lived map object.

    Emits mapClicked / mapDoubleClicked with (x, y) in map units and renders
    the managed feature. Gesture tools mount on it by connecting to its
    signals.
    """

    mapClicked = Signal(float, float)
    mapDoubleClicked = Signal(float, float)
    pointerMoved = Signal(float, float)

    def __init__(self, parent=None):
        scene = QGraphicsScene()
        half = DEFAULT_SCENE_HALF_EXTENT
        scene.setSceneRect(QRectF(-half, -half, 2 * half, 2 * half))
        super().__init__(scene, parent)
        self._scene = scene  # the view does not own its scene

        self.viewport().setMouseTracking(True)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setBackgroundBrush(QBrush(QColor("#F8F8F8")))

        self._press_pos = None
        self._swallow_release = False
        self._feature_items = []

        self._draw_world_frame()
        self.reset_zoom()

    def _draw_world_frame(self):
        pen = QPen(QColor(Colors.GRID_COLOR), 1)
        pen.setCosmetic(True)
        self.scene().addRect(self.scene().sceneRect(), pen)

    # ------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._press_pos = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event):
        super().mouseReleaseEvent(event)
        if event.button() != Qt.LeftButton or self._press_pos is None:
            return

        pos = event.position().toPoint()
        moved = (pos - self._press_pos).manhattanLength()
        self._press_pos = None

        # Release of the second press of a double click
        if self._swallow_release:
            self._swallow_release = False
            return

        if moved <= CLICK_TOLERANCE_PX:
            x, y = scene_to_map(self.mapToScene(pos))
            self.mapClicked.emit(x, y)

    def mouseDoubleClickEvent(self, event):
        if event.button() == Qt.LeftButton:
            self._swallow_release = True
            self._press_pos = event.position().toPoint()
            x, y = scene_to_map(self.mapToScene(self._press_pos))
            self.mapDoubleClicked.emit(x, y)
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    def mouseMoveEvent(self, event):
        x, y = scene_to_map(self.mapToScene(event.position().toPoint()))
        self.pointerMoved.emit(x, y)
        super().mouseMoveEvent(event)

    # ------------------------------------------------------------------
    # Rendering surface
    # ------------------------------------------------------------------

    def clear_features(self):
        """Remove every rendered feature item."""
        for item in self._feature_items:
            self.scene().removeItem(item)
        self._feature_items = []

    def set_feature_geometry(self, feature: dict):
        """
        Replace the managed feature with the given line feature.

        Non-finite vertices break the path instead of being drawn.
        """
        self.clear_features()

        coords = feature["geometry"]["coordinates"]
        closed = feature.get("properties", {}).get("closed", False)

        path = QPainterPath()
        drawing = False
        finite_points = []
        for x, y in coords:
            if not (math.isfinite(x) and math.isfinite(y)):
                drawing = False
                continue
            point = map_to_scene(x, y)
            finite_points.append(point)
            if drawing:
                path.lineTo(point)
            else:
                path.moveTo(point)
                drawing = True

        if closed and len(finite_points) >= 3 and len(finite_points) == len(coords):
            path.closeSubpath()

        color = Colors.FREE_DRAW_COLOR if closed else Colors.LINE_COLOR
        pen = QPen(QColor(color), 2)
        pen.setCosmetic(True)
        if not closed:
            pen.setStyle(Qt.DashLine)

        path_item = QGraphicsPathItem(path)
        path_item.setPen(pen)
        if closed:
            path_item.setBrush(QBrush(QColor(Colors.FREE_DRAW_FILL)))
        self.scene().addItem(path_item)
        self._feature_items.append(path_item)

        radius = DEFAULT_POINT_SIZE / 2
        vertex_pen = QPen(QColor(Colors.VERTEX_STROKE), 1)
        vertex_pen.setCosmetic(True)
        for point in finite_points:
            marker = QGraphicsEllipseItem(-radius, -radius, 2 * radius, 2 * radius)
            marker.setPos(point)
            marker.setFlag(QGraphicsItem.ItemIgnoresTransformations, True)
            marker.setPen(vertex_pen)
            marker.setBrush(QBrush(QColor(Colors.VERTEX_FILL)))
            self.scene().addItem(marker)
            self._feature_items.append(marker)
