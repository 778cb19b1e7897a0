# tests/test_map_canvas.py
"""
Unit tests for MapCanvas and QtGestureTool.
Requires PySide6; runs on the offscreen platform and skips without Qt.
"""

import math
import unittest
import sys
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


class QtTestCase(unittest.TestCase):
    """Creates the QApplication once, or skips when Qt is missing."""

    @classmethod
    def setUpClass(cls):
        """Check if Qt is available."""
        try:
            from PySide6.QtWidgets import QApplication
            # Only create app if not exists
            if not QApplication.instance():
                cls.app = QApplication([])
            else:
                cls.app = QApplication.instance()
            cls.qt_available = True
        except ImportError:
            cls.qt_available = False

    def setUp(self):
        if not self.qt_available:
            self.skipTest("Qt not available")

        from ui.map_canvas import MapCanvas
        self.canvas = MapCanvas()

    def tearDown(self):
        if hasattr(self, 'canvas'):
            self.canvas.deleteLater()


def mouse_event(kind, x, y, button_down=True):
    from PySide6.QtCore import QEvent, QPointF, Qt
    from PySide6.QtGui import QMouseEvent

    types = {
        "press": QEvent.MouseButtonPress,
        "release": QEvent.MouseButtonRelease,
        "double": QEvent.MouseButtonDblClick,
    }
    pos = QPointF(x, y)
    buttons = Qt.LeftButton if button_down else Qt.NoButton
    return QMouseEvent(types[kind], pos, pos, Qt.LeftButton, buttons, Qt.NoModifier)


class TestMapCanvasMouse(QtTestCase):

    def setUp(self):
        super().setUp()
        self.clicks = []
        self.double_clicks = []
        self.canvas.mapClicked.connect(lambda x, y: self.clicks.append((x, y)))
        self.canvas.mapDoubleClicked.connect(lambda x, y: self.double_clicks.append((x, y)))

    def press_release(self, x, y, release_x=None, release_y=None):
        self.canvas.mousePressEvent(mouse_event("press", x, y))
        self.canvas.mouseReleaseEvent(mouse_event(
            "release",
            x if release_x is None else release_x,
            y if release_y is None else release_y,
            button_down=False
        ))

    def test_click_emits_map_units(self):
        from PySide6.QtCore import QPoint
        from ui.map_canvas import scene_to_map

        self.press_release(50, 40)

        self.assertEqual(len(self.clicks), 1)
        expected = scene_to_map(self.canvas.mapToScene(QPoint(50, 40)))
        self.assertAlmostEqual(self.clicks[0][0], expected[0], places=3)
        self.assertAlmostEqual(self.clicks[0][1], expected[1], places=3)

    def test_drag_is_not_a_click(self):
        self.press_release(50, 40, release_x=90)
        self.assertEqual(self.clicks, [])

    def test_release_after_double_click_is_ignored(self):
        self.press_release(50, 40)
        self.canvas.mouseDoubleClickEvent(mouse_event("double", 50, 40))
        self.canvas.mouseReleaseEvent(mouse_event("release", 50, 40, button_down=False))

        self.assertEqual(len(self.clicks), 1)
        self.assertEqual(len(self.double_clicks), 1)

        # The next plain click is reported again
        self.press_release(60, 40)
        self.assertEqual(len(self.clicks), 2)


class TestMapCanvasRendering(QtTestCase):

    def feature(self, coords, closed=False):
        return {
            "type": "Feature",
            "properties": {"closed": closed},
            "geometry": {"type": "LineString", "coordinates": coords},
        }

    def rendered_path(self):
        # First managed item is the path, the rest are vertex markers
        return self.canvas._feature_items[0].path()

    def test_open_line(self):
        self.canvas.set_feature_geometry(
            self.feature([[0, 0], [1000, 0], [1000, 1000]])
        )
        path = self.rendered_path()
        self.assertEqual(path.elementCount(), 3)
        self.assertEqual(len(self.canvas._feature_items), 1 + 3)

    def test_closed_ring_when_all_vertices_finite(self):
        self.canvas.set_feature_geometry(
            self.feature([[0, 0], [1000, 0], [1000, 1000]], closed=True)
        )
        path = self.rendered_path()
        self.assertEqual(path.elementCount(), 4)
        first, last = path.elementAt(0), path.elementAt(3)
        self.assertEqual((first.x, first.y), (last.x, last.y))

    def test_non_finite_vertex_breaks_path(self):
        self.canvas.set_feature_geometry(
            self.feature([[0, 0], [1000, 0], [math.nan, math.nan], [1000, 1000]])
        )
        path = self.rendered_path()
        self.assertEqual(path.elementCount(), 3)
        self.assertTrue(path.elementAt(2).isMoveTo())
        # Markers only for finite vertices
        self.assertEqual(len(self.canvas._feature_items), 1 + 3)

    def test_ring_with_non_finite_vertex_is_not_closed(self):
        self.canvas.set_feature_geometry(
            self.feature([[0, 0], [1000, 0], [1000, 1000], [math.nan, math.nan]], closed=True)
        )
        self.assertEqual(self.rendered_path().elementCount(), 3)

    def test_y_axis_points_up(self):
        self.canvas.set_feature_geometry(self.feature([[0, 0], [0, 1000]]))
        self.assertEqual(self.rendered_path().elementAt(1).y, -1000)

    def test_clear_features(self):
        frame_items = len(self.canvas.scene().items())
        self.canvas.set_feature_geometry(self.feature([[0, 0], [1000, 0]]))
        self.assertGreater(len(self.canvas.scene().items()), frame_items)

        self.canvas.clear_features()
        self.assertEqual(len(self.canvas.scene().items()), frame_items)
        self.assertEqual(self.canvas._feature_items, [])


def recording_tool_class():
    from ui.gesture_tools import QtGestureTool

    class RecordingTool(QtGestureTool):
        def __init__(self, rule):
            super().__init__(rule)
            self.clicks = []

        def click(self, coordinate):
            self.clicks.append(coordinate)
            return super().click(coordinate)

    return RecordingTool


class TestQtGestureTool(QtTestCase):

    def setUp(self):
        super().setUp()
        from core.modes import Mode, get_mode_rule
        self.tool = recording_tool_class()(get_mode_rule(Mode.FREE_DRAW))

    def test_mount_receives_clicks(self):
        self.tool.mount(self.canvas)
        self.canvas.mapClicked.emit(1.0, 2.0)
        self.assertEqual(self.tool.clicks, [(1.0, 2.0)])

    def test_unmount_disconnects(self):
        self.tool.mount(self.canvas)
        self.tool.unmount()
        self.canvas.mapClicked.emit(1.0, 2.0)
        self.canvas.mapDoubleClicked.emit(1.0, 2.0)
        self.assertEqual(self.tool.clicks, [])

    def test_double_click_finishes_gesture(self):
        completions = []
        self.tool.on_complete(completions.append)
        self.tool.mount(self.canvas)
        for x in (0.0, 1.0, 2.0):
            self.canvas.mapClicked.emit(x, x * 2)
        self.canvas.mapDoubleClicked.emit(2.0, 4.0)
        self.assertEqual(completions, [3])

    def test_cursor_follows_mount(self):
        from PySide6.QtCore import Qt
        self.tool.mount(self.canvas)
        self.assertEqual(self.canvas.viewport().cursor().shape(), Qt.CrossCursor)
        self.tool.unmount()
        self.assertNotEqual(self.canvas.viewport().cursor().shape(), Qt.CrossCursor)


class TestModeSwitchOnCanvas(QtTestCase):
    """Only the tool of the current mode is attached to the canvas."""

    def setUp(self):
        super().setUp()
        from controllers.mode_controller import InteractionModeController
        from core.geometry import GeometrySynchronizer
        from core.point_sequence import PointSequenceStore

        self.created = []
        tool_class = recording_tool_class()

        def factory(rule):
            tool = tool_class(rule)
            self.created.append(tool)
            return tool

        self.handled = []
        store = PointSequenceStore()
        synchronizer = GeometrySynchronizer(self.canvas)
        self.controller = InteractionModeController(
            store, synchronizer, self.canvas, tool_factory=factory
        )
        self.controller.bind_click_handler(lambda c: self.handled.append(c) or True)

    def test_only_new_tool_receives_clicks(self):
        from core.modes import Mode

        self.controller.set_mode(Mode.LINE_MEASUREMENT)
        self.controller.set_mode(Mode.FREE_DRAW)
        first, second = self.created

        self.canvas.mapClicked.emit(10.0, 20.0)

        self.assertEqual(first.clicks, [])
        self.assertEqual(second.clicks, [(10.0, 20.0)])
        self.assertEqual(self.handled, [(10.0, 20.0)])

    def test_deactivate_detaches_every_tool(self):
        from core.modes import Mode

        self.controller.set_mode(Mode.FREE_DRAW)
        self.controller.deactivate()
        self.canvas.mapClicked.emit(10.0, 20.0)

        self.assertEqual(self.created[0].clicks, [])
        self.assertEqual(self.handled, [])


if __name__ == '__main__':
    unittest.main()
