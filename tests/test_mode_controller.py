# tests/test_mode_controller.py
"""
Unit tests for the interaction mode state machine and the headless gesture
tool.
"""

import unittest
import sys
import os
from unittest.mock import MagicMock

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from controllers.mode_controller import InteractionModeController
from core.exceptions import GestureToolError, InvalidModeError, InvalidTransitionError
from core.geometry import GeometrySynchronizer
from core.gesture import GestureTool
from core.modes import (
    GeometryKind,
    InteractionState,
    Mode,
    ModeRule,
    check_transition,
    get_mode_rule,
    parse_mode,
)
from core.point_sequence import Point, PointSequenceStore


def open_ended_rule():
    return ModeRule(
        mode=Mode.LINE_MEASUREMENT,
        label="Polilínea",
        geometry_kind=GeometryKind.LINESTRING,
        max_points=None,
        suppress_duplicates=True,
        closed=False,
        min_points=2
    )


class TestModes(unittest.TestCase):

    def test_parse_mode(self):
        self.assertIs(parse_mode("LineMeasurement"), Mode.LINE_MEASUREMENT)
        self.assertIs(parse_mode("FREE_DRAW"), Mode.FREE_DRAW)
        self.assertIs(parse_mode(Mode.FREE_DRAW), Mode.FREE_DRAW)

    def test_parse_unknown_mode(self):
        with self.assertRaises(InvalidModeError):
            parse_mode("Polygon")

    def test_rules(self):
        self.assertTrue(get_mode_rule(Mode.LINE_MEASUREMENT).suppress_duplicates)
        self.assertEqual(get_mode_rule(Mode.FREE_DRAW).geometry_kind, GeometryKind.POLYGON)

    def test_idle_to_idle_is_not_a_transition(self):
        with self.assertRaises(InvalidTransitionError):
            check_transition(InteractionState.IDLE, InteractionState.IDLE)


class TestGestureTool(unittest.TestCase):

    def setUp(self):
        self.tool = GestureTool(open_ended_rule())
        self.starts = []
        self.completions = []
        self.tool.on_start(lambda: self.starts.append(True))
        self.tool.on_complete(self.completions.append)

    def test_click_requires_mount(self):
        with self.assertRaises(GestureToolError):
            self.tool.click((0, 0))

    def test_mount_twice_raises(self):
        self.tool.mount(object())
        with self.assertRaises(GestureToolError):
            self.tool.mount(object())

    def test_start_fires_once_per_gesture(self):
        self.tool.mount(object())
        self.tool.click((0, 0))
        self.tool.click((1, 1))
        self.assertEqual(len(self.starts), 1)
        self.assertTrue(self.tool.in_gesture)

    def test_finish_completes(self):
        self.tool.mount(object())
        self.tool.click((0, 0))
        self.tool.click((1, 1))
        self.assertTrue(self.tool.finish())
        self.assertEqual(self.completions, [2])
        self.assertFalse(self.tool.in_gesture)

    def test_finish_needs_min_points(self):
        self.tool.mount(object())
        self.tool.click((0, 0))
        self.assertFalse(self.tool.finish())
        self.assertEqual(self.completions, [])

    def test_rejected_clicks_do_not_count(self):
        self.tool.mount(object())
        self.tool.set_point_handler(lambda coordinate: False)
        self.tool.click((0, 0))
        self.tool.click((1, 1))
        self.assertEqual(self.tool.point_count, 0)

    def test_line_rule_completes_on_second_point(self):
        tool = GestureTool(get_mode_rule(Mode.LINE_MEASUREMENT))
        completions = []
        tool.on_complete(completions.append)
        tool.mount(object())
        tool.click((0, 0))
        self.assertEqual(completions, [])
        tool.click((1, 1))
        self.assertEqual(completions, [2])

    def test_unmount_cancels(self):
        self.tool.mount(object())
        self.tool.click((0, 0))
        self.tool.unmount()
        self.assertFalse(self.tool.mounted)
        self.assertFalse(self.tool.in_gesture)
        self.assertEqual(self.completions, [])


class TestInteractionModeController(unittest.TestCase):

    def setUp(self):
        self.surface = MagicMock()
        self.store = PointSequenceStore()
        self.sync = GeometrySynchronizer(self.surface)
        self.store.subscribe(self.sync.redraw)
        self.controller = InteractionModeController(self.store, self.sync, self.surface)
        self.controller.bind_click_handler(self._append)

    def _append(self, coordinate):
        x, y = coordinate
        self.store.append(Point(y, x))
        return True

    def test_starts_idle(self):
        self.assertIs(self.controller.state, InteractionState.IDLE)
        self.assertIsNone(self.controller.active_tool)

    def test_set_mode_mounts_tool(self):
        self.controller.set_mode(Mode.LINE_MEASUREMENT)
        self.assertIs(self.controller.state, InteractionState.LINE_MEASUREMENT)
        tool = self.controller.active_tool
        self.assertTrue(tool.mounted)
        self.assertIs(tool.surface, self.surface)
        self.assertIs(self.sync.rule, get_mode_rule(Mode.LINE_MEASUREMENT))

    def test_switch_unmounts_previous_tool(self):
        self.controller.set_mode(Mode.LINE_MEASUREMENT)
        first = self.controller.active_tool
        self.controller.set_mode(Mode.FREE_DRAW)
        self.assertFalse(first.mounted)
        self.assertTrue(self.controller.active_tool.mounted)
        self.assertIsNot(first, self.controller.active_tool)

    def test_switch_resets_sequence_and_geometry(self):
        """Switching mode always leaves an empty sequence and geometry."""
        self.controller.set_mode(Mode.LINE_MEASUREMENT)
        self.controller.active_tool.click((0, 0))
        self.controller.active_tool.click((1, 1))
        self.surface.clear_features.reset_mock()

        self.controller.set_mode(Mode.FREE_DRAW)
        self.assertEqual(self.store.get_all(), ())
        self.assertIsNone(self.sync.feature)
        self.surface.clear_features.assert_called()

    def test_reselecting_same_mode_resets(self):
        self.controller.set_mode("LineMeasurement")
        self.controller.active_tool.click((0, 0))
        self.controller.set_mode("LineMeasurement")
        self.assertEqual(len(self.store), 0)

    def test_line_completes_on_second_click(self):
        self.controller.set_mode(Mode.LINE_MEASUREMENT)
        self.controller.active_tool.click((0, 0))
        self.assertTrue(self.controller.gesture_in_progress)
        self.assertFalse(self.controller.sequence_complete)
        self.controller.active_tool.click((1, 1))
        self.assertTrue(self.controller.sequence_complete)
        self.assertFalse(self.controller.gesture_in_progress)
        self.assertFalse(self.controller.finish_gesture())

    def test_free_draw_completes_on_finish(self):
        self.controller.set_mode(Mode.FREE_DRAW)
        for coordinate in [(0, 0), (1, 0), (1, 1)]:
            self.controller.active_tool.click(coordinate)
        self.assertFalse(self.controller.sequence_complete)
        self.assertTrue(self.controller.finish_gesture())
        self.assertTrue(self.controller.sequence_complete)
        self.controller.begin_new_sequence()
        self.assertFalse(self.controller.sequence_complete)

    def test_cancel_gesture_clears_progress(self):
        self.controller.set_mode(Mode.FREE_DRAW)
        self.controller.active_tool.click((0, 0))
        self.assertTrue(self.controller.gesture_in_progress)

        self.controller.cancel_gesture()
        self.assertFalse(self.controller.gesture_in_progress)
        self.assertFalse(self.controller.sequence_complete)
        self.assertFalse(self.controller.active_tool.in_gesture)

    def test_cancel_gesture_when_idle(self):
        self.controller.cancel_gesture()
        self.assertFalse(self.controller.gesture_in_progress)

    def test_unknown_mode(self):
        with self.assertRaises(InvalidModeError):
            self.controller.set_mode("Polygon")
        self.assertIs(self.controller.state, InteractionState.IDLE)

    def test_deactivate(self):
        self.controller.set_mode(Mode.FREE_DRAW)
        tool = self.controller.active_tool
        self.controller.deactivate()
        self.assertIs(self.controller.state, InteractionState.IDLE)
        self.assertFalse(tool.mounted)
        self.assertIsNone(self.controller.mode)

    def test_deactivate_when_idle_is_noop(self):
        self.controller.deactivate()
        self.assertIs(self.controller.state, InteractionState.IDLE)

    def test_listeners_notified(self):
        seen = []
        self.controller.subscribe(seen.append)
        self.controller.set_mode(Mode.FREE_DRAW)
        self.controller.deactivate()
        self.assertEqual(seen, [Mode.FREE_DRAW, None])

    def test_custom_tool_factory(self):
        created = []

        def factory(rule):
            tool = GestureTool(rule)
            created.append(tool)
            return tool

        controller = InteractionModeController(self.store, self.sync, self.surface, factory)
        controller.set_mode(Mode.LINE_MEASUREMENT)
        controller.set_mode(Mode.FREE_DRAW)
        self.assertEqual(len(created), 2)
        self.assertEqual(sum(1 for t in created if t.mounted), 1)


if __name__ == '__main__':
    unittest.main()
