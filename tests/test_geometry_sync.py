# tests/test_geometry_sync.py
"""
Unit tests for GeometrySynchronizer.
The rendering surface is a MagicMock, so no Qt is needed.
"""

import math
import unittest
import sys
import os
from unittest.mock import MagicMock

# Add root directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.geometry import GeometrySynchronizer, build_line_feature
from core.modes import Mode, get_mode_rule
from core.point_sequence import Point, PointSequenceStore


class TestBuildLineFeature(unittest.TestCase):

    def test_structure(self):
        feature = build_line_feature([[0, 0], [1, 1]])
        self.assertEqual(feature["type"], "Feature")
        self.assertEqual(feature["geometry"]["type"], "LineString")
        self.assertEqual(feature["geometry"]["coordinates"], [[0, 0], [1, 1]])
        self.assertFalse(feature["properties"]["closed"])


def complete_count(snapshot):
    return sum(1 for p in snapshot if p.is_complete)


class TestGeometrySynchronizer(unittest.TestCase):

    def setUp(self):
        self.surface = MagicMock()
        self.sync = GeometrySynchronizer(self.surface)
        self.store = PointSequenceStore()
        self.store.subscribe(self.sync.redraw)

    def test_identity_projection_is_lon_lat(self):
        self.store.append(Point(10, 20))
        self.assertEqual(self.sync.feature["geometry"]["coordinates"], [[20, 10]])

    def test_vertex_count_tracks_complete_points(self):
        """After every mutation vertex count equals the complete point count."""
        self.store.append(Point(0, 0))
        self.assertEqual(self.sync.vertex_count, complete_count(self.store.get_all()))
        self.store.append(Point(None, 1))
        self.assertEqual(self.sync.vertex_count, 1)
        self.store.update(1, "lat", 1.0)
        self.assertEqual(self.sync.vertex_count, 2)
        self.store.append(Point(2, 2))
        self.assertEqual(self.sync.vertex_count, 3)
        self.store.delete(0)
        self.assertEqual(self.sync.vertex_count, 2)
        self.assertEqual(self.sync.vertex_count, complete_count(self.store.get_all()))

    def test_redraw_replaces_single_feature(self):
        self.store.append(Point(0, 0))
        self.store.append(Point(0, 1))
        self.assertEqual(self.surface.set_feature_geometry.call_count, 2)
        last_feature = self.surface.set_feature_geometry.call_args[0][0]
        self.assertIs(last_feature, self.sync.feature)
        self.assertEqual(len(last_feature["geometry"]["coordinates"]), 2)

    def test_vertices_keep_sequence_order(self):
        for p in [(0, 0), (0, 1), (1, 1)]:
            self.store.append(p)
        self.assertEqual(
            self.sync.feature["geometry"]["coordinates"],
            [[0, 0], [1, 0], [1, 1]]
        )

    def test_empty_sequence_clears(self):
        self.store.append(Point(0, 0))
        self.store.delete(0)
        self.surface.clear_features.assert_called()
        self.assertIsNone(self.sync.feature)
        self.assertEqual(self.sync.vertex_count, 0)

    def test_nan_point_keeps_a_placeholder_vertex(self):
        self.store.append(Point(0, 0))
        self.store.append(Point(math.nan, 1))
        coords = self.sync.feature["geometry"]["coordinates"]
        self.assertEqual(len(coords), 2)
        self.assertTrue(math.isnan(coords[1][0]))

    def test_projection_is_used(self):
        sync = GeometrySynchronizer(self.surface, project=lambda lat, lon: (lon * 2, lat * 3))
        sync.redraw((Point(1, 1),))
        self.assertEqual(sync.feature["geometry"]["coordinates"], [[2, 3]])

    def test_rule_marks_closed(self):
        self.sync.set_rule(get_mode_rule(Mode.FREE_DRAW))
        self.store.append(Point(0, 0))
        self.assertTrue(self.sync.feature["properties"]["closed"])
        self.assertEqual(self.sync.feature["properties"]["kind"], "Polygon")

    def test_clear(self):
        self.store.append(Point(0, 0))
        self.sync.clear()
        self.surface.clear_features.assert_called_once()
        self.assertIsNone(self.sync.feature)


if __name__ == '__main__':
    unittest.main()
