# core/geometry.py
"""
Managed line geometry, rebuilt from the point sequence after every change.
"""

import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from core.modes import GeometryKind, ModeRule
from core.point_sequence import Point
from utils.logger import get_logger

logger = get_logger(__name__)

Projector = Callable[[float, float], Tuple[float, float]]


def _lonlat(lat: float, long: float) -> Tuple[float, float]:
    return long, lat


def build_line_feature(vertices: List[List[float]], closed: bool = False,
                       kind: str = GeometryKind.LINESTRING) -> Dict:
    """
    Build the managed GeoJSON feature from a vertex list.

    The ring is never closed here; the surface closes it when closed=True.
    """
    return {
        "type": "Feature",
        "properties": {"closed": closed, "kind": kind},
        "geometry": {
            "type": GeometryKind.LINESTRING,
            "coordinates": vertices,
        },
    }


class GeometrySynchronizer:
    """
    Keeps the single rendered feature in lockstep with the point sequence.

    The feature is always rebuilt from scratch from the complete points of
    the sequence, projected to map units. Nothing else writes to it.

    The surface must provide set_feature_geometry(feature) and
    clear_features().
    """

    def __init__(self, surface, project: Optional[Projector] = None,
                 rule: Optional[ModeRule] = None):
        self.surface = surface
        self.project = project or _lonlat
        self.rule = rule
        self._feature: Optional[Dict] = None

    def set_rule(self, rule: Optional[ModeRule]) -> None:
        self.rule = rule

    @property
    def feature(self) -> Optional[Dict]:
        return self._feature

    @property
    def vertex_count(self) -> int:
        if self._feature is None:
            return 0
        return len(self._feature["geometry"]["coordinates"])

    def _project_point(self, point: Point) -> List[float]:
        if not point.is_finite:
            # Kept so the vertex list still mirrors the complete points
            return [math.nan, math.nan]
        x, y = self.project(point.lat, point.long)
        return [x, y]

    def redraw(self, sequence: Sequence[Point]) -> Optional[Dict]:
        """Rebuild the managed feature from the complete points of sequence."""
        if not sequence:
            self.clear()
            return None

        vertices = [self._project_point(p) for p in sequence if p.is_complete]
        closed = bool(self.rule and self.rule.closed)
        kind = self.rule.geometry_kind if self.rule else GeometryKind.LINESTRING

        created = self._feature is None
        self._feature = build_line_feature(vertices, closed=closed, kind=kind)
        self.surface.set_feature_geometry(self._feature)

        if created:
            logger.debug("Created rendered feature")
        logger.debug(f"Redrawn feature with {len(vertices)} vertices")
        return self._feature

    def clear(self) -> None:
        """Remove all rendered features."""
        self._feature = None
        self.surface.clear_features()
        logger.debug("Cleared rendered features")
