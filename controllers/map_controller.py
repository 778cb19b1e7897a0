# controllers/map_controller.py
"""
Controller for map-related operations.
Converts between the map's projected units (Web Mercator) and geographic
latitude/longitude, and builds GeoJSON views of a point sequence.
"""

import math
from typing import Dict, Sequence, Tuple

from pyproj import Transformer

from constants import WEB_MERCATOR_EPSG, WGS84_EPSG
from core.exceptions import CoordinateTransformError
from core.point_sequence import Point
from utils.logger import get_logger

logger = get_logger(__name__)


class MapController:
    """
    Projection service for one map view.

    Responsibilities:
    - Convert projected click coordinates to (lat, long)
    - Convert (lat, long) to projected map units for rendering
    - Build GeoJSON from a point sequence
    """

    def __init__(self, map_epsg: int = WEB_MERCATOR_EPSG):
        """
        Initialize map controller.

        Args:
            map_epsg: EPSG code of the map's projected CRS
        """
        self.map_epsg = map_epsg
        self._transformer_cache = {}

    def _get_transformer(self, from_epsg: str, to_epsg: str) -> Transformer:
        """Get or create cached transformer."""
        key = (from_epsg, to_epsg)
        if key not in self._transformer_cache:
            self._transformer_cache[key] = Transformer.from_crs(
                from_epsg, to_epsg, always_xy=True
            )
        return self._transformer_cache[key]

    def map_to_geographic(self, coordinate: Tuple[float, float]) -> Tuple[float, float]:
        """
        Convert a projected map coordinate to (lat, long).

        Args:
            coordinate: (x, y) in map units

        Returns:
            Tuple of (latitude, longitude)

        Raises:
            CoordinateTransformError: If the coordinate cannot be projected
        """
        from_crs = f"EPSG:{self.map_epsg}"
        to_crs = f"EPSG:{WGS84_EPSG}"
        try:
            x, y = coordinate
            lon, lat = self._get_transformer(from_crs, to_crs).transform(float(x), float(y))
        except (TypeError, ValueError) as e:
            raise CoordinateTransformError(from_crs, to_crs, str(e)) from e

        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise CoordinateTransformError(from_crs, to_crs, f"resultado no finito para {coordinate}")
        return lat, lon

    def geographic_to_map(self, lat: float, long: float) -> Tuple[float, float]:
        """
        Convert (lat, long) to projected map units.

        Returns:
            Tuple of (x, y). Latitudes beyond the projection's limit come
            back as inf; the rendering surface skips them.
        """
        transformer = self._get_transformer(f"EPSG:{WGS84_EPSG}", f"EPSG:{self.map_epsg}")
        return transformer.transform(long, lat)

    def build_geojson_from_sequence(self, sequence: Sequence[Point]) -> Dict:
        """
        Build a GeoJSON FeatureCollection (WGS84) from a point sequence.

        Complete points become Point features; when two or more are complete
        a LineString joining them is added.
        """
        features = []
        line = []

        for index, point in enumerate(sequence):
            if not point.is_finite:
                logger.debug(f"Skipping point #{index}: {point}")
                continue
            coords = [point.long, point.lat]
            line.append(coords)
            features.append({
                "type": "Feature",
                "properties": {"index": index},
                "geometry": {"type": "Point", "coordinates": coords}
            })

        if len(line) >= 2:
            features.append({
                "type": "Feature",
                "properties": {"index": None},
                "geometry": {"type": "LineString", "coordinates": line}
            })

        return {
            "type": "FeatureCollection",
            "features": features
        }
