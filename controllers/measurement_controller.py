# controllers/measurement_controller.py
"""
Controller for measurement calculations.
Derives per-point distances and angles from the point sequence and formats
them with the current unit preference.
"""

from typing import Dict, List, Optional, Sequence

from core.point_sequence import Point
from core.units import UnitPreference
from utils.measurements import (
    format_angle,
    format_distance,
    segment_distances,
    total_distance,
    vertex_angles,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class MeasurementController:
    """
    Controller for sequence measurements.

    Metrics are recomputed on every read; nothing is cached, so they always
    reflect the snapshot passed in.
    """

    def __init__(self, units: Optional[UnitPreference] = None):
        """
        Initialize measurement controller.

        Args:
            units: Unit preference shared with the panel (default km/deg)
        """
        self.units = units if units is not None else UnitPreference()

    def set_distance_unit(self, unit: str):
        """Set distance unit preference."""
        self.units.set_distance_unit(unit)

    def set_angle_unit(self, unit: str):
        """Set angle unit preference."""
        self.units.set_angle_unit(unit)

    def calculate_rows(self, sequence: Sequence[Point]) -> List[Dict]:
        """
        Per-point metrics.

        Returns:
            List of dicts with 'index', 'lat', 'long', 'distance', 'angle'
            (distance is None and angle NaN where undefined)
        """
        distances = segment_distances(sequence, self.units.distance_unit)
        angles = vertex_angles(sequence, self.units.angle_unit)

        return [
            {
                "index": i,
                "lat": point.lat,
                "long": point.long,
                "distance": distances[i],
                "angle": angles[i],
            }
            for i, point in enumerate(sequence)
        ]

    def calculate_total(self, sequence: Sequence[Point]) -> float:
        """Total length along the sequence in the current distance unit."""
        return total_distance(sequence, self.units.distance_unit)

    def get_formatted_measurements(self, sequence: Sequence[Point]) -> Dict:
        """
        Get all measurements formatted with units.

        Returns:
            Dict with 'rows' (list of dicts with formatted 'distance' and
            'angle') and 'total'
        """
        distance_unit = self.units.distance_unit
        angle_unit = self.units.angle_unit

        rows = []
        for row in self.calculate_rows(sequence):
            rows.append({
                "index": row["index"],
                "distance": format_distance(row["distance"], distance_unit),
                "angle": format_angle(row["angle"], angle_unit),
            })

        total = "--"
        if len(sequence) >= 2:
            total = format_distance(self.calculate_total(sequence), distance_unit)

        return {
            "rows": rows,
            "total": total,
        }
