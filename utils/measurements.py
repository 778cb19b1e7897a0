"""
Measurement utilities for distances between points and angles at vertices.
Distances are great-circle lengths on the sphere used by web maps; angles are
solved in planar degree space with the law of cosines.
"""

import math
from pyproj import Geod

from constants import (
    AngleUnit,
    DistanceUnit,
    EARTH_RADIUS_M,
    DISPLAY_DECIMALS,
    METERS_TO_KILOMETERS,
    METERS_TO_MILES,
    PLACEHOLDER_NAN,
    PLACEHOLDER_NOT_AVAILABLE,
)
from core.exceptions import InvalidUnitError

# Spherical earth, same radius as the web map length tools
geod = Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)


def _is_complete(point):
    return point is not None and point.lat is not None and point.long is not None


def _is_finite(point):
    return math.isfinite(point.lat) and math.isfinite(point.long)


def convert_distance(value_meters, to_unit=DistanceUnit.KILOMETERS):
    """
    Convert distance from meters to specified unit.

    Args:
        value_meters: Distance in meters
        to_unit: Target unit ('km', 'mi')

    Returns:
        float: Converted distance
    """
    conversions = {
        DistanceUnit.KILOMETERS: METERS_TO_KILOMETERS,
        DistanceUnit.MILES: METERS_TO_MILES,
    }
    if to_unit not in conversions:
        raise InvalidUnitError(to_unit, DistanceUnit.VALID_UNITS)

    return value_meters * conversions[to_unit]


def convert_angle(value_radians, to_unit=AngleUnit.DEGREES):
    """Convert an angle in radians to 'deg' or 'rad'."""
    if to_unit == AngleUnit.DEGREES:
        return math.degrees(value_radians)
    if to_unit == AngleUnit.RADIANS:
        return value_radians
    raise InvalidUnitError(to_unit, AngleUnit.VALID_UNITS)


def distance_meters(point_a, point_b):
    """
    Great-circle distance in meters between two complete points.

    Returns:
        float or None: None if either point is incomplete, NaN if any
        coordinate is not finite
    """
    if not (_is_complete(point_a) and _is_complete(point_b)):
        return None
    if not (_is_finite(point_a) and _is_finite(point_b)):
        return math.nan

    # geod.inv returns (forward_azimuth, back_azimuth, distance)
    _, _, meters = geod.inv(point_a.long, point_a.lat, point_b.long, point_b.lat)
    return meters


def distance(point_a, point_b, unit=DistanceUnit.KILOMETERS):
    """
    Distance between two points in the requested unit.

    Args:
        point_a: First Point
        point_b: Second Point
        unit: 'km' or 'mi'

    Returns:
        float or None: None when either point is incomplete
    """
    meters = distance_meters(point_a, point_b)
    if meters is None:
        return None
    return convert_distance(meters, unit)


def angle(point_a, point_b, point_c, unit=AngleUnit.DEGREES):
    """
    Interior angle at point_b between segments b->a and b->c.

    Side lengths are Euclidean in (lat, long) degree space, so the value is
    an approximation that degrades with triangle size.

    Returns:
        float: Angle in the requested unit, NaN when it cannot be computed
    """
    points = (point_a, point_b, point_c)
    if not all(_is_complete(p) for p in points):
        return math.nan
    if not all(_is_finite(p) for p in points):
        return math.nan

    side_ab = math.hypot(point_a.lat - point_b.lat, point_a.long - point_b.long)
    side_bc = math.hypot(point_c.lat - point_b.lat, point_c.long - point_b.long)
    side_ac = math.hypot(point_c.lat - point_a.lat, point_c.long - point_a.long)

    if side_ab == 0 or side_bc == 0:
        return math.nan

    cosine = (side_ab ** 2 + side_bc ** 2 - side_ac ** 2) / (2 * side_ab * side_bc)
    # Rounding can push the cosine just outside [-1, 1]
    cosine = max(-1.0, min(1.0, cosine))

    return convert_angle(math.acos(cosine), unit)


def segment_distances(sequence, unit=DistanceUnit.KILOMETERS):
    """
    Distance from the previous point, per index.

    Returns:
        list: Index 0 is None; index i is distance(p[i-1], p[i])
    """
    result = [None] * len(sequence)
    for i in range(1, len(sequence)):
        result[i] = distance(sequence[i - 1], sequence[i], unit)
    return result


def vertex_angles(sequence, unit=AngleUnit.DEGREES):
    """
    Angle closing at each index.

    Returns:
        list: Indices 0 and 1 are NaN; index i is the angle at p[i-1]
        formed with p[i-2] and p[i]
    """
    result = [math.nan] * len(sequence)
    for i in range(2, len(sequence)):
        result[i] = angle(sequence[i - 2], sequence[i - 1], sequence[i], unit)
    return result


def total_distance(sequence, unit=DistanceUnit.KILOMETERS):
    """
    Sum of distances over consecutive pairs.

    Pairs with an incomplete endpoint contribute 0; NaN propagates.
    """
    total = 0.0
    for value in segment_distances(sequence, unit):
        if value is not None:
            total += value
    return total


# Formatting

_ANGLE_LABELS = {
    AngleUnit.DEGREES: "°",
    AngleUnit.RADIANS: " rad",
}


def format_distance(value, unit=DistanceUnit.KILOMETERS):
    """
    Format a distance already expressed in unit.

    Returns:
        str: 'N/A' for None, 'NaN' for NaN, otherwise value with unit label
    """
    if value is None:
        return PLACEHOLDER_NOT_AVAILABLE
    if math.isnan(value):
        return PLACEHOLDER_NAN

    if value < 1000:
        return f"{value:.{DISPLAY_DECIMALS}f} {unit}"
    else:
        return f"{value:,.{DISPLAY_DECIMALS}f} {unit}"


def format_angle(value, unit=AngleUnit.DEGREES):
    """Format an angle already expressed in unit; NaN renders as 'NaN'."""
    if value is None or math.isnan(value):
        return PLACEHOLDER_NAN

    label = _ANGLE_LABELS.get(unit, f" {unit}")
    decimals = DISPLAY_DECIMALS if unit == AngleUnit.DEGREES else 4
    return f"{value:.{decimals}f}{label}"
