#!/usr/bin/env python3
"""
Great-circle geodesy on a spherical earth.

Distances, bearings, midpoints, destinations, path intersections and
cross-track calculations between Position values. Every function is pure:
degrees and meters in, degrees and meters out.

Formulas follow the well-known spherical-trigonometry forms, see
http://www.movable-type.co.uk/scripts/latlong.html and
http://williams.best.vwh.net/avform.htm
"""

from typing import Optional
import logging
import math

from .geometry import (
    EARTH_RADIUS_METERS,
    Position,
    clamp_unit,
    compare_to_decimal_places,
    normalize_bearing,
    normalize_longitude,
)

logger = logging.getLogger(__name__)


def equal_to(
    position1: Position, position2: Position, include_altitude: bool = False
) -> bool:
    """
    Check whether two positions are equal.

    Args:
        position1: First position
        position2: Second position
        include_altitude: Whether altitude must match as well

    Returns:
        True if the positions match exactly
    """
    return position1.equal_to(position2, include_altitude)


def distance_to(position1: Position, position2: Position) -> float:
    """
    Calculate the great-circle distance between two positions.

    Uses the haversine formula.

    Args:
        position1: First position
        position2: Second position

    Returns:
        Distance in meters
    """
    if equal_to(position1, position2):
        return 0.0

    lat1, lon1 = math.radians(position1.latitude), math.radians(position1.longitude)
    lat2, lon2 = math.radians(position2.latitude), math.radians(position2.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (
        math.sin(dlat / 2.0) * math.sin(dlat / 2.0)
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) * math.sin(dlon / 2.0)
    )
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1.0 - a)))

    return EARTH_RADIUS_METERS * c


def initial_bearing_to(position1: Position, position2: Position) -> float:
    """
    Calculate the initial bearing from one position toward another.

    Args:
        position1: Start position
        position2: Destination position

    Returns:
        Bearing in degrees clockwise from north, in [0, 360)
    """
    if equal_to(position1, position2):
        return 0.0

    lat1 = math.radians(position1.latitude)
    lat2 = math.radians(position2.latitude)
    dlon = math.radians(position2.longitude - position1.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def final_bearing_to(position1: Position, position2: Position) -> float:
    """
    Calculate the bearing on arrival at position2 when travelling from position1.

    This is the reciprocal of the initial bearing from position2 back to
    position1, so it differs from the initial bearing by an amount that
    depends on distance and latitude.

    Returns:
        Bearing in degrees clockwise from north, in [0, 360)
    """
    if equal_to(position1, position2):
        return 0.0
    return (initial_bearing_to(position2, position1) + 180.0) % 360.0


def midpoint_to(position1: Position, position2: Position) -> Position:
    """
    Calculate the point halfway along the great circle between two positions.

    Args:
        position1: First position
        position2: Second position

    Returns:
        Midpoint position (position1 itself if both positions are equal)
    """
    if equal_to(position1, position2):
        return position1

    # see http://mathforum.org/library/drmath/view/51822.html for derivation
    lat1, lon1 = math.radians(position1.latitude), math.radians(position1.longitude)
    lat2 = math.radians(position2.latitude)
    dlon = math.radians(position2.longitude - position1.longitude)

    bx = math.cos(lat2) * math.cos(dlon)
    by = math.cos(lat2) * math.sin(dlon)

    x = math.sqrt((math.cos(lat1) + bx) * (math.cos(lat1) + bx) + by * by)
    y = math.sin(lat1) + math.sin(lat2)
    lat3 = math.atan2(y, x)
    lon3 = lon1 + math.atan2(by, math.cos(lat1) + bx)

    return Position(
        latitude=math.degrees(lat3),
        longitude=normalize_longitude(math.degrees(lon3)),
    )


def destination_point(position: Position, bearing: float, distance: float) -> Position:
    """
    Calculate the position reached by travelling a distance along a bearing.

    Args:
        position: Start position
        bearing: Initial bearing in degrees
        distance: Distance in meters

    Returns:
        Destination position (the start position itself for zero distance)
    """
    if distance == 0.0:
        return position

    angular_distance = distance / EARTH_RADIUS_METERS
    theta = math.radians(bearing)

    lat1, lon1 = math.radians(position.latitude), math.radians(position.longitude)

    lat2 = math.asin(
        clamp_unit(
            math.sin(lat1) * math.cos(angular_distance)
            + math.cos(lat1) * math.sin(angular_distance) * math.cos(theta)
        )
    )
    x = math.cos(angular_distance) - math.sin(lat1) * math.sin(lat2)
    y = math.sin(theta) * math.sin(angular_distance) * math.cos(lat1)
    lon2 = lon1 + math.atan2(y, x)

    return Position(
        latitude=math.degrees(lat2),
        longitude=normalize_longitude(math.degrees(lon2)),
    )


def _bearing_between(numerator: float, denominator: float) -> float:
    """Inverse cosine of a bearing ratio, 0.0 where rounding leaves it undefined."""
    if denominator == 0.0:
        return 0.0
    ratio = numerator / denominator
    if not -1.0 <= ratio <= 1.0:
        return 0.0
    return math.acos(ratio)


def intersection_of(
    position1: Position, bearing1: float, position2: Position, bearing2: float
) -> Optional[Position]:
    """
    Calculate the point where two great-circle paths cross.

    Each path is given by a start position and an initial bearing.

    Args:
        position1: Start of the first path
        bearing1: Initial bearing of the first path in degrees
        position2: Start of the second path
        bearing2: Initial bearing of the second path in degrees

    Returns:
        The intersection, or None when the paths start at the same point,
        coincide, or have no unique intersection
    """
    # see http://williams.best.vwh.net/avform.htm#Intersection
    lat1, lon1 = math.radians(position1.latitude), math.radians(position1.longitude)
    lat2, lon2 = math.radians(position2.latitude), math.radians(position2.longitude)
    theta13 = math.radians(bearing1)
    theta23 = math.radians(bearing2)
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    delta12 = 2.0 * math.asin(
        clamp_unit(
            math.sqrt(
                math.sin(dlat / 2.0) * math.sin(dlat / 2.0)
                + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) * math.sin(dlon / 2.0)
            )
        )
    )
    if delta12 == 0.0:
        logger.debug("Paths start at the same point, no intersection")
        return None

    # Initial/final bearings between the start points
    theta1 = _bearing_between(
        math.sin(lat2) - math.sin(lat1) * math.cos(delta12),
        math.sin(delta12) * math.cos(lat1),
    )
    theta2 = _bearing_between(
        math.sin(lat1) - math.sin(lat2) * math.cos(delta12),
        math.sin(delta12) * math.cos(lat2),
    )

    if math.sin(lon2 - lon1) > 0.0:
        theta12 = theta1
        theta21 = 2.0 * math.pi - theta2
    else:
        theta12 = 2.0 * math.pi - theta1
        theta21 = theta2

    # Truncated remainder: the sign follows the dividend
    alpha1 = math.fmod(theta13 - theta12 + math.pi, (2.0 * math.pi) - math.pi)  # angle 2-1-3
    alpha2 = math.fmod(theta21 - theta23 + math.pi, (2.0 * math.pi) - math.pi)  # angle 1-2-3

    if math.sin(alpha1) == 0.0 and math.sin(alpha2) == 0.0:
        logger.debug("Paths coincide, infinite intersections")
        return None

    if math.sin(alpha1) * math.sin(alpha2) < 0.0:
        logger.debug("Ambiguous intersection")
        return None

    alpha3 = math.acos(
        clamp_unit(
            -math.cos(alpha1) * math.cos(alpha2)
            + math.sin(alpha1) * math.sin(alpha2) * math.cos(delta12)
        )
    )
    delta13 = math.atan2(
        math.sin(delta12) * math.sin(alpha1) * math.sin(alpha2),
        math.cos(alpha2) + math.cos(alpha1) * math.cos(alpha3),
    )
    lat3 = math.asin(
        clamp_unit(
            math.sin(lat1) * math.cos(delta13)
            + math.cos(lat1) * math.sin(delta13) * math.cos(theta13)
        )
    )
    dlon13 = math.atan2(
        math.sin(theta13) * math.sin(delta13) * math.cos(lat1),
        math.cos(delta13) - math.sin(lat1) * math.sin(lat3),
    )
    lon3 = lon1 + dlon13

    return Position(
        latitude=math.degrees(lat3),
        longitude=normalize_longitude(math.degrees(lon3)),
    )


def cross_track_distance_to(
    position: Position, start_position: Position, end_position: Position
) -> float:
    """
    Calculate the signed distance from a position to the great circle through two others.

    Args:
        position: The position to measure from
        start_position: Start of the path
        end_position: End of the path

    Returns:
        Distance in meters, positive to the right of the path and negative to the left
    """
    if equal_to(position, start_position) or equal_to(position, end_position):
        return 0.0

    delta13 = distance_to(start_position, position) / EARTH_RADIUS_METERS
    theta13 = math.radians(initial_bearing_to(start_position, position))
    theta12 = math.radians(initial_bearing_to(start_position, end_position))

    return (
        math.asin(clamp_unit(math.sin(delta13) * math.sin(theta13 - theta12)))
        * EARTH_RADIUS_METERS
    )


def cross_track_position_of(
    position: Position, start_position: Position, end_position: Position
) -> Position:
    """
    Project a position perpendicularly onto the great circle through two others.

    Args:
        position: The position to project
        start_position: Start of the path
        end_position: End of the path

    Returns:
        The closest position on the path (the position itself if it already lies on it)
    """
    if equal_to(position, start_position) or equal_to(position, end_position):
        return position

    cross_track_distance = cross_track_distance_to(position, start_position, end_position)

    # Effectively on the track already
    if compare_to_decimal_places(abs(cross_track_distance), 0.0, 3):
        return position

    turn = 90.0 if cross_track_distance < 0.0 else 270.0
    bearing = (initial_bearing_to(start_position, end_position) + turn + 360.0) % 360.0
    return destination_point(position, bearing, abs(cross_track_distance))
