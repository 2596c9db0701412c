#!/usr/bin/env python3
"""
greatcircle - Spherical-earth geodesy for GPS positions.

This package provides distances, bearings, midpoints, destinations, path
intersections and cross-track calculations on a great-circle earth model,
plus a small route model for GPX tracks.
"""
import importlib.metadata

__version__ = importlib.metadata.version("greatcircle")

# Import main classes and functions for public API
from .geometry import EARTH_RADIUS_METERS, Position, compare_to_decimal_places
from .geodesy import (
    cross_track_distance_to,
    cross_track_position_of,
    destination_point,
    distance_to,
    equal_to,
    final_bearing_to,
    initial_bearing_to,
    intersection_of,
    midpoint_to,
)
from .route import Leg, Route

__all__ = [
    "EARTH_RADIUS_METERS",
    "Position",
    "compare_to_decimal_places",
    "cross_track_distance_to",
    "cross_track_position_of",
    "destination_point",
    "distance_to",
    "equal_to",
    "final_bearing_to",
    "initial_bearing_to",
    "intersection_of",
    "midpoint_to",
    "Leg",
    "Route",
]
