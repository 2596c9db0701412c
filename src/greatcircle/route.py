#!/usr/bin/env python3
"""
Route data model: an ordered list of positions with great-circle measurements.
"""

from typing import List, NamedTuple, Optional, TextIO
import logging
import gpxpy
import gpxpy.geo
import gpxpy.gpx

from .geometry import Position
from .geodesy import (
    cross_track_distance_to,
    cross_track_position_of,
    distance_to,
    final_bearing_to,
    initial_bearing_to,
)

logger = logging.getLogger(__name__)


class Leg(NamedTuple):
    """One segment of a route between two consecutive positions."""

    start: Position
    end: Position
    distance: float
    initial_bearing: float
    final_bearing: float


class Route:
    """Represents a GPX route with memoized great-circle measurements."""

    def __init__(self, coords: List[Position]):
        """Initializes a Route object.

        Args:
            coords: A list of Position objects in travel order.

        Raises:
            ValueError: If coords is empty or has fewer than two positions.
        """
        if not coords:
            raise ValueError("Route coordinates cannot be empty")
        if len(coords) < 2:
            raise ValueError("Route must have at least two coordinates")

        self.coords = coords
        self._cumulative_distances: Optional[List[float]] = None

    @property
    def start(self) -> Position:
        return self.coords[0]

    @property
    def end(self) -> Position:
        return self.coords[-1]

    def legs(self) -> List[Leg]:
        """
        Build the list of legs between consecutive positions.

        Returns:
            List of Leg tuples, one fewer than the number of positions
        """
        return [
            Leg(
                start=start,
                end=end,
                distance=distance_to(start, end),
                initial_bearing=initial_bearing_to(start, end),
                final_bearing=final_bearing_to(start, end),
            )
            for start, end in zip(self.coords, self.coords[1:])
        ]

    def cumulative_distances(self) -> List[float]:
        """
        Calculate cumulative distances along the route.

        Returns:
            List of cumulative distances in meters, with same length as the route
        """
        if self._cumulative_distances is None:
            distances = [0.0]
            for i in range(1, len(self.coords)):
                distances.append(
                    distances[-1] + distance_to(self.coords[i - 1], self.coords[i])
                )
            self._cumulative_distances = distances
        return self._cumulative_distances

    def total_distance(self) -> float:
        """Return the distance along the route in meters."""
        return self.cumulative_distances()[-1]

    def cross_track_deviations(self) -> List[float]:
        """
        Signed distance of every position from the great circle through the
        first and last positions.

        Returns:
            List of distances in meters (positive right of the path, negative left)
        """
        return [
            cross_track_distance_to(position, self.start, self.end)
            for position in self.coords
        ]

    def max_cross_track_deviation(self) -> float:
        """Return the largest absolute deviation from the start-to-end great circle."""
        return max(abs(deviation) for deviation in self.cross_track_deviations())

    def closest_track_positions(self) -> List[Position]:
        """Project every position onto the start-to-end great circle."""
        return [
            cross_track_position_of(position, self.start, self.end)
            for position in self.coords
        ]

    @classmethod
    def from_gpx(cls, file_input: TextIO) -> "Route":
        """
        Parse GPX data and concatenate all tracks/segments into a single route.

        Files without tracks fall back to their route points.

        Args:
            file_input: File-like object containing GPX data

        Returns:
            Route object representing the concatenated route

        Raises:
            ValueError: If the GPX data holds fewer than two points.
            gpxpy.gpx.GPXException: If GPX data is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        coords_data = []

        for track in gpx_data.tracks:
            for segment in track.segments:
                for point in segment.points:
                    coords_data.append(_point_to_position(point))

        if not coords_data:
            logger.debug("No track points found, reading route points")
            for gpx_route in gpx_data.routes:
                for point in gpx_route.points:
                    coords_data.append(_point_to_position(point))

        route = cls(coords_data)

        logger.debug(f"Parsed {len(route.coords)} points from GPX data")

        return route

    @classmethod
    def from_file(cls, filename: str) -> "Route":
        """
        Load and parse a GPX file into a route.

        Args:
            filename: Path to GPX file

        Returns:
            Route object representing the route

        Raises:
            ValueError: If the file holds fewer than two points.
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return cls.from_gpx(f)

    def __len__(self) -> int:
        """Return number of positions in route."""
        return len(self.coords)

    def __getitem__(self, index):
        """Allow indexing into positions."""
        return self.coords[index]

    def __iter__(self):
        """Allow iteration over positions."""
        return iter(self.coords)


def _point_to_position(point: gpxpy.geo.Location) -> Position:
    altitude = point.elevation if point.elevation is not None else 0.0
    return Position(
        latitude=point.latitude, longitude=point.longitude, altitude=altitude
    )
