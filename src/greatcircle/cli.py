#!/usr/bin/env python3
"""
Great-circle calculator.
This script evaluates spherical-earth geodesy between positions given on
the command line, or summarizes the legs of a route read from a GPX file.

Requirements:
    pip install gpxpy

"""

from typing import List, Optional
import argparse
import logging
import sys
from gpxpy import gpx

from . import __version__
from .config import GreatCircleConfig
from .geometry import Position
from .geodesy import (
    cross_track_distance_to,
    cross_track_position_of,
    destination_point,
    distance_to,
    final_bearing_to,
    initial_bearing_to,
    intersection_of,
    midpoint_to,
)
from .metrics import collect_metrics, log_metrics
from .route import Route

# Configure logging
logger = logging.getLogger("greatcircle")


def _add_position_argument(
    parser: argparse.ArgumentParser, name: str, description: str
) -> None:
    parser.add_argument(
        name,
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help=description,
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Great-circle (spherical earth) geodesy calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=6,
        help="Decimal places for latitudes, longitudes and bearings (default: 6)",
    )
    parser.add_argument(
        "--distance-precision",
        type=int,
        default=3,
        help="Decimal places for distances in meters (default: 3)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after summarizing a route",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"greatcircle {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    distance = subparsers.add_parser("distance", help="Distance between two positions")
    _add_position_argument(distance, "start", "Start position")
    _add_position_argument(distance, "end", "End position")
    distance.set_defaults(handler=run_distance)

    bearing = subparsers.add_parser(
        "bearing", help="Initial and final bearing between two positions"
    )
    _add_position_argument(bearing, "start", "Start position")
    _add_position_argument(bearing, "end", "End position")
    bearing.set_defaults(handler=run_bearing)

    midpoint = subparsers.add_parser("midpoint", help="Midpoint between two positions")
    _add_position_argument(midpoint, "start", "Start position")
    _add_position_argument(midpoint, "end", "End position")
    midpoint.set_defaults(handler=run_midpoint)

    destination = subparsers.add_parser(
        "destination", help="Position reached from a start along a bearing"
    )
    _add_position_argument(destination, "start", "Start position")
    destination.add_argument("bearing", type=float, help="Initial bearing in degrees")
    destination.add_argument("distance", type=float, help="Distance in meters")
    destination.set_defaults(handler=run_destination)

    intersection = subparsers.add_parser(
        "intersection", help="Intersection of two paths given by position and bearing"
    )
    _add_position_argument(intersection, "first", "Start of the first path")
    intersection.add_argument(
        "first_bearing", type=float, help="Bearing of the first path in degrees"
    )
    _add_position_argument(intersection, "second", "Start of the second path")
    intersection.add_argument(
        "second_bearing", type=float, help="Bearing of the second path in degrees"
    )
    intersection.set_defaults(handler=run_intersection)

    cross_track = subparsers.add_parser(
        "cross-track", help="Distance from a position to the path between two others"
    )
    _add_position_argument(cross_track, "position", "Position to measure from")
    _add_position_argument(cross_track, "start", "Start of the path")
    _add_position_argument(cross_track, "end", "End of the path")
    cross_track.set_defaults(handler=run_cross_track)

    route = subparsers.add_parser("route", help="Summarize the legs of a GPX route")
    route.add_argument("filename", type=str, help="GPX file to process")
    route.set_defaults(handler=run_route)

    return parser


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    level = getattr(logging, args.log_level)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def format_position(position: Position, precision: int) -> str:
    return f"{position.latitude:.{precision}f}, {position.longitude:.{precision}f}"


def _position(values: List[float]) -> Position:
    return Position(latitude=values[0], longitude=values[1])


def run_distance(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    distance = distance_to(_position(args.start), _position(args.end))
    print(f"{distance:.{config.distance_precision}f} m")
    return 0


def run_bearing(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    start, end = _position(args.start), _position(args.end)
    print(f"Initial bearing: {initial_bearing_to(start, end):.{config.precision}f}°")
    print(f"Final bearing: {final_bearing_to(start, end):.{config.precision}f}°")
    return 0


def run_midpoint(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    midpoint = midpoint_to(_position(args.start), _position(args.end))
    print(format_position(midpoint, config.precision))
    return 0


def run_destination(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    destination = destination_point(_position(args.start), args.bearing, args.distance)
    print(format_position(destination, config.precision))
    return 0


def run_intersection(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    intersection = intersection_of(
        _position(args.first),
        args.first_bearing,
        _position(args.second),
        args.second_bearing,
    )
    if intersection is None:
        print("No unique intersection")
        return 1
    print(format_position(intersection, config.precision))
    return 0


def run_cross_track(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    position, start, end = _position(args.position), _position(args.start), _position(args.end)
    distance = cross_track_distance_to(position, start, end)
    closest = cross_track_position_of(position, start, end)

    if closest == position:
        side = "on track"
    else:
        side = "right of track" if distance > 0.0 else "left of track"

    print(f"Cross-track distance: {distance:.{config.distance_precision}f} m ({side})")
    print(f"Closest track position: {format_position(closest, config.precision)}")
    return 0


def log_route_legs(route: Route, config: GreatCircleConfig) -> None:
    """
    Print every leg of a route with its distance and bearings.

    Args:
        route: Route to describe
        config: Output precision settings
    """
    legs = route.legs()
    cumulative_distances = route.cumulative_distances()

    # Calculate digits needed for formatting alignment
    distance_width = len(f"{cumulative_distances[-1] / 1000:.0f}") + 3  # +3 for ".XX"
    index_width = len(str(len(legs)))

    print(f"Route legs ({len(legs)}):")
    for i, leg in enumerate(legs, start=1):
        start_km = cumulative_distances[i - 1] / 1000
        end_km = cumulative_distances[i] / 1000
        print(
            f"{i:{index_width}d}: {start_km:{distance_width}.2f}-{end_km:{distance_width}.2f} km "
            f"({leg.distance:.{config.distance_precision}f} m) "
            f"bearing {leg.initial_bearing:.1f}° -> {leg.final_bearing:.1f}°"
        )

    print(f"Total distance: {route.total_distance():.{config.distance_precision}f} m")
    print(
        f"Maximum deviation from start-end great circle: "
        f"{route.max_cross_track_deviation():.{config.distance_precision}f} m"
    )


def run_route(args: argparse.Namespace, config: GreatCircleConfig) -> int:
    # Load and parse the GPX file into a route
    try:
        route = Route.from_file(args.filename)
    except FileNotFoundError:
        logger.error(f"GPX file not found: {args.filename}")
        return 1
    except PermissionError:
        logger.error(f"Cannot read GPX file (permission denied): {args.filename}")
        return 1
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Unusable route in {args.filename}: {e}")
        return 1
    logger.info(f"Loaded GPX route with {len(route)} points")

    log_route_legs(route, config)

    metrics = collect_metrics(route)
    log_metrics(metrics, config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments and runs the requested calculation.

    Returns:
        Process exit status
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Setup logging
    setup_logging(args)

    config = GreatCircleConfig.from_args(args)
    logger.debug(f"Running {args.command} with {config}")

    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
