"""
Module for collecting and logging metrics related to routes.
"""

import logging
from typing import NamedTuple

from .config import GreatCircleConfig
from .geodesy import distance_to
from .route import Route

logger = logging.getLogger(__name__)


class RouteMetrics(NamedTuple):
    """Container for route metrics data."""

    point_count: int
    leg_count: int
    total_distance: float
    straight_line_distance: float
    longest_leg: float
    max_cross_track_deviation: float


def collect_metrics(route: Route) -> RouteMetrics:
    """
    Collect summary metrics for a route.

    Args:
        route: Route to analyze

    Returns:
        RouteMetrics containing all collected metrics
    """
    legs = route.legs()
    return RouteMetrics(
        point_count=len(route),
        leg_count=len(legs),
        total_distance=route.total_distance(),
        straight_line_distance=distance_to(route.start, route.end),
        longest_leg=max(leg.distance for leg in legs),
        max_cross_track_deviation=route.max_cross_track_deviation(),
    )


def log_metrics(metrics: RouteMetrics, config: GreatCircleConfig) -> None:
    """
    Log detailed metrics after summarizing a route.

    Args:
        metrics: RouteMetrics containing collected metrics
        config: GreatCircleConfig holding the metrics flag
    """
    if not config.metrics:
        return

    logger.info("=== GREATCIRCLE_METRICS ===")
    logger.info(f"point_count={metrics.point_count}")
    logger.info(f"leg_count={metrics.leg_count}")
    logger.info(f"total_distance_m={metrics.total_distance:.3f}")
    logger.info(f"straight_line_distance_m={metrics.straight_line_distance:.3f}")
    logger.info(f"longest_leg_m={metrics.longest_leg:.3f}")
    logger.info(f"max_cross_track_deviation_m={metrics.max_cross_track_deviation:.3f}")
    logger.info("=== END_GREATCIRCLE_METRICS ===")
