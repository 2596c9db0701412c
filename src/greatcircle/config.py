import argparse
from dataclasses import dataclass


@dataclass
class GreatCircleConfig:
    """Configuration for the greatcircle CLI."""

    precision: int = 6
    distance_precision: int = 3
    log_level: str = "WARNING"
    metrics: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "GreatCircleConfig":
        return cls(
            precision=args.precision,
            distance_precision=args.distance_precision,
            log_level=args.log_level,
            metrics=args.metrics,
        )
