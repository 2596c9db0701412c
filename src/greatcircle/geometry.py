"""
Position value type and angle helpers shared by the geodesy functions.

All calculations in this package use a spherical earth model, so the
constants and helpers here are deliberately simple: degrees in and out,
radians for the trigonometry.
"""

from dataclasses import dataclass, field
import math

# Mean earth radius in meters
EARTH_RADIUS_METERS = 6371000.0


@dataclass(frozen=True)
class Position:
    """Represents a geographic position with latitude, longitude and altitude.

    Altitude is carried along but takes no part in equality, hashing or any
    spherical calculation.
    """

    latitude: float
    longitude: float
    altitude: float = field(default=0.0, compare=False)

    def equal_to(self, other: "Position", include_altitude: bool = False) -> bool:
        """
        Compare this position to another one for equality.

        Args:
            other: The other position
            include_altitude: Whether altitude must match as well

        Returns:
            True if latitude and longitude (and, optionally, altitude) match exactly
        """
        if self is other:
            return True
        return (
            self.latitude == other.latitude
            and self.longitude == other.longitude
            and (self.altitude == other.altitude if include_altitude else True)
        )


def normalize_bearing(degrees: float) -> float:
    """Normalize a bearing in the range [-360, 360] to [0, 360)."""
    return (degrees + 360.0) % 360.0


def normalize_longitude(degrees: float) -> float:
    """Normalize a longitude to the range [-180, 180)."""
    return ((degrees + 540.0) % 360.0) - 180.0


def clamp_unit(value: float) -> float:
    """Clamp an asin/acos argument that drifted outside [-1, 1] through rounding."""
    return max(-1.0, min(1.0, value))


def compare_to_decimal_places(value1: float, value2: float, decimal_places: int) -> bool:
    """
    Compare two floats to the given number of decimal places.

    Both values are scaled and rounded half-to-even before comparison.

    Args:
        value1: First value
        value2: Second value
        decimal_places: Number of decimal places that must agree

    Returns:
        True if the rounded values are equal
    """
    multiplier = math.pow(10, decimal_places)
    return round(value1 * multiplier) == round(value2 * multiplier)
