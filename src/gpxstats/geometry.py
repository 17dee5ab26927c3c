#!/usr/bin/env python3
"""
Geometry and distance calculation utilities for way-point analysis.
"""

from typing import NamedTuple
import math

# Mean earth radius in meters
EARTH_RADIUS = 6371008.8


class Position(NamedTuple):
    """Represents a geographic position with latitude, longitude and elevation."""

    latitude: float
    longitude: float
    elevation: float = 0.0

    def __str__(self) -> str:
        return f"({self.latitude:.6f}°, {self.longitude:.6f}°, {self.elevation:.1f}m)"


def distance_between(pos1: Position, pos2: Position) -> float:
    """
    Calculate the great circle distance between two positions.

    Uses the Haversine formula on a sphere of fixed radius. Elevation is
    ignored.

    Args:
        pos1: First position
        pos2: Second position

    Returns:
        Surface distance in meters
    """
    lat1, lon1 = math.radians(pos1.latitude), math.radians(pos1.longitude)
    lat2, lon2 = math.radians(pos2.latitude), math.radians(pos2.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )

    # Rounding can push a slightly above 1 for near-antipodal points
    a = min(1.0, max(0.0, a))

    return 2 * EARTH_RADIUS * math.asin(math.sqrt(a))


def path_length(pos1: Position, pos2: Position) -> float:
    """
    Calculate the 3D distance between two positions.

    Applies the Pythagorean theorem to the surface distance and the
    elevation difference.
    """
    delta_h = distance_between(pos1, pos2)
    delta_v = pos2.elevation - pos1.elevation
    return math.sqrt(delta_h**2 + delta_v**2)


def gradient(pos1: Position, pos2: Position) -> float:
    """
    Calculate the gradient from pos1 to pos2 in degrees.

    Positive values are uphill, negative values downhill. Two positions with
    no horizontal separation give +90 (ascent), -90 (descent) or 0 (level).

    Args:
        pos1: Starting position
        pos2: Ending position

    Returns:
        Gradient angle in degrees, in the range [-90, 90]
    """
    delta_h = distance_between(pos1, pos2)
    delta_v = pos2.elevation - pos1.elevation
    return math.degrees(math.atan2(delta_v, delta_h))
