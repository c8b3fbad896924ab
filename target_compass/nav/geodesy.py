"""
Geodesy
=======

Spherical-earth helpers for distance and heading math. All functions are
pure; angles are in degrees unless the name says otherwise.

The sphere model (R = 6,371,000 m) is accurate to about 1 m over sub-km
spans and acceptable up to ~100 km.
"""

import math
from dataclasses import dataclass

EARTH_RADIUS_M = 6371000.0


@dataclass(frozen=True)
class Coordinate:
    """WGS84 position in degrees."""
    latitude: float
    longitude: float

    def as_tuple(self):
        """Return as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"


def to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180.0)


def to_degrees(radians: float) -> float:
    return radians * (180.0 / math.pi)


def distance(a: Coordinate, b: Coordinate) -> float:
    """Haversine great-circle distance between two coordinates (meters)."""
    lat1 = to_radians(a.latitude)
    lat2 = to_radians(b.latitude)
    dlat = to_radians(b.latitude - a.latitude)
    dlon = to_radians(b.longitude - a.longitude)

    h = (math.sin(dlat / 2.0) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2)
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
    return EARTH_RADIUS_M * c


def bearing(origin: Coordinate, destination: Coordinate) -> float:
    """
    Initial great-circle bearing from origin to destination.

    Returns:
        Degrees in [0, 360), 0 = true north, clockwise positive
    """
    lat1 = to_radians(origin.latitude)
    lat2 = to_radians(destination.latitude)
    dlon = to_radians(destination.longitude - origin.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = (math.cos(lat1) * math.sin(lat2)
         - math.sin(lat1) * math.cos(lat2) * math.cos(dlon))
    return normalize_angle(to_degrees(math.atan2(y, x)))


def normalize_angle(angle: float) -> float:
    """Reduce any angle to [0, 360)."""
    normalized = angle % 360.0
    # Tiny negative inputs round up to exactly 360.0
    if normalized >= 360.0:
        normalized = 0.0
    return normalized


def angle_difference(from_angle: float, to_angle: float) -> float:
    """
    Shortest signed rotation from from_angle to to_angle.

    Returns:
        Degrees in (-180, 180]; positive means to_angle is clockwise
    """
    diff = (to_angle - from_angle) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def format_distance(meters: float) -> str:
    """
    Format distance with km + meters for precise tracking.

    850.4 -> "850m", 1234.5 -> "1km 235m", 1999.7 -> "2km 0m"
    """
    total = round_half_up(meters)
    if total < 1000:
        return f"{total}m"
    km, remaining = divmod(total, 1000)
    return f"{km}km {remaining}m"


def format_distance_simple(meters: float) -> str:
    """Coarser format: "850m", "1.5km", "12km"."""
    total = round_half_up(meters)
    if total < 1000:
        return f"{total}m"
    if total < 10000:
        return f"{total / 1000:.1f}km"
    return f"{round_half_up(total / 1000)}km"
