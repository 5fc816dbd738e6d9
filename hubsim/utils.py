"""
HUBSIM Utility Functions
Common geometry helpers and display formatting.
"""

from math import radians, sin, cos, sqrt, atan2, degrees
from typing import Optional, Tuple

from .config import Constants


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers

    Example:
        >>> haversine_distance(37.6213, -122.3790, 33.9425, -118.4081)
        543.6
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return Constants.EARTH_RADIUS_KM * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate bearing (direction) from point 1 to point 2.

    Returns the initial bearing (forward azimuth) from the first
    point to the second point on a spherical earth. Identical points
    yield atan2(0, 0), i.e. 0.0.

    Args:
        lat1, lon1: Start point (degrees)
        lat2, lon2: End point (degrees)

    Returns:
        Bearing in degrees (0-360, where 0=North, 90=East, 180=South, 270=West)
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlon = lon2 - lon1

    x = sin(dlon) * cos(lat2)
    y = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)

    bearing = atan2(x, y)
    bearing = degrees(bearing)
    bearing = (bearing + 360) % 360

    return bearing


def bearing(start, end) -> float:
    """Bearing between two Coordinate-like (latitude, longitude) pairs."""
    return calculate_bearing(start[0], start[1], end[0], end[1])


def lerp(start, end, t: float) -> Tuple[float, float]:
    """
    Linearly interpolate between two (latitude, longitude) pairs.

    Latitude and longitude are interpolated independently (planar
    approximation, fine at airport scale).

    Args:
        start: Start point
        end: End point
        t: Fraction in [0, 1]

    Returns:
        Interpolated (latitude, longitude) tuple
    """
    return (
        start[0] + (end[0] - start[0]) * t,
        start[1] + (end[1] - start[1]) * t,
    )


def format_altitude(altitude_ft: Optional[float]) -> str:
    """
    Format altitude in feet, or 'GND' for aircraft on the ground.

    Example:
        >>> format_altitude(3500)
        '3500 ft'
    """
    if altitude_ft is None:
        return "N/A"
    if altitude_ft <= 0:
        return "GND"
    return f"{altitude_ft:.0f} ft"


def format_speed(speed_kts: Optional[float], unit: str = "knots") -> str:
    """
    Format ground speed.

    Args:
        speed_kts: Speed in knots
        unit: Output unit ('knots', 'kmh')

    Returns:
        Formatted speed string
    """
    if speed_kts is None:
        return "N/A"

    if unit == "kmh":
        return f"{speed_kts * Constants.KNOTS_TO_KMH:.1f} km/h"
    return f"{speed_kts:.0f} kts"


def format_duration(seconds: Optional[int]) -> str:
    """
    Format duration in human-readable format.

    Example:
        >>> format_duration(3665)
        '1h 1m 5s'
    """
    if seconds is None or seconds < 0:
        return "N/A"

    seconds = int(seconds)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return " ".join(parts)


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Example:
        >>> validate_coordinates(37.6213, -122.3790)
        True
        >>> validate_coordinates(100, 200)
        False
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180
