"""Great-circle distance (no external dependencies)."""

from __future__ import annotations

import math

from src.config.constants import EARTH_RADIUS_M
from src.services.geo.models import Coordinate


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Compute Haversine distance in meters between two coordinates.

    Args:
        a: First coordinate.
        b: Second coordinate.

    Returns:
        Distance in meters, symmetric in its arguments and 0.0 for identical points.
    """

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    # rounding can push h a hair above 1.0 for antipodal points
    h = min(1.0, max(0.0, h))
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
    return EARTH_RADIUS_M * c


def is_within_radius(point: Coordinate, center: Coordinate, radius_m: float) -> bool:
    """Check whether a point is inside or on the boundary of a circle geofence."""

    return distance_meters(point, center) <= radius_m
