"""Geographic primitives."""

from src.services.geo.distance import distance_meters, is_within_radius
from src.services.geo.models import CachedPosition, Coordinate

__all__ = [
    "CachedPosition",
    "Coordinate",
    "distance_meters",
    "is_within_radius",
]
