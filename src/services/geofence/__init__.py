"""Geofence presence checking."""

from src.services.geofence.checker import GeofenceChecker, GeofenceResult, evaluate_position

__all__ = ["GeofenceChecker", "GeofenceResult", "evaluate_position"]
