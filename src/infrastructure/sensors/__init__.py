"""Sensing collaborators: contracts and adapters."""

from src.infrastructure.sensors.factory import (
    Sensors,
    build_sensors,
    create_position_source,
    create_radio_source,
)
from src.infrastructure.sensors.gpsd_position import GpsdPositionSource, parse_tpv
from src.infrastructure.sensors.permissions import StaticPermissionGate
from src.infrastructure.sensors.protocols import PermissionGate, PositionSource, RadioSource
from src.infrastructure.sensors.static_position import StaticPositionSource
from src.infrastructure.sensors.unavailable import UnavailablePositionSource, UnavailableRadioSource

__all__ = [
    "GpsdPositionSource",
    "PermissionGate",
    "PositionSource",
    "RadioSource",
    "Sensors",
    "StaticPermissionGate",
    "StaticPositionSource",
    "UnavailablePositionSource",
    "UnavailableRadioSource",
    "build_sensors",
    "create_position_source",
    "create_radio_source",
    "parse_tpv",
]
