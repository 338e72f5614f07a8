"""Sensor adapter factory helpers."""

import logging
from dataclasses import dataclass

from src.config.constants import PositionBackend, RadioBackend
from src.config.settings import Settings
from src.infrastructure.sensors.permissions import StaticPermissionGate
from src.infrastructure.sensors.protocols import PermissionGate, PositionSource, RadioSource
from src.infrastructure.sensors.static_position import StaticPositionSource
from src.infrastructure.sensors.unavailable import UnavailablePositionSource, UnavailableRadioSource
from src.services.geo.models import Coordinate

logger = logging.getLogger(__name__)


@dataclass
class Sensors:
    """The three collaborators one orchestrator needs."""

    permissions: PermissionGate
    radio: RadioSource
    position: PositionSource


def create_radio_source(settings: Settings) -> RadioSource:
    """Create the radio source named by ``settings.radio_backend``."""
    if settings.radio_backend == RadioBackend.BLEAK:
        # bleak pulls in platform backends (dbus on Linux); import lazily
        from src.infrastructure.sensors.bleak_radio import BleakRadioSource

        return BleakRadioSource(adapter=settings.bleak_adapter)
    return UnavailableRadioSource()


def create_position_source(settings: Settings) -> PositionSource:
    """Create the position source named by ``settings.position_backend``."""
    if settings.position_backend == PositionBackend.GPSD:
        from src.infrastructure.sensors.gpsd_position import GpsdPositionSource

        return GpsdPositionSource(host=settings.gpsd_host, port=settings.gpsd_port)
    if settings.position_backend == PositionBackend.STATIC:
        # presence of both values is enforced by Settings
        return StaticPositionSource(Coordinate(settings.static_latitude, settings.static_longitude))
    return UnavailablePositionSource()


def build_sensors(settings: Settings) -> Sensors:
    """Build the permission gate, radio source and position source from settings."""
    sensors = Sensors(
        permissions=StaticPermissionGate(settings.granted_capabilities),
        radio=create_radio_source(settings),
        position=create_position_source(settings),
    )
    logger.debug(
        "Sensors built: radio=%s position=%s granted=%s",
        type(sensors.radio).__name__,
        type(sensors.position).__name__,
        settings.granted_capabilities,
    )
    return sensors
