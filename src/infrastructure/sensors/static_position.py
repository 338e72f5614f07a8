"""Position source for fixed installations (kiosk, door terminal)."""

import time

from src.infrastructure.sensors.protocols import PositionCallback
from src.services.geo.models import CachedPosition, Coordinate


class StaticPositionSource:
    """Always reports the configured site coordinate."""

    def __init__(self, coordinate: Coordinate | None):
        self._coordinate = coordinate

    def is_available(self) -> bool:
        return self._coordinate is not None

    def last_known_position(self) -> CachedPosition | None:
        if self._coordinate is None:
            return None
        return CachedPosition(self._coordinate, time.time())

    def request_position(self, on_result: PositionCallback, timeout: float) -> None:
        on_result(self._coordinate)

    def cancel_request(self) -> None:
        return None
