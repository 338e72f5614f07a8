"""Placeholders for hosts without a radio or a positioning device."""

from src.infrastructure.sensors.protocols import DiscoveryCallback, PositionCallback, ScanFailedCallback
from src.services.geo.models import CachedPosition


class UnavailableRadioSource:
    def is_available(self) -> bool:
        return False

    async def start_scan(
        self,
        on_discovered: DiscoveryCallback,
        on_failed: ScanFailedCallback | None = None,
    ) -> None:
        if on_failed is not None:
            on_failed("no radio configured")

    async def stop_scan(self) -> None:
        return None


class UnavailablePositionSource:
    def is_available(self) -> bool:
        return False

    def last_known_position(self) -> CachedPosition | None:
        return None

    def request_position(self, on_result: PositionCallback, timeout: float) -> None:
        on_result(None)

    def cancel_request(self) -> None:
        return None
