"""Contracts for the sensing collaborators consumed by the verification engine."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from src.services.geo.models import CachedPosition, Coordinate

DiscoveryCallback = Callable[[str], None]
ScanFailedCallback = Callable[[str], None]
PositionCallback = Callable[[Coordinate | None], None]


@runtime_checkable
class PermissionGate(Protocol):
    """Reports which sensing capabilities are currently authorized."""

    def has_capability(self, name: str) -> bool: ...

    def missing_capabilities(self) -> set[str]: ...


@runtime_checkable
class RadioSource(Protocol):
    """Short-range radio driver emitting discovered device identifiers.

    ``on_discovered`` and ``on_failed`` may be invoked from any thread.
    Calling ``start_scan`` while a scan is running replaces that scan.
    """

    def is_available(self) -> bool: ...

    async def start_scan(
        self,
        on_discovered: DiscoveryCallback,
        on_failed: ScanFailedCallback | None = None,
    ) -> None: ...

    async def stop_scan(self) -> None: ...


@runtime_checkable
class PositionSource(Protocol):
    """Positioning provider delivering one fix per request.

    ``request_position`` delivers exactly one call to ``on_result``; ``None``
    means no fix could be obtained within ``timeout`` seconds.
    """

    def is_available(self) -> bool: ...

    def last_known_position(self) -> CachedPosition | None: ...

    def request_position(self, on_result: PositionCallback, timeout: float) -> None: ...

    def cancel_request(self) -> None: ...
