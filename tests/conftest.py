"""Pytest configuration and fixtures."""

import asyncio
import time

import pytest

from src.config.settings import Settings
from src.infrastructure.sensors.permissions import StaticPermissionGate
from src.orchestrator.pipeline import VerificationOrchestrator
from src.services.geo.models import CachedPosition, Coordinate


class FakeRadioSource:
    """Radio source replaying scripted discoveries.

    ``discoveries`` is a list of ``(delay_seconds, identifier)`` pairs emitted
    one after another while the scan is running. ``burst`` identifiers are
    emitted synchronously from inside ``start_scan``.
    """

    def __init__(
        self,
        discoveries=(),
        *,
        burst=(),
        available=True,
        start_error=None,
        fail_reason=None,
    ):
        self.discoveries = list(discoveries)
        self.burst = list(burst)
        self.available = available
        self.start_error = start_error
        self.fail_reason = fail_reason
        self.start_calls = 0
        self.stop_calls = 0
        self.scanning = False
        self.emitted: list[str] = []
        self._task = None

    def is_available(self):
        return self.available

    async def start_scan(self, on_discovered, on_failed=None):
        self.start_calls += 1
        if self.start_error is not None:
            raise self.start_error
        self.scanning = True
        if self.fail_reason is not None:
            on_failed(self.fail_reason)
            return
        for identifier in self.burst:
            self.emitted.append(identifier)
            on_discovered(identifier)
        self._task = asyncio.get_running_loop().create_task(self._emit(on_discovered))

    async def _emit(self, on_discovered):
        for delay, identifier in self.discoveries:
            await asyncio.sleep(delay)
            if not self.scanning:
                return
            self.emitted.append(identifier)
            on_discovered(identifier)

    async def stop_scan(self):
        self.stop_calls += 1
        self.scanning = False
        if self._task is not None:
            self._task.cancel()
            self._task = None


class FakePositionSource:
    """Position source delivering ``fix`` after ``delay`` seconds (never, if ``respond`` is False)."""

    def __init__(self, fix=None, *, delay=0.0, cached=None, available=True, respond=True):
        self.fix = fix
        self.delay = delay
        self.cached = cached
        self.available = available
        self.respond = respond
        self.requests = 0
        self.cancels = 0
        self.pending = False
        self._handle = None

    def is_available(self):
        return self.available

    def last_known_position(self):
        return self.cached

    def request_position(self, on_result, timeout):
        self.requests += 1
        self.pending = True
        if self.respond:
            loop = asyncio.get_running_loop()
            self._handle = loop.call_later(self.delay, self._deliver, on_result)

    def _deliver(self, on_result):
        if self.pending:
            self.pending = False
            on_result(self.fix)

    def cancel_request(self):
        self.cancels += 1
        self.pending = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


def _make_orchestrator(radio=None, position=None, granted=("radio-scan", "positioning"), **kwargs):
    return VerificationOrchestrator(
        StaticPermissionGate(granted),
        radio if radio is not None else FakeRadioSource(),
        position if position is not None else FakePositionSource(),
        **kwargs,
    )


def _cached_at(coordinate: Coordinate, age_seconds: float) -> CachedPosition:
    return CachedPosition(coordinate, time.time() - age_seconds)


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(radio_backend="none", position_backend="none")


@pytest.fixture
def fake_radio():
    """Factory for scripted radio sources."""
    return FakeRadioSource


@pytest.fixture
def fake_position():
    """Factory for scripted position sources."""
    return FakePositionSource


@pytest.fixture
def build_orchestrator():
    """Factory for orchestrators wired to fakes and a static permission gate."""
    return _make_orchestrator


@pytest.fixture
def cached_at():
    """Factory for cached positions of a given age in seconds."""
    return _cached_at
