"""Tests for the radio proximity scanner."""

import asyncio
import time

import pytest

from src.config.constants import MatchMode
from src.services.radio.scanner import RadioProximityScanner, matches_identifier


class TestMatchesIdentifier:
    def test_exact_requires_membership(self):
        assert matches_identifier("Beacon-1", {"Beacon-1"}, MatchMode.EXACT)
        assert not matches_identifier("beacon-1", {"Beacon-1"}, MatchMode.EXACT)
        assert not matches_identifier("Beacon-10", {"Beacon-1"}, MatchMode.EXACT)

    def test_substring_is_case_insensitive_contains(self):
        assert matches_identifier("OFFICE-beacon-7", {"Beacon"}, MatchMode.SUBSTRING)
        assert not matches_identifier("Office", {"Beacon"}, MatchMode.SUBSTRING)

    def test_empty_identifier_never_matches(self):
        assert not matches_identifier("", {""}, MatchMode.EXACT)
        assert not matches_identifier("", {"A"}, MatchMode.SUBSTRING)


@pytest.mark.asyncio
async def test_first_match_stops_scan(fake_radio):
    radio = fake_radio([(0.01, "Other"), (0.01, "Beacon-1"), (0.01, "Beacon-2")])
    scanner = RadioProximityScanner(radio)

    result = await scanner.scan(["Beacon-1", "Beacon-2"], MatchMode.EXACT, timeout=1.0)

    assert result == "Beacon-1"
    assert radio.stop_calls == 1
    assert not radio.scanning
    await asyncio.sleep(0.05)
    assert radio.emitted == ["Other", "Beacon-1"]
    assert scanner.discovered_count == 2


@pytest.mark.asyncio
async def test_events_after_match_are_ignored(fake_radio):
    radio = fake_radio(burst=["Other", "Beacon-1", "Beacon-2"])
    scanner = RadioProximityScanner(radio)

    result = await scanner.scan(["Beacon-1", "Beacon-2"], MatchMode.EXACT, timeout=1.0)

    assert result == "Beacon-1"
    assert scanner.discovered_count == 2


@pytest.mark.asyncio
async def test_timeout_returns_none_and_stops(fake_radio):
    radio = fake_radio([(0.01, "Nope")])
    scanner = RadioProximityScanner(radio)

    start = time.monotonic()
    result = await scanner.scan(["Beacon-1"], MatchMode.EXACT, timeout=0.1)
    elapsed = time.monotonic() - start

    assert result is None
    assert 0.09 <= elapsed < 0.5
    assert radio.stop_calls == 1


@pytest.mark.asyncio
async def test_unavailable_radio_skips_scan(fake_radio):
    radio = fake_radio([(0.0, "Beacon-1")], available=False)
    scanner = RadioProximityScanner(radio)

    start = time.monotonic()
    result = await scanner.scan(["Beacon-1"], MatchMode.EXACT, timeout=5.0)

    assert result is None
    assert time.monotonic() - start < 0.1
    assert radio.start_calls == 0


@pytest.mark.asyncio
async def test_driver_failure_resolves_not_found(fake_radio):
    radio = fake_radio(fail_reason="scan failed: 2")
    scanner = RadioProximityScanner(radio)

    result = await scanner.scan(["Beacon-1"], MatchMode.EXACT, timeout=5.0)

    assert result is None
    assert radio.stop_calls == 1


@pytest.mark.asyncio
async def test_start_exception_resolves_not_found(fake_radio):
    radio = fake_radio(start_error=RuntimeError("driver exploded"))
    scanner = RadioProximityScanner(radio)

    result = await scanner.scan(["Beacon-1"], MatchMode.EXACT, timeout=1.0)

    assert result is None
    assert radio.stop_calls == 1


@pytest.mark.asyncio
async def test_new_scan_cancels_previous(fake_radio):
    radio = fake_radio([(0.05, "Beacon-1")])
    scanner = RadioProximityScanner(radio)

    first = asyncio.create_task(scanner.scan(["Nothing"], MatchMode.EXACT, timeout=5.0))
    await asyncio.sleep(0.01)
    second = await scanner.scan(["Beacon-1"], MatchMode.EXACT, timeout=1.0)

    assert await first is None
    assert second == "Beacon-1"
