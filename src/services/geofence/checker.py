"""Geofence presence check against the current position."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from src.config.constants import DEFAULT_POSITION_MAX_AGE_SECONDS, DEFAULT_POSITION_TIMEOUT_SECONDS
from src.infrastructure.sensors.protocols import PositionSource
from src.services.geo.distance import distance_meters
from src.services.geo.models import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeofenceResult:
    """Outcome of one geofence check.

    ``position`` is None when no fix was available. On a hit,
    ``matched_location`` and ``distance_meters`` describe the first target
    within radius; on a miss, ``closest_distance_meters`` is the smallest
    distance seen across all targets.
    """

    within_radius: bool
    position: Coordinate | None = None
    matched_location: Coordinate | None = None
    distance_meters: float | None = None
    closest_distance_meters: float | None = None

    @property
    def available(self) -> bool:
        return self.position is not None


NOT_AVAILABLE = GeofenceResult(within_radius=False)


def evaluate_position(
    position: Coordinate,
    targets: Sequence[Coordinate],
    radius_m: float,
) -> GeofenceResult:
    """Test ``position`` against ``targets`` in order; first target within radius wins."""
    closest: float | None = None
    for target in targets:
        distance = distance_meters(position, target)
        if closest is None or distance < closest:
            closest = distance
        if distance <= radius_m:
            return GeofenceResult(
                within_radius=True,
                position=position,
                matched_location=target,
                distance_meters=distance,
                closest_distance_meters=closest,
            )
    return GeofenceResult(within_radius=False, position=position, closest_distance_meters=closest)


class GeofenceChecker:
    """Acquires a position (cached when fresh) and checks it against target locations."""

    def __init__(
        self,
        source: PositionSource,
        position_timeout: float = DEFAULT_POSITION_TIMEOUT_SECONDS,
        max_cached_age: float = DEFAULT_POSITION_MAX_AGE_SECONDS,
    ):
        self.source = source
        self.position_timeout = position_timeout
        self.max_cached_age = max_cached_age

    def _source_available(self) -> bool:
        try:
            return bool(self.source.is_available())
        except Exception as e:
            logger.warning("Positioning availability check failed: %s", e)
            return False

    def _fresh_cached_position(self, level: int) -> Coordinate | None:
        try:
            cached = self.source.last_known_position()
        except Exception as e:
            logger.warning("Reading cached position failed: %s", e)
            return None
        if cached is None:
            return None
        age = cached.age_seconds()
        if age < self.max_cached_age:
            logger.log(level, "Using cached position (%.1fs old)", age)
            return cached.coordinate
        logger.log(level, "Cached position too old (%.1fs); requesting a fresh fix", age)
        return None

    async def acquire_position(self, *, verbose: bool = False) -> Coordinate | None:
        """Return a fresh-enough position, or None if none arrives before the timeout."""
        level = logging.INFO if verbose else logging.DEBUG

        cached = self._fresh_cached_position(level)
        if cached is not None:
            return cached

        loop = asyncio.get_running_loop()
        fix: asyncio.Future = loop.create_future()

        def resolve(position: Coordinate | None) -> None:
            if not fix.done():
                fix.set_result(position)

        def on_result(position: Coordinate | None) -> None:
            try:
                loop.call_soon_threadsafe(resolve, position)
            except RuntimeError:
                # loop already closed: the verification is over
                pass

        try:
            self.source.request_position(on_result, self.position_timeout)
            try:
                position = await asyncio.wait_for(fix, timeout=self.position_timeout)
            except asyncio.TimeoutError:
                logger.log(level, "Position request timeout after %.1fs", self.position_timeout)
                return None
        finally:
            self._cancel_request()

        if position is None:
            logger.log(level, "Failed to get current position")
        return position

    def _cancel_request(self) -> None:
        try:
            self.source.cancel_request()
        except Exception as e:
            logger.warning("Error cancelling position request: %s", e, exc_info=True)

    async def check(
        self,
        targets: Sequence[Coordinate],
        radius_m: float,
        *,
        verbose: bool = False,
    ) -> GeofenceResult:
        """Check whether the current position lies within ``radius_m`` of any target."""
        level = logging.INFO if verbose else logging.DEBUG
        logger.log(
            level,
            "Starting location check for %d target locations with radius %sm",
            len(targets),
            radius_m,
        )

        if not self._source_available():
            logger.log(level, "Positioning not available")
            return NOT_AVAILABLE

        position = await self.acquire_position(verbose=verbose)
        if position is None:
            return NOT_AVAILABLE

        logger.log(level, "Current position: %s, %s", position.latitude, position.longitude)
        result = evaluate_position(position, targets, radius_m)
        if result.within_radius:
            logger.log(level, "Location match found within %.1fm", result.distance_meters)
        else:
            logger.log(level, "Closest target is %.1fm away", result.closest_distance_meters or 0.0)
        return result
