"""Hybrid verification orchestrator."""

import logging
from typing import Any

from src.config.constants import (
    NO_MATCH_BOTH,
    NO_MATCH_LOCATION_ONLY,
    NO_MATCH_RADIO_ONLY,
    REQUIRED_CAPABILITIES,
    VerificationStep,
)
from src.config.settings import Settings
from src.infrastructure.logging.logger import StructuredLogger
from src.infrastructure.sensors.factory import Sensors, build_sensors
from src.infrastructure.sensors.protocols import PermissionGate, PositionSource, RadioSource
from src.orchestrator.state import VerificationState
from src.orchestrator.step_timer import timed_step
from src.services.geofence.checker import NOT_AVAILABLE, GeofenceChecker, GeofenceResult
from src.services.radio.scanner import RadioProximityScanner
from src.services.verification.models import (
    ConfigurationError,
    VerificationConfig,
    VerificationInProgressError,
)
from src.services.verification.verification_result import (
    MatchedByLocation,
    MatchedByRadio,
    NoMatch,
    PermissionDenied,
    VerificationOutcome,
    describe_missing_capabilities,
)

logger = logging.getLogger(__name__)


class VerificationOrchestrator:
    """Runs permission check, radio scan and geofence check in order and returns one verdict.

    Callers must serialize ``verify`` calls on one instance; a concurrent call
    raises ``VerificationInProgressError``.
    """

    def __init__(
        self,
        permissions: PermissionGate,
        radio: RadioSource,
        position: PositionSource,
        *,
        position_timeout: float | None = None,
        position_max_age: float | None = None,
    ):
        """Initialize orchestrator with its sensing collaborators."""
        self.permissions = permissions
        self.scanner = RadioProximityScanner(radio)
        checker_kwargs: dict[str, float] = {}
        if position_timeout is not None:
            checker_kwargs["position_timeout"] = position_timeout
        if position_max_age is not None:
            checker_kwargs["max_cached_age"] = position_max_age
        self.geofence = GeofenceChecker(position, **checker_kwargs)
        self.structured_logger = StructuredLogger(__name__)
        self.last_state: VerificationState | None = None
        self._in_flight = False

    @classmethod
    def from_settings(cls, settings: Settings, sensors: Sensors | None = None) -> "VerificationOrchestrator":
        """Build an orchestrator wired to the adapters selected in settings."""
        sensors = sensors or build_sensors(settings)
        return cls(
            sensors.permissions,
            sensors.radio,
            sensors.position,
            position_timeout=settings.position_timeout,
            position_max_age=settings.position_max_age,
        )

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def missing_capabilities(self) -> tuple[str, ...]:
        """Required capabilities the gate does not currently authorize, sorted by name."""
        missing = {name for name in REQUIRED_CAPABILITIES if not self.permissions.has_capability(name)}
        missing |= set(self.permissions.missing_capabilities()) & REQUIRED_CAPABILITIES
        return tuple(sorted(missing))

    def permission_status(self) -> dict[str, Any]:
        """Report which capabilities are granted and a hint for the missing ones."""
        missing = self.missing_capabilities()
        return {
            "granted": not missing,
            "missingCapabilities": list(missing),
            "message": describe_missing_capabilities(missing) or "All permissions already granted",
        }

    async def verify(self, config: VerificationConfig) -> VerificationOutcome:
        """
        Verify presence for one config.

        Steps:
        1. Permission check (both capabilities, before any sensing)
        2. Radio scan (skipped when no identifiers are configured)
        3. Geofence check (skipped when no locations are configured)

        No scan or position request is left active when this returns.
        """
        if not isinstance(config, VerificationConfig):
            raise ConfigurationError(f"Expected VerificationConfig, got {type(config).__name__}")
        if self._in_flight:
            raise VerificationInProgressError("A verification is already in progress on this instance")

        self._in_flight = True
        state = VerificationState(config=config)
        self.last_state = state
        try:
            outcome = await self._run(state)
        finally:
            self._in_flight = False
            self.scanner.cancel()

        state.finish(outcome)
        self.structured_logger.log_step(
            VerificationStep.DONE.value,
            state.to_log_dict(),
            duration_ms=sum(state.timings_ms.values()),
            level=logging.INFO if config.enable_logging else logging.DEBUG,
        )
        return outcome

    async def _run(self, state: VerificationState) -> VerificationOutcome:
        config = state.config

        missing = await self._step_permissions(state)
        if missing:
            return PermissionDenied(missing)

        if config.uses_radio:
            identifier = await self._step_radio(state)
            if identifier is not None:
                return MatchedByRadio(identifier)

        geofence = NOT_AVAILABLE
        if config.uses_location:
            geofence = await self._step_location(state)
            if geofence.within_radius:
                return MatchedByLocation(geofence.position, geofence.distance_meters)

        return NoMatch(self._no_match_reason(config, geofence))

    async def _step_permissions(self, state: VerificationState) -> tuple[str, ...]:
        """Execute the capability check."""
        verbose = state.config.enable_logging
        async with timed_step(
            VerificationStep.CHECKING_PERMISSIONS, state, self.structured_logger, verbose=verbose
        ) as step:
            try:
                missing = self.missing_capabilities()
            except Exception as e:
                # an unreadable gate grants nothing
                self._record_stage_error(state, VerificationStep.CHECKING_PERMISSIONS, e)
                missing = tuple(sorted(REQUIRED_CAPABILITIES))
            state.missing_capabilities = missing
            step.set_result({"missing": list(missing)})
        return missing

    async def _step_radio(self, state: VerificationState) -> str | None:
        """Execute the radio scan stage."""
        config = state.config
        async with timed_step(
            VerificationStep.SCANNING_RADIO, state, self.structured_logger, verbose=config.enable_logging
        ) as step:
            state.radio_attempted = True
            try:
                identifier = await self.scanner.scan(
                    config.target_identifiers,
                    config.match_mode,
                    config.scan_timeout,
                    verbose=config.enable_logging,
                )
            except Exception as e:
                self._record_stage_error(state, VerificationStep.SCANNING_RADIO, e)
                identifier = None
            state.radio_match = identifier
            state.discovered_count = self.scanner.discovered_count
            step.set_result({"match": identifier, "discovered": state.discovered_count})
        return identifier

    async def _step_location(self, state: VerificationState) -> GeofenceResult:
        """Execute the geofence stage."""
        config = state.config
        async with timed_step(
            VerificationStep.CHECKING_LOCATION, state, self.structured_logger, verbose=config.enable_logging
        ) as step:
            state.location_attempted = True
            try:
                result = await self.geofence.check(
                    config.target_locations,
                    config.radius_meters,
                    verbose=config.enable_logging,
                )
            except Exception as e:
                self._record_stage_error(state, VerificationStep.CHECKING_LOCATION, e)
                result = NOT_AVAILABLE
            state.geofence = result
            step.set_result(
                {
                    "within_radius": result.within_radius,
                    "available": result.available,
                    "distance_meters": result.distance_meters,
                    "closest_distance_meters": result.closest_distance_meters,
                }
            )
        return result

    def _record_stage_error(self, state: VerificationState, step: VerificationStep, error: Exception) -> None:
        state.stage_errors.append(f"{step.value}: {type(error).__name__}: {error}")
        if state.config.enable_logging:
            self.structured_logger.log_error(step.value, error, context=state.to_log_dict())
        else:
            logger.debug("Stage %s failed: %s", step.value, error, exc_info=True)

    @staticmethod
    def _no_match_reason(config: VerificationConfig, geofence: GeofenceResult) -> str:
        if config.uses_radio and config.uses_location:
            reason = NO_MATCH_BOTH
        elif config.uses_radio:
            reason = NO_MATCH_RADIO_ONLY
        else:
            reason = NO_MATCH_LOCATION_ONLY
        if geofence.closest_distance_meters is not None:
            reason += f" (closest {geofence.closest_distance_meters:.1f}m away)"
        return reason
