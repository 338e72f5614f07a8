"""Verification state model."""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.config.constants import VerificationStep
from src.services.geofence.checker import GeofenceResult
from src.services.verification.models import VerificationConfig
from src.services.verification.verification_result import VerificationOutcome


@dataclass
class VerificationState:
    """State object carried through one verification call."""

    # Input
    config: VerificationConfig

    step: VerificationStep = VerificationStep.IDLE

    # Permissions
    missing_capabilities: tuple[str, ...] = ()

    # Radio stage
    radio_attempted: bool = False
    radio_match: Optional[str] = None
    discovered_count: int = 0

    # Location stage
    location_attempted: bool = False
    geofence: Optional[GeofenceResult] = None

    # Collaborator failures caught at a stage boundary
    stage_errors: list[str] = field(default_factory=list)
    timings_ms: dict[str, float] = field(default_factory=dict)

    outcome: Optional[VerificationOutcome] = None

    def transition(self, step: VerificationStep) -> None:
        self.step = step

    def finish(self, outcome: VerificationOutcome) -> None:
        self.outcome = outcome
        self.step = VerificationStep.DONE

    def to_log_dict(self) -> dict[str, Any]:
        summary: dict[str, Any] = {
            "step": self.step.value,
            "identifiers": len(self.config.target_identifiers),
            "locations": len(self.config.target_locations),
            "radio_attempted": self.radio_attempted,
            "location_attempted": self.location_attempted,
        }
        if self.missing_capabilities:
            summary["missing_capabilities"] = list(self.missing_capabilities)
        if self.radio_match is not None:
            summary["radio_match"] = self.radio_match
        if self.geofence is not None:
            summary["geofence_within_radius"] = self.geofence.within_radius
            summary["closest_distance_meters"] = self.geofence.closest_distance_meters
        if self.stage_errors:
            summary["stage_errors"] = self.stage_errors
        if self.outcome is not None:
            summary["status"] = self.outcome.status.value
        return summary
