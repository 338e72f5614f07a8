"""
Constants, enums, and static values.
"""

from enum import Enum

EARTH_RADIUS_M = 6_371_000.0  # mean Earth radius in meters

DEFAULT_RADIUS_METERS = 100
DEFAULT_SCAN_TIMEOUT_SECONDS = 20
DEFAULT_POSITION_TIMEOUT_SECONDS = 10.0
DEFAULT_POSITION_MAX_AGE_SECONDS = 60.0


class Capability(str, Enum):
    """Sensing capabilities that must be authorized before verification."""

    RADIO_SCAN = "radio-scan"
    POSITIONING = "positioning"


REQUIRED_CAPABILITIES: frozenset[str] = frozenset(c.value for c in Capability)

CAPABILITY_LABELS: dict[str, str] = {
    Capability.RADIO_SCAN.value: "Bluetooth scanning",
    Capability.POSITIONING.value: "Location access",
}


class MatchMode(str, Enum):
    """How discovered radio identifiers are compared to the targets."""

    EXACT = "exact"
    SUBSTRING = "substring"  # case-insensitive contains


class VerificationStatus(str, Enum):
    """Terminal verdict of one verification call."""

    MATCHED_RADIO = "matched-radio"
    MATCHED_LOCATION = "matched-location"
    NO_MATCH = "no-match"
    PERMISSION_DENIED = "permission-denied"

    @property
    def description(self) -> str:
        return _STATUS_DESCRIPTIONS[self]

    @property
    def is_success(self) -> bool:
        return self in (VerificationStatus.MATCHED_RADIO, VerificationStatus.MATCHED_LOCATION)


_STATUS_DESCRIPTIONS = {
    VerificationStatus.MATCHED_RADIO: "Attendance verified via Bluetooth device",
    VerificationStatus.MATCHED_LOCATION: "Attendance verified via location",
    VerificationStatus.NO_MATCH: "No matching devices or locations found",
    VerificationStatus.PERMISSION_DENIED: "Insufficient permissions",
}


class VerificationStep(str, Enum):
    """Orchestrator state machine steps."""

    IDLE = "idle"
    CHECKING_PERMISSIONS = "checking_permissions"
    SCANNING_RADIO = "scanning_radio"
    CHECKING_LOCATION = "checking_location"
    DONE = "done"


class VerificationStepDescription(str, Enum):
    """Human-readable step descriptions for logs."""

    CHECKING_PERMISSIONS = "Check that radio scanning and positioning are authorized"
    SCANNING_RADIO = "Scan for a configured beacon until match or timeout"
    CHECKING_LOCATION = "Compare the current position against the configured geofences"


class RadioBackend(str, Enum):
    """Radio source implementations selectable from settings."""

    BLEAK = "bleak"
    NONE = "none"


class PositionBackend(str, Enum):
    """Position source implementations selectable from settings."""

    GPSD = "gpsd"
    STATIC = "static"
    NONE = "none"


NO_MATCH_BOTH = "No matching Bluetooth devices found and not within any configured location"
NO_MATCH_RADIO_ONLY = "No matching Bluetooth devices found and no locations configured"
NO_MATCH_LOCATION_ONLY = "Not within any configured location"
