"""Verification request models."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Iterable

from src.config.constants import DEFAULT_RADIUS_METERS, DEFAULT_SCAN_TIMEOUT_SECONDS, MatchMode
from src.services.geo.models import Coordinate


class ConfigurationError(ValueError):
    """Raised when a verification config cannot be used."""


class VerificationInProgressError(RuntimeError):
    """Raised when verify() is called while another call is in flight."""


def _dedupe(identifiers: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for ident in identifiers:
        seen.setdefault(ident, None)
    return tuple(seen)


@dataclass(frozen=True)
class VerificationConfig:
    """Targets and limits for one verification call.

    Identifiers carry no priority; duplicates are dropped keeping the first
    occurrence. Locations keep their configured order, which is the order the
    geofence stage tests them in.
    """

    target_identifiers: tuple[str, ...] = ()
    target_locations: tuple[Coordinate, ...] = ()
    radius_meters: float = DEFAULT_RADIUS_METERS
    scan_timeout: float = DEFAULT_SCAN_TIMEOUT_SECONDS
    match_mode: MatchMode = MatchMode.EXACT
    enable_logging: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.target_identifiers, str):
            raise ConfigurationError("target_identifiers must be a sequence of identifiers, not a string")
        object.__setattr__(self, "target_identifiers", _dedupe(self.target_identifiers))
        object.__setattr__(self, "target_locations", tuple(self.target_locations))
        object.__setattr__(self, "match_mode", MatchMode(self.match_mode))

        if not self.target_identifiers and not self.target_locations:
            raise ConfigurationError("At least one device identifier or location must be provided")
        if not math.isfinite(self.radius_meters) or self.radius_meters <= 0:
            raise ConfigurationError(
                f"radius_meters must be a finite number greater than 0, got {self.radius_meters}"
            )
        if not math.isfinite(self.scan_timeout) or self.scan_timeout <= 0:
            raise ConfigurationError(
                f"scan_timeout must be a finite number greater than 0, got {self.scan_timeout}"
            )

    @property
    def uses_radio(self) -> bool:
        return bool(self.target_identifiers)

    @property
    def uses_location(self) -> bool:
        return bool(self.target_locations)

    def copy_with(self, **changes: Any) -> VerificationConfig:
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> VerificationConfig:
        """Build a config from the wire record (camelCase keys).

        Omitted fields take the defaults: radius 100 m, scan timeout 20 s,
        exact matching, diagnostics off.
        """
        try:
            identifiers = record.get("targetIdentifiers") or []
            if isinstance(identifiers, str):
                raise ConfigurationError("targetIdentifiers must be a list of identifiers, not a string")
            locations = tuple(Coordinate.from_dict(loc) for loc in record.get("targetLocations") or [])
            exact = bool(record.get("exactMatch", True))
            return cls(
                target_identifiers=tuple(str(i) for i in identifiers),
                target_locations=locations,
                radius_meters=record.get("radiusMeters", DEFAULT_RADIUS_METERS),
                scan_timeout=record.get("scanTimeoutSeconds", DEFAULT_SCAN_TIMEOUT_SECONDS),
                match_mode=MatchMode.EXACT if exact else MatchMode.SUBSTRING,
                enable_logging=bool(record.get("enableLogging", False)),
            )
        except ConfigurationError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid verification config: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "targetIdentifiers": list(self.target_identifiers),
            "targetLocations": [loc.to_dict() for loc in self.target_locations],
            "radiusMeters": self.radius_meters,
            "scanTimeoutSeconds": self.scan_timeout,
            "exactMatch": self.match_mode == MatchMode.EXACT,
            "enableLogging": self.enable_logging,
        }
