"""Verification outcome variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from src.config.constants import CAPABILITY_LABELS, VerificationStatus
from src.services.geo.models import Coordinate


class _Outcome:
    """Shared behaviour of the four terminal variants."""

    status: ClassVar[VerificationStatus]

    @property
    def message(self) -> str:
        raise NotImplementedError

    @property
    def data(self) -> dict[str, Any] | None:
        return None

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire record ``{status, message, data}``."""
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.data,
        }


@dataclass(frozen=True)
class MatchedByRadio(_Outcome):
    identifier: str

    status: ClassVar[VerificationStatus] = VerificationStatus.MATCHED_RADIO

    @property
    def message(self) -> str:
        return f"Attendance verified via Bluetooth device: {self.identifier}"

    @property
    def data(self) -> dict[str, Any]:
        return {"identifier": self.identifier}


@dataclass(frozen=True)
class MatchedByLocation(_Outcome):
    coordinate: Coordinate
    distance_meters: float

    status: ClassVar[VerificationStatus] = VerificationStatus.MATCHED_LOCATION

    @property
    def message(self) -> str:
        return f"Attendance verified via location ({self.distance_meters:.1f}m away)"

    @property
    def data(self) -> dict[str, Any]:
        return {
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "distanceMeters": self.distance_meters,
        }


@dataclass(frozen=True)
class NoMatch(_Outcome):
    reason: str

    status: ClassVar[VerificationStatus] = VerificationStatus.NO_MATCH

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class PermissionDenied(_Outcome):
    missing_capabilities: tuple[str, ...]

    status: ClassVar[VerificationStatus] = VerificationStatus.PERMISSION_DENIED

    @property
    def message(self) -> str:
        return describe_missing_capabilities(self.missing_capabilities)

    @property
    def data(self) -> dict[str, Any]:
        return {"missingCapabilities": list(self.missing_capabilities)}


VerificationOutcome = Union[MatchedByRadio, MatchedByLocation, NoMatch, PermissionDenied]


def describe_missing_capabilities(missing: tuple[str, ...] | list[str]) -> str:
    """User-facing hint naming the permissions to enable."""
    labels = [CAPABILITY_LABELS.get(name, name) for name in missing]
    if not labels:
        return ""
    if len(labels) == 1:
        return f"Please enable {labels[0]} permission in Settings"
    return f"Please enable {' and '.join(labels)} permissions in Settings"
