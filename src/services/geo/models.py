"""Geographic value types."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude must be within [-180, 180], got {self.longitude}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Coordinate:
        return cls(float(data["latitude"]), float(data["longitude"]))

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True, slots=True)
class CachedPosition:
    """A previously obtained fix and the epoch seconds it was taken at."""

    coordinate: Coordinate
    timestamp: float

    def age_seconds(self, now: float | None = None) -> float:
        """Seconds since the fix was taken (never negative)."""
        current = time.time() if now is None else now
        return max(0.0, current - self.timestamp)
