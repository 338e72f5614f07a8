"""Request/Response models for API endpoints."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.config.constants import DEFAULT_RADIUS_METERS, DEFAULT_SCAN_TIMEOUT_SECONDS


class LocationModel(BaseModel):
    """A target location."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class CheckAttendanceRequest(BaseModel):
    """Request model for the attendance check endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    target_identifiers: list[str] = Field(
        default_factory=list,
        alias="targetIdentifiers",
        description="Beacon identifiers that prove presence",
    )
    target_locations: list[LocationModel] = Field(
        default_factory=list,
        alias="targetLocations",
        description="Geofence centers that prove presence",
    )
    radius_meters: int = Field(
        DEFAULT_RADIUS_METERS, gt=0, alias="radiusMeters", description="Geofence radius in meters"
    )
    scan_timeout_seconds: int = Field(
        DEFAULT_SCAN_TIMEOUT_SECONDS,
        gt=0,
        alias="scanTimeoutSeconds",
        description="Maximum radio scan duration before falling back to location",
    )
    exact_match: bool = Field(
        True, alias="exactMatch", description="Exact identifier match (false: case-insensitive substring)"
    )
    enable_logging: bool = Field(False, alias="enableLogging", description="Emit per-stage diagnostics")


class CheckAttendanceResponse(BaseModel):
    """Response model for the attendance check endpoint."""

    status: Literal["matched-radio", "matched-location", "no-match", "permission-denied"] = Field(
        ..., description="Verification verdict"
    )
    message: str = Field(..., description="Human-readable summary")
    data: dict[str, Any] | None = Field(None, description="Verdict details, null for no-match")


class PermissionStatusResponse(BaseModel):
    """Response model for the permission status endpoint."""

    granted: bool = Field(..., description="True when every required capability is authorized")
    missing_capabilities: list[str] = Field(..., alias="missingCapabilities")
    message: str = Field(..., description="Hint naming the permissions to enable")

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
