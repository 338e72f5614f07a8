"""Application settings using Pydantic BaseSettings."""

import logging
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.constants import (
    DEFAULT_POSITION_MAX_AGE_SECONDS,
    DEFAULT_POSITION_TIMEOUT_SECONDS,
    REQUIRED_CAPABILITIES,
    PositionBackend,
    RadioBackend,
)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Hybrid Presence"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("granted_capabilities")
    @classmethod
    def validate_capabilities(cls, v: list[str]) -> list[str]:
        unknown = set(v) - REQUIRED_CAPABILITIES
        if unknown:
            raise ValueError(f"unknown capabilities: {sorted(unknown)}")
        return v

    @model_validator(mode="after")
    def validate_timeouts_positive(self) -> "Settings":
        for field_name in ("position_timeout", "position_max_age"):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def warn_wildcard_origins(self) -> "Settings":
        if self.allowed_origins == ["*"]:
            logging.getLogger(__name__).warning(
                "allowed_origins is set to ['*'] - consider restricting in production"
            )
        return self

    @model_validator(mode="after")
    def validate_static_position(self) -> "Settings":
        if self.position_backend == PositionBackend.STATIC:
            if self.static_latitude is None or self.static_longitude is None:
                raise ValueError(
                    "static_latitude and static_longitude are required when position_backend=static"
                )
        return self

    # CORS
    allowed_origins: list[str] = ["*"]

    # Geofence stage
    position_timeout: float = DEFAULT_POSITION_TIMEOUT_SECONDS
    position_max_age: float = DEFAULT_POSITION_MAX_AGE_SECONDS

    # Radio source
    radio_backend: RadioBackend = RadioBackend.BLEAK
    bleak_adapter: str | None = None

    # Position source
    position_backend: PositionBackend = PositionBackend.GPSD
    gpsd_host: str = "localhost"
    gpsd_port: int = 2947
    static_latitude: float | None = None
    static_longitude: float | None = None

    # Capabilities authorized for this host
    granted_capabilities: list[str] = sorted(REQUIRED_CAPABILITIES)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
