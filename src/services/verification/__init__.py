"""Verification configuration and outcomes."""

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

__all__ = [
    "ConfigurationError",
    "MatchedByLocation",
    "MatchedByRadio",
    "NoMatch",
    "PermissionDenied",
    "VerificationConfig",
    "VerificationInProgressError",
    "VerificationOutcome",
    "describe_missing_capabilities",
]
