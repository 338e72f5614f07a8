"""Standardized response builder for CheckAttendanceResponse."""

from typing import Any

from src.api.models import CheckAttendanceResponse
from src.services.verification.verification_result import VerificationOutcome


def build_response(outcome: VerificationOutcome, **overrides: Any) -> dict[str, Any]:
    """Build a CheckAttendanceResponse-compatible dict with Pydantic validation."""
    fields: dict[str, Any] = outcome.to_dict()
    fields.update(overrides)
    return CheckAttendanceResponse(**fields).model_dump()
