"""Attendance verification endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_orchestrator
from src.api.models import CheckAttendanceRequest, CheckAttendanceResponse, PermissionStatusResponse
from src.api.response import build_response
from src.orchestrator.pipeline import VerificationOrchestrator
from src.services.verification.models import (
    ConfigurationError,
    VerificationConfig,
    VerificationInProgressError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/check", response_model=CheckAttendanceResponse)
async def check_attendance(
    request: CheckAttendanceRequest,
    orchestrator: VerificationOrchestrator = Depends(get_orchestrator),  # noqa: B008
) -> dict[str, Any]:
    """
    Verify physical presence.

    1. Permission check
    2. Radio beacon scan (if identifiers are configured)
    3. Geofence check (if locations are configured)
    """
    try:
        config = VerificationConfig.from_dict(request.model_dump(by_alias=True))
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        outcome = await orchestrator.verify(config)
    except VerificationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    logger.info("Attendance check finished: %s", outcome.status.value)
    return build_response(outcome)


@router.get("/permissions", response_model=PermissionStatusResponse)
async def permission_status(
    orchestrator: VerificationOrchestrator = Depends(get_orchestrator),  # noqa: B008
) -> dict[str, Any]:
    """Report which sensing capabilities are authorized."""
    return orchestrator.permission_status()
