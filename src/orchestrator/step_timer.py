"""Async context manager for timing and logging verification stages."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from src.config.constants import VerificationStep, VerificationStepDescription
from src.infrastructure.logging.logger import StructuredLogger
from src.orchestrator.state import VerificationState


class StepContext:
    """Mutable context for a timed stage."""

    def __init__(self) -> None:
        self.result: Any = None

    def set_result(self, result: Any) -> None:
        self.result = result


@asynccontextmanager
async def timed_step(
    step: VerificationStep,
    state: VerificationState,
    logger: StructuredLogger,
    *,
    verbose: bool = False,
) -> AsyncGenerator[StepContext, None]:
    """Enter ``step`` on ``state``, time it, and log its result on exit."""
    level = logging.INFO if verbose else logging.DEBUG
    state.transition(step)
    logger.logger.log(level, "%s: %s", step.value, VerificationStepDescription[step.name].value)
    ctx = StepContext()
    start = time.perf_counter()
    try:
        yield ctx
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        state.timings_ms[step.value] = elapsed_ms
        logger.log_step(
            step.value,
            {"result": ctx.result},
            duration_ms=elapsed_ms,
            level=level,
        )
