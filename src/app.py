"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from src.api.dependencies import get_orchestrator
from src.api.routers import api_router
from src.config.constants import REQUIRED_CAPABILITIES, PositionBackend, RadioBackend
from src.config.settings import Settings, get_settings
from src.infrastructure.logging.logger import setup_logging

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=not settings.debug,
    silence_noisy_loggers=True,
)

logger = logging.getLogger(__name__)


def _validate_startup_config(settings: Settings) -> None:
    """Warn about configurations that can never verify anyone."""
    if settings.radio_backend == RadioBackend.NONE and settings.position_backend == PositionBackend.NONE:
        logger.warning("No radio or position backend configured - every check will return no-match")
    if set(settings.granted_capabilities) != REQUIRED_CAPABILITIES:
        logger.warning(
            "Not all capabilities granted (%s) - every check will return permission-denied",
            settings.granted_capabilities,
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown lifecycle."""
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    _validate_startup_config(settings)
    yield
    logger.info("Shutting down %s", settings.app_name)
    if get_orchestrator.cache_info().currsize == 0:
        return
    orchestrator = get_orchestrator()
    try:
        orchestrator.scanner.cancel()
        await orchestrator.scanner.source.stop_scan()
    except Exception as e:
        logger.error("Error stopping radio source: %s", e, exc_info=True)


app = FastAPI(
    title=settings.app_name,
    description="Hybrid presence verification: radio beacon scan with geofence fallback",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.include_router(api_router, prefix="/api")
