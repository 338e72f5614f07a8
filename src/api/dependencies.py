"""FastAPI dependencies."""

from functools import lru_cache

from src.config.settings import Settings, get_settings
from src.orchestrator.pipeline import VerificationOrchestrator


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings as a FastAPI dependency."""
    return get_settings()


@lru_cache
def get_orchestrator() -> VerificationOrchestrator:
    """Shared orchestrator; one verification may be in flight at a time."""
    return VerificationOrchestrator.from_settings(get_settings())
