"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from src.api.routers.attendance import router as attendance_router
from src.api.routers.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(attendance_router, prefix="/attendance", tags=["attendance"])
