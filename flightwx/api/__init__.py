"""API router definitions."""

from fastapi import APIRouter

from .flights import router as flights_router
from .logs import router as logs_router
from .routes import health_router
from .weather import router as weather_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(flights_router)
api_router.include_router(weather_router)
api_router.include_router(logs_router)

__all__ = ["api_router"]
