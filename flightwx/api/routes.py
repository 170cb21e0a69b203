"""Root API routers."""

from fastapi import APIRouter

from flightwx.core.config import settings

health_router = APIRouter(tags=["system"])


@health_router.get("/health", summary="Service health probe")
async def healthcheck() -> dict[str, str]:
    """Heartbeat plus the upstream weather endpoints in use."""

    return {
        "status": "ok",
        "version": settings.app_version,
        "aviationweather": settings.awc_base_url,
        "nws": settings.nws_base_url,
    }
