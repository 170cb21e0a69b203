"""Per-flight weather endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from flightwx.api.deps import get_weather_service
from flightwx.models import WeatherSnapshot
from flightwx.services.weather import FlightWeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flights", tags=["flights"])


@router.get("/{flight_id}/weather", summary="Weather for a flight (snapshot or forecast)")
def get_flight_weather(
    flight_id: str,
    debug: bool = Query(False, description="Include resolved stations and times used"),
    service: FlightWeatherService = Depends(get_weather_service),
) -> dict[str, Any]:
    response = service.get_weather(flight_id)
    if response is None:
        raise HTTPException(status_code=404, detail="Flight not found")

    payload = response.model_dump(mode="json")
    if debug:
        payload["debug"] = service.debug_info(flight_id)
    return payload


@router.post(
    "/{flight_id}/weather/snapshot",
    response_model=WeatherSnapshot | None,
    summary="Capture the historical weather snapshot for a completed flight",
)
def ensure_flight_snapshot(
    flight_id: str,
    service: FlightWeatherService = Depends(get_weather_service),
) -> WeatherSnapshot | None:
    if service.store.get(flight_id) is None:
        raise HTTPException(status_code=404, detail="Flight not found")
    return service.ensure_snapshot(flight_id)


__all__ = ["router"]
