"""API dependencies."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlmodel import Session

from flightwx.db.session import get_session
from flightwx.services.aviationweather import AviationWeatherClient
from flightwx.services.grid_forecast import GridForecastClient
from flightwx.services.weather import FlightWeatherService

_reports_client: AviationWeatherClient | None = None
_grid_client: GridForecastClient | None = None


def get_db() -> Generator[Session, None, None]:
    with get_session() as session:
        yield session


def get_reports_client() -> AviationWeatherClient:
    global _reports_client
    if _reports_client is None:
        _reports_client = AviationWeatherClient()
    return _reports_client


def get_grid_client() -> GridForecastClient:
    global _grid_client
    if _grid_client is None:
        _grid_client = GridForecastClient()
    return _grid_client


def get_weather_service(
    session: Session = Depends(get_db),
    reports: AviationWeatherClient = Depends(get_reports_client),
    grid: GridForecastClient = Depends(get_grid_client),
) -> FlightWeatherService:
    return FlightWeatherService(session=session, reports=reports, grid=grid)
