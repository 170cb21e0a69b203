"""Tiered forecast selection for planned flights.

Hours until planned departure pick the data source:

  H <= 24          near term   METAR + TAF per station, TAF segment preferred
  24 < H <= 168    medium term NWS gridpoint forecast per station
  H > 168          too far out nothing fetched

Each station is fetched independently; a failed or empty fetch leaves that
station None with a source descriptor saying why, and never raises.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Generic, Optional, Protocol, TypeVar

from flightwx.core.config import settings
from flightwx.models import (
    ForecastResponse,
    ForecastTier,
    SourceDescriptor,
    SourceKind,
    StationSources,
    StructuredObservation,
)

from .aviationweather import RawForecast, RawObservation
from .decoder import decode_report
from .errors import UpstreamError
from .flights import FlightRecord, as_utc
from .grid_forecast import GridForecast, adapt_grid_periods
from .stations import StationResolver
from .taf import decode_forecast_for_time

logger = logging.getLogger(__name__)

T = TypeVar("T")

TOO_FAR_OUT_NOTICE = "Forecasts are not available yet; check back within 7 days of departure."
MEDIUM_TERM_NOTICE = "Departure is beyond TAF range; showing the NWS area forecast."


class ReportSource(Protocol):
    def fetch_current(self, station: str) -> RawObservation | None: ...

    def fetch_forecast_text(self, station: str) -> RawForecast | None: ...


class GridSource(Protocol):
    def fetch_grid_periods(self, lat: float, lon: float) -> GridForecast | None: ...


CoordinateLookup = Callable[[str], Optional[tuple[float, float]]]


@dataclass
class FetchOutcome(Generic[T]):
    value: T | None = None
    error: str | None = None


@dataclass
class StationForecast:
    observation: StructuredObservation | None
    source: SourceDescriptor
    used_fallback: bool = False


def select_tier(
    hours_until_departure: float,
    near_term_hours: float = 24.0,
    medium_term_hours: float = 168.0,
) -> ForecastTier:
    if hours_until_departure <= near_term_hours:
        return ForecastTier.NEAR_TERM
    if hours_until_departure <= medium_term_hours:
        return ForecastTier.MEDIUM_TERM
    return ForecastTier.TOO_FAR_OUT


def _no_station() -> StationForecast:
    return StationForecast(
        observation=None,
        source=SourceDescriptor(kind=SourceKind.NONE, detail="No weather station could be resolved."),
    )


def _resolve(future: Future | None, station: str | None = None) -> FetchOutcome:
    """Join a fetch, turning upstream failures into an error string."""

    if future is None:
        return FetchOutcome()
    try:
        return FetchOutcome(value=future.result())
    except UpstreamError as exc:
        logger.warning(
            "Weather fetch failed (%s): %s",
            exc.url or "unknown url",
            exc,
            extra={"station": station},
        )
        return FetchOutcome(error=str(exc))


class ForecastOrchestrator:
    def __init__(
        self,
        resolver: StationResolver,
        reports: ReportSource,
        grid: GridSource,
        coordinates: CoordinateLookup,
        near_term_hours: float | None = None,
        medium_term_hours: float | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.resolver = resolver
        self.reports = reports
        self.grid = grid
        self.coordinates = coordinates
        self.near_term_hours = near_term_hours if near_term_hours is not None else settings.near_term_hours
        self.medium_term_hours = (
            medium_term_hours if medium_term_hours is not None else settings.medium_term_hours
        )
        self.max_workers = max_workers or settings.fetch_max_workers

    def forecast(self, flight: FlightRecord, now: datetime | None = None) -> ForecastResponse:
        """Build the forecast response for a flight with a planned departure."""

        now = as_utc(now) or datetime.now(timezone.utc)
        departure = as_utc(flight.planned_start_time) or as_utc(flight.start_time)
        arrival = as_utc(flight.planned_end_time) or departure

        hours = (departure - now).total_seconds() / 3600.0
        tier = select_tier(hours, self.near_term_hours, self.medium_term_hours)
        logger.info(
            "Flight %s departs in %.1fh; using %s tier",
            flight.id,
            hours,
            tier.value,
            extra={"flight_id": flight.id},
        )

        if tier is ForecastTier.TOO_FAR_OUT:
            unavailable = SourceDescriptor(
                kind=SourceKind.NONE, detail="Departure is more than 7 days out."
            )
            return ForecastResponse(
                for_time=departure,
                tier=tier,
                sources=StationSources(origin=unavailable, destination=unavailable),
                notice=TOO_FAR_OUT_NOTICE,
            )

        origin_station = self.resolver.resolve(flight.origin, flight.origin_station_hint)
        destination_station = self.resolver.resolve(
            flight.destination, flight.destination_station_hint
        )

        if tier is ForecastTier.NEAR_TERM:
            origin, destination = self._near_term(
                (origin_station, departure), (destination_station, arrival)
            )
            missing = [
                result.observation.station
                for result in (origin, destination)
                if result.used_fallback and result.observation is not None
            ]
            notice = (
                f"No TAF available for {', '.join(missing)}; showing current METAR instead."
                if missing
                else None
            )
        else:
            origin, destination = self._medium_term(
                (origin_station, departure), (destination_station, arrival)
            )
            notice = MEDIUM_TERM_NOTICE

        return ForecastResponse(
            for_time=departure,
            tier=tier,
            origin=origin.observation,
            destination=destination.observation,
            sources=StationSources(origin=origin.source, destination=destination.source),
            notice=notice,
        )

    def _near_term(
        self, *endpoints: tuple[str | None, datetime]
    ) -> list[StationForecast]:
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending = [
                (
                    station,
                    target,
                    executor.submit(self.reports.fetch_current, station) if station else None,
                    executor.submit(self.reports.fetch_forecast_text, station) if station else None,
                )
                for station, target in endpoints
            ]
            return [
                self._combine_near_term(
                    station, target, _resolve(metar, station), _resolve(taf, station)
                )
                for station, target, metar, taf in pending
            ]

    def _combine_near_term(
        self,
        station: str | None,
        target: datetime,
        metar: FetchOutcome[RawObservation],
        taf: FetchOutcome[RawForecast],
    ) -> StationForecast:
        if station is None:
            return _no_station()

        current = (
            decode_report(metar.value.raw_text, station, metar.value.observed_at)
            if metar.value
            else None
        )
        if taf.value:
            observation = decode_forecast_for_time(
                taf.value.raw_text,
                station,
                target,
                temperature_c=current.temperature_c if current else None,
            )
            return StationForecast(
                observation=observation,
                source=SourceDescriptor(
                    kind=SourceKind.TAF,
                    detail=f"TAF period in force at {target:%d %H:%MZ}",
                    url=taf.value.url,
                ),
            )
        if current is not None:
            return StationForecast(
                observation=current,
                source=SourceDescriptor(
                    kind=SourceKind.METAR,
                    detail="Current METAR (no TAF available)",
                    url=metar.value.url,
                ),
                used_fallback=True,
            )
        detail = "; ".join(e for e in (metar.error, taf.error) if e) or "No METAR or TAF available."
        return StationForecast(
            observation=None, source=SourceDescriptor(kind=SourceKind.NONE, detail=detail)
        )

    def _medium_term(
        self, *endpoints: tuple[str | None, datetime]
    ) -> list[StationForecast]:
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending = []
            for station, target in endpoints:
                coords = self.coordinates(station) if station else None
                future = executor.submit(self.grid.fetch_grid_periods, *coords) if coords else None
                pending.append((station, target, coords, future))
            return [
                self._combine_medium_term(station, target, coords, _resolve(future, station))
                for station, target, coords, future in pending
            ]

    def _combine_medium_term(
        self,
        station: str | None,
        target: datetime,
        coords: tuple[float, float] | None,
        grid: FetchOutcome[GridForecast],
    ) -> StationForecast:
        if station is None:
            return _no_station()
        if coords is None:
            return StationForecast(
                observation=None,
                source=SourceDescriptor(
                    kind=SourceKind.NONE, detail=f"No coordinates on file for {station}."
                ),
            )
        if grid.value is None:
            return StationForecast(
                observation=None,
                source=SourceDescriptor(
                    kind=SourceKind.NONE,
                    detail=grid.error or f"No gridpoint forecast available for {station}.",
                ),
            )
        return StationForecast(
            observation=adapt_grid_periods(grid.value.periods, station, target),
            source=SourceDescriptor(
                kind=SourceKind.GRID,
                detail=f"NWS forecast period covering {target:%d %H:%MZ}",
                url=grid.value.url,
            ),
        )


__all__ = ["ForecastOrchestrator", "StationForecast", "select_tier"]
