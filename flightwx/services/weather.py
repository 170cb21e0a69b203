"""Flight weather entry points: ``get_weather`` and ``ensure_snapshot``."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session

from flightwx.models import (
    SnapshotResponse,
    UnavailableResponse,
    WeatherResponse,
    WeatherSnapshot,
)

from .airports import AirportDirectory
from .aviationweather import AviationWeatherClient
from .flights import FlightRecordStore, as_utc
from .forecast import ForecastOrchestrator
from .grid_forecast import GridForecastClient
from .snapshot import SnapshotCache
from .stations import StationResolver

logger = logging.getLogger(__name__)


class FlightWeatherService:
    """Choose between a stored snapshot, a live forecast or a fresh capture."""

    def __init__(
        self,
        session: Session,
        reports: AviationWeatherClient | None = None,
        grid: GridForecastClient | None = None,
    ) -> None:
        self.store = FlightRecordStore(session)
        self.directory = AirportDirectory(session)
        self.resolver = StationResolver(self.directory)
        self.reports = reports or AviationWeatherClient()
        self.grid = grid or GridForecastClient()
        self.orchestrator = ForecastOrchestrator(
            resolver=self.resolver,
            reports=self.reports,
            grid=self.grid,
            coordinates=self.directory.coordinates,
        )
        self.snapshots = SnapshotCache(self.store, self.resolver, self.reports)

    def get_weather(self, flight_id: str, now: datetime | None = None) -> WeatherResponse | None:
        """Return the weather response for a flight, or None if the flight is unknown."""

        flight = self.store.get(flight_id)
        if flight is None:
            return None

        existing = flight.existing_snapshot
        if existing is not None and not existing.unavailable:
            return SnapshotResponse(snapshot=existing)

        now = as_utc(now) or datetime.now(timezone.utc)
        planned = flight.planned_start_time
        if planned is not None and planned > now:
            return self.orchestrator.forecast(flight, now=now)

        snapshot = self.snapshots.ensure_snapshot(flight_id, now=now)
        if snapshot is None:
            return UnavailableResponse(notice="Weather could not be captured for this flight.")
        notice = "Historical weather was unavailable for this flight." if snapshot.unavailable else None
        return SnapshotResponse(snapshot=snapshot, notice=notice)

    def ensure_snapshot(self, flight_id: str, now: datetime | None = None) -> WeatherSnapshot | None:
        return self.snapshots.ensure_snapshot(flight_id, now=now)

    def debug_info(self, flight_id: str) -> dict[str, Any] | None:
        flight = self.store.get(flight_id)
        if flight is None:
            return None

        def _iso(value: datetime | None) -> str | None:
            return value.isoformat() if value else None

        return {
            "origin_resolved": self.resolver.resolve(flight.origin, flight.origin_station_hint),
            "destination_resolved": self.resolver.resolve(
                flight.destination, flight.destination_station_hint
            ),
            "used_times": {
                "start_time": _iso(flight.start_time),
                "end_time": _iso(flight.end_time),
                "planned_start_time": _iso(flight.planned_start_time),
                "planned_end_time": _iso(flight.planned_end_time),
            },
        }


__all__ = ["FlightWeatherService"]
