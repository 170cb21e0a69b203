"""One-time historical weather capture for completed flights."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Protocol

from flightwx.core.config import settings
from flightwx.models import WeatherSnapshot

from .aviationweather import RawObservation
from .decoder import decode_report
from .errors import UpstreamError
from .flights import FlightRecordStore, as_utc
from .stations import StationResolver

logger = logging.getLogger(__name__)

NO_STATIONS_NOTE = "No station codes available for this flight."


class HistoricalSource(Protocol):
    def fetch_historical(self, station: str, at: datetime) -> RawObservation | None: ...


class SnapshotCache:
    """Fetch and persist a flight's weather snapshot at most once.

    A successful snapshot is permanent. An ``unavailable`` snapshot is retried
    on the next call. Fetch failures are stored as an unavailable snapshot
    with the error in ``notes`` rather than raised.
    """

    def __init__(
        self,
        store: FlightRecordStore,
        resolver: StationResolver,
        history: HistoricalSource,
        max_workers: int | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.history = history
        self.max_workers = max_workers or settings.fetch_max_workers

    def ensure_snapshot(self, flight_id: str, now: datetime | None = None) -> WeatherSnapshot | None:
        flight = self.store.get(flight_id)
        if flight is None:
            logger.info(
                "Snapshot requested for unknown flight %s", flight_id, extra={"flight_id": flight_id}
            )
            return None

        existing = flight.existing_snapshot
        if existing is not None and not existing.unavailable:
            return existing

        now = as_utc(now) or datetime.now(timezone.utc)
        if flight.start_time > now:
            logger.debug("Flight %s has not departed yet; skipping snapshot", flight_id)
            return existing

        origin_station = self.resolver.resolve(flight.origin, flight.origin_station_hint)
        destination_station = self.resolver.resolve(
            flight.destination, flight.destination_station_hint
        )
        origin_at = flight.start_time
        destination_at = flight.end_time or flight.start_time

        try:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                origin_future = (
                    executor.submit(self.history.fetch_historical, origin_station, origin_at)
                    if origin_station
                    else None
                )
                destination_future = (
                    executor.submit(
                        self.history.fetch_historical, destination_station, destination_at
                    )
                    if destination_station
                    else None
                )
                origin_raw = origin_future.result() if origin_future else None
                destination_raw = destination_future.result() if destination_future else None
        except UpstreamError as exc:
            logger.warning(
                "Historical weather fetch failed for flight %s: %s",
                flight_id,
                exc,
                extra={"flight_id": flight_id},
            )
            snapshot = WeatherSnapshot(captured_at=now, unavailable=True, notes=str(exc)[:512])
        else:
            origin = (
                decode_report(origin_raw.raw_text, origin_station, origin_raw.observed_at)
                if origin_raw
                else None
            )
            destination = (
                decode_report(
                    destination_raw.raw_text, destination_station, destination_raw.observed_at
                )
                if destination_raw
                else None
            )
            snapshot = WeatherSnapshot(
                captured_at=now,
                unavailable=origin is None and destination is None,
                origin=origin,
                destination=destination,
                notes=NO_STATIONS_NOTE if not origin_station and not destination_station else None,
            )

        # A concurrent capture may have stored a success first; that one wins.
        return self.store.save_snapshot(flight_id, snapshot) or snapshot


__all__ = ["SnapshotCache", "NO_STATIONS_NOTE"]
