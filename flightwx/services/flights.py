"""Flight record access for the weather engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session

from flightwx.models import Flight, FlightWeatherSnapshot, WeatherSnapshot

from .airports import AirportDirectory

logger = logging.getLogger(__name__)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps from the database as UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class FlightRecord:
    id: str
    origin: str | None
    destination: str | None
    start_time: datetime
    end_time: datetime | None
    planned_start_time: datetime | None
    planned_end_time: datetime | None
    origin_station_hint: str | None
    destination_station_hint: str | None
    existing_snapshot: WeatherSnapshot | None


class FlightRecordStore:
    """Read flights and write their one-to-one weather snapshot row."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.airports = AirportDirectory(session)

    def get(self, flight_id: str) -> FlightRecord | None:
        flight = self.session.get(Flight, flight_id)
        if flight is None:
            return None
        return FlightRecord(
            id=flight.id,
            origin=flight.origin,
            destination=flight.destination,
            start_time=as_utc(flight.start_time),
            end_time=as_utc(flight.end_time),
            planned_start_time=as_utc(flight.planned_start_time),
            planned_end_time=as_utc(flight.planned_end_time),
            origin_station_hint=self.airports.icao_for(flight.origin_airport_id),
            destination_station_hint=self.airports.icao_for(flight.destination_airport_id),
            existing_snapshot=self.load_snapshot(flight_id),
        )

    def load_snapshot(self, flight_id: str) -> WeatherSnapshot | None:
        # Another writer may have replaced the row since this session last saw it.
        row = self.session.get(FlightWeatherSnapshot, flight_id, populate_existing=True)
        return row.to_snapshot() if row else None

    def save_snapshot(self, flight_id: str, snapshot: WeatherSnapshot) -> WeatherSnapshot | None:
        """Write the flight's snapshot row in a single upsert statement.

        An existing row is replaced only while it is still ``unavailable``; a
        successful snapshot stays as first written. Returns what is stored
        after the write, which may be another writer's success.
        """

        row = FlightWeatherSnapshot.from_snapshot(flight_id, snapshot)
        values = {column.name: getattr(row, column.name) for column in FlightWeatherSnapshot.__table__.columns}
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = pg_insert(FlightWeatherSnapshot).values(**values)
        elif dialect == "sqlite":
            stmt = sqlite_insert(FlightWeatherSnapshot).values(**values)
        else:
            stmt = None

        if stmt is None:
            current = self.session.get(FlightWeatherSnapshot, flight_id, populate_existing=True)
            if current is None or current.unavailable:
                self.session.merge(row)
        else:
            stmt = stmt.on_conflict_do_update(
                index_elements=["flight_id"],
                set_={key: value for key, value in values.items() if key != "flight_id"},
                where=FlightWeatherSnapshot.unavailable.is_(True),
            )
            self.session.exec(stmt)
        self.session.commit()

        stored = self.load_snapshot(flight_id)
        if stored is not None and stored.model_dump() != snapshot.model_dump():
            logger.info(
                "Kept existing weather snapshot for flight %s",
                flight_id,
                extra={"flight_id": flight_id},
            )
        else:
            logger.info(
                "Stored weather snapshot for flight %s (unavailable=%s)",
                flight_id,
                snapshot.unavailable,
                extra={"flight_id": flight_id},
            )
        return stored


__all__ = ["FlightRecord", "FlightRecordStore", "as_utc"]
