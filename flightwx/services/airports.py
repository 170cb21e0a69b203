"""Local airport directory lookups and CSV import."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Mapping

from sqlmodel import Session, or_, select

from flightwx.models import Airport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StationCandidate:
    preferred_code: str


@dataclass
class ImportResult:
    upserted: int = 0
    skipped: int = 0


class AirportDirectory:
    """Query the airport table by ICAO/IATA code."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_station_candidates(self, code: str) -> StationCandidate | None:
        """Return the preferred code for an exact ICAO or IATA match."""

        code = (code or "").strip().upper()
        if not code:
            return None
        stmt = select(Airport).where(or_(Airport.icao == code, Airport.iata == code))
        airport = self.session.exec(stmt).first()
        if airport is None:
            return None
        preferred = airport.icao or airport.iata
        if not preferred:
            return None
        return StationCandidate(preferred_code=preferred)

    def coordinates(self, station: str) -> tuple[float, float] | None:
        airport = self.session.exec(select(Airport).where(Airport.icao == station)).first()
        if airport is None or airport.latitude is None or airport.longitude is None:
            return None
        return airport.latitude, airport.longitude

    def icao_for(self, airport_id: int | None) -> str | None:
        if airport_id is None:
            return None
        airport = self.session.get(Airport, airport_id)
        return airport.icao if airport else None


def _pick(row: Mapping[str, str | None], keys: Iterable[str]) -> str:
    for key in keys:
        value = row.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _parse_coordinate(value: str) -> float | None:
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def import_airports(session: Session, rows: Iterable[Mapping[str, str | None]]) -> ImportResult:
    """Upsert airport rows keyed by ICAO code.

    Accepts OurAirports-style columns (``ident``, ``gps_code``, ``iata_code``,
    ``latitude_deg``...) as well as plain ``icao``/``iata``/``latitude`` headers.
    Rows without an ICAO code are skipped.
    """

    result = ImportResult()
    for row in rows:
        icao = _pick(row, ("icao", "ICAO", "icao_code", "gps_code", "ident")).upper()
        if not icao:
            result.skipped += 1
            continue

        airport = session.exec(select(Airport).where(Airport.icao == icao)).first()
        if airport is None:
            airport = Airport(icao=icao)
        airport.iata = _pick(row, ("iata", "IATA", "iata_code")).upper() or None
        airport.name = _pick(row, ("name", "airport_name")) or None
        airport.city = _pick(row, ("city", "municipality")) or None
        airport.region = _pick(row, ("region", "iso_region", "state")) or None
        airport.country = _pick(row, ("country", "iso_country")) or None
        airport.latitude = _parse_coordinate(_pick(row, ("latitude", "latitude_deg", "lat")))
        airport.longitude = _parse_coordinate(
            _pick(row, ("longitude", "longitude_deg", "lon", "lng"))
        )
        airport.time_zone = (
            _pick(row, ("timeZone", "timezone", "tz", "tz_database_time_zone")) or None
        )
        session.add(airport)
        result.upserted += 1
        if result.upserted % 1000 == 0:
            session.commit()
            logger.info("Upserted %d airports so far", result.upserted)

    session.commit()
    logger.info("Airport import finished: %d upserted, %d skipped", result.upserted, result.skipped)
    return result


__all__ = ["AirportDirectory", "StationCandidate", "ImportResult", "import_airports"]
