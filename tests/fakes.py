"""In-process stand-ins for the upstream weather services and the database."""

from __future__ import annotations

import threading
from datetime import datetime

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import flightwx.models  # noqa: F401  (registers tables)
from flightwx.services.aviationweather import RawForecast, RawObservation
from flightwx.services.errors import UpstreamError
from flightwx.services.grid_forecast import GridForecast

METAR_KJFK = "KJFK 011751Z 18010KT 10SM FEW250 24/14 A3002 RMK AO2 SLP166 T02440139"
METAR_KBOS = "KBOS 011754Z 27015G25KT 10SM -RA BKN035 OVC080 18/12 A2990"
TAF_KJFK = (
    "TAF KJFK 011730Z 0118/0224 18012KT P6SM SCT040 "
    "FM010600 20015G25KT 4SM -TSRA BKN020CB "
    "FM011200 VRB05KT P6SM SKC"
)


def make_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


def make_session() -> Session:
    return Session(make_engine())


class FakeReports:
    """Serves canned METAR/TAF/historical text per station and records every call."""

    def __init__(
        self,
        current: dict[str, str] | None = None,
        forecasts: dict[str, str] | None = None,
        historical: dict[str, str] | None = None,
        failing: set[tuple[str, str]] | None = None,
    ) -> None:
        self.current = current or {}
        self.forecasts = forecasts or {}
        self.historical = historical or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def _record(self, kind: str, station: str) -> None:
        with self._lock:
            self.calls.append((kind, station))
        if (kind, station) in self.failing:
            raise UpstreamError(f"{kind} fetch failed (503)", url=f"https://example.test/{kind}")

    def fetch_current(self, station: str) -> RawObservation | None:
        self._record("current", station)
        raw = self.current.get(station)
        return RawObservation(raw, None, f"https://example.test/metar/{station}") if raw else None

    def fetch_forecast_text(self, station: str) -> RawForecast | None:
        self._record("taf", station)
        raw = self.forecasts.get(station)
        return RawForecast(raw, None, f"https://example.test/taf/{station}") if raw else None

    def fetch_historical(self, station: str, at: datetime) -> RawObservation | None:
        self._record("historical", station)
        raw = self.historical.get(station)
        return RawObservation(raw, at, f"https://example.test/metar/{station}") if raw else None


class FakeGrid:
    def __init__(self, forecasts: dict[tuple[float, float], GridForecast] | None = None) -> None:
        self.forecasts = forecasts or {}
        self.calls: list[tuple[float, float]] = []
        self._lock = threading.Lock()

    def fetch_grid_periods(self, lat: float, lon: float) -> GridForecast | None:
        with self._lock:
            self.calls.append((lat, lon))
        return self.forecasts.get((lat, lon))
