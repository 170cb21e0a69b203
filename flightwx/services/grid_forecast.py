"""Adapt NWS gridpoint forecast periods to the decoded observation shape.

Used for departures beyond TAF coverage. Periods are coarse (12-hour text
blocks), with compass wind directions, mph speeds and Fahrenheit
temperatures, so the conversions here are deliberately lossy.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

import httpx

from flightwx.core.config import settings
from flightwx.models import (
    Sky,
    SkyCover,
    StructuredObservation,
    WeatherPhenomenon,
    Wind,
    WxKind,
)

from .errors import UpstreamError

logger = logging.getLogger(__name__)

MPH_TO_KT = 0.868976

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
COMPASS_DEGREES = {point: index * 22.5 for index, point in enumerate(COMPASS_POINTS)}

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")

# Evaluated in order; the first matching rule wins.
WX_RULES: tuple[tuple[WxKind, re.Pattern[str]], ...] = (
    (WxKind.THUNDERSTORM, re.compile(r"thunderstorm|t-storm")),
    (WxKind.SNOW, re.compile(r"snow|sleet|flurries")),
    (WxKind.RAIN, re.compile(r"rain|showers|drizzle")),
    (WxKind.FOG, re.compile(r"fog")),
    (WxKind.MIST, re.compile(r"mist|haze")),
)
SKY_RULES: tuple[tuple[SkyCover, re.Pattern[str]], ...] = (
    (SkyCover.CLEAR, re.compile(r"(?<!mostly )(?<!partly )\b(?:clear|sunny)\b")),
    (SkyCover.FEW, re.compile(r"mostly (?:sunny|clear)")),
    (SkyCover.SCATTERED, re.compile(r"partly (?:cloudy|sunny)")),
    (SkyCover.BROKEN, re.compile(r"mostly cloudy")),
    (SkyCover.OVERCAST, re.compile(r"(?<!mostly )(?<!partly )\bcloudy\b|overcast")),
)


@dataclass
class GridPeriod:
    start: datetime
    end: datetime
    summary: str
    wind_direction: str | None
    wind_speed_text: str | None
    temperature: float | None
    temperature_unit: str | None


@dataclass
class GridForecast:
    url: str
    periods: list[GridPeriod]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compass_to_degrees(direction: str | None) -> float | None:
    """16-point compass to degrees clockwise from north; None if unrecognized."""

    if not direction:
        return None
    return COMPASS_DEGREES.get(direction.strip().upper())


def mph_text_to_knots(text: str | None) -> int | None:
    """Convert the first number in e.g. ``"10 to 15 mph"`` from mph to knots."""

    if not text:
        return None
    match = _NUMBER_RE.search(text)
    if not match:
        return None
    return _round_half_up(float(match.group(0)) * MPH_TO_KT)


def to_celsius(value: float | None, unit: str | None) -> int | None:
    if value is None:
        return None
    if (unit or "F").strip().upper() in {"C", "°C", "CELSIUS"}:
        return _round_half_up(value)
    return _round_half_up((value - 32.0) * 5.0 / 9.0)


def classify_summary_wx(summary: str) -> WeatherPhenomenon:
    text = summary.lower()
    for kind, pattern in WX_RULES:
        match = pattern.search(text)
        if match:
            return WeatherPhenomenon(kind=kind, token=match.group(0))
    return WeatherPhenomenon()


def classify_summary_sky(summary: str) -> SkyCover:
    text = summary.lower()
    for cover, pattern in SKY_RULES:
        if pattern.search(text):
            return cover
    return SkyCover.UNKNOWN


def select_period(periods: Sequence[GridPeriod], target: datetime) -> GridPeriod | None:
    """Return the last period whose ``[start, end)`` contains ``target``.

    When no period contains it the first period is returned, even if it is far
    from the target. Callers rely on getting something for any non-empty list.
    """

    if not periods:
        return None
    target = _as_utc(target)
    chosen: GridPeriod | None = None
    for period in periods:
        if _as_utc(period.start) <= target < _as_utc(period.end):
            chosen = period
    return chosen or periods[0]


def adapt_grid_periods(
    periods: Sequence[GridPeriod], station: str, target: datetime
) -> StructuredObservation | None:
    period = select_period(periods, target)
    if period is None:
        return None

    degrees = compass_to_degrees(period.wind_direction)
    summary = period.summary or ""
    raw_text = " | ".join(
        part
        for part in (
            summary,
            f"{period.wind_direction or ''} {period.wind_speed_text or ''}".strip(),
            (
                f"{period.temperature:g}{period.temperature_unit or ''}"
                if period.temperature is not None
                else ""
            ),
        )
        if part
    )
    return StructuredObservation(
        station=station,
        observed_at=None,
        raw_text=raw_text,
        wind=Wind(
            direction_deg=_round_half_up(degrees) if degrees is not None else None,
            speed_kt=mph_text_to_knots(period.wind_speed_text),
            gust_kt=None,
            variable=False,
        ),
        temperature_c=to_celsius(period.temperature, period.temperature_unit),
        sky=Sky(cover=classify_summary_sky(summary), ceiling_ft=None),
        wx=classify_summary_wx(summary),
    )


def _parse_time(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return _as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
    except ValueError:
        return None


def _coerce_float(value: Any) -> float | None:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_periods(payload: dict[str, Any]) -> list[GridPeriod]:
    raw_periods = (payload.get("properties") or {}).get("periods") or []
    periods: list[GridPeriod] = []
    for entry in raw_periods:
        if not isinstance(entry, dict):
            continue
        start = _parse_time(entry.get("startTime"))
        end = _parse_time(entry.get("endTime"))
        if start is None or end is None:
            continue
        periods.append(
            GridPeriod(
                start=start,
                end=end,
                summary=str(entry.get("shortForecast") or ""),
                wind_direction=entry.get("windDirection"),
                wind_speed_text=entry.get("windSpeed"),
                temperature=_coerce_float(entry.get("temperature")),
                temperature_unit=entry.get("temperatureUnit"),
            )
        )
    return periods


class GridForecastClient:
    """Fetch 12-hour forecast periods from api.weather.gov for a lat/lon."""

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.nws_base_url).rstrip("/")
        self.http = http_client or httpx.Client(
            timeout=settings.weather_api_timeout,
            headers={"User-Agent": settings.nws_user_agent, "Accept": "application/geo+json"},
        )

    def _get_json(self, url: str) -> dict[str, Any]:
        try:
            response = self.http.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"NWS request failed ({exc.response.status_code})",
                url=url,
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError(f"NWS request failed: {exc}", url=url) from exc
        if not isinstance(payload, dict):
            raise UpstreamError("Unexpected NWS response format", url=url)
        return payload

    def fetch_grid_periods(self, lat: float, lon: float) -> GridForecast | None:
        points_url = f"{self.base_url}/points/{lat:.4f},{lon:.4f}"
        logger.debug("Resolving NWS gridpoint from %s", points_url)
        points = self._get_json(points_url)
        forecast_url = (points.get("properties") or {}).get("forecast")
        if not forecast_url:
            logger.info("NWS returned no forecast URL for %s,%s", lat, lon)
            return None
        periods = parse_periods(self._get_json(forecast_url))
        if not periods:
            return None
        return GridForecast(url=forecast_url, periods=periods)


__all__ = [
    "GridPeriod",
    "GridForecast",
    "GridForecastClient",
    "compass_to_degrees",
    "mph_text_to_knots",
    "to_celsius",
    "classify_summary_wx",
    "classify_summary_sky",
    "select_period",
    "adapt_grid_periods",
    "parse_periods",
]
