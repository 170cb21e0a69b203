"""aviationweather.gov Data API client (METAR, TAF, historical METAR)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlencode

import httpx

from flightwx.core.config import settings

from .errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class RawObservation:
    raw_text: str
    observed_at: datetime | None
    url: str


@dataclass
class RawForecast:
    raw_text: str
    issued_at: datetime | None
    url: str


def parse_report_time(value: Any) -> datetime | None:
    """Parse the API's time fields: epoch seconds or ISO-8601 / ``YYYY-MM-DD HH:MM:SS``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    text = str(value).strip().replace("Z", "+00:00")
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _first_string(row: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = row.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _first_time(row: dict[str, Any], keys: tuple[str, ...]) -> datetime | None:
    for key in keys:
        parsed = parse_report_time(row.get(key))
        if parsed is not None:
            return parsed
    return None


class AviationWeatherClient:
    """Fetch raw METAR/TAF text for single stations.

    Every method returns None when the service has no report for the station
    and raises :class:`UpstreamError` on transport errors or non-2xx answers.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.base_url = (base_url or settings.awc_base_url).rstrip("/")
        self.http = http_client or httpx.Client(
            timeout=settings.weather_api_timeout,
            headers={"User-Agent": settings.nws_user_agent},
        )

    def _first_row(self, product: str, params: dict[str, str]) -> tuple[dict[str, Any] | None, str]:
        url = f"{self.base_url}/{product}?{urlencode(params)}"
        try:
            logger.debug(
                "Fetching %s from %s", product.upper(), url, extra={"station": params.get("ids")}
            )
            response = self.http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"{product.upper()} fetch failed ({exc.response.status_code})",
                url=url,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{product.upper()} fetch failed: {exc}", url=url) from exc

        # The API answers 204 with an empty body when a station has no report.
        if response.status_code == 204 or not response.content.strip():
            return None, url
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(f"{product.upper()} response was not JSON", url=url) from exc
        if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
            return None, url
        return payload[0], url

    def fetch_current(self, station: str) -> RawObservation | None:
        row, url = self._first_row("metar", {"ids": station, "format": "json"})
        return self._to_observation(row, url)

    def fetch_historical(self, station: str, at: datetime) -> RawObservation | None:
        """Return the METAR valid at or just before ``at``."""

        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        stamp = at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        row, url = self._first_row("metar", {"ids": station, "format": "json", "date": stamp})
        return self._to_observation(row, url)

    def fetch_forecast_text(self, station: str) -> RawForecast | None:
        row, url = self._first_row("taf", {"ids": station, "format": "json"})
        if row is None:
            return None
        raw_text = _first_string(row, ("rawTAF", "rawTaf", "raw_text"))
        if not raw_text:
            return None
        return RawForecast(
            raw_text=raw_text,
            issued_at=_first_time(row, ("issueTime", "issue_time")),
            url=url,
        )

    def _to_observation(self, row: dict[str, Any] | None, url: str) -> RawObservation | None:
        if row is None:
            return None
        raw_text = _first_string(row, ("rawOb", "raw_text"))
        if not raw_text:
            return None
        return RawObservation(
            raw_text=raw_text,
            observed_at=_first_time(
                row, ("reportTime", "obsTime", "report_time", "observation_time")
            ),
            url=url,
        )


__all__ = ["AviationWeatherClient", "RawObservation", "RawForecast", "parse_report_time"]
