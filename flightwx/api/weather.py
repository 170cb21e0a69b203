"""Ad-hoc current conditions for a pair of stations."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from flightwx.api.deps import get_reports_client
from flightwx.models import StructuredObservation
from flightwx.services.aviationweather import AviationWeatherClient
from flightwx.services.decoder import decode_report
from flightwx.services.errors import UpstreamError
from flightwx.services.stations import normalize_station

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])


class CurrentConditions(BaseModel):
    origin: StructuredObservation | None = None
    destination: StructuredObservation | None = None


def _current(client: AviationWeatherClient, station: str | None) -> StructuredObservation | None:
    if not station:
        return None
    metar = client.fetch_current(station)
    if metar is None:
        return None
    return decode_report(metar.raw_text, station, metar.observed_at)


@router.get("/aviation", response_model=CurrentConditions)
def current_conditions(
    origin: str | None = Query(None, description="Departure station or 3-letter code"),
    destination: str | None = Query(None, description="Arrival station or 3-letter code"),
    client: AviationWeatherClient = Depends(get_reports_client),
) -> CurrentConditions:
    origin_station = normalize_station(origin)
    destination_station = normalize_station(destination)
    if not origin_station and not destination_station:
        raise HTTPException(status_code=400, detail="Missing origin or destination station code.")

    try:
        with ThreadPoolExecutor(max_workers=2) as executor:
            origin_future = executor.submit(_current, client, origin_station)
            destination_future = executor.submit(_current, client, destination_station)
            return CurrentConditions(
                origin=origin_future.result(), destination=destination_future.result()
            )
    except UpstreamError as exc:
        logger.warning("Current conditions fetch failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


__all__ = ["router"]
