"""Weather response union returned to the page/API layer."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .observation import StructuredObservation
from .weather import WeatherSnapshot


class SourceKind(str, enum.Enum):
    TAF = "taf"
    METAR = "metar"
    GRID = "grid"
    HISTORICAL = "historical"
    NONE = "none"


class ForecastTier(str, enum.Enum):
    NEAR_TERM = "near_term"
    MEDIUM_TERM = "medium_term"
    TOO_FAR_OUT = "too_far_out"


class SourceDescriptor(BaseModel):
    """Where a station's result came from, or why it is missing."""

    kind: SourceKind
    detail: str
    url: Optional[str] = None


class StationSources(BaseModel):
    origin: SourceDescriptor
    destination: SourceDescriptor


class SnapshotResponse(BaseModel):
    mode: Literal["snapshot"] = "snapshot"
    snapshot: WeatherSnapshot
    notice: Optional[str] = None


class ForecastResponse(BaseModel):
    mode: Literal["forecast"] = "forecast"
    for_time: datetime
    tier: ForecastTier
    origin: Optional[StructuredObservation] = None
    destination: Optional[StructuredObservation] = None
    sources: StationSources
    notice: Optional[str] = None


class UnavailableResponse(BaseModel):
    mode: Literal["unavailable"] = "unavailable"
    notice: Optional[str] = None


WeatherResponse = Annotated[
    Union[SnapshotResponse, ForecastResponse, UnavailableResponse],
    Field(discriminator="mode"),
]


__all__ = [
    "SourceKind",
    "ForecastTier",
    "SourceDescriptor",
    "StationSources",
    "SnapshotResponse",
    "ForecastResponse",
    "UnavailableResponse",
    "WeatherResponse",
]
