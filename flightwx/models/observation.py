"""Decoded weather shapes shared by every report source."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SkyCover(str, enum.Enum):
    CLEAR = "clear"
    FEW = "few"
    SCATTERED = "scattered"
    BROKEN = "broken"
    OVERCAST = "overcast"
    UNKNOWN = "unknown"


class WxKind(str, enum.Enum):
    NONE = "none"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"
    MIST = "mist"
    FOG = "fog"
    OTHER = "other"


class Wind(BaseModel):
    """Surface wind. ``variable`` means the direction was reported as VRB."""

    direction_deg: Optional[int] = None
    speed_kt: Optional[int] = None
    gust_kt: Optional[int] = None
    variable: bool = False


class Sky(BaseModel):
    cover: SkyCover = SkyCover.UNKNOWN
    ceiling_ft: Optional[int] = Field(
        default=None, description="Height of the governing layer; None when no height was reported"
    )


class WeatherPhenomenon(BaseModel):
    kind: WxKind = WxKind.NONE
    token: Optional[str] = None


class StructuredObservation(BaseModel):
    """Canonical decoded observation produced from METAR, TAF or grid forecasts.

    ``observed_at`` is None when the shape describes a forecast period rather
    than a point observation.
    """

    station: str = Field(min_length=4, max_length=4)
    observed_at: Optional[datetime] = None
    raw_text: str
    wind: Wind = Field(default_factory=Wind)
    temperature_c: Optional[int] = None
    sky: Sky = Field(default_factory=Sky)
    wx: WeatherPhenomenon = Field(default_factory=WeatherPhenomenon)


__all__ = [
    "SkyCover",
    "WxKind",
    "Wind",
    "Sky",
    "WeatherPhenomenon",
    "StructuredObservation",
]
