"""Airport directory model."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


class Airport(SQLModel, table=True):
    """Local airport directory row used for station resolution and coordinates."""

    id: Optional[int] = Field(default=None, primary_key=True)
    icao: str = Field(index=True, unique=True, max_length=8)
    iata: Optional[str] = Field(default=None, index=True, max_length=4)
    name: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = Field(default=None, max_length=16)
    country: Optional[str] = Field(default=None, max_length=8)
    latitude: Optional[float] = Field(default=None, description="Degrees, north positive")
    longitude: Optional[float] = Field(default=None, description="Degrees, east positive")
    time_zone: Optional[str] = Field(default=None, max_length=64)
