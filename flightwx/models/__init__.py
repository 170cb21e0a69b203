"""Database models and decoded weather shapes."""

from .airport import Airport
from .flight import Flight
from .observation import (
    Sky,
    SkyCover,
    StructuredObservation,
    WeatherPhenomenon,
    Wind,
    WxKind,
)
from .responses import (
    ForecastResponse,
    ForecastTier,
    SnapshotResponse,
    SourceDescriptor,
    SourceKind,
    StationSources,
    UnavailableResponse,
    WeatherResponse,
)
from .weather import SNAPSHOT_VERSION, FlightWeatherSnapshot, WeatherSnapshot

__all__ = [
    "Airport",
    "Flight",
    "FlightWeatherSnapshot",
    "WeatherSnapshot",
    "SNAPSHOT_VERSION",
    "StructuredObservation",
    "Wind",
    "Sky",
    "SkyCover",
    "WeatherPhenomenon",
    "WxKind",
    "SourceKind",
    "SourceDescriptor",
    "StationSources",
    "ForecastTier",
    "SnapshotResponse",
    "ForecastResponse",
    "UnavailableResponse",
    "WeatherResponse",
]
