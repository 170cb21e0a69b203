"""Service-layer utilities."""

from .airports import AirportDirectory, import_airports
from .aviationweather import AviationWeatherClient
from .decoder import decode_report
from .errors import FlightWxError, UpstreamError
from .flights import FlightRecord, FlightRecordStore
from .forecast import ForecastOrchestrator, select_tier
from .grid_forecast import GridForecastClient, adapt_grid_periods
from .snapshot import SnapshotCache
from .stations import StationResolver, normalize_station
from .taf import decode_forecast_for_time, select_segment_tokens
from .weather import FlightWeatherService

__all__ = [
    "AirportDirectory",
    "import_airports",
    "AviationWeatherClient",
    "GridForecastClient",
    "decode_report",
    "decode_forecast_for_time",
    "select_segment_tokens",
    "adapt_grid_periods",
    "FlightWxError",
    "UpstreamError",
    "FlightRecord",
    "FlightRecordStore",
    "ForecastOrchestrator",
    "select_tier",
    "SnapshotCache",
    "StationResolver",
    "normalize_station",
    "FlightWeatherService",
]
