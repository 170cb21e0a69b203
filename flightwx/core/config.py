"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "flightwx"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    database_url: str = "postgresql+psycopg://flightwx:flightwx@db:5432/flightwx"
    # aviationweather.gov Data API (METAR/TAF, historical METAR via date=)
    awc_base_url: str = "https://aviationweather.gov/api/data"
    # api.weather.gov gridpoint forecasts (US only)
    nws_base_url: str = "https://api.weather.gov"
    nws_user_agent: str = "flightwx/0.1.0 (ops@example.com)"
    weather_api_timeout: float = 10.0
    # Tier boundaries in hours until planned departure
    near_term_hours: float = 24.0
    medium_term_hours: float = 168.0
    fetch_max_workers: int = 4

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

__all__ = ["settings", "Settings"]
