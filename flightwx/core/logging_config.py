"""Shared logging configuration for the weather service."""

from __future__ import annotations

import logging
import os
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

_CONFIGURED = False
_LOG_BUFFER: deque[dict[str, str]] = deque(maxlen=200)

# Passed via ``extra=`` by the weather services; copied into buffered entries.
CONTEXT_FIELDS = ("flight_id", "station")


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.service = self.service_name
        return True


class _BufferHandler(logging.Handler):
    """Keep recent records in memory, tagged with the flight/station they concern."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
            entry = {
                "time": timestamp.isoformat().replace("+00:00", "Z"),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
            }
            for field in CONTEXT_FIELDS:
                value = getattr(record, field, None)
                if value:
                    entry[field] = str(value)
            _LOG_BUFFER.appendleft(entry)
        except Exception:
            # Never break logging for buffer failures
            return


def setup_logging(service_name: Optional[str] = None) -> None:
    """Configure root logging with a JSON formatter and consistent metadata."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    service = service_name or os.getenv("SERVICE_NAME", "flightwx")

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(service)s")
    )
    handler.addFilter(_ServiceNameFilter(service))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.addHandler(_BufferHandler())
    root.setLevel(log_level)
    logging.captureWarnings(True)
    # httpx logs every request at INFO; keep upstream chatter at WARNING.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _CONFIGURED = True


def get_log_buffer(
    limit: int = 100,
    flight_id: Optional[str] = None,
    station: Optional[str] = None,
) -> list[dict[str, str]]:
    """Most recent entries first, optionally only those tagged with a flight or station."""

    entries = (
        entry
        for entry in _LOG_BUFFER
        if (flight_id is None or entry.get("flight_id") == flight_id)
        and (station is None or entry.get("station") == station.upper())
    )
    return [entry for _, entry in zip(range(limit), entries)]


__all__ = ["setup_logging", "get_log_buffer", "CONTEXT_FIELDS"]
