"""Resolve free-form airport labels to 4-character weather station codes.

The 3-letter rule assumes a US domestic IATA code and prepends ``K``; it
will misclassify 3-letter codes outside the contiguous US (e.g. ``YVR``).
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

from .airports import StationCandidate

logger = logging.getLogger(__name__)

_STATION_RE = re.compile(r"^[A-Z0-9]{4}$")
_IATA_RE = re.compile(r"^[A-Z]{3}$")


class StationDirectory(Protocol):
    def find_station_candidates(self, code: str) -> StationCandidate | None: ...


def is_station_code(code: str | None) -> bool:
    return bool(code) and bool(_STATION_RE.match(code.strip().upper()))


def normalize_station(code: str | None) -> str | None:
    """Uppercase a valid station code, or map a bare 3-letter code to ``K`` + code."""

    raw = (code or "").strip().upper()
    if not raw:
        return None
    if _STATION_RE.match(raw):
        return raw
    if _IATA_RE.match(raw):
        return f"K{raw}"
    return None


class StationResolver:
    def __init__(self, directory: StationDirectory | None = None) -> None:
        self.directory = directory

    def resolve(self, label: str | None, hint: str | None = None) -> str | None:
        """Return the station for ``label``, preferring a linked airport's ``hint``.

        None means no weather is available for this endpoint; it is not an error.
        """

        if is_station_code(hint):
            return hint.strip().upper()

        normalized = normalize_station(label)
        if normalized:
            return normalized

        raw = (label or "").strip().upper()
        if not raw or self.directory is None:
            return None

        for code in (raw, f"K{raw}"):
            candidate = self.directory.find_station_candidates(code)
            if candidate is not None:
                station = normalize_station(candidate.preferred_code)
                logger.debug(
                    "Resolved %r via airport directory to %s",
                    label,
                    station,
                    extra={"station": station},
                )
                return station
        logger.debug("No station found for label %r", label)
        return None


__all__ = ["StationResolver", "StationDirectory", "normalize_station", "is_station_code"]
