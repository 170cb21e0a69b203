"""Exception types raised by upstream weather clients."""

from __future__ import annotations


class FlightWxError(Exception):
    """Base error for the weather engine."""


class UpstreamError(FlightWxError):
    """An external weather service failed or answered with a non-success status."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


__all__ = ["FlightWxError", "UpstreamError"]
