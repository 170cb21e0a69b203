"""Weather snapshot models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field as PydanticField
from sqlmodel import Field, SQLModel

from .observation import StructuredObservation

SNAPSHOT_VERSION = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherSnapshot(BaseModel):
    """Point-in-time weather captured once for a completed flight."""

    version: Literal[1] = SNAPSHOT_VERSION
    captured_at: datetime = PydanticField(default_factory=_utcnow)
    unavailable: bool = False
    origin: Optional[StructuredObservation] = None
    destination: Optional[StructuredObservation] = None
    notes: Optional[str] = None


class FlightWeatherSnapshot(SQLModel, table=True):
    """One-to-one snapshot row keyed by flight id.

    The whole row is replaced on every write, so concurrent writers for the
    same flight resolve to whichever write lands last.
    """

    __tablename__ = "flight_weather_snapshot"

    flight_id: str = Field(foreign_key="flight.id", primary_key=True, max_length=64)
    version: int = Field(default=SNAPSHOT_VERSION, nullable=False)
    captured_at: datetime = Field(default_factory=_utcnow, nullable=False)
    unavailable: bool = Field(default=False, nullable=False, index=True)
    origin_json: Optional[str] = Field(
        default=None, description="JSON-encoded StructuredObservation for the departure station"
    )
    destination_json: Optional[str] = Field(
        default=None, description="JSON-encoded StructuredObservation for the arrival station"
    )
    notes: Optional[str] = Field(default=None, max_length=512)
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)

    @classmethod
    def from_snapshot(cls, flight_id: str, snapshot: WeatherSnapshot) -> "FlightWeatherSnapshot":
        return cls(
            flight_id=flight_id,
            version=snapshot.version,
            captured_at=snapshot.captured_at,
            unavailable=snapshot.unavailable,
            origin_json=snapshot.origin.model_dump_json() if snapshot.origin else None,
            destination_json=(
                snapshot.destination.model_dump_json() if snapshot.destination else None
            ),
            notes=snapshot.notes,
            updated_at=_utcnow(),
        )

    def to_snapshot(self) -> WeatherSnapshot:
        return WeatherSnapshot(
            version=SNAPSHOT_VERSION,
            captured_at=(
                self.captured_at.replace(tzinfo=timezone.utc)
                if self.captured_at.tzinfo is None
                else self.captured_at
            ),
            unavailable=self.unavailable,
            origin=(
                StructuredObservation.model_validate_json(self.origin_json)
                if self.origin_json
                else None
            ),
            destination=(
                StructuredObservation.model_validate_json(self.destination_json)
                if self.destination_json
                else None
            ),
            notes=self.notes,
        )


__all__ = ["SNAPSHOT_VERSION", "WeatherSnapshot", "FlightWeatherSnapshot"]
