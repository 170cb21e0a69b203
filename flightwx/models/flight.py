"""Flight record model (the subset the weather engine reads)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Flight(SQLModel, table=True):
    id: str = Field(primary_key=True, max_length=64)
    origin: Optional[str] = Field(default=None, description="Free-text departure label")
    destination: Optional[str] = Field(default=None, description="Free-text arrival label")
    origin_airport_id: Optional[int] = Field(default=None, foreign_key="airport.id")
    destination_airport_id: Optional[int] = Field(default=None, foreign_key="airport.id")
    start_time: datetime = Field(nullable=False, index=True)
    end_time: Optional[datetime] = None
    planned_start_time: Optional[datetime] = None
    planned_end_time: Optional[datetime] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False
    )


__all__ = ["Flight"]
