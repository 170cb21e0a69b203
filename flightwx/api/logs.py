"""Recent log lines from the in-memory buffer."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from flightwx.core.logging_config import get_log_buffer

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
def list_logs(
    limit: int = Query(100, ge=1, le=200),
    flight_id: Optional[str] = Query(None, description="Only entries about this flight"),
    station: Optional[str] = Query(None, description="Only entries about this station"),
) -> dict[str, list[dict[str, str]]]:
    return {"logs": get_log_buffer(limit=limit, flight_id=flight_id, station=station)}


__all__ = ["router"]
