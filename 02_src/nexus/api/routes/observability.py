"""Trace inspection routes."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import Application


class TraceEventResponse(BaseModel):
    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: str


def parse_after(value: str | None) -> datetime | None:
    """Parse an ISO timestamp; naive values are read as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid after timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def create_observability_router(app: Application) -> APIRouter:
    """Create the router that exposes what the orchestrator traced."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def list_trace_events(
        after: str | None = Query(None, description="Only events after this ISO timestamp"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: list[str] | None = Query(None, description="Repeat to match several types"),
        actor: str | None = Query(None),
    ) -> list[dict]:
        events = app.tracker.get_events(
            after=parse_after(after),
            event_types=event_type or None,
            actor=actor,
            limit=limit,
        )
        return [event.to_dict() for event in events]

    return router
