"""Tracker implementation for creating TraceEvents."""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Protocol

from ..models import TraceEvent

DEFAULT_CAPACITY = 5000


class ITracker(Protocol):
    """Creating TraceEvents through direct track() calls."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and keep it."""
        ...

    def get_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    def clear(self) -> None:
        """Drop all recorded events."""
        ...


class Tracker:
    """Keeps the most recent TraceEvents in memory."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._events: deque[TraceEvent] = deque(maxlen=capacity)

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and keep it."""
        self._events.append(
            TraceEvent(
                id=str(uuid.uuid4()),
                event_type=event_type,
                actor=actor,
                data=data,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def get_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events in chronological order."""
        if after is not None and after.tzinfo is None:
            after = after.replace(tzinfo=timezone.utc)
        events = [
            e
            for e in self._events
            if (after is None or e.timestamp > after)
            and (not event_types or e.event_type in event_types)
            and (actor is None or e.actor == actor)
        ]
        return events[:limit]

    def clear(self) -> None:
        self._events.clear()
