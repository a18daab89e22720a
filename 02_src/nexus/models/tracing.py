"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class TraceEvent:
    """One step of a send, as recorded by the tracker."""

    id: str
    event_type: str  # message_received, strategy_selected, response_ready, send_rejected, speech_requested
    actor: str  # orchestrator | speech
    data: dict
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "event_type": self.event_type,
            "actor": self.actor,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }
