"""Insight panel API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import Application
from ...render import render_insight


class InsightResponse(BaseModel):
    """Rendered active analysis; ``insight`` is None while awaiting data."""

    loading: bool
    insight: dict[str, Any] | None = None


def create_insight_router(app: Application) -> APIRouter:
    """Create insight router."""
    router = APIRouter(prefix="/api", tags=["insight"])

    @router.get("/insight", response_model=InsightResponse)
    async def get_insight() -> dict:
        analysis = app.conversation.active_analysis
        return {
            "loading": app.session.is_sending,
            "insight": render_insight(analysis).to_dict() if analysis is not None else None,
        }

    return router
