"""Control API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class SessionStatusResponse(BaseModel):
    """Snapshot of the single session."""

    send_state: str
    mode: str
    message_count: int
    attachment_staged: bool
    text_provider: str


def create_control_router(app: Application) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.get("/status", response_model=SessionStatusResponse)
    async def get_status() -> dict:
        session = app.session
        return {
            "send_state": app.orchestrator.state.value,
            "mode": session.mode.value,
            "message_count": len(app.conversation),
            "attachment_staged": session.staged_attachment is not None,
            "text_provider": app.settings.text_provider,
        }

    @router.post("/reset", response_model=StatusResponse)
    async def reset_session() -> dict:
        """Cancel any in-flight send, then clear conversation, attachment, mode and traces."""
        try:
            await app.reset()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok"}

    return router
