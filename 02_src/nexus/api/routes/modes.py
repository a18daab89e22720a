"""Mode selection API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...models import Mode
from ...registry import MODE_STRATEGIES, input_placeholder


class ModeInfo(BaseModel):
    """Response model for a mode."""

    id: str
    label: str
    strategy: str
    placeholder: str


class ModeRequest(BaseModel):
    """Request model for switching mode (label or member name)."""

    mode: str


class CurrentModeResponse(BaseModel):
    mode: ModeInfo
    placeholder: str


def mode_info(mode: Mode) -> dict:
    return {
        "id": mode.name,
        "label": mode.label,
        "strategy": MODE_STRATEGIES[mode].value,
        "placeholder": input_placeholder(mode),
    }


def create_modes_router(app: Application) -> APIRouter:
    """Create modes router."""
    router = APIRouter(prefix="/api", tags=["modes"])

    @router.get("/modes", response_model=list[ModeInfo])
    async def list_modes() -> list[dict]:
        return [mode_info(mode) for mode in Mode]

    @router.get("/mode", response_model=CurrentModeResponse)
    async def get_mode() -> dict:
        session = app.session
        return {"mode": mode_info(session.mode), "placeholder": session.placeholder}

    @router.put("/mode", response_model=CurrentModeResponse)
    async def set_mode(request: ModeRequest) -> dict:
        session = app.session
        try:
            session.set_mode(request.mode)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return {"mode": mode_info(session.mode), "placeholder": session.placeholder}

    return router
