"""Attachment staging API routes."""

from typing import Literal

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...capture import from_base64
from ...models import Attachment, AttachmentError


class StageRequest(BaseModel):
    """Captured media: a selected file or a finished recording."""

    data: str  # base64 or data URI
    mime_type: str | None = None
    kind: Literal["image", "audio", "video"] | None = None


class StagedResponse(BaseModel):
    staged: bool
    kind: str | None = None
    mime_type: str | None = None
    placeholder: str


def _staged(app: Application, attachment: Attachment | None) -> dict:
    return {
        "staged": attachment is not None,
        "kind": attachment.kind if attachment else None,
        "mime_type": attachment.mime_type if attachment else None,
        "placeholder": app.session.placeholder,
    }


def create_attachments_router(app: Application) -> APIRouter:
    """Create attachments router."""
    router = APIRouter(prefix="/api", tags=["attachments"])

    @router.get("/attachments", response_model=StagedResponse)
    async def get_attachment() -> dict:
        return _staged(app, app.session.staged_attachment)

    @router.post("/attachments", response_model=StagedResponse)
    async def stage_attachment(request: StageRequest) -> dict:
        """Stage one attachment for the next send, replacing any staged one."""
        try:
            attachment = from_base64(request.data, mime_type=request.mime_type, kind=request.kind)
        except AttachmentError as e:
            raise HTTPException(status_code=400, detail=str(e))
        app.session.stage_attachment(attachment)
        return _staged(app, attachment)

    @router.delete("/attachments", response_model=StagedResponse)
    async def clear_attachment() -> dict:
        app.session.clear_attachment()
        return _staged(app, None)

    return router
