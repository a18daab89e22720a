"""Messaging API routes."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...capture import from_base64
from ...models import AttachmentError, Message
from ...orchestrator import SendRejectedError
from ...session import EmptyPromptError


class AttachmentPayload(BaseModel):
    """Captured media, base64 or data URI."""

    data: str
    mime_type: str | None = None
    kind: Literal["image", "audio", "video"] | None = None


class MessageRequest(BaseModel):
    """Request model for sending a message."""

    text: str = ""
    attachment: AttachmentPayload | None = None


class SendResponse(BaseModel):
    """Response model for a completed send."""

    message_id: str
    response: dict[str, Any]


class MessageResponse(BaseModel):
    """Response model for one conversation entry."""

    id: str
    role: str
    display_text: str
    created_at: datetime
    attachment: dict[str, str] | None = None
    structured_response: dict[str, Any] | None = None


def message_to_dict(message: Message) -> dict:
    return {
        "id": message.id,
        "role": message.role,
        "display_text": message.display_text,
        "created_at": message.created_at,
        "attachment": (
            {
                "kind": message.attachment.kind,
                "mime_type": message.attachment.mime_type,
                "url": message.attachment.to_data_uri(),
            }
            if message.attachment
            else None
        ),
        "structured_response": (
            message.structured_response.to_payload() if message.structured_response else None
        ),
    }


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=SendResponse)
    async def send_message(request: MessageRequest) -> dict:
        """Send the prompt (plus staged or inline attachment) to the orchestrator."""
        session = app.session
        if session.is_sending:
            raise HTTPException(status_code=409, detail="A request is already in flight")

        if request.attachment is not None:
            try:
                session.stage_attachment(
                    from_base64(
                        request.attachment.data,
                        mime_type=request.attachment.mime_type,
                        kind=request.attachment.kind,
                    )
                )
            except AttachmentError as e:
                raise HTTPException(status_code=400, detail=str(e))

        try:
            response = await session.send(request.text)
        except EmptyPromptError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except SendRejectedError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        last = app.conversation.last()
        return {
            "message_id": last.id if last else "",
            "response": response.to_payload(),
        }

    @router.get("/messages", response_model=list[MessageResponse])
    async def get_messages() -> list[dict]:
        """Get the conversation log in order."""
        return [message_to_dict(m) for m in app.conversation.get_all()]

    @router.post("/messages/cancel")
    async def cancel_message() -> dict:
        """Cancel the in-flight request."""
        return {"cancelled": app.orchestrator.cancel()}

    return router
