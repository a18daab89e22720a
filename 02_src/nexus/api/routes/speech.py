"""Text-to-speech API routes."""

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import Application


class SpeechRequest(BaseModel):
    text: str


class SpeechResponse(BaseModel):
    """``audio_url`` is None when speech is unavailable."""

    audio_url: str | None = None


def create_speech_router(app: Application) -> APIRouter:
    """Create speech router."""
    router = APIRouter(prefix="/api", tags=["speech"])

    @router.post("/speech", response_model=SpeechResponse)
    async def synthesize(request: SpeechRequest) -> dict:
        audio_url = await app.speech.synthesize(request.text)
        await app.tracker.track(
            event_type="speech_requested",
            actor="speech",
            data={"chars": len(request.text), "available": audio_url is not None},
        )
        return {"audio_url": audio_url}

    return router
