"""Generation backend implementation using the Google GenAI SDK."""

import os

from google import genai
from google.genai import types

from ..config import Settings
from ..logging_config import get_logger
from .backend import ContentPart, SpeechAudio, VideoJob

logger = get_logger(__name__)


def _to_part(part: ContentPart) -> types.Part:
    if part.is_inline:
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type or "application/octet-stream")
    return types.Part.from_text(text=part.text or "")


def _video_job(operation) -> VideoJob:
    uri = None
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) if response else None
    if videos:
        video = videos[0].video
        uri = getattr(video, "uri", None) if video else None
    return VideoJob(
        job_id=getattr(operation, "name", None) or "",
        done=bool(operation.done),
        result_uri=uri,
        handle=operation,
    )


class GeminiBackend:
    """Google GenAI provider: text, vision, Imagen, Veo and TTS."""

    def __init__(self, settings: Settings | None = None, api_key: str | None = None):
        self._settings = settings or Settings()
        self._api_key = api_key or self._settings.gemini_api_key or os.getenv("GEMINI_API_KEY")
        if not self._api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set")

        self._client = genai.Client(api_key=self._api_key)

    @property
    def api_key(self) -> str:
        return self._api_key

    async def generate_text(
        self,
        parts: list[ContentPart],
        model: str | None = None,
        system: str | None = None,
        temperature: float | None = None,
        search: bool = False,
    ) -> str | None:
        """Generate text using the Gemini API."""
        config = types.GenerateContentConfig(
            system_instruction=system,
            temperature=temperature,
            tools=[types.Tool(google_search=types.GoogleSearch())] if search else None,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=model or self._settings.text_model,
                contents=[types.Content(role="user", parts=[_to_part(p) for p in parts])],
                config=config,
            )
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {e}") from e

        return response.text

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: str = "16:9",
        mime_type: str = "image/jpeg",
    ) -> bytes | None:
        """Generate one image with Imagen."""
        try:
            response = await self._client.aio.models.generate_images(
                model=self._settings.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    aspect_ratio=aspect_ratio,
                    output_mime_type=mime_type,
                ),
            )
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {e}") from e

        images = response.generated_images or []
        if not images or images[0].image is None:
            return None
        return images[0].image.image_bytes

    async def submit_video(
        self,
        prompt: str,
        resolution: str = "720p",
        aspect_ratio: str = "16:9",
    ) -> VideoJob:
        """Submit a Veo job."""
        try:
            operation = await self._client.aio.models.generate_videos(
                model=self._settings.video_model,
                prompt=prompt,
                config=types.GenerateVideosConfig(
                    number_of_videos=1,
                    resolution=resolution,
                    aspect_ratio=aspect_ratio,
                ),
            )
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {e}") from e

        job = _video_job(operation)
        logger.info("Submitted video job %s", job.job_id)
        return job

    async def poll_video(self, job: VideoJob) -> VideoJob:
        """Re-query a Veo job."""
        try:
            operation = await self._client.aio.operations.get(job.handle)
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {e}") from e

        return _video_job(operation)

    async def generate_speech(self, text: str, voice: str) -> SpeechAudio | None:
        """Synthesize speech with a prebuilt voice."""
        try:
            response = await self._client.aio.models.generate_content(
                model=self._settings.speech_model,
                contents=[types.Content(role="user", parts=[types.Part.from_text(text=text)])],
                config=types.GenerateContentConfig(
                    response_modalities=["AUDIO"],
                    speech_config=types.SpeechConfig(
                        voice_config=types.VoiceConfig(
                            prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
                        ),
                    ),
                ),
            )
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {e}") from e

        try:
            inline = response.candidates[0].content.parts[0].inline_data
        except (AttributeError, IndexError, TypeError):
            return None
        if inline is None or not inline.data:
            return None
        return SpeechAudio(data=inline.data, mime_type=inline.mime_type or "audio/wav")
