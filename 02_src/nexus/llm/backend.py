"""Backend-neutral generation contracts."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class ContentPart:
    """A text or inline-binary part of a generation request."""

    text: str | None = None
    data: bytes | None = None
    mime_type: str | None = None

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(text=text)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "ContentPart":
        return cls(data=data, mime_type=mime_type)

    @property
    def is_inline(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class VideoJob:
    """Snapshot of a long-running video generation job."""

    job_id: str
    done: bool = False
    result_uri: str | None = None
    handle: Any = None  # backend-native operation object, needed to re-poll


@dataclass(frozen=True)
class SpeechAudio:
    """Synthesized speech."""

    data: bytes
    mime_type: str


class ITextBackend(Protocol):
    """Text and vision generation."""

    async def generate_text(
        self,
        parts: list[ContentPart],
        model: str | None = None,
        system: str | None = None,
        temperature: float | None = None,
        search: bool = False,
    ) -> str | None:
        """Generate text from content parts. Returns None when the model produced no text."""
        ...


class IMediaBackend(Protocol):
    """Image, video and speech synthesis."""

    async def generate_image(
        self,
        prompt: str,
        aspect_ratio: str = "16:9",
        mime_type: str = "image/jpeg",
    ) -> bytes | None:
        """Generate exactly one image."""
        ...

    async def submit_video(
        self,
        prompt: str,
        resolution: str = "720p",
        aspect_ratio: str = "16:9",
    ) -> VideoJob:
        """Submit a single-video generation job."""
        ...

    async def poll_video(self, job: VideoJob) -> VideoJob:
        """Re-query job status."""
        ...

    async def generate_speech(self, text: str, voice: str) -> SpeechAudio | None:
        """Synthesize speech with a prebuilt voice."""
        ...
