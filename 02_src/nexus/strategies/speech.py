"""Text-to-speech strategy."""

import base64
import io
import re
import wave

from ..logging_config import get_logger
from ..llm import IMediaBackend

logger = get_logger(__name__)

DEFAULT_VOICE = "Kore"
PCM_SAMPLE_RATE = 24000

_RATE_RE = re.compile(r"rate=(\d+)")


def pcm_to_wav(pcm: bytes, sample_rate: int = PCM_SAMPLE_RATE) -> bytes:
    """Wrap 16-bit mono PCM in a WAV container."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(pcm)
    return buffer.getvalue()


def _is_raw_pcm(mime_type: str) -> bool:
    mime = mime_type.lower()
    return mime.startswith("audio/l16") or "pcm" in mime


class SpeechStrategy:
    """Narrative playback. Failures mean "speech unavailable", never an error."""

    def __init__(self, media_backend: IMediaBackend, voice: str = DEFAULT_VOICE):
        self._backend = media_backend
        self._voice = voice

    async def synthesize(self, text: str) -> str | None:
        """Return a playable audio data URI, or None."""
        if not text or not text.strip():
            return None

        try:
            audio = await self._backend.generate_speech(text, voice=self._voice)
        except Exception as e:
            logger.error("TTS error: %s", e, exc_info=True)
            return None

        if audio is None or not audio.data:
            return None

        data, mime_type = audio.data, audio.mime_type
        if _is_raw_pcm(mime_type):
            match = _RATE_RE.search(mime_type)
            data = pcm_to_wav(data, int(match.group(1)) if match else PCM_SAMPLE_RATE)
            mime_type = "audio/wav"

        return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
