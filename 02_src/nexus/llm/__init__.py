"""LLM module."""

from .anthropic_provider import AnthropicTextBackend
from .backend import ContentPart, IMediaBackend, ITextBackend, SpeechAudio, VideoJob
from .gemini_backend import GeminiBackend

__all__ = [
    "AnthropicTextBackend",
    "ContentPart",
    "GeminiBackend",
    "IMediaBackend",
    "ITextBackend",
    "SpeechAudio",
    "VideoJob",
]
