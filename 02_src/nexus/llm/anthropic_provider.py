"""Text backend implementation using Anthropic Claude API."""

import base64
import os

import anthropic

from .backend import ContentPart

SUPPORTED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")


class AnthropicTextBackend:
    """Anthropic Claude API provider for text and vision requests."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 4096,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model
        self._max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    def _to_block(self, part: ContentPart) -> dict:
        if not part.is_inline:
            return {"type": "text", "text": part.text or ""}
        if part.mime_type not in SUPPORTED_IMAGE_TYPES:
            raise ValueError(f"Anthropic text backend cannot read {part.mime_type} attachments")
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": part.mime_type,
                "data": base64.b64encode(part.data).decode("ascii"),
            },
        }

    async def generate_text(
        self,
        parts: list[ContentPart],
        model: str | None = None,
        system: str | None = None,
        temperature: float | None = None,
        search: bool = False,
    ) -> str | None:
        """Generate text using Claude API. Search grants are not supported and are ignored."""
        content = [self._to_block(p) for p in parts]

        # Model identities from the Gemini side do not apply here
        kwargs = {
            "model": self._model,
            "messages": [{"role": "user", "content": content}],
            "max_tokens": self._max_tokens,
        }
        if system:
            kwargs["system"] = system
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = await self._client.messages.create(**kwargs)
        except Exception as e:
            raise RuntimeError(f"LLM API error: {e}") from e

        texts = [block.text for block in response.content if getattr(block, "type", "text") == "text"]
        return "".join(texts) or None
