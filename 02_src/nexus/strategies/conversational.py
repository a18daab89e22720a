"""Conversational strategy: structured JSON answers from the text model."""

import json
import re

from pydantic import ValidationError

from ..logging_config import get_logger
from ..llm import ContentPart, ITextBackend
from ..models import DEFAULT_MIME_TYPES, RESPONSE_SCHEMA, Attachment, Mode, StructuredResponse
from ..registry import role_instruction
from .errors import MalformedResponseError, to_error_envelope

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.7

_OPENING_FENCE = re.compile(r"^```[\w-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def build_system_instruction(mode: Mode) -> str:
    schema = json.dumps(RESPONSE_SCHEMA, indent=2)
    return (
        f"{role_instruction(mode)}\n"
        f"Current Mode: {mode.value}.\n\n"
        f"OUTPUT: JSON Object matching this schema:\n{schema}\n\n"
        "RULES:\n"
        "- If SECURITY mode: Focus on risk assessment, permissions, and vulnerabilities.\n"
        "- If CONVERTER mode: Provide 'code' widgets with conversion scripts.\n"
        "- If ARCHITECT/MAGIC mode: Provide 'prototype' widget for UI.\n"
    )


def degraded_response(raw_text: str) -> StructuredResponse:
    """Wrap unstructured model output so the exchange still completes."""
    return StructuredResponse(
        narrative=raw_text,
        visual_cues=[],
        domain="General Response",
        impact_score=50,
        analysis="Structured data parsing failed, displaying raw output.",
        widgets=[],
        suggested_actions=[],
        export_options=[],
    )


def parse_response_text(text: str) -> StructuredResponse:
    """
    Parse model text into a StructuredResponse.

    Unparsable or schema-invalid text degrades to a raw-text envelope.
    """
    cleaned = strip_code_fence(text)
    try:
        payload = json.loads(cleaned)
    except (ValueError, RecursionError):
        logger.warning("JSON parse error, falling back to raw text")
        return degraded_response(text)

    if not isinstance(payload, dict):
        logger.warning("Model returned JSON %s instead of an object", type(payload).__name__)
        return degraded_response(text)

    payload.pop("error", None)
    payload.pop("generatedMedia", None)
    try:
        return StructuredResponse.model_validate(payload)
    except ValidationError as e:
        logger.warning("Response failed schema validation: %s", e.errors(include_url=False))
        return degraded_response(text)


def attachment_part(attachment: Attachment) -> ContentPart:
    return ContentPart.from_bytes(
        attachment.decode(),
        attachment.mime_type or DEFAULT_MIME_TYPES[attachment.kind],
    )


class ConversationalStrategy:
    """Default strategy for most modes."""

    def __init__(
        self,
        text_backend: ITextBackend,
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        search: bool = True,
    ):
        self._backend = text_backend
        self._model = model
        self._temperature = temperature
        self._search = search

    async def generate(
        self,
        prompt: str,
        mode: Mode,
        attachment: Attachment | None = None,
    ) -> StructuredResponse:
        """Ask the text model for a structured answer."""
        try:
            parts: list[ContentPart] = []
            if attachment is not None:
                parts.append(attachment_part(attachment))
            parts.append(ContentPart.from_text(prompt))

            text = await self._backend.generate_text(
                parts,
                model=self._model,
                system=build_system_instruction(mode),
                temperature=self._temperature,
                search=self._search,
            )
            if not text or not text.strip():
                raise MalformedResponseError("No response text received from model.")

            response = parse_response_text(text)
            logger.debug("Conversational response in domain %s", response.domain)
            return response

        except Exception as e:
            return to_error_envelope(e, "Nexus Generation")
