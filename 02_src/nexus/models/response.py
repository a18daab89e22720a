"""Structured response envelope shared by every generation strategy."""

import json
import math
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..logging_config import get_logger

logger = get_logger(__name__)


class WidgetKind(str, Enum):
    """Widget kinds the render pipeline knows how to display."""

    CODE = "code"
    STEPS = "steps"
    IMPACT = "impact"
    CHART = "chart"
    SUMMARY = "summary"
    PROTOTYPE = "prototype"
    SECURITY_REPORT = "security_report"


# Schema description sent to the text model as part of the request context.
RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "narrative": {
            "type": "STRING",
            "description": "Cinematic, emotional, high-tech storytelling narration.",
        },
        "visualCues": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Animation triggers: '(glow-in)', '(slide-left)', '(particles-fast)', '(rotate-3d)'.",
        },
        "domain": {"type": "STRING", "description": "Detected domain."},
        "impactScore": {"type": "INTEGER", "description": "Impact score 0-100."},
        "analysis": {
            "type": "STRING",
            "description": "Deep insightful analysis utilizing researched data.",
        },
        "widgets": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "type": {"type": "STRING", "enum": [kind.value for kind in WidgetKind]},
                    "title": {"type": "STRING"},
                    "content": {
                        "type": "STRING",
                        "description": "For 'prototype', valid HTML/Tailwind. For steps, JSON array.",
                    },
                },
            },
            "description": "UI Components.",
        },
        "suggestedActions": {"type": "ARRAY", "items": {"type": "STRING"}},
        "exportOptions": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["narrative", "domain", "impactScore", "analysis", "widgets", "suggestedActions"],
}


class Step(BaseModel):
    """One entry of a steps widget."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None


def normalize_steps(content: Any) -> list[Step]:
    """
    Coerce steps widget content into a list of Steps.

    Content may be a list, a JSON-encoded list, or garbage. Anything that
    cannot be read as a list yields an empty list.
    """
    if content is None:
        return []

    if isinstance(content, str):
        text = content.strip()
        if not text:
            return []
        try:
            content = json.loads(text)
        except (ValueError, RecursionError):
            logger.warning("Steps content is not valid JSON, rendering no steps")
            return []

    if isinstance(content, dict):
        content = [content]
    if not isinstance(content, (list, tuple)):
        logger.warning("Steps content has unexpected type %s", type(content).__name__)
        return []

    steps: list[Step] = []
    for item in content:
        if isinstance(item, Step):
            steps.append(item)
        elif isinstance(item, dict):
            title = item.get("title") or item.get("name") or item.get("step") or ""
            description = item.get("description")
            steps.append(
                Step(
                    title=str(title),
                    description=None if description is None else str(description),
                )
            )
        elif item is not None:
            steps.append(Step(title=str(item)))
    return steps


class Widget(BaseModel):
    """One renderable unit of a StructuredResponse."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(alias="type")
    title: str = ""
    content: tuple[Step, ...] | str = ""

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        kind = data.pop("kind", None) or data.get("type")
        kind = str(kind or "").strip().lower()
        data["type"] = kind
        data["title"] = "" if data.get("title") is None else str(data["title"])

        content = data.get("content")
        if kind == WidgetKind.STEPS.value:
            data["content"] = normalize_steps(content)
        elif content is None:
            data["content"] = ""
        elif not isinstance(content, str):
            data["content"] = json.dumps(content, ensure_ascii=False)
        return data

    @property
    def is_known(self) -> bool:
        return self.kind in WidgetKind._value2member_map_

    @property
    def text(self) -> str:
        return self.content if isinstance(self.content, str) else ""

    @property
    def steps(self) -> tuple[Step, ...]:
        return self.content if isinstance(self.content, tuple) else ()


class GeneratedMedia(BaseModel):
    """Media produced by an image or video synthesis strategy."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    kind: Literal["image", "video"] = Field(alias="type")
    url: str
    mime_type: str


class StructuredResponse(BaseModel):
    """Canonical envelope for both successful and failed generations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    narrative: str
    visual_cues: tuple[str, ...] = ()
    domain: str
    impact_score: int = Field(ge=0, le=100)
    analysis: str
    widgets: tuple[Widget, ...]
    suggested_actions: tuple[str, ...]
    export_options: tuple[str, ...] = ()
    generated_media: GeneratedMedia | None = None
    error: bool = False

    @field_validator("impact_score", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("impactScore must be a number")
        if isinstance(value, str):
            value = float(value.strip().rstrip("%"))
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("impactScore must be finite")
        if isinstance(value, (int, float)):
            return max(0, min(100, int(round(value))))
        return value

    @field_validator("visual_cues", "export_options", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """Serialize with wire (camelCase) field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
