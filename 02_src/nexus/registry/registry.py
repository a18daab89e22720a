"""Mode registry: strategy resolution and per-mode prompt framing."""

from dataclasses import dataclass
from enum import Enum

from ..models import DEFAULT_MODE, Mode


class StrategyKind(str, Enum):
    """Generation strategy families."""

    CONVERSATIONAL = "conversational"
    IMAGE = "image"
    VIDEO = "video"
    EDIT = "edit"


@dataclass(frozen=True)
class StrategyHandle:
    """Resolved strategy plus its per-request options."""

    kind: StrategyKind
    volumetric: bool = False


CONVERSATIONAL = StrategyHandle(StrategyKind.CONVERSATIONAL)

# Strategy family each mode uses when no attachment is staged
MODE_STRATEGIES: dict[Mode, StrategyKind] = {
    mode: StrategyKind.CONVERSATIONAL for mode in Mode
}
MODE_STRATEGIES.update(
    {
        Mode.VIDEO: StrategyKind.VIDEO,
        Mode.IMAGE: StrategyKind.IMAGE,
        Mode.THREE_D: StrategyKind.IMAGE,
        Mode.EDITOR: StrategyKind.EDIT,
    }
)

DEFAULT_ROLE = "You are SHAH. Research, analyze, create."

ROLE_INSTRUCTIONS: dict[Mode, str] = {
    Mode.ARCHITECT: (
        "You are the CHIEF SOFTWARE ARCHITECT. Build apps. "
        "Return 'prototype' widget for main code, 'code' for snippets."
    ),
    Mode.SECURITY: (
        "You are a MILITARY-GRADE CYBERSECURITY EXPERT. Analyze permissions, code "
        "vulnerabilities, and privacy risks. Provide a 'security_report' widget."
    ),
    Mode.CONVERTER: (
        "You are a UNIVERSAL FILE CONVERTER. Since you cannot process files directly, "
        "GENERATE PYTHON (ffmpeg/pandas/pillow) or NODE.JS scripts that the user can run "
        "to convert their files. Explain the code."
    ),
    Mode.EDITOR: (
        "You are a MEDIA EDITOR. If no image is provided, ask for one. If text is provided, "
        "explain how you would edit it or write code to do so."
    ),
    Mode.THREE_D: (
        "You are a 3D MODELING ASSISTANT. If user asks for an image, we handle it externally. "
        "If user asks for OBJ/GLB code, generate Three.js code."
    ),
}

PLACEHOLDERS: dict[Mode, str] = {
    Mode.VIDEO: "Describe the video you want to create...",
    Mode.IMAGE: "Describe the image you want to generate...",
    Mode.ARCHITECT: "Describe the app you want to build (Mobile, Web, Desktop)...",
}
DEFAULT_PLACEHOLDER = "Enter command, upload media, or ask for analysis..."


def parse_mode(value: "Mode | str") -> Mode:
    """Accept a Mode, its label, or its member name."""
    if isinstance(value, Mode):
        return value

    text = str(value).strip()
    try:
        return Mode(text)
    except ValueError:
        pass
    try:
        return Mode[text.upper()]
    except KeyError:
        raise ValueError(f"Unknown mode: {value!r}") from None


def resolve_strategy(
    mode: "Mode | str",
    has_attachment: bool,
    attachment_kind: str | None = None,
) -> StrategyHandle:
    """Pick the strategy for a request. Total: anything unmatched is conversational."""
    try:
        mode = parse_mode(mode)
    except ValueError:
        return CONVERSATIONAL

    family = MODE_STRATEGIES.get(mode, StrategyKind.CONVERSATIONAL)

    if not has_attachment:
        if family is StrategyKind.VIDEO:
            return StrategyHandle(StrategyKind.VIDEO)
        if family is StrategyKind.IMAGE:
            return StrategyHandle(StrategyKind.IMAGE, volumetric=mode is Mode.THREE_D)
    elif family is StrategyKind.EDIT and attachment_kind == "image":
        return StrategyHandle(StrategyKind.EDIT)

    return CONVERSATIONAL


def role_instruction(mode: Mode) -> str:
    return ROLE_INSTRUCTIONS.get(mode, DEFAULT_ROLE)


def input_placeholder(mode: Mode = DEFAULT_MODE, attachment_kind: str | None = None) -> str:
    """Prompt hint for the input box."""
    if attachment_kind == "audio":
        return "Listening to audio input..."
    return PLACEHOLDERS.get(mode, DEFAULT_PLACEHOLDER)
