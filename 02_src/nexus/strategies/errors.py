"""Error envelope construction and classification."""

from dataclasses import dataclass

from ..logging_config import get_logger
from ..models import StructuredResponse, Widget

logger = get_logger(__name__)


class MalformedResponseError(RuntimeError):
    """Backend reported success but the payload is unusable."""


class GenerationTimeout(TimeoutError):
    """A generation exceeded its time or attempt budget."""


class GenerationCancelled(RuntimeError):
    """A generation was cancelled by the caller."""


@dataclass(frozen=True)
class ErrorCategory:
    domain: str
    narrative: str
    suggested_actions: tuple[str, ...]


RESOURCE_LIMIT = ErrorCategory(
    domain="Resource Limit",
    narrative="API Resource Quota Exceeded. Please wait a moment before retrying.",
    suggested_actions=("Retry", "Wait a Moment", "Simplify Request"),
)
SAFETY_PROTOCOL = ErrorCategory(
    domain="Safety Protocol",
    narrative="The request was flagged by safety protocols. Please adjust your prompt.",
    suggested_actions=("Rephrase Prompt", "Simplify Request", "Retry"),
)
NETWORK_ERROR = ErrorCategory(
    domain="Network Error",
    narrative="Network connection unstable. Unable to reach the AI core.",
    suggested_actions=("Retry", "Check Connection"),
)
TIMEOUT = ErrorCategory(
    domain="Timeout",
    narrative="The generation took too long and was stopped before it completed.",
    suggested_actions=("Retry", "Simplify Request", "Check Connection"),
)
CANCELLED = ErrorCategory(
    domain="Request Cancelled",
    narrative="The request was cancelled before the result arrived.",
    suggested_actions=("Retry",),
)
SYSTEM_FAILURE = ErrorCategory(
    domain="System Failure",
    narrative="An unexpected disruption occurred in the neural link.",
    suggested_actions=("Retry", "Check Connection", "Simplify Request"),
)

# Checked in order; first match wins.
SUBSTRING_RULES: tuple[tuple[ErrorCategory, tuple[str, ...]], ...] = (
    (RESOURCE_LIMIT, ("quota", "429", "rate limit", "resource exhausted", "resource_exhausted")),
    (SAFETY_PROTOCOL, ("safety", "blocked")),
    (NETWORK_ERROR, ("network", "fetch", "connection", "unreachable")),
)


def _describe(raw_error: object) -> str:
    try:
        text = str(raw_error)
    except Exception:
        text = repr(raw_error)
    if isinstance(raw_error, BaseException) and not text:
        text = type(raw_error).__name__
    return text


def classify_error(raw_error: object) -> ErrorCategory:
    """Best-effort classification of a raw failure."""
    if isinstance(raw_error, GenerationCancelled):
        return CANCELLED
    if isinstance(raw_error, GenerationTimeout):
        return TIMEOUT

    description = _describe(raw_error).lower()
    for category, needles in SUBSTRING_RULES:
        if any(needle in description for needle in needles):
            return category
    return SYSTEM_FAILURE


def to_error_envelope(raw_error: object, context: str) -> StructuredResponse:
    """Convert any failure into an error-flagged StructuredResponse."""
    logger.error(
        "Error in %s: %s",
        context,
        raw_error,
        exc_info=raw_error if isinstance(raw_error, BaseException) else None,
    )
    category = classify_error(raw_error)

    return StructuredResponse(
        narrative=category.narrative,
        visual_cues=["(error-glitch)", "(fade-red)"],
        domain=category.domain,
        impact_score=0,
        analysis=f"Error Details: {_describe(raw_error) or 'unknown error'}",
        widgets=[Widget(kind="summary", title="Status Alert", content="Process Terminated.")],
        suggested_actions=list(category.suggested_actions),
        export_options=[],
        error=True,
    )
