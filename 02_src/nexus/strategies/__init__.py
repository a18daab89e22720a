"""Generation strategies."""

from .conversational import ConversationalStrategy, parse_response_text, strip_code_fence
from .edit import EditStrategy
from .errors import (
    GenerationCancelled,
    GenerationTimeout,
    MalformedResponseError,
    classify_error,
    to_error_envelope,
)
from .image import ImageStrategy
from .speech import SpeechStrategy
from .video import PollBudget, VideoStrategy, with_access_key

__all__ = [
    "ConversationalStrategy",
    "EditStrategy",
    "ImageStrategy",
    "SpeechStrategy",
    "VideoStrategy",
    "PollBudget",
    "GenerationCancelled",
    "GenerationTimeout",
    "MalformedResponseError",
    "classify_error",
    "to_error_envelope",
    "parse_response_text",
    "strip_code_fence",
    "with_access_key",
]
