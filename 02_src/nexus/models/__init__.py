"""Core data models for Nexus Studio."""

from .attachments import (
    DEFAULT_MIME_TYPES,
    Attachment,
    AttachmentError,
    AttachmentKind,
    strip_data_uri,
)
from .modes import DEFAULT_MODE, Mode
from .response import (
    RESPONSE_SCHEMA,
    GeneratedMedia,
    Step,
    StructuredResponse,
    Widget,
    WidgetKind,
    normalize_steps,
)
from .messages import Message
from .tracing import TraceEvent

__all__ = [
    # Attachments
    "Attachment",
    "AttachmentError",
    "AttachmentKind",
    "DEFAULT_MIME_TYPES",
    "strip_data_uri",
    # Modes
    "Mode",
    "DEFAULT_MODE",
    # Response schema
    "RESPONSE_SCHEMA",
    "GeneratedMedia",
    "Step",
    "StructuredResponse",
    "Widget",
    "WidgetKind",
    "normalize_steps",
    # Conversation
    "Message",
    # Tracing
    "TraceEvent",
]
