"""Nexus Studio core module."""

from .app import Application, IApplication
from .config import Settings, load_settings
from .conversation import ConversationState
from .llm import AnthropicTextBackend, GeminiBackend, IMediaBackend, ITextBackend
from .models import (
    Attachment,
    GeneratedMedia,
    Message,
    Mode,
    StructuredResponse,
    TraceEvent,
    Widget,
)
from .orchestrator import IOrchestrator, Orchestrator, SendRejectedError, SendState
from .registry import StrategyHandle, StrategyKind, resolve_strategy
from .session import EmptyPromptError, IStudioSession, StudioSession
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    "load_settings",
    # Models
    "Attachment",
    "GeneratedMedia",
    "Message",
    "Mode",
    "StructuredResponse",
    "TraceEvent",
    "Widget",
    # Components
    "ConversationState",
    "ITextBackend",
    "IMediaBackend",
    "GeminiBackend",
    "AnthropicTextBackend",
    "StrategyHandle",
    "StrategyKind",
    "resolve_strategy",
    "IOrchestrator",
    "Orchestrator",
    "SendRejectedError",
    "SendState",
    "IStudioSession",
    "StudioSession",
    "EmptyPromptError",
    "ITracker",
    "Tracker",
]
