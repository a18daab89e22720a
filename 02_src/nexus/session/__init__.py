"""Session module."""

from .session import EmptyPromptError, IStudioSession, StudioSession

__all__ = ["EmptyPromptError", "IStudioSession", "StudioSession"]
