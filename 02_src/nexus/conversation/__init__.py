"""Conversation module."""

from .state import ConversationState

__all__ = ["ConversationState"]
