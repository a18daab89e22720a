"""Orchestrator module."""

from .orchestrator import IOrchestrator, Orchestrator, SendRejectedError, SendState

__all__ = ["IOrchestrator", "Orchestrator", "SendRejectedError", "SendState"]
