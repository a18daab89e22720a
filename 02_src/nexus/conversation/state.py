"""Append-only conversation log."""

from ..models import Message, StructuredResponse


class ConversationState:
    """Ordered message log plus the most recent structured response."""

    def __init__(self):
        self._messages: list[Message] = []
        self._active_analysis: StructuredResponse | None = None

    def append(self, message: Message) -> None:
        """Add a message to the end of the log."""
        if message.role not in ("user", "assistant"):
            raise ValueError(f"Unsupported message role: {message.role!r}")
        if any(m.id == message.id for m in self._messages):
            raise ValueError(f"Message {message.id} already in conversation")

        self._messages.append(message)
        if message.role == "assistant" and message.structured_response is not None:
            self._active_analysis = message.structured_response

    def get_all(self) -> list[Message]:
        """Get all messages in append order."""
        return self._messages.copy()

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    @property
    def active_analysis(self) -> StructuredResponse | None:
        return self._active_analysis

    def clear_active_analysis(self) -> None:
        """Hide the side panel while a new request is in flight."""
        self._active_analysis = None

    def clear(self) -> None:
        """Reset the log (application reset only)."""
        self._messages.clear()
        self._active_analysis = None

    def __len__(self) -> int:
        return len(self._messages)
