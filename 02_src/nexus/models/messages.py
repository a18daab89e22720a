"""Message-related data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from .attachments import Attachment
from .response import StructuredResponse


@dataclass(frozen=True)
class Message:
    """A single entry in the conversation log."""

    id: str
    role: Literal["user", "assistant"]
    display_text: str
    created_at: datetime
    attachment: Attachment | None = None
    structured_response: StructuredResponse | None = None
