"""Attachment data model."""

import base64
import binascii
from dataclasses import dataclass
from typing import Literal

AttachmentKind = Literal["image", "audio", "video"]

DEFAULT_MIME_TYPES: dict[str, str] = {
    "image": "image/jpeg",
    "video": "video/mp4",
    "audio": "audio/wav",
}


class AttachmentError(ValueError):
    """Raised when captured media cannot be turned into an Attachment."""


def strip_data_uri(payload: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` prefix if present."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


@dataclass(frozen=True)
class Attachment:
    """User-supplied media accompanying a prompt."""

    kind: AttachmentKind
    payload: str  # base64, no data URI prefix
    mime_type: str

    def decode(self) -> bytes:
        """Return the raw media bytes."""
        try:
            return base64.b64decode(strip_data_uri(self.payload), validate=True)
        except (binascii.Error, ValueError) as e:
            raise AttachmentError(f"Attachment payload is not valid base64: {e}") from e

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{strip_data_uri(self.payload)}"
