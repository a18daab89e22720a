"""Normalization of captured media into transport-ready Attachments."""

import base64
import binascii
import re

from ..logging_config import get_logger
from ..models import DEFAULT_MIME_TYPES, Attachment, AttachmentError, AttachmentKind

logger = get_logger(__name__)

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?;base64,(?P<data>.*)$", re.S)


def kind_for_mime(mime_type: str | None) -> AttachmentKind:
    """Map a MIME type onto an attachment kind (image unless video/audio)."""
    major = (mime_type or "").split("/", 1)[0].strip().lower()
    if major == "video":
        return "video"
    if major == "audio":
        return "audio"
    return "image"


def encode_file(data: bytes, mime_type: str | None = None) -> Attachment:
    """Encode a selected file."""
    if not data:
        raise AttachmentError("Selected file is empty")

    kind = kind_for_mime(mime_type)
    attachment = Attachment(
        kind=kind,
        payload=base64.b64encode(data).decode("ascii"),
        mime_type=mime_type or DEFAULT_MIME_TYPES[kind],
    )
    logger.debug("Encoded %s attachment (%s, %d bytes)", kind, attachment.mime_type, len(data))
    return attachment


def encode_recording(blob: bytes, mime_type: str = "audio/webm") -> Attachment:
    """Encode a finalized microphone recording."""
    if not blob:
        raise AttachmentError("Recording is empty")

    return Attachment(
        kind="audio",
        payload=base64.b64encode(blob).decode("ascii"),
        mime_type=mime_type or DEFAULT_MIME_TYPES["audio"],
    )


def from_data_uri(uri: str, kind: AttachmentKind | None = None) -> Attachment:
    """Build an Attachment from a ``data:<mime>;base64,<payload>`` string."""
    match = _DATA_URI_RE.match(uri.strip())
    if not match:
        raise AttachmentError("Not a base64 data URI")

    payload = match.group("data")
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AttachmentError(f"Data URI payload is not valid base64: {e}") from e
    if not decoded:
        raise AttachmentError("Data URI payload is empty")

    mime_type = match.group("mime")
    resolved_kind = kind or kind_for_mime(mime_type)
    return Attachment(
        kind=resolved_kind,
        payload=payload,
        mime_type=mime_type or DEFAULT_MIME_TYPES[resolved_kind],
    )


def from_base64(payload: str, mime_type: str | None = None, kind: AttachmentKind | None = None) -> Attachment:
    """Build an Attachment from base64 text, with or without a data URI prefix."""
    if payload.startswith("data:"):
        attachment = from_data_uri(payload, kind=kind)
        if mime_type and mime_type != attachment.mime_type:
            return Attachment(kind=kind or kind_for_mime(mime_type), payload=attachment.payload, mime_type=mime_type)
        return attachment

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise AttachmentError(f"Payload is not valid base64: {e}") from e

    if kind == "audio":
        return encode_recording(data, mime_type or DEFAULT_MIME_TYPES["audio"])
    attachment = encode_file(data, mime_type)
    if kind and kind != attachment.kind:
        return Attachment(kind=kind, payload=attachment.payload, mime_type=mime_type or DEFAULT_MIME_TYPES[kind])
    return attachment
