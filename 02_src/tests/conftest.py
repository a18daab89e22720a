"""Pytest configuration and fixtures."""

import base64
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from nexus.config import Settings  # noqa: E402
from nexus.llm import SpeechAudio, VideoJob  # noqa: E402
from nexus.models import Attachment  # noqa: E402

VALID_RESPONSE_JSON = """{
  "narrative": "Scanning complete.",
  "visualCues": ["(glow-in)"],
  "domain": "Cybersecurity",
  "impactScore": 72,
  "analysis": "Two risky permissions found.",
  "widgets": [
    {"type": "security_report", "title": "Permissions", "content": "CAMERA, CONTACTS"},
    {"type": "steps", "title": "Fix", "content": "[{\\"title\\": \\"Revoke camera\\"}]"}
  ],
  "suggestedActions": ["Revoke", "Rescan"],
  "exportOptions": ["PDF"]
}"""


@pytest.fixture
def valid_response_json():
    return VALID_RESPONSE_JSON


@pytest.fixture
def settings():
    """Settings with fake credentials and a fast poll budget."""
    return Settings(
        gemini_api_key="test_key",
        video_poll_interval=0,
        video_max_polls=5,
        video_max_wait=60,
        request_timeout=5,
    )


@pytest.fixture
def mock_text_backend():
    """Create mock text backend."""
    backend = Mock()
    backend.generate_text = AsyncMock(return_value=VALID_RESPONSE_JSON)
    return backend


@pytest.fixture
def mock_media_backend():
    """Create mock media backend."""
    backend = Mock()
    backend.generate_image = AsyncMock(return_value=b"\xff\xd8jpeg-bytes")
    backend.submit_video = AsyncMock(
        return_value=VideoJob(job_id="op-1", done=True, result_uri="https://media.example/v.mp4")
    )
    backend.poll_video = AsyncMock()
    backend.generate_speech = AsyncMock(
        return_value=SpeechAudio(data=b"\x00\x01" * 8, mime_type="audio/L16;codec=pcm;rate=24000")
    )
    return backend


@pytest.fixture
def image_attachment():
    return Attachment(
        kind="image",
        payload=base64.b64encode(b"\x89PNG fake image").decode("ascii"),
        mime_type="image/png",
    )


@pytest.fixture
def audio_attachment():
    return Attachment(
        kind="audio",
        payload=base64.b64encode(b"RIFF fake audio").decode("ascii"),
        mime_type="audio/webm",
    )
