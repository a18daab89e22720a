"""Tests for the capture encoder."""

import base64

import pytest

from nexus.capture import encode_file, encode_recording, from_base64, from_data_uri, kind_for_mime
from nexus.models import AttachmentError


class TestKindForMime:
    """Tests for MIME type classification."""

    @pytest.mark.parametrize(
        "mime_type,kind",
        [
            ("video/mp4", "video"),
            ("audio/webm", "audio"),
            ("image/png", "image"),
            ("application/pdf", "image"),
            (None, "image"),
        ],
    )
    def test_kind(self, mime_type, kind):
        """Test that anything not video or audio is treated as an image."""
        assert kind_for_mime(mime_type) == kind


class TestEncodeFile:
    """Tests for encode_file()."""

    def test_encodes_bytes(self):
        """Test that file bytes are base64 encoded without a prefix."""
        att = encode_file(b"hello", "video/mp4")
        assert att.kind == "video"
        assert att.payload == base64.b64encode(b"hello").decode()
        assert not att.payload.startswith("data:")

    def test_default_mime_type(self):
        """Test that a missing MIME type falls back to the kind default."""
        att = encode_file(b"hello")
        assert att.kind == "image"
        assert att.mime_type == "image/jpeg"

    def test_empty_file(self):
        """Test that an empty file is rejected."""
        with pytest.raises(AttachmentError):
            encode_file(b"", "image/png")


class TestEncodeRecording:
    """Tests for encode_recording()."""

    def test_recording_is_audio(self):
        """Test that recordings become audio/webm attachments."""
        att = encode_recording(b"\x1aE\xdf\xa3")
        assert att.kind == "audio"
        assert att.mime_type == "audio/webm"

    def test_empty_recording(self):
        """Test that an empty recording is rejected."""
        with pytest.raises(AttachmentError):
            encode_recording(b"")


class TestFromDataUri:
    """Tests for from_data_uri()."""

    def test_parses_mime_and_payload(self):
        """Test that the data URI prefix is stripped and the MIME type kept."""
        att = from_data_uri("data:image/png;base64,QUJD")
        assert att.kind == "image"
        assert att.mime_type == "image/png"
        assert att.payload == "QUJD"

    def test_codec_parameters(self):
        """Test that MIME parameters before base64 are tolerated."""
        att = from_data_uri("data:audio/webm;codecs=opus;base64,QUJD")
        assert att.kind == "audio"
        assert att.mime_type == "audio/webm"

    def test_rejects_plain_text(self):
        """Test that non data URIs are rejected."""
        with pytest.raises(AttachmentError):
            from_data_uri("hello")

    def test_rejects_bad_base64(self):
        """Test that a corrupt payload is rejected."""
        with pytest.raises(AttachmentError):
            from_data_uri("data:image/png;base64,@@@")


class TestFromBase64:
    """Tests for from_base64()."""

    def test_bare_payload(self):
        """Test that a bare payload uses the given MIME type."""
        att = from_base64("QUJD", mime_type="video/mp4")
        assert att.kind == "video"
        assert att.decode() == b"ABC"

    def test_audio_kind_hint(self):
        """Test that an explicit audio kind builds a recording."""
        att = from_base64("QUJD", kind="audio")
        assert att.kind == "audio"
        assert att.mime_type == "audio/wav"

    def test_data_uri_payload(self):
        """Test that data URIs are accepted too."""
        att = from_base64("data:image/jpeg;base64,QUJD")
        assert att.mime_type == "image/jpeg"

    def test_invalid_payload(self):
        """Test that garbage is rejected."""
        with pytest.raises(AttachmentError):
            from_base64("not base64!!")
