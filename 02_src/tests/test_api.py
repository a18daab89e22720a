"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from nexus.api import create_fastapi_app
from nexus.app import Application
from nexus.orchestrator import SendState


@pytest.fixture
def application(settings, mock_text_backend, mock_media_backend):
    return Application(
        settings=settings,
        text_backend=mock_text_backend,
        media_backend=mock_media_backend,
    )


@pytest.fixture
def client(application):
    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client


class TestModesApi:
    """Tests for /api/modes and /api/mode."""

    def test_list_modes(self, client):
        """Test that all modes are listed with their strategy."""
        modes = client.get("/api/modes").json()

        assert len(modes) == 17
        video = next(m for m in modes if m["id"] == "VIDEO")
        assert video["label"] == "Video Studio"
        assert video["strategy"] == "video"

    def test_switch_mode(self, client):
        """Test that the mode can be switched by label."""
        response = client.put("/api/mode", json={"mode": "Image Studio"})

        assert response.status_code == 200
        assert client.get("/api/mode").json()["mode"]["id"] == "IMAGE"

    def test_unknown_mode(self, client):
        """Test that unknown modes are rejected."""
        response = client.put("/api/mode", json={"mode": "Hologram Forge"})

        assert response.status_code == 422


class TestMessagingApi:
    """Tests for /api/messages."""

    def test_send_and_list(self, client):
        """Test that a send returns the envelope and appends two messages."""
        response = client.post("/api/messages", json={"text": "Audit my app"})

        assert response.status_code == 200
        body = response.json()
        assert body["response"]["domain"] == "Cybersecurity"
        assert body["response"]["impactScore"] == 72

        messages = client.get("/api/messages").json()
        assert [m["role"] for m in messages] == ["user", "assistant"]
        assert messages[1]["id"] == body["message_id"]
        assert messages[1]["structured_response"]["narrative"] == "Scanning complete."

    def test_empty_send(self, client):
        """Test that an empty send is rejected."""
        response = client.post("/api/messages", json={"text": "   "})

        assert response.status_code == 400
        assert client.get("/api/messages").json() == []

    def test_inline_attachment(self, client, mock_text_backend):
        """Test that an inline attachment is sent with a default prompt."""
        response = client.post(
            "/api/messages",
            json={"attachment": {"data": "data:image/png;base64,QUJD"}},
        )

        assert response.status_code == 200
        messages = client.get("/api/messages").json()
        assert messages[0]["display_text"] == "Analyze this image"
        assert messages[0]["attachment"]["kind"] == "image"

    def test_bad_attachment(self, client):
        """Test that a corrupt attachment is rejected."""
        response = client.post(
            "/api/messages",
            json={"text": "hi", "attachment": {"data": "not base64!!"}},
        )

        assert response.status_code == 400

    def test_busy(self, client, application):
        """Test that a send while another is in flight conflicts."""
        application.orchestrator._state = SendState.SENDING

        response = client.post("/api/messages", json={"text": "hi"})

        assert response.status_code == 409

    def test_cancel_idle(self, client):
        """Test that cancel with nothing in flight reports false."""
        assert client.post("/api/messages/cancel").json() == {"cancelled": False}


class TestAttachmentsApi:
    """Tests for /api/attachments."""

    def test_stage_and_clear(self, client):
        """Test staging, inspecting and clearing an attachment."""
        staged = client.post("/api/attachments", json={"data": "QUJD", "kind": "audio"}).json()
        assert staged["staged"] is True
        assert staged["kind"] == "audio"
        assert staged["placeholder"] == "Listening to audio input..."

        assert client.get("/api/attachments").json()["staged"] is True

        cleared = client.delete("/api/attachments").json()
        assert cleared["staged"] is False

    def test_staged_attachment_is_sent(self, client):
        """Test that a staged attachment is consumed by the next send."""
        client.post("/api/attachments", json={"data": "data:image/png;base64,QUJD"})
        client.post("/api/messages", json={"text": "what is this"})

        assert client.get("/api/attachments").json()["staged"] is False
        messages = client.get("/api/messages").json()
        assert messages[0]["attachment"]["mime_type"] == "image/png"

    def test_bad_payload(self, client):
        """Test that invalid base64 is rejected."""
        response = client.post("/api/attachments", json={"data": "@@@"})

        assert response.status_code == 400


class TestInsightApi:
    """Tests for /api/insight."""

    def test_empty(self, client):
        """Test that there is no insight before the first answer."""
        assert client.get("/api/insight").json() == {"loading": False, "insight": None}

    def test_after_send(self, client):
        """Test that the insight panel renders the latest answer."""
        client.post("/api/messages", json={"text": "Audit my app"})

        insight = client.get("/api/insight").json()["insight"]
        assert insight["domain"] == "Cybersecurity"
        assert insight["alert"] is False
        assert [w["kind"] for w in insight["widgets"]] == ["security_report", "steps"]
        assert insight["widgets"][1]["steps"][0]["title"] == "Revoke camera"


class TestSpeechApi:
    """Tests for /api/speech."""

    def test_synthesize(self, client):
        """Test that narration is returned as playable audio."""
        body = client.post("/api/speech", json={"text": "Scanning complete."}).json()

        assert body["audio_url"].startswith("data:audio/wav;base64,")

    def test_unavailable(self, client, mock_media_backend):
        """Test that a TTS failure returns no audio."""
        mock_media_backend.generate_speech.side_effect = RuntimeError("boom")

        body = client.post("/api/speech", json={"text": "Hello"}).json()

        assert body == {"audio_url": None}


class TestObservabilityAndControl:
    """Tests for /api/trace-events and /api/control/reset."""

    def test_trace_events(self, client):
        """Test that a send is visible in the trace."""
        client.post("/api/messages", json={"text": "Hello"})

        events = client.get("/api/trace-events").json()
        assert [e["event_type"] for e in events] == [
            "message_received",
            "strategy_selected",
            "response_ready",
        ]

        filtered = client.get("/api/trace-events", params={"event_type": "response_ready"}).json()
        assert len(filtered) == 1

    def test_bad_after(self, client):
        """Test that a malformed timestamp is rejected."""
        assert client.get("/api/trace-events", params={"after": "yesterday"}).status_code == 400

    def test_trace_events_several_types(self, client):
        """Test that repeating event_type matches any of the given types."""
        client.post("/api/messages", json={"text": "Hello"})

        events = client.get(
            "/api/trace-events",
            params=[("event_type", "message_received"), ("event_type", "response_ready")],
        ).json()
        assert [e["event_type"] for e in events] == ["message_received", "response_ready"]

    def test_trace_events_after_utc_suffix(self, client):
        """Test that a Z-suffixed timestamp in the future filters everything out."""
        client.post("/api/messages", json={"text": "Hello"})

        response = client.get("/api/trace-events", params={"after": "2999-01-01T00:00:00Z"})
        assert response.status_code == 200
        assert response.json() == []

    def test_status(self, client):
        """Test that the status snapshot follows the session."""
        before = client.get("/api/control/status").json()
        assert before == {
            "send_state": "idle",
            "mode": "Universal Solver",
            "message_count": 0,
            "attachment_staged": False,
            "text_provider": "gemini",
        }

        client.post("/api/messages", json={"text": "Hello"})

        after = client.get("/api/control/status").json()
        assert after["send_state"] == "done"
        assert after["message_count"] == 2

    def test_reset(self, client):
        """Test that reset clears the conversation and mode."""
        client.put("/api/mode", json={"mode": "Code Forge"})
        client.post("/api/messages", json={"text": "Hello"})

        assert client.post("/api/control/reset").json() == {"status": "ok"}
        assert client.get("/api/messages").json() == []
        assert client.get("/api/mode").json()["mode"]["id"] == "UNIVERSAL"
