"""Tests for the conversational strategy."""

import pytest

from nexus.llm import ContentPart
from nexus.models import Mode
from nexus.strategies import ConversationalStrategy, parse_response_text, strip_code_fence


class TestStripCodeFence:
    """Tests for strip_code_fence()."""

    def test_json_fence(self):
        """Test that a ```json fence is removed."""
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        """Test that an untagged fence is removed."""
        assert strip_code_fence('```\n{"a": 1}```') == '{"a": 1}'

    def test_no_fence(self):
        """Test that unfenced text is only trimmed."""
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


class TestParseResponseText:
    """Tests for parse_response_text()."""

    def test_fenced_and_plain_are_equivalent(self, valid_response_json):
        """Test that fencing does not change the parsed result."""
        plain = parse_response_text(valid_response_json)
        fenced = parse_response_text(f"```json\n{valid_response_json}\n```")
        assert plain == fenced
        assert plain.domain == "Cybersecurity"
        assert plain.error is False

    def test_plain_text_degrades(self):
        """Test that prose is wrapped as a General Response."""
        response = parse_response_text("Hello there, no JSON today.")
        assert response.domain == "General Response"
        assert response.narrative == "Hello there, no JSON today."
        assert response.impact_score == 50
        assert response.widgets == ()
        assert response.error is False

    def test_json_array_degrades(self):
        """Test that JSON that is not an object degrades."""
        assert parse_response_text("[1, 2, 3]").domain == "General Response"

    def test_schema_violation_degrades(self):
        """Test that an object missing required fields degrades."""
        response = parse_response_text('{"narrative": "only this"}')
        assert response.domain == "General Response"

    def test_non_finite_score_degrades(self):
        """Test that an infinite impact score degrades instead of failing."""
        text = (
            '{"narrative": "n", "domain": "d", "impactScore": 1e999, '
            '"analysis": "a", "widgets": [], "suggestedActions": []}'
        )
        response = parse_response_text(text)
        assert response.error is False
        assert response.domain == "General Response"

    def test_deeply_nested_json_degrades(self):
        """Test that JSON nested past the parser's depth degrades."""
        response = parse_response_text("[" * 100000 + "]" * 100000)
        assert response.error is False
        assert response.domain == "General Response"

    def test_model_cannot_flag_error(self, valid_response_json):
        """Test that the model cannot set the error flag itself."""
        text = valid_response_json.replace('"narrative"', '"error": true, "narrative"', 1)
        assert parse_response_text(text).error is False


class TestConversationalStrategy:
    """Tests for ConversationalStrategy.generate()."""

    @pytest.mark.asyncio
    async def test_generate_success(self, mock_text_backend):
        """Test that a valid model answer is returned as-is."""
        strategy = ConversationalStrategy(mock_text_backend, model="text-model")
        response = await strategy.generate("Scan my app", Mode.SECURITY)

        assert response.domain == "Cybersecurity"
        assert response.impact_score == 72

        call = mock_text_backend.generate_text.call_args
        assert call.kwargs["model"] == "text-model"
        assert call.kwargs["search"] is True
        assert call.kwargs["temperature"] == 0.7
        assert "Current Mode: Security Guard." in call.kwargs["system"]
        assert "CYBERSECURITY" in call.kwargs["system"]

    @pytest.mark.asyncio
    async def test_attachment_goes_first(self, mock_text_backend, image_attachment):
        """Test that the attachment part precedes the prompt part."""
        strategy = ConversationalStrategy(mock_text_backend)
        await strategy.generate("What is this?", Mode.UNIVERSAL, image_attachment)

        parts = mock_text_backend.generate_text.call_args.args[0]
        assert len(parts) == 2
        assert parts[0] == ContentPart(data=image_attachment.decode(), mime_type="image/png")
        assert parts[1] == ContentPart(text="What is this?")

    @pytest.mark.asyncio
    async def test_empty_text_is_error(self, mock_text_backend):
        """Test that no text at all produces an error envelope."""
        mock_text_backend.generate_text.return_value = None
        strategy = ConversationalStrategy(mock_text_backend)

        response = await strategy.generate("Hi", Mode.UNIVERSAL)

        assert response.error is True
        assert "No response text" in response.analysis

    @pytest.mark.asyncio
    async def test_backend_error_is_classified(self, mock_text_backend):
        """Test that backend failures become classified envelopes."""
        mock_text_backend.generate_text.side_effect = RuntimeError("Gemini API error: 429 quota")
        strategy = ConversationalStrategy(mock_text_backend)

        response = await strategy.generate("Hi", Mode.UNIVERSAL)

        assert response.error is True
        assert response.domain == "Resource Limit"

    @pytest.mark.asyncio
    async def test_unparsable_text_degrades(self, mock_text_backend):
        """Test that prose answers are not treated as errors."""
        mock_text_backend.generate_text.return_value = "Just words."
        strategy = ConversationalStrategy(mock_text_backend)

        response = await strategy.generate("Hi", Mode.UNIVERSAL)

        assert response.error is False
        assert response.domain == "General Response"
