"""Tests for ConversationState."""

from datetime import datetime, timezone

import pytest

from nexus.conversation import ConversationState
from nexus.models import Message
from nexus.strategies import to_error_envelope


def make_message(id, role="user", response=None):
    return Message(
        id=id,
        role=role,
        display_text=f"text {id}",
        created_at=datetime.now(timezone.utc),
        structured_response=response,
    )


class TestConversationState:
    """Tests for the conversation log."""

    def test_append_order(self):
        """Test that messages keep append order."""
        state = ConversationState()
        state.append(make_message("1"))
        state.append(make_message("2", role="assistant"))

        assert [m.id for m in state.get_all()] == ["1", "2"]
        assert state.last().id == "2"
        assert len(state) == 2

    def test_get_all_is_a_copy(self):
        """Test that callers cannot mutate the log."""
        state = ConversationState()
        state.append(make_message("1"))
        state.get_all().clear()

        assert len(state) == 1

    def test_duplicate_id_rejected(self):
        """Test that message ids are unique."""
        state = ConversationState()
        state.append(make_message("1"))

        with pytest.raises(ValueError):
            state.append(make_message("1"))

    def test_active_analysis_follows_assistant(self):
        """Test that the latest assistant response becomes the active analysis."""
        state = ConversationState()
        response = to_error_envelope(RuntimeError("x"), "Test")
        state.append(make_message("1", role="assistant", response=response))

        assert state.active_analysis == response

        state.clear_active_analysis()
        assert state.active_analysis is None
        assert len(state) == 1

    def test_user_message_keeps_analysis(self):
        """Test that user messages do not change the active analysis."""
        state = ConversationState()
        response = to_error_envelope(RuntimeError("x"), "Test")
        state.append(make_message("1", role="assistant", response=response))
        state.append(make_message("2"))

        assert state.active_analysis == response

    def test_clear(self):
        """Test that clear() empties the log."""
        state = ConversationState()
        state.append(make_message("1"))
        state.clear()

        assert state.get_all() == []
        assert state.last() is None
