"""Tests for settings loading."""

import pytest

from nexus.config import Settings, load_settings


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_defaults(self):
        """Test that an empty environment yields the defaults."""
        assert load_settings({}) == Settings()

    def test_overrides(self):
        """Test that environment values are parsed into typed settings."""
        settings = load_settings(
            {
                "API_KEY": "k",
                "TEXT_PROVIDER": " Anthropic ",
                "VIDEO_MAX_POLLS": "3",
                "REQUEST_TIMEOUT": "12.5",
                "API_HOST": "0.0.0.0",
                "API_PORT": "9001",
            }
        )

        assert settings.gemini_api_key == "k"
        assert settings.text_provider == "anthropic"
        assert settings.video_max_polls == 3
        assert settings.request_timeout == 12.5
        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 9001

    def test_unknown_provider(self):
        """Test that an unsupported text provider is rejected."""
        with pytest.raises(ValueError, match="TEXT_PROVIDER"):
            load_settings({"TEXT_PROVIDER": "llama"})

    def test_bad_port(self):
        """Test that a non-numeric port is rejected with its key named."""
        with pytest.raises(ValueError, match="API_PORT"):
            load_settings({"API_PORT": "http"})
