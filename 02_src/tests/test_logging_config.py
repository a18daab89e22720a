"""Tests for logging configuration."""

import json
import logging

from nexus.config import Settings
from nexus.logging_config import JSONFormatter, setup_logging


def make_record(**extra):
    record = logging.LogRecord(
        name="nexus.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Routing %s request",
        args=("Video Studio",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        """Test that a record is rendered as one JSON object."""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "nexus.test"
        assert data["message"] == "Routing Video Studio request"

    def test_context_fields(self):
        """Test that request context passed via extra is kept."""
        data = json.loads(JSONFormatter().format(make_record(mode="Video Studio", strategy="video")))

        assert data["mode"] == "Video Studio"
        assert data["strategy"] == "video"
        assert "job_id" not in data


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_writes_json_file(self, tmp_path):
        """Test that logs land in the given file as JSON lines."""
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(Settings(log_level="debug"), log_file=log_file)

        logging.getLogger("nexus.test").debug("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["message"] == "hello"
        assert logging.getLogger("httpx").level == logging.WARNING
