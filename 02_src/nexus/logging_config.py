"""Structured logging configuration for Nexus Studio."""

import json
import logging
import logging.config
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH, Settings

# Fields callers may attach with extra={...}; copied into the JSON line when present
CONTEXT_FIELDS = ("mode", "strategy", "job_id", "context")

# SDK transport loggers are chatty at INFO (one line per HTTP request)
QUIET_LOGGERS = ("httpx", "httpcore", "google_genai", "anthropic")


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


def setup_logging(
    settings: Settings | None = None,
    log_file: str | Path | None = None,
) -> None:
    """
    Route application logs to stdout and a rotating JSON file.

    Args:
        settings: Source of the log level. Defaults to Settings loaded from env.
        log_file: Path to log file. Defaults to 04_logs/app.log.
    """
    if settings is None:
        from .config import load_settings

        settings = load_settings()

    log_path = Path(log_file) if log_file else DEFAULT_LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "nexus.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": str(log_path),
                    "maxBytes": 10 * 1024 * 1024,  # 10 MB
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
            "root": {
                "level": settings.log_level.upper(),
                "handlers": ["file", "console"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
