"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

TEXT_PROVIDERS = ("gemini", "anthropic")


@dataclass(frozen=True)
class Settings:
    """Backend credentials, model identities and request budgets."""

    gemini_api_key: str | None = None
    anthropic_api_key: str | None = None
    text_provider: str = "gemini"

    text_model: str = "gemini-2.5-flash"
    vision_model: str = "gemini-2.5-flash"
    image_model: str = "imagen-3.0-generate-001"
    video_model: str = "veo-3.1-fast-generate-preview"
    speech_model: str = "gemini-2.5-flash-preview-tts"
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    voice_name: str = "Kore"

    temperature: float = 0.7
    video_poll_interval: float = 5.0
    video_max_polls: int = 120
    video_max_wait: float = 600.0
    request_timeout: float = 900.0
    log_level: str = "INFO"
    api_host: str = "localhost"
    api_port: int = 8000


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be a number, got {raw!r}") from e


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from e


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Returns:
        Settings instance
    """
    if env is None:
        env = os.environ

    defaults = Settings()
    text_provider = env.get("TEXT_PROVIDER", defaults.text_provider).strip().lower()
    if text_provider not in TEXT_PROVIDERS:
        raise ValueError(
            f"TEXT_PROVIDER must be one of {', '.join(TEXT_PROVIDERS)}, got {text_provider!r}"
        )

    return Settings(
        gemini_api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
        anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
        text_provider=text_provider,
        text_model=env.get("TEXT_MODEL", defaults.text_model),
        vision_model=env.get("VISION_MODEL", defaults.vision_model),
        image_model=env.get("IMAGE_MODEL", defaults.image_model),
        video_model=env.get("VIDEO_MODEL", defaults.video_model),
        speech_model=env.get("SPEECH_MODEL", defaults.speech_model),
        anthropic_model=env.get("ANTHROPIC_MODEL", defaults.anthropic_model),
        voice_name=env.get("VOICE_NAME", defaults.voice_name),
        temperature=_float(env, "TEMPERATURE", defaults.temperature),
        video_poll_interval=_float(env, "VIDEO_POLL_INTERVAL", defaults.video_poll_interval),
        video_max_polls=_int(env, "VIDEO_MAX_POLLS", defaults.video_max_polls),
        video_max_wait=_float(env, "VIDEO_MAX_WAIT", defaults.video_max_wait),
        request_timeout=_float(env, "REQUEST_TIMEOUT", defaults.request_timeout),
        log_level=env.get("LOG_LEVEL", defaults.log_level),
        api_host=env.get("API_HOST", defaults.api_host),
        api_port=_int(env, "API_PORT", defaults.api_port),
    )
