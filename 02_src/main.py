"""Main entry point for Nexus Studio."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from nexus.api import create_fastapi_app
from nexus.app import Application
from nexus.config import load_settings
from nexus.logging_config import setup_logging


def main():
    """Load .env, then serve the studio API with settings from the environment."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    settings = load_settings()
    setup_logging(settings)

    app = create_fastapi_app(Application(settings=settings))

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
