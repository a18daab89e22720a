"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .config import Settings, load_settings
from .conversation import ConversationState
from .llm import AnthropicTextBackend, GeminiBackend, IMediaBackend, ITextBackend
from .logging_config import get_logger
from .orchestrator import Orchestrator
from .session import StudioSession
from .strategies import (
    ConversationalStrategy,
    EditStrategy,
    ImageStrategy,
    PollBudget,
    SpeechStrategy,
    VideoStrategy,
)
from .tracker import ITracker, Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset conversation, mode and traces."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        text_backend: ITextBackend | None = None,
        media_backend: IMediaBackend | None = None,
    ):
        self._settings = settings or load_settings()
        self._text_backend = text_backend
        self._media_backend = media_backend

        # Components (will be initialized in start())
        self._tracker: ITracker | None = None
        self._conversation: ConversationState | None = None
        self._orchestrator: Orchestrator | None = None
        self._session: StudioSession | None = None
        self._speech: SpeechStrategy | None = None

    def _build_backends(self) -> tuple[ITextBackend, IMediaBackend]:
        media = self._media_backend
        if media is None:
            media = GeminiBackend(self._settings)

        text = self._text_backend
        if text is None:
            if self._settings.text_provider == "anthropic":
                text = AnthropicTextBackend(
                    api_key=self._settings.anthropic_api_key,
                    model=self._settings.anthropic_model,
                )
            elif isinstance(media, GeminiBackend):
                text = media
            else:
                text = GeminiBackend(self._settings)
        return text, media

    @property
    def _access_key(self) -> str | None:
        if isinstance(self._media_backend, GeminiBackend):
            return self._media_backend.api_key
        return self._settings.gemini_api_key

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Tracker (no dependencies)
        self._tracker = Tracker()

        # 2. Backends (credentials from settings)
        self._text_backend, self._media_backend = self._build_backends()
        logger.info("Backends initialized (text provider: %s)", self._settings.text_provider)

        # 3. Strategies (depend on backends)
        image = ImageStrategy(self._media_backend)
        video = VideoStrategy(
            self._media_backend,
            access_key=self._access_key,
            budget=PollBudget(
                interval=self._settings.video_poll_interval,
                max_polls=self._settings.video_max_polls,
                max_wait=self._settings.video_max_wait,
            ),
        )
        edit = EditStrategy(self._text_backend, image, vision_model=self._settings.vision_model)
        conversational = ConversationalStrategy(
            self._text_backend,
            model=self._settings.text_model,
            temperature=self._settings.temperature,
        )
        self._speech = SpeechStrategy(self._media_backend, voice=self._settings.voice_name)

        # 4. Conversation state
        self._conversation = ConversationState()

        # 5. Orchestrator (depends on strategies, conversation, tracker)
        self._orchestrator = Orchestrator(
            conversation=self._conversation,
            conversational=conversational,
            image=image,
            video=video,
            edit=edit,
            tracker=self._tracker,
            request_timeout=self._settings.request_timeout,
        )

        # 6. Session (owns mode and staged attachment)
        self._session = StudioSession(self._orchestrator, self._conversation)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._orchestrator is not None:
            self._orchestrator.cancel()
        logger.info("Application stopped")

    async def reset(self) -> None:
        """Reset conversation, mode and traces."""
        if self._orchestrator is not None:
            self._orchestrator.cancel()
        if self._session is not None:
            self._session.reset()
        if self._conversation is not None:
            self._conversation.clear()
        if self._tracker is not None:
            self._tracker.clear()
        logger.info("Reset complete")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def tracker(self) -> ITracker:
        """Get tracker instance."""
        if self._tracker is None:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def conversation(self) -> ConversationState:
        """Get conversation state."""
        if self._conversation is None:
            raise RuntimeError("Application not started")
        return self._conversation

    @property
    def orchestrator(self) -> Orchestrator:
        """Get orchestrator instance."""
        if self._orchestrator is None:
            raise RuntimeError("Application not started")
        return self._orchestrator

    @property
    def session(self) -> StudioSession:
        """Get session instance."""
        if self._session is None:
            raise RuntimeError("Application not started")
        return self._session

    @property
    def speech(self) -> SpeechStrategy:
        """Get speech strategy."""
        if self._speech is None:
            raise RuntimeError("Application not started")
        return self._speech
