"""StudioSession: owner of the current mode and the staged attachment."""

from typing import Protocol

from ..conversation import ConversationState
from ..logging_config import get_logger
from ..models import DEFAULT_MODE, Attachment, Mode, StructuredResponse
from ..orchestrator import IOrchestrator, SendRejectedError, SendState
from ..registry import input_placeholder, parse_mode

logger = get_logger(__name__)


class EmptyPromptError(ValueError):
    """Raised when there is neither text nor an attachment to send."""


class IStudioSession(Protocol):
    """Top-level coordinator for the single user session."""

    @property
    def mode(self) -> Mode:
        ...

    def set_mode(self, mode: "Mode | str") -> Mode:
        """Switch the operating mode."""
        ...

    def stage_attachment(self, attachment: Attachment) -> None:
        """Hold an attachment for the next send, replacing any staged one."""
        ...

    def clear_attachment(self) -> Attachment | None:
        """Discard the staged attachment."""
        ...

    async def send(self, text: str) -> StructuredResponse:
        """Send text plus the staged attachment."""
        ...


class StudioSession:
    """Coordinates mode selection, attachment staging and sending."""

    def __init__(
        self,
        orchestrator: IOrchestrator,
        conversation: ConversationState,
        mode: Mode = DEFAULT_MODE,
    ):
        self._orchestrator = orchestrator
        self._conversation = conversation
        self._mode = mode
        self._staged: Attachment | None = None

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def conversation(self) -> ConversationState:
        return self._conversation

    @property
    def staged_attachment(self) -> Attachment | None:
        return self._staged

    @property
    def is_sending(self) -> bool:
        return self._orchestrator.state is SendState.SENDING

    @property
    def placeholder(self) -> str:
        return input_placeholder(self._mode, self._staged.kind if self._staged else None)

    def set_mode(self, mode: "Mode | str") -> Mode:
        self._mode = parse_mode(mode)
        logger.info("Mode switched to %s", self._mode.value)
        return self._mode

    def stage_attachment(self, attachment: Attachment) -> None:
        self._staged = attachment

    def clear_attachment(self) -> Attachment | None:
        attachment, self._staged = self._staged, None
        return attachment

    async def send(self, text: str) -> StructuredResponse:
        """
        Send the prompt with whatever attachment is staged.

        The staged attachment is taken before the request starts, so a
        second send cannot pick it up again.

        Raises:
            EmptyPromptError: no text and no attachment
            SendRejectedError: a request is already in flight
        """
        prompt = (text or "").strip()
        if not prompt and self._staged is None:
            raise EmptyPromptError("Nothing to send")
        if self.is_sending:
            raise SendRejectedError("A request is already in flight")

        attachment = self.clear_attachment()
        if not prompt and attachment is not None:
            prompt = f"Analyze this {attachment.kind}"

        return await self._orchestrator.handle_send(prompt, self._mode, attachment)

    def reset(self) -> None:
        self._mode = DEFAULT_MODE
        self._staged = None
