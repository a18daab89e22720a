"""Orchestrator: single-flight request routing and conversation bookkeeping."""

import asyncio
import contextlib
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

from ..conversation.state import ConversationState
from ..logging_config import get_logger
from ..models import DEFAULT_MODE, Attachment, Message, Mode, StructuredResponse
from ..registry import StrategyHandle, StrategyKind, parse_mode, resolve_strategy
from ..strategies import (
    ConversationalStrategy,
    EditStrategy,
    GenerationCancelled,
    GenerationTimeout,
    ImageStrategy,
    VideoStrategy,
    to_error_envelope,
)
from ..tracker import ITracker, Tracker

logger = get_logger(__name__)


class SendState(str, Enum):
    """Send guard states."""

    IDLE = "idle"
    SENDING = "sending"
    DONE = "done"


class SendRejectedError(RuntimeError):
    """Raised when a send arrives while another one is in flight."""


class IOrchestrator(Protocol):
    """Routing of one prompt to one strategy, exactly one outcome per request."""

    @property
    def state(self) -> SendState:
        ...

    async def handle_send(
        self,
        prompt: str,
        mode: Mode,
        attachment: Attachment | None = None,
    ) -> StructuredResponse:
        """Append the user message, run the strategy, append the assistant message."""
        ...

    def cancel(self) -> bool:
        """Cancel the in-flight request, if any."""
        ...


class Orchestrator:
    """Selects and runs the generation strategy for each send."""

    def __init__(
        self,
        conversation: ConversationState,
        conversational: ConversationalStrategy,
        image: ImageStrategy,
        video: VideoStrategy,
        edit: EditStrategy,
        tracker: ITracker | None = None,
        request_timeout: float | None = None,
    ):
        self._conversation = conversation
        self._conversational = conversational
        self._image = image
        self._video = video
        self._edit = edit
        self._tracker = tracker or Tracker()
        self._request_timeout = request_timeout

        self._state = SendState.IDLE
        self._cancel: asyncio.Event | None = None

    @property
    def state(self) -> SendState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is SendState.SENDING

    def cancel(self) -> bool:
        if self._cancel is None:
            return False
        self._cancel.set()
        return True

    async def handle_send(
        self,
        prompt: str,
        mode: Mode,
        attachment: Attachment | None = None,
    ) -> StructuredResponse:
        """Run one request. Raises SendRejectedError if one is already in flight."""
        if self._state is SendState.SENDING:
            await self._tracker.track(
                event_type="send_rejected",
                actor="orchestrator",
                data={"prompt": prompt[:100]},
            )
            raise SendRejectedError("A request is already in flight")

        # No await between the check above and this assignment
        self._state = SendState.SENDING
        self._cancel = asyncio.Event()
        try:
            try:
                mode = parse_mode(mode)
            except ValueError:
                logger.warning("Unknown mode %r, using %s", mode, DEFAULT_MODE.value)
                mode = DEFAULT_MODE
            user_message = Message(
                id=str(uuid.uuid4()),
                role="user",
                display_text=prompt,
                created_at=datetime.now(timezone.utc),
                attachment=attachment,
            )
            self._conversation.append(user_message)
            self._conversation.clear_active_analysis()

            try:
                response = await self._respond(prompt, mode, attachment, self._cancel)
            except asyncio.CancelledError:
                self._append_assistant(
                    to_error_envelope(GenerationCancelled("Request task was cancelled"), "Orchestrator")
                )
                raise

            self._append_assistant(response)
            await self._tracker.track(
                event_type="response_ready",
                actor="orchestrator",
                data={
                    "mode": mode.value,
                    "domain": response.domain,
                    "error": response.error,
                    "widget_count": len(response.widgets),
                },
            )
            return response
        finally:
            self._state = SendState.DONE
            self._cancel = None

    async def _respond(
        self,
        prompt: str,
        mode: Mode,
        attachment: Attachment | None,
        cancel: asyncio.Event,
    ) -> StructuredResponse:
        try:
            await self._tracker.track(
                event_type="message_received",
                actor="orchestrator",
                data={
                    "mode": mode.value,
                    "prompt": prompt[:200],
                    "attachment_kind": attachment.kind if attachment else None,
                },
            )
            handle = resolve_strategy(mode, attachment is not None, attachment.kind if attachment else None)
            logger.info(
                "Routing %s request to %s strategy",
                mode.value,
                handle.kind.value,
                extra={"mode": mode.value, "strategy": handle.kind.value},
            )
            await self._tracker.track(
                event_type="strategy_selected",
                actor="orchestrator",
                data={"strategy": handle.kind.value, "volumetric": handle.volumetric},
            )
            return await self._run_bounded(handle, prompt, mode, attachment, cancel)
        except Exception as e:
            return to_error_envelope(e, "Orchestrator")

    async def _run_bounded(
        self,
        handle: StrategyHandle,
        prompt: str,
        mode: Mode,
        attachment: Attachment | None,
        cancel: asyncio.Event,
    ) -> StructuredResponse:
        """Race the strategy against cancellation and the request timeout."""
        task = asyncio.ensure_future(self._dispatch(handle, prompt, mode, attachment, cancel))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self._request_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

        if waiter in done:
            return to_error_envelope(GenerationCancelled("Request cancelled by user"), "Orchestrator")
        return to_error_envelope(
            GenerationTimeout(f"No result after {self._request_timeout:.0f}s"),
            "Orchestrator",
        )

    async def _dispatch(
        self,
        handle: StrategyHandle,
        prompt: str,
        mode: Mode,
        attachment: Attachment | None,
        cancel: asyncio.Event,
    ) -> StructuredResponse:
        if handle.kind is StrategyKind.VIDEO:
            return await self._video.generate(prompt, mode, cancel=cancel)
        if handle.kind is StrategyKind.IMAGE:
            return await self._image.generate_image(prompt, volumetric=handle.volumetric)
        if handle.kind is StrategyKind.EDIT:
            return await self._edit.generate(prompt, mode, attachment)
        return await self._conversational.generate(prompt, mode, attachment)

    def _append_assistant(self, response: StructuredResponse) -> None:
        self._conversation.append(
            Message(
                id=str(uuid.uuid4()),
                role="assistant",
                display_text=response.narrative,
                created_at=datetime.now(timezone.utc),
                structured_response=response,
            )
        )
