"""Video synthesis strategy: submit a job, then poll until it completes."""

import asyncio
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..logging_config import get_logger
from ..llm import IMediaBackend, VideoJob
from ..models import Attachment, GeneratedMedia, Mode, StructuredResponse
from .errors import GenerationCancelled, GenerationTimeout, MalformedResponseError, to_error_envelope

logger = get_logger(__name__)

RESOLUTION = "720p"
ASPECT_RATIO = "16:9"
VIDEO_MIME_TYPE = "video/mp4"


@dataclass(frozen=True)
class PollBudget:
    """Upper bounds for one poll loop."""

    interval: float = 5.0
    max_polls: int = 120
    max_wait: float = 600.0


def with_access_key(uri: str, key: str | None) -> str:
    """Append the access key as a ``key`` query parameter."""
    if not key:
        return uri
    parts = urlsplit(uri)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "key"]
    query.append(("key", key))
    return urlunsplit(parts._replace(query=urlencode(query)))


class VideoStrategy:
    """Long-running video generation with a bounded poll loop."""

    def __init__(
        self,
        media_backend: IMediaBackend,
        access_key: str | None = None,
        budget: PollBudget | None = None,
    ):
        self._backend = media_backend
        self._access_key = access_key
        self._budget = budget or PollBudget()

    async def generate(
        self,
        prompt: str,
        mode: Mode = Mode.VIDEO,
        attachment: Attachment | None = None,
        cancel: asyncio.Event | None = None,
    ) -> StructuredResponse:
        """Submit a video job and wait for the result URI."""
        try:
            job = await self._backend.submit_video(
                prompt,
                resolution=RESOLUTION,
                aspect_ratio=ASPECT_RATIO,
            )
            job = await self._wait_for(job, cancel)

            if not job.result_uri:
                raise MalformedResponseError("Video generation failed to return a URI.")

            return StructuredResponse(
                narrative="Visual sequence materialized. Rendering high-fidelity motion stream.",
                visual_cues=["(cinematic-fade)", "(play-video)"],
                domain="Video Production",
                impact_score=95,
                analysis=f'Generated {RESOLUTION} video based on prompt: "{prompt}".',
                widgets=[],
                suggested_actions=["Download Video", "Generate Variations", "Extend Clip"],
                export_options=["MP4"],
                generated_media=GeneratedMedia(
                    kind="video",
                    url=with_access_key(job.result_uri, self._access_key),
                    mime_type=VIDEO_MIME_TYPE,
                ),
            )
        except Exception as e:
            return to_error_envelope(e, "Video Generation")

    async def _wait_for(self, job: VideoJob, cancel: asyncio.Event | None) -> VideoJob:
        loop = asyncio.get_running_loop()
        started = loop.time()
        polls = 0

        while not job.done:
            if cancel is not None and cancel.is_set():
                raise GenerationCancelled(f"Video job {job.job_id} cancelled")
            if polls >= self._budget.max_polls:
                raise GenerationTimeout(
                    f"Video job {job.job_id} not done after {polls} polls"
                )
            if loop.time() - started >= self._budget.max_wait:
                raise GenerationTimeout(
                    f"Video job {job.job_id} not done after {self._budget.max_wait:.0f}s"
                )

            await self._pause(cancel)
            if cancel is not None and cancel.is_set():
                raise GenerationCancelled(f"Video job {job.job_id} cancelled")

            job = await self._backend.poll_video(job)
            polls += 1
            logger.debug("Video job %s poll %d: done=%s", job.job_id, polls, job.done)

        logger.info("Video job %s finished after %d polls", job.job_id, polls, extra={"job_id": job.job_id})
        return job

    async def _pause(self, cancel: asyncio.Event | None) -> None:
        if cancel is None:
            await asyncio.sleep(self._budget.interval)
            return
        try:
            await asyncio.wait_for(cancel.wait(), timeout=self._budget.interval)
        except asyncio.TimeoutError:
            pass
