"""Image edit strategy: vision rewrite of the prompt, then image synthesis."""

from ..logging_config import get_logger
from ..llm import ContentPart, ITextBackend
from ..models import Attachment, Mode, StructuredResponse
from .conversational import attachment_part
from .errors import to_error_envelope
from .image import ImageStrategy

logger = get_logger(__name__)


def rewrite_instruction(prompt: str) -> str:
    return (
        "Describe this image in detail. Then, considering the user's request: "
        f'"{prompt}", create a full prompt for an image generator to recreate '
        "this image with the requested changes."
    )


class EditStrategy:
    """Two-stage edit of an attached image."""

    def __init__(
        self,
        text_backend: ITextBackend,
        image_strategy: ImageStrategy,
        vision_model: str | None = None,
    ):
        self._backend = text_backend
        self._images = image_strategy
        self._vision_model = vision_model

    async def generate(
        self,
        prompt: str,
        mode: Mode = Mode.EDITOR,
        attachment: Attachment | None = None,
    ) -> StructuredResponse:
        try:
            if attachment is None or attachment.kind != "image":
                raise ValueError("Media editing needs an image attachment")

            image = attachment_part(attachment)
            derived = await self._derive_prompt(prompt, image)
        except Exception as e:
            return to_error_envelope(e, "Editor Analysis")

        return await self._images.generate_image(derived, volumetric=False)

    async def _derive_prompt(self, prompt: str, image: ContentPart) -> str:
        """Stage 1. Falls back to the user's prompt when the vision call gives nothing."""
        try:
            text = await self._backend.generate_text(
                [image, ContentPart.from_text(rewrite_instruction(prompt))],
                model=self._vision_model,
            )
        except Exception as e:
            logger.warning("Vision stage failed, editing with original prompt: %s", e, exc_info=True)
            return prompt

        if not text or not text.strip():
            logger.warning("Vision stage returned no text, editing with original prompt")
            return prompt
        return text.strip()
