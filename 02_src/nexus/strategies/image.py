"""Image synthesis strategy."""

import base64

from ..logging_config import get_logger
from ..llm import IMediaBackend
from ..models import Attachment, GeneratedMedia, Mode, StructuredResponse
from .errors import MalformedResponseError, to_error_envelope

logger = get_logger(__name__)

VOLUMETRIC_PREFIX = (
    "3D render, high fidelity, unreal engine 5 style, isometric, "
    "volumetric lighting, 8k resolution: "
)
ASPECT_RATIO = "16:9"
OUTPUT_MIME_TYPE = "image/jpeg"


def styled_prompt(prompt: str, volumetric: bool) -> str:
    return f"{VOLUMETRIC_PREFIX}{prompt}" if volumetric else prompt


class ImageStrategy:
    """Single-image generation, optionally in volumetric 3D style."""

    def __init__(self, media_backend: IMediaBackend):
        self._backend = media_backend

    async def generate(
        self,
        prompt: str,
        mode: Mode = Mode.IMAGE,
        attachment: Attachment | None = None,
    ) -> StructuredResponse:
        return await self.generate_image(prompt, volumetric=mode is Mode.THREE_D)

    async def generate_image(self, prompt: str, volumetric: bool = False) -> StructuredResponse:
        """Generate one image and wrap it as a data URI."""
        try:
            image_bytes = await self._backend.generate_image(
                styled_prompt(prompt, volumetric),
                aspect_ratio=ASPECT_RATIO,
                mime_type=OUTPUT_MIME_TYPE,
            )
            if not image_bytes:
                raise MalformedResponseError("Image generation failed to return bytes.")

            encoded = base64.b64encode(image_bytes).decode("ascii")
            logger.info("Generated %s image (%d bytes)", "3D" if volumetric else "flat", len(image_bytes))

            return StructuredResponse(
                narrative=(
                    "3D Topology constructed. Rendering volumetric assets."
                    if volumetric
                    else "Visual asset visualized. High-resolution render complete."
                ),
                visual_cues=["(flash)", "(reveal-image)"],
                domain="3D Modeling" if volumetric else "Creative Studio",
                impact_score=88,
                analysis=f'Generated {"3D Render" if volumetric else "Image"} for: "{prompt}".',
                widgets=[],
                suggested_actions=["Upscale", "Edit Image", "Save to Gallery"],
                export_options=["JPEG", "PNG"],
                generated_media=GeneratedMedia(
                    kind="image",
                    url=f"data:{OUTPUT_MIME_TYPE};base64,{encoded}",
                    mime_type=OUTPUT_MIME_TYPE,
                ),
            )
        except Exception as e:
            return to_error_envelope(e, "Image Generation")
