"""Text-to-image pipeline backed by Imagen."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Union

from google.genai import types

from config.settings import AppConfig
from modules.utils.encoding import to_data_uri

logger = logging.getLogger(__name__)


class AspectRatio(str, Enum):
    """Aspect ratios accepted by the text-to-image model."""

    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    STANDARD = "4:3"
    TALL = "3:4"


ASPECT_RATIO_LABELS: dict[AspectRatio, str] = {
    AspectRatio.SQUARE: "Square (1:1) - Instagram Post, Passport",
    AspectRatio.LANDSCAPE: "Landscape (16:9) - YouTube, Facebook Cover",
    AspectRatio.PORTRAIT: "Portrait (9:16) - Instagram Story, TikTok",
    AspectRatio.STANDARD: "Standard Photo (4:3)",
    AspectRatio.TALL: "Tall Photo (3:4) - Pinterest",
}


class Text2ImageService:
    """Facade around the Imagen ``generate_images`` endpoint."""

    def __init__(self, config: AppConfig, client: Any) -> None:
        self.config = config
        self._client = client

    async def generate(self, prompt: str, aspect_ratio: Union[AspectRatio, str]) -> Optional[str]:
        """Generate one image and return it as a data URI, or None when nothing came back."""
        ratio = AspectRatio(aspect_ratio).value
        response = await self._client.aio.models.generate_images(
            model=self.config.text2img_model_id,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type=self.config.output_mime_type,
                aspect_ratio=ratio,
            ),
        )

        generated = list(getattr(response, "generated_images", None) or [])
        if not generated:
            logger.info("Text-to-image returned no images for aspect ratio %s", ratio)
            return None

        image = getattr(generated[0], "image", None)
        image_bytes = getattr(image, "image_bytes", None)
        if not image_bytes:
            return None
        return to_data_uri(image_bytes, self.config.output_mime_type)
