"""Image editing pipeline backed by a Gemini image model."""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from google.genai import types

from config.settings import AppConfig
from modules.utils.encoding import to_data_uri

logger = logging.getLogger(__name__)


def extract_first_image(response: Any, default_mime_type: str = "image/png") -> Optional[str]:
    """Return the first inline image of the first candidate as a data URI.

    Text parts and any later images are ignored.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        data = getattr(inline, "data", None)
        if not data:
            continue
        mime_type = getattr(inline, "mime_type", None) or default_mime_type
        return to_data_uri(data, mime_type)
    return None


class Image2ImageService:
    """Facade around ``generate_content`` with image input and image output."""

    def __init__(self, config: AppConfig, client: Any) -> None:
        self.config = config
        self._client = client

    async def edit(self, prompt: str, image_base64: str, mime_type: str) -> Optional[str]:
        """Transform the given image according to the prompt."""
        image_part = types.Part.from_bytes(data=base64.b64decode(image_base64), mime_type=mime_type)
        response = await self._client.aio.models.generate_content(
            model=self.config.edit_model_id,
            contents=[image_part, types.Part.from_text(text=prompt)],
            config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )

        result = extract_first_image(response, self.config.output_mime_type)
        if result is None:
            logger.info("Image edit response contained no image part")
        return result
