"""The image service capability the interaction controller depends on."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from config.settings import AppConfig
from modules.pipelines.client import create_client
from modules.pipelines.img2img import Image2ImageService
from modules.pipelines.text2img import Text2ImageService

logger = logging.getLogger(__name__)


class ImageServiceError(RuntimeError):
    """Base class for failures reaching the remote image model."""


class GenerationError(ImageServiceError):
    """Text-to-image request could not complete."""


class EditError(ImageServiceError):
    """Image edit request could not complete."""


class ImageService(Protocol):
    """Generate-from-text and edit-from-image, each yielding a data URI or None."""

    async def generate_from_text(self, prompt: str, aspect_ratio: str) -> Optional[str]: ...

    async def edit_from_image(self, prompt: str, image_base64: str, mime_type: str) -> Optional[str]: ...


class GeminiImageService:
    """ImageService implementation over the Imagen and Gemini pipelines."""

    def __init__(self, text2img: Text2ImageService, image2img: Image2ImageService) -> None:
        self.text2img = text2img
        self.image2img = image2img

    async def generate_from_text(self, prompt: str, aspect_ratio: str) -> Optional[str]:
        try:
            return await self.text2img.generate(prompt, aspect_ratio)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error generating image")
            raise GenerationError("Failed to generate image from text.") from exc

    async def edit_from_image(self, prompt: str, image_base64: str, mime_type: str) -> Optional[str]:
        try:
            return await self.image2img.edit(prompt, image_base64, mime_type)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error editing image")
            raise EditError("Failed to edit image.") from exc


def build_image_service(config: AppConfig, client: Optional[Any] = None) -> GeminiImageService:
    """Create the Gemini-backed service, sharing one client between both pipelines."""
    shared = client if client is not None else create_client(config)
    return GeminiImageService(
        text2img=Text2ImageService(config, shared),
        image2img=Image2ImageService(config, shared),
    )
