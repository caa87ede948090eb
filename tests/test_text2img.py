"""Text2ImageService unit tests."""

from __future__ import annotations

import base64
from types import SimpleNamespace

import pytest

from config.settings import AppConfig
from modules.pipelines import text2img


class DummyModels:
    """Mimics ``client.aio.models`` and captures call arguments."""

    def __init__(self, response=None) -> None:
        self.response = response
        self.called_with = None

    async def generate_images(self, **kwargs):
        self.called_with = kwargs
        return self.response


def make_client(models: DummyModels) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def imagen_response(*payloads: bytes) -> SimpleNamespace:
    return SimpleNamespace(
        generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=p)) for p in payloads]
    )


@pytest.mark.asyncio
async def test_generate_returns_png_data_uri():
    models = DummyModels(imagen_response(b"first-image", b"second-image"))
    config = AppConfig(text2img_model_id="imagen-test")
    service = text2img.Text2ImageService(config, make_client(models))

    result = await service.generate("a red fox in snow", "16:9")

    assert result == "data:image/png;base64," + base64.b64encode(b"first-image").decode("ascii")
    assert models.called_with["model"] == "imagen-test"
    assert models.called_with["prompt"] == "a red fox in snow"
    request_config = models.called_with["config"]
    assert request_config.number_of_images == 1
    assert request_config.aspect_ratio == "16:9"
    assert request_config.output_mime_type == "image/png"


@pytest.mark.asyncio
async def test_generate_accepts_enum_ratio():
    models = DummyModels(imagen_response(b"img"))
    service = text2img.Text2ImageService(AppConfig(), make_client(models))

    await service.generate("tall tower", text2img.AspectRatio.TALL)

    assert models.called_with["config"].aspect_ratio == "3:4"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        SimpleNamespace(generated_images=[]),
        SimpleNamespace(generated_images=None),
        SimpleNamespace(generated_images=[SimpleNamespace(image=None)]),
    ],
)
async def test_generate_without_images_returns_none(response):
    service = text2img.Text2ImageService(AppConfig(), make_client(DummyModels(response)))

    assert await service.generate("nothing", "1:1") is None


@pytest.mark.asyncio
async def test_generate_rejects_unknown_ratio():
    models = DummyModels(imagen_response(b"img"))
    service = text2img.Text2ImageService(AppConfig(), make_client(models))

    with pytest.raises(ValueError):
        await service.generate("wide", "21:9")
    assert models.called_with is None
