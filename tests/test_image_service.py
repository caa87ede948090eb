"""GeminiImageService tests: delegation and error wrapping."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from config.settings import AppConfig
from modules.pipelines import client as client_module
from modules.services import image_service
from modules.services.image_service import (
    EditError,
    GeminiImageService,
    GenerationError,
    ImageServiceError,
    build_image_service,
)


class DummyText2Image:
    def __init__(self, result=None, error=None) -> None:
        self.result = result
        self.error = error
        self.calls = []

    async def generate(self, prompt, aspect_ratio):
        self.calls.append((prompt, aspect_ratio))
        if self.error:
            raise self.error
        return self.result


class DummyImage2Image:
    def __init__(self, result=None, error=None) -> None:
        self.result = result
        self.error = error
        self.calls = []

    async def edit(self, prompt, image_base64, mime_type):
        self.calls.append((prompt, image_base64, mime_type))
        if self.error:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_delegates_to_pipelines():
    text = DummyText2Image(result="data:image/png;base64,T")
    edit = DummyImage2Image(result="data:image/png;base64,E")
    service = GeminiImageService(text, edit)

    assert await service.generate_from_text("fox", "16:9") == "data:image/png;base64,T"
    assert await service.edit_from_image("hat", "QUJD", "image/jpeg") == "data:image/png;base64,E"
    assert text.calls == [("fox", "16:9")]
    assert edit.calls == [("hat", "QUJD", "image/jpeg")]


@pytest.mark.asyncio
async def test_generation_failure_is_wrapped(caplog):
    cause = RuntimeError("quota exceeded")
    service = GeminiImageService(DummyText2Image(error=cause), DummyImage2Image())

    with pytest.raises(GenerationError) as excinfo:
        await service.generate_from_text("fox", "1:1")

    assert str(excinfo.value) == "Failed to generate image from text."
    assert excinfo.value.__cause__ is cause
    assert isinstance(excinfo.value, ImageServiceError)
    assert "Error generating image" in caplog.text


@pytest.mark.asyncio
async def test_edit_failure_is_wrapped():
    cause = ConnectionError("reset by peer")
    service = GeminiImageService(DummyText2Image(), DummyImage2Image(error=cause))

    with pytest.raises(EditError, match="Failed to edit image."):
        await service.edit_from_image("hat", "QUJD", "image/png")


def test_build_image_service_shares_client():
    client = SimpleNamespace(aio=SimpleNamespace(models=None))

    service = build_image_service(AppConfig(), client=client)

    assert service.text2img._client is client
    assert service.image2img._client is client


def test_build_image_service_creates_client_from_config(monkeypatch):
    created = []

    def fake_create_client(config):
        created.append(config)
        return SimpleNamespace(aio=None)

    monkeypatch.setattr(image_service, "create_client", fake_create_client)
    config = AppConfig(api_key="secret")

    service = build_image_service(config)

    assert created == [config]
    assert service.text2img.config is config


def test_create_client_warns_without_key(monkeypatch, caplog):
    created = []
    monkeypatch.setattr(client_module.genai, "Client", lambda **kwargs: created.append(kwargs) or "client")

    assert client_module.create_client(AppConfig(api_key=None)) == "client"
    assert "API key not found" in caplog.text

    client_module.create_client(AppConfig(api_key="real-key"))
    assert created[-1] == {"api_key": "real-key"}
