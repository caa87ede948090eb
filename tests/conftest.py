"""Shared fixtures: tiny real images and a scriptable image service stub."""

from __future__ import annotations

import asyncio
import base64
from io import BytesIO
from pathlib import Path
from typing import Callable, Optional

import pytest
from PIL import Image


def _png_bytes(color: tuple[int, int, int] = (255, 0, 0), size: tuple[int, int] = (4, 4)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class StubImageService:
    """Records calls and returns scripted results.

    ``results`` are consumed in order; once exhausted ``result`` is returned.
    When ``gate`` is set, calls block until it is released.
    """

    def __init__(
        self,
        result: Optional[str] = None,
        results: Optional[list[Optional[str]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.result = result
        self.results = list(results or [])
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.generate_calls: list[tuple[str, str]] = []
        self.edit_calls: list[tuple[str, str, str]] = []

    async def _respond(self) -> Optional[str]:
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.results:
            return self.results.pop(0)
        return self.result

    async def generate_from_text(self, prompt: str, aspect_ratio: str) -> Optional[str]:
        self.generate_calls.append((prompt, aspect_ratio))
        return await self._respond()

    async def edit_from_image(self, prompt: str, image_base64: str, mime_type: str) -> Optional[str]:
        self.edit_calls.append((prompt, image_base64, mime_type))
        return await self._respond()

    @property
    def call_count(self) -> int:
        return len(self.generate_calls) + len(self.edit_calls)


@pytest.fixture
def make_data_uri() -> Callable[..., str]:
    def _make(color: tuple[int, int, int] = (255, 0, 0)) -> str:
        payload = base64.b64encode(_png_bytes(color)).decode("ascii")
        return f"data:image/png;base64,{payload}"

    return _make


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "portrait.png"
    path.write_bytes(_png_bytes((0, 128, 255)))
    return path


@pytest.fixture
def stub_service_cls() -> type[StubImageService]:
    return StubImageService
