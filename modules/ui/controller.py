"""Interaction controller: owns the session state and the request lifecycle."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from modules.optimization.customization import Customization, compose_prompt
from modules.pipelines.text2img import AspectRatio
from modules.services.history_service import GenerationHistory, HistoryEntry
from modules.services.image_service import ImageService
from modules.ui.state import (
    EditRequest,
    GenerateRequest,
    GenerationRequest,
    Mode,
    SessionState,
    SubmitOutcome,
)
from modules.utils.encoding import EncodedImage, FileReadError, UploadedFile, encode_file

logger = logging.getLogger(__name__)

IMAGE_REQUIRED_MESSAGE = "Please upload an image to edit."
NO_IMAGE_MESSAGE = "No image was produced. Try rephrasing your description and generate again."

Encoder = Callable[[UploadedFile], Awaitable[EncodedImage]]


class InteractionController:
    """Mediates between user input, the image service and the result history.

    At most one request is in flight per controller: ``submit`` is a no-op
    while ``state.loading`` is set. Switching mode or uploading a new file
    invalidates any in-flight request, whose late outcome is then dropped.
    """

    def __init__(
        self,
        service: ImageService,
        *,
        history: Optional[GenerationHistory] = None,
        encoder: Encoder = encode_file,
        default_aspect_ratio: Union[AspectRatio, str] = AspectRatio.SQUARE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._service = service
        self._encoder = encoder
        self._clock = clock
        self._epoch = 0
        self.state = SessionState(
            aspect_ratio=AspectRatio(default_aspect_ratio),
            history=history if history is not None else GenerationHistory(),
        )

    # Input handlers -----------------------------------------------------------
    def set_mode(self, mode: Union[Mode, str]) -> None:
        """Switch workflow and reset every input and output except history."""
        state = self.state
        state.mode = Mode(mode)
        state.prompt = ""
        state.uploaded_file = None
        state.preview = None
        state.result = None
        state.error = None
        state.notice = None
        self._epoch += 1

    async def set_uploaded_file(self, path: Union[UploadedFile, str, Path, None]) -> None:
        """Store a newly picked file and compute its preview."""
        state = self.state
        self._epoch += 1
        state.result = None
        state.error = None
        state.notice = None
        state.preview = None
        if path is None:
            state.uploaded_file = None
            return

        upload = path if isinstance(path, UploadedFile) else UploadedFile.from_path(path)
        state.uploaded_file = upload
        try:
            encoded = await self._encoder(upload)
        except FileReadError as exc:
            logger.warning("Could not build preview for %s: %s", upload.name, exc)
            if state.uploaded_file is upload:
                state.error = f"Could not read the uploaded image: {exc}"
            return
        # A newer upload may have replaced this one while it was being read.
        if state.uploaded_file is upload:
            state.preview = encoded.to_data_uri()

    def set_prompt(self, text: Optional[str]) -> None:
        self.state.prompt = text or ""

    def set_aspect_ratio(self, ratio: Union[AspectRatio, str]) -> None:
        self.state.aspect_ratio = AspectRatio(ratio)

    def set_customization(self, customization: Customization) -> None:
        self.state.customization = customization

    # History ------------------------------------------------------------------
    def select_history_entry(self, entry: HistoryEntry) -> None:
        """Show a past result again."""
        self.state.result = self.state.history.select(entry).image
        self.state.notice = None

    def select_history_index(self, index: int) -> None:
        self.select_history_entry(self.state.history.get(index))

    # Request lifecycle --------------------------------------------------------
    async def submit(self) -> SubmitOutcome:
        """Send the current inputs to the image service and record the outcome."""
        state = self.state
        if not state.prompt or state.loading:
            return SubmitOutcome.SKIPPED
        if state.mode is Mode.EDIT and state.uploaded_file is None:
            state.error = IMAGE_REQUIRED_MESSAGE
            return SubmitOutcome.INVALID

        epoch = self._epoch
        mode = state.mode
        upload = state.uploaded_file
        user_prompt = state.prompt
        prompt = compose_prompt(user_prompt, state.customization)
        aspect_ratio = state.aspect_ratio

        state.loading = True
        state.error = None
        state.result = None
        state.notice = None

        image: Optional[str] = None
        error: Optional[str] = None
        try:
            request = await self._build_request(mode, prompt, aspect_ratio, upload)
            image = await self._dispatch(request)
        except FileReadError as exc:
            logger.warning("Could not read upload for edit request: %s", exc)
            error = f"Could not read the uploaded image: {exc}"
        except Exception as exc:  # noqa: BLE001
            error = f"An error occurred: {exc}"
        finally:
            state.loading = False

        if epoch != self._epoch:
            logger.info("Discarding %s response; inputs changed while it was in flight", mode.value)
            return SubmitOutcome.STALE
        if error is not None:
            state.error = error
            return SubmitOutcome.FAILED
        if not image:
            logger.info("%s request produced no image", mode.value)
            state.notice = NO_IMAGE_MESSAGE
            return SubmitOutcome.EMPTY

        state.result = image
        state.history.prepend(
            HistoryEntry(image=image, prompt=user_prompt, mode=mode.value, created_at=self._clock())
        )
        return SubmitOutcome.SUCCEEDED

    async def _build_request(
        self,
        mode: Mode,
        prompt: str,
        aspect_ratio: AspectRatio,
        upload: Optional[UploadedFile],
    ) -> GenerationRequest:
        if mode is Mode.GENERATE:
            return GenerateRequest(prompt=prompt, aspect_ratio=aspect_ratio)
        if upload is None:
            raise ValueError(IMAGE_REQUIRED_MESSAGE)
        return EditRequest(prompt=prompt, image=await self._encoder(upload))

    async def _dispatch(self, request: GenerationRequest) -> Optional[str]:
        if isinstance(request, GenerateRequest):
            return await self._service.generate_from_text(request.prompt, request.aspect_ratio.value)
        if isinstance(request, EditRequest):
            return await self._service.edit_from_image(
                request.prompt, request.image.data, request.image.mime_type
            )
        raise TypeError(f"Unsupported request type: {type(request).__name__}")
