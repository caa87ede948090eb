"""Callback implementations for the Gradio interface."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Optional

import gradio as gr

from config.settings import AppConfig
from modules.optimization.customization import Customization
from modules.services.history_service import GenerationHistory
from modules.services.image_service import ImageService
from modules.ui.controller import InteractionController
from modules.ui.state import Mode, SessionState
from modules.utils.cache import TTLCache
from modules.utils.image_utils import decode_data_uri, generate_thumbnail

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "AIVerse is creating your vision..."
RESULT_MESSAGE = "Your vision is ready."
CAPTION_LENGTH = 48

MODE_DESCRIPTIONS = {
    Mode.GENERATE: (
        "Craft entirely new visuals from your imagination. Describe any scene, character, "
        "or concept, and watch it come to life."
    ),
    Mode.EDIT: (
        "Transform existing images with precision. Upload a photo, then describe your desired "
        "changes, from outfits and backgrounds to specific features."
    ),
}

PLACEHOLDERS = {
    Mode.GENERATE: (
        "#### Create From Imagination\n"
        "Use the panel on the left to describe a new image.\n\n"
        "*Example: \"A knight in shimmering silver armor standing on a cliff overlooking "
        "a stormy sea, cinematic lighting.\"*"
    ),
    Mode.EDIT: (
        "#### Transform Your Image\n"
        "Upload a photo and describe the changes you want to see.\n\n"
        "*Example: \"Change the background to a futuristic cityscape at night. "
        "Make the jacket black leather.\"*"
    ),
}


def status_message(state: SessionState) -> str:
    """Return the markdown shown next to the result image."""
    if state.loading:
        return LOADING_MESSAGE
    if state.error:
        return f"### Error\n{state.error}"
    if state.notice:
        return state.notice
    if state.result:
        return RESULT_MESSAGE
    return PLACEHOLDERS[state.mode]


def _safe_decode(uri: Optional[str]) -> Any:
    try:
        return decode_data_uri(uri)
    except ValueError as exc:
        logger.warning("Could not display image: %s", exc)
        return None


def _caption(prompt: str) -> str:
    text = " ".join(prompt.split())
    if len(text) <= CAPTION_LENGTH:
        return text
    return text[: CAPTION_LENGTH - 1].rstrip() + "…"


def render_view(state: SessionState) -> tuple[Any, Any, str, list[tuple[Any, str]]]:
    """Project session state onto (preview, result, status, gallery).

    The prompt box is owned by the browser and only written on a mode switch.
    """
    gallery: list[tuple[Any, str]] = []
    for entry in state.history:
        image = _safe_decode(entry.image)
        if image is not None:
            gallery.append((generate_thumbnail(image), _caption(entry.prompt)))
    return (
        _safe_decode(state.preview),
        _safe_decode(state.result),
        status_message(state),
        gallery,
    )


def build_callbacks(
    config: AppConfig,
    service: ImageService,
    sessions: Optional[TTLCache[str, InteractionController]] = None,
) -> dict[str, Any]:
    """Return a dictionary of Gradio callback functions."""

    cache: TTLCache[str, InteractionController] = (
        sessions if sessions is not None else TTLCache(ttl_seconds=config.session_ttl_seconds)
    )

    def _new_controller() -> InteractionController:
        return InteractionController(
            service,
            history=GenerationHistory(limit=config.history_limit),
            default_aspect_ratio=config.default_aspect_ratio,
        )

    def _session_key(request: Optional[gr.Request]) -> str:
        return str(getattr(request, "session_hash", None) or "default")

    def _controller(request: Optional[gr.Request]) -> InteractionController:
        return cache.get_or_create(_session_key(request), _new_controller)

    def on_mode_change(mode: str, request: gr.Request) -> tuple[Any, ...]:
        controller = _controller(request)
        controller.set_mode(mode)
        current = controller.state.mode
        return (
            controller.state.prompt,
            *render_view(controller.state),
            MODE_DESCRIPTIONS[current],
            gr.update(visible=current is Mode.EDIT),
            gr.update(visible=current is Mode.GENERATE),
            None,
        )

    async def on_upload(file_path: Optional[str], request: gr.Request) -> tuple[Any, ...]:
        controller = _controller(request)
        await controller.set_uploaded_file(file_path or None)
        return render_view(controller.state)

    async def on_submit(
        prompt: str,
        aspect_ratio: str,
        hair_color: str,
        eye_color: str,
        facial_structure: str,
        request: gr.Request,
    ) -> AsyncIterator[tuple[Any, ...]]:
        """Yield a loading view while the request runs, then the final view."""
        controller = _controller(request)
        controller.set_prompt(prompt)
        if aspect_ratio:
            try:
                controller.set_aspect_ratio(aspect_ratio)
            except ValueError:
                logger.warning("Ignoring unknown aspect ratio %r", aspect_ratio)
        controller.set_customization(
            Customization(
                hair_color=hair_color or "",
                eye_color=eye_color or "",
                facial_structure=facial_structure or "",
            )
        )
        task = asyncio.create_task(controller.submit())
        # Let submit run up to its first await so a started request shows as loading.
        await asyncio.sleep(0)
        if controller.state.loading:
            yield (*render_view(controller.state), gr.update(interactive=False))
        outcome = await task
        logger.info("Submission finished: %s", outcome.value)
        yield (*render_view(controller.state), gr.update(interactive=not controller.state.loading))

    def on_select_history(evt: gr.SelectData, request: gr.Request) -> tuple[Any, ...]:
        controller = _controller(request)
        index = evt.index[0] if isinstance(evt.index, (list, tuple)) else evt.index
        try:
            controller.select_history_index(int(index))
        except (IndexError, TypeError, ValueError):
            logger.warning("History selection out of range: %r", evt.index)
        return render_view(controller.state)

    def on_session_end(request: gr.Request) -> None:
        cache.pop(_session_key(request))

    return {
        "on_mode_change": on_mode_change,
        "on_upload": on_upload,
        "on_submit": on_submit,
        "on_select_history": on_select_history,
        "on_session_end": on_session_end,
    }
