"""Gradio layout composition for generate and transform workflows."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import gradio as gr

from config.settings import AppConfig
from modules.pipelines.text2img import ASPECT_RATIO_LABELS
from modules.services.image_service import ImageService, build_image_service
from modules.ui.callbacks import MODE_DESCRIPTIONS, PLACEHOLDERS, build_callbacks
from modules.ui.state import Mode

TAGLINE = (
    "As **AIVerse 2100**, I use your vision to forge photorealistic characters. "
    "Create, customize, and evolve your digital self with unparalleled precision."
)

PROMPT_PLACEHOLDER = (
    "e.g., A cinematic photo of a futuristic royal guardian in white armor with glowing lines, "
    "city-at-night background... For transformations: Change outfit to a futuristic white armor. "
    "Keep my face exactly the same."
)


def _mode_choices() -> Sequence[tuple[str, str]]:
    return [("Create", Mode.GENERATE.value), ("Transform", Mode.EDIT.value)]


def _aspect_ratio_choices() -> Sequence[tuple[str, str]]:
    return [(label, ratio.value) for ratio, label in ASPECT_RATIO_LABELS.items()]


def build_app(config: AppConfig, service: Optional[ImageService] = None) -> Any:
    """Compose and return the Gradio application."""
    image_service = service if service is not None else build_image_service(config)
    callbacks_map = build_callbacks(config, image_service)

    with gr.Blocks(title="MythXGenesis") as demo:
        gr.Markdown("# MythXGenesis")
        gr.Markdown(TAGLINE)

        with gr.Row():
            with gr.Column():
                mode = gr.Radio(
                    label="Mode",
                    choices=_mode_choices(),
                    value=Mode.GENERATE.value,
                )
                description = gr.Markdown(MODE_DESCRIPTIONS[Mode.GENERATE])

                with gr.Column(visible=False) as upload_group:
                    upload = gr.File(
                        label="1. Upload Image (PNG or JPG)",
                        file_types=[".png", ".jpg", ".jpeg"],
                        type="filepath",
                    )
                    preview = gr.Image(label="Upload preview", type="pil", interactive=False)

                aspect_ratio = gr.Dropdown(
                    label="Aspect Ratio",
                    choices=_aspect_ratio_choices(),
                    value=config.default_aspect_ratio,
                )

                with gr.Accordion("Character Customization", open=False):
                    hair_color = gr.Textbox(
                        label="Hair Color",
                        placeholder="e.g., platinum blonde, deep crimson",
                    )
                    eye_color = gr.Textbox(
                        label="Eye Color",
                        placeholder="e.g., emerald green, piercing blue",
                    )
                    facial_structure = gr.Textbox(
                        label="Facial Structure Adjustments",
                        placeholder="e.g., sharper jawline, slightly fuller lips",
                    )

                prompt = gr.Textbox(
                    label="Describe Your Vision",
                    lines=8,
                    placeholder=PROMPT_PLACEHOLDER,
                )
                generate_btn = gr.Button("Generate", variant="primary")

            with gr.Column():
                output_image = gr.Image(label="Result", type="pil", interactive=False)
                status = gr.Markdown(PLACEHOLDERS[Mode.GENERATE])

        history = gr.Gallery(
            label="Generation History",
            columns=6,
            height="auto",
            allow_preview=False,
        )

        view_outputs = [preview, output_image, status, history]

        mode.change(
            fn=callbacks_map["on_mode_change"],
            inputs=[mode],
            outputs=[prompt, *view_outputs, description, upload_group, aspect_ratio, upload],
        )
        upload.upload(
            fn=callbacks_map["on_upload"],
            inputs=[upload],
            outputs=view_outputs,
        )
        upload.clear(
            fn=callbacks_map["on_upload"],
            inputs=[upload],
            outputs=view_outputs,
        )
        generate_btn.click(
            fn=callbacks_map["on_submit"],
            inputs=[prompt, aspect_ratio, hair_color, eye_color, facial_structure],
            outputs=[*view_outputs, generate_btn],
        )
        history.select(
            fn=callbacks_map["on_select_history"],
            inputs=None,
            outputs=view_outputs,
        )
        demo.unload(callbacks_map["on_session_end"])

    return demo
