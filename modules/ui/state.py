"""Session state owned by the interaction controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from modules.optimization.customization import Customization
from modules.pipelines.text2img import AspectRatio
from modules.services.history_service import GenerationHistory
from modules.utils.encoding import EncodedImage, UploadedFile


class Mode(str, Enum):
    """The two mutually exclusive workflows."""

    GENERATE = "generate"
    EDIT = "edit"


class SubmitOutcome(str, Enum):
    """How a call to ``submit`` ended."""

    SKIPPED = "skipped"
    INVALID = "invalid"
    SUCCEEDED = "succeeded"
    EMPTY = "empty"
    FAILED = "failed"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class GenerateRequest:
    """Text-to-image request."""

    prompt: str
    aspect_ratio: AspectRatio


@dataclass(frozen=True, slots=True)
class EditRequest:
    """Image-plus-text request."""

    prompt: str
    image: EncodedImage


GenerationRequest = Union[GenerateRequest, EditRequest]


@dataclass(slots=True)
class SessionState:
    """Everything the UI renders for one browser session."""

    mode: Mode = Mode.GENERATE
    prompt: str = ""
    uploaded_file: Optional[UploadedFile] = None
    preview: Optional[str] = None
    aspect_ratio: AspectRatio = AspectRatio.SQUARE
    customization: Customization = field(default_factory=Customization)
    result: Optional[str] = None
    error: Optional[str] = None
    notice: Optional[str] = None
    loading: bool = False
    history: GenerationHistory = field(default_factory=GenerationHistory)
