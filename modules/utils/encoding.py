"""Encode locally selected images for transmission to the image service."""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union

DEFAULT_MIME_TYPE = "application/octet-stream"


class FileReadError(OSError):
    """Raised when an uploaded file cannot be read from disk."""


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A file picked by the user, with the MIME type declared for it."""

    path: Path
    mime_type: str
    name: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "UploadedFile":
        """Describe a picked file, declaring its MIME type from the file name."""
        resolved = Path(path)
        mime_type, _ = mimetypes.guess_type(resolved.name)
        return cls(path=resolved, mime_type=mime_type or DEFAULT_MIME_TYPE, name=resolved.name)


@dataclass(frozen=True, slots=True)
class EncodedImage:
    """Base64 payload plus the MIME type it was declared with."""

    data: str
    mime_type: str

    def to_data_uri(self) -> str:
        return to_data_uri(self.data, self.mime_type)


def to_data_uri(data: Union[str, bytes], mime_type: str) -> str:
    """Build a self-contained ``data:`` URI from raw bytes or a base64 string."""
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{data}"


async def encode_file(upload: UploadedFile) -> EncodedImage:
    """Read the whole upload and return it base64-encoded.

    The read runs in a worker thread so the event loop stays responsive.
    The declared MIME type is propagated unchanged.
    """
    try:
        raw = await asyncio.to_thread(upload.path.read_bytes)
    except OSError as exc:
        raise FileReadError(f"Could not read {upload.name}: {exc.strerror or exc}") from exc
    return EncodedImage(data=base64.b64encode(raw).decode("ascii"), mime_type=upload.mime_type)
