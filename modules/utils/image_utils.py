"""Utility helpers for turning result URIs into displayable images."""

from __future__ import annotations

import base64
import binascii
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image


def decode_data_uri(uri: Optional[str]) -> Optional[Image.Image]:
    """Decode a ``data:<mime>;base64,<payload>`` URI into a PIL image."""
    if not uri:
        return None
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise ValueError("Unsupported image URI; expected a base64 data URI.")
    try:
        raw = base64.b64decode(payload, validate=True)
        image = Image.open(BytesIO(raw))
        image.load()
    except (binascii.Error, OSError) as exc:
        raise ValueError(f"Could not decode image data: {exc}") from exc
    return image


def generate_thumbnail(image: Image.Image, max_size: Tuple[int, int] = (256, 256)) -> Image.Image:
    """Create a thumbnail suitable for history previews."""
    thumb = image.copy()
    thumb.thumbnail(max_size)
    return thumb
