"""Base64 / data URL helpers for image payloads."""

from __future__ import annotations

import base64
import binascii
import re

from .convert import ConversionError

_DATA_URL_PREFIX = re.compile(r"^data:image/[A-Za-z0-9.+-]+;base64,")


def decode_image_data(text: str) -> bytes:
    """Decode base64 image data, with or without a data URL prefix."""
    payload = _DATA_URL_PREFIX.sub("", text.strip(), count=1)
    payload = "".join(payload.split())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ConversionError(f"Invalid base64 image data: {e}") from e


def to_data_url(data: bytes, mime: str = "image/webp") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
