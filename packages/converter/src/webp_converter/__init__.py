"""
WebP Conversion Engine.

This package wraps the image library that does the actual WebP
encoding. It is used only by the backend's conversion tools.

Deployment:
    pip install webp-mcp

This package has no networking dependencies. It's pure image processing.

"""

from .convert import (
    DEFAULT_QUALITY,
    MAX_DIMENSION,
    MAX_PIXELS,
    ConversionError,
    WebpResult,
    encode_webp,
)
from .data_url import decode_image_data, to_data_url

__all__ = [
    "DEFAULT_QUALITY",
    "MAX_DIMENSION",
    "MAX_PIXELS",
    "ConversionError",
    "WebpResult",
    "encode_webp",
    "decode_image_data",
    "to_data_url",
]
