"""
WebP encoding through Pillow.

This module handles the conversion boundary:
1. Open and sanity-check the source image
2. Normalize its mode to something the WebP encoder accepts
3. Encode, keeping every frame only when animation is requested
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger(__name__)

MAX_DIMENSION = 16383  # WebP hard limit per side
MAX_PIXELS = 50_000_000

DEFAULT_QUALITY = 80
DEFAULT_METHOD = 6


class ConversionError(RuntimeError):
    """Raised when an image cannot be converted to WebP."""


@dataclass(frozen=True)
class WebpResult:
    """Encoded WebP bytes and what was learned about the source."""

    data: bytes
    width: int
    height: int
    original_format: str
    original_size: int
    frames: int = 1

    @property
    def encoded_size(self) -> int:
        return len(self.data)

    def metadata(self) -> dict[str, object]:
        return {
            "format": "webp",
            "width": self.width,
            "height": self.height,
            "size": self.encoded_size,
            "originalFormat": self.original_format,
            "originalSize": self.original_size,
            "encodedSize": self.encoded_size,
        }


def _normalize_mode(img: Image.Image) -> Image.Image:
    has_alpha = img.mode in ("RGBA", "LA") or (
        img.mode == "P" and "transparency" in img.info
    )
    if has_alpha:
        return img if img.mode == "RGBA" else img.convert("RGBA")
    return img if img.mode == "RGB" else img.convert("RGB")


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ConversionError(f"Image has no pixels: {width}x{height}")
    if max(width, height) > MAX_DIMENSION:
        raise ConversionError(
            f"Image too large for WebP: {width}x{height} (max side {MAX_DIMENSION})"
        )
    if width * height > MAX_PIXELS:
        raise ConversionError(
            f"Image too large: {width * height} pixels (max {MAX_PIXELS})"
        )


def encode_webp(
    image_bytes: bytes,
    quality: int | float = DEFAULT_QUALITY,
    lossless: bool = True,
    animated: bool = False,
) -> WebpResult:
    """
    Encode raw image bytes as WebP.

    Raises ConversionError: If the bytes are empty, unreadable or too large
    """
    if not image_bytes:
        raise ConversionError("Input image is empty")

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            original_format = (img.format or "unknown").lower()
            width, height = img.size
            _check_size(width, height)

            frames = getattr(img, "n_frames", 1)
            keep_frames = animated and frames > 1

            options = {
                "quality": int(round(quality)),
                "lossless": lossless,
                "method": DEFAULT_METHOD,
                "alpha_quality": 100 if lossless else DEFAULT_QUALITY,
            }

            out = io.BytesIO()
            if keep_frames:
                img.save(out, format="WEBP", save_all=True, **options)
            else:
                frame = _normalize_mode(ImageOps.exif_transpose(img))
                frame.save(out, format="WEBP", **options)
                frames = 1
    except UnidentifiedImageError as e:
        raise ConversionError(f"Unsupported or corrupt image: {e}") from e
    except Image.DecompressionBombError as e:
        raise ConversionError(str(e)) from e
    except (OSError, ValueError) as e:
        raise ConversionError(f"{type(e).__name__}: {e}") from e

    data = out.getvalue()
    logger.debug(
        "Encoded %s %dx%d (%d bytes) -> webp (%d bytes), frames=%d",
        original_format, width, height, len(image_bytes), len(data), frames,
    )
    return WebpResult(
        data=data,
        width=width,
        height=height,
        original_format=original_format,
        original_size=len(image_bytes),
        frames=frames,
    )
