"""PNG -> WebP conversion tools."""

from __future__ import annotations

import logging
from typing import Any

from webp_converter import ConversionError, decode_image_data, encode_webp, to_data_url
from webp_toolkit import (
    BooleanValidator,
    NumberValidator,
    ObjectValidator,
    StringValidator,
    ToolContext,
    ToolDescriptor,
    ToolRegistryEntry,
)

logger = logging.getLogger(__name__)

IMAGE_FILE_FIELD = "imageFile"


def _quality() -> NumberValidator:
    return NumberValidator(minimum=1, maximum=100, integer=True)


PNG_TO_WEBP = ToolDescriptor(
    name="PngToWebpTool",
    description="Convert a base64-encoded PNG image to WebP.",
    schema=ObjectValidator({
        "imageData": StringValidator(
            description="Base64 encoded PNG image data (data:image/png;base64,... format)",
        ),
        "quality": _quality().default(80).describe(
            "WebP image quality (1-100, higher is better)"
        ),
        "lossless": BooleanValidator().default(True).describe(
            "Use lossless compression (default: true)"
        ),
        "animated": BooleanValidator().default(False).describe(
            "Keep animation frames (default: false)"
        ),
    }),
)

PNG_FILE_TO_WEBP = ToolDescriptor(
    name="PngFileToWebpTool",
    description="Convert an uploaded PNG file to WebP and return it as base64.",
    schema=ObjectValidator({
        "quality": _quality().default(80).describe(
            "WebP image quality (1-100, default: 80)"
        ),
        "lossless": BooleanValidator().default(True).describe(
            "Use lossless compression (default: true)"
        ),
        "animated": BooleanValidator().default(False).describe(
            "Keep animation frames (default: false)"
        ),
    }),
    attachment=IMAGE_FILE_FIELD,
)


def png_to_webp(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
    try:
        image_bytes = decode_image_data(params["imageData"])
        result = encode_webp(
            image_bytes,
            quality=params["quality"],
            lossless=params["lossless"],
            animated=params["animated"],
        )
    except ConversionError as e:
        logger.warning("PNG to WebP conversion failed: %s", e)
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "dataUrl": to_data_url(result.data),
        "metadata": result.metadata(),
    }


def png_file_to_webp(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
    attachment = context.attachment
    if attachment is None:
        return {
            "success": False,
            "error": f"No image was uploaded. Send the file in the '{IMAGE_FILE_FIELD}' field.",
        }

    try:
        result = encode_webp(
            attachment.data,
            quality=params["quality"],
            lossless=params["lossless"],
            animated=params["animated"],
        )
    except ConversionError as e:
        logger.warning("Uploaded file %s failed to convert: %s", attachment.filename, e)
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "webpBase64": to_data_url(result.data),
        "metadata": result.metadata(),
    }


CONVERSION_TOOLS = (
    ToolRegistryEntry(PNG_TO_WEBP, png_to_webp, route="png_to_webp"),
    ToolRegistryEntry(PNG_FILE_TO_WEBP, png_file_to_webp, route="png_file_to_webp"),
)
