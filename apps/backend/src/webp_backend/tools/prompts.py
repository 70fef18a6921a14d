"""
Prompt templates advertised through discovery.

A prompt renders instructions that point a client at one of the
conversion tools; it never converts anything itself.
"""

from __future__ import annotations

from typing import Any

from webp_toolkit import (
    BooleanValidator,
    NumberValidator,
    ObjectValidator,
    StringValidator,
    ToolContext,
    ToolDescriptor,
    ToolRegistryEntry,
)


def _quality() -> NumberValidator:
    return NumberValidator(minimum=1, maximum=100, integer=True).describe(
        "Quality of the WebP image (1-100)"
    )


GET_WEBP_FROM_PNG = ToolDescriptor(
    name="GetWebpFromPngPrompt",
    description="Takes a URL of a PNG image and returns a WebP image.",
    schema=ObjectValidator({
        "imageUrl": StringValidator(
            url=True, description="URL of the PNG image to convert to WebP"
        ),
        "quality": _quality().default(80),
    }),
)

GET_WEBP_FROM_BASE64_PNG = ToolDescriptor(
    name="GetWebpFromBase64PngPrompt",
    description="Takes base64 encoded PNG image data and returns a WebP image.",
    schema=ObjectValidator({
        "imageData": StringValidator(
            description="Base64 encoded PNG image data (data:image/png;base64,... format)"
        ),
        "quality": _quality().default(80),
        "lossless": BooleanValidator(description="Use lossless compression").default(False),
    }),
)

GET_WEBP_FROM_PNG_FILE = ToolDescriptor(
    name="GetWebpFromPngFilePrompt",
    description="Takes a PNG file (identified by a path or URL) and returns a WebP image.",
    schema=ObjectValidator({
        "fileIdentifier": StringValidator(
            min_length=1,
            description=(
                "Identifier for the PNG file (a local path or a URL accessible to "
                "the prompt executor)"
            ),
        ),
        "quality": _quality().default(80),
        "lossless": BooleanValidator(description="Use lossless compression").default(False),
    }),
)


def _compression(params: dict[str, Any]) -> str:
    return "lossless" if params.get("lossless") else "lossy"


def _render(description: str, text: str) -> dict[str, Any]:
    return {
        "success": True,
        "description": description,
        "messages": [{"role": "user", "content": {"type": "text", "text": text}}],
    }


def get_webp_from_png(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
    return _render(
        GET_WEBP_FROM_PNG.description,
        f"Download the PNG image at {params['imageUrl']} and convert it to WebP "
        f"with quality {params['quality']} using the PngToWebpTool.",
    )


def get_webp_from_base64_png(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
    return _render(
        GET_WEBP_FROM_BASE64_PNG.description,
        f"Convert the attached base64 PNG data ({len(params['imageData'])} characters) "
        f"to {_compression(params)} WebP with quality {params['quality']} "
        "using the PngToWebpTool.",
    )


def get_webp_from_png_file(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
    return _render(
        GET_WEBP_FROM_PNG_FILE.description,
        f"Upload the PNG file {params['fileIdentifier']} as 'imageFile' and convert it "
        f"to {_compression(params)} WebP with quality {params['quality']} "
        "using the PngFileToWebpTool.",
    )


PROMPTS = (
    ToolRegistryEntry(GET_WEBP_FROM_PNG, get_webp_from_png),
    ToolRegistryEntry(GET_WEBP_FROM_BASE64_PNG, get_webp_from_base64_png),
    ToolRegistryEntry(GET_WEBP_FROM_PNG_FILE, get_webp_from_png_file),
)
