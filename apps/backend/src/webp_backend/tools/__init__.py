"""Tools and prompts served by the backend."""

from webp_toolkit import ToolRegistry

from .conversion import CONVERSION_TOOLS, IMAGE_FILE_FIELD
from .prompts import PROMPTS


def build_tool_registry() -> ToolRegistry:
    return ToolRegistry(CONVERSION_TOOLS)


def build_prompt_registry() -> ToolRegistry:
    return ToolRegistry(PROMPTS)


__all__ = [
    "CONVERSION_TOOLS",
    "IMAGE_FILE_FIELD",
    "PROMPTS",
    "build_prompt_registry",
    "build_tool_registry",
]
