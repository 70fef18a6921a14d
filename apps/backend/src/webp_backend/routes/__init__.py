"""Backend HTTP routes."""

from .api import api_bp
from .mcp import mcp_bp

__all__ = ["api_bp", "mcp_bp"]
