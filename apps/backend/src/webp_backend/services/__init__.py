"""Backend services."""

from .mcp_service import McpService

__all__ = ["McpService"]
