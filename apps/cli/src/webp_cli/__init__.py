"""
Command-line launcher for the WebP MCP server.

Deployment:
    pip install webp-mcp
    webp-mcp --port 10000
"""

from .cli import cli, main

__all__ = ["cli", "main"]
