"""
WebP MCP Backend - Flask API for tool discovery and execution

This app is deployed as a single process. It:
1. Lists the conversion tools and prompts with their input schemas
2. Validates and runs tool calls by name
3. Serves one convenience endpoint per tool

Deployment:
    pip install webp-mcp
    webp-mcp --port 10000
"""

__version__ = "1.0.0"

from .app import create_app
from .config import Config

__all__ = ["create_app", "Config", "__version__"]
