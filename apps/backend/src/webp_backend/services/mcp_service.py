"""
MCP service for the WebP backend.

Holds everything a request needs: the tool and prompt registries, their
dispatchers and the worker pool conversions run on. Built once by the
app factory and read-only afterwards.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from webp_toolkit import (
    Attachment,
    Dispatcher,
    ExecutionResult,
    ToolRegistry,
    ToolRegistryEntry,
    reflect,
)

from ..config import Config

logger = logging.getLogger(__name__)

SERVER_NAME = "webp-mcp"
SERVER_DESCRIPTION = "PNG to WebP image conversion MCP server"


def describe_entry(entry: ToolRegistryEntry) -> dict[str, Any]:
    return {
        "name": entry.name,
        "description": entry.descriptor.description,
        "inputSchema": reflect(entry.descriptor),
    }


class McpService:
    """Discovery and execution over the registered tools and prompts."""

    def __init__(self, config: Config, tools: ToolRegistry, prompts: ToolRegistry):
        self._config = config
        self._tools = tools
        self._prompts = prompts
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, config.workers),
            thread_name_prefix="webp-tool",
        )
        self._tool_dispatcher = Dispatcher(tools, self._executor)
        self._prompt_dispatcher = Dispatcher(prompts)
        self._routes = {e.route: e for e in tools.list() if e.route}

        logger.info(
            "McpService ready: tools=%s prompts=%s workers=%d",
            ", ".join(tools.names()), ", ".join(prompts.names()), max(1, config.workers),
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def tools(self) -> ToolRegistry:
        return self._tools

    @property
    def prompts(self) -> ToolRegistry:
        return self._prompts

    def tool_for_route(self, route: str) -> ToolRegistryEntry | None:
        return self._routes.get(route)

    def discover(self) -> dict[str, Any]:
        """Build the discovery document for every tool and prompt."""
        return {
            "tools": [describe_entry(e) for e in self._tools.list()],
            "resources": [],
            "prompts": [describe_entry(e) for e in self._prompts.list()],
        }

    def execute(
        self,
        tool_name: str | None,
        raw_input: Any = None,
        attachment: Attachment | None = None,
    ) -> ExecutionResult:
        return self._tool_dispatcher.dispatch(tool_name, raw_input, attachment)

    def render_prompt(self, prompt_name: str | None, raw_input: Any = None) -> ExecutionResult:
        return self._prompt_dispatcher.dispatch(prompt_name, raw_input)

    def info(self, version: str) -> dict[str, Any]:
        return {
            "name": SERVER_NAME,
            "version": version,
            "description": SERVER_DESCRIPTION,
            "endpoints": [
                {
                    "path": f"/api/{e.route}",
                    "method": "POST",
                    "tool": e.name,
                    "description": e.descriptor.description,
                    "attachment": e.descriptor.attachment,
                }
                for e in self._tools.list()
                if e.route
            ],
        }

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)
