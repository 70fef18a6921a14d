"""Flask application factory for the WebP MCP backend."""

from __future__ import annotations

import logging
import sys

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from webp_toolkit import ToolRegistry

from .config import Config
from .routes import api_bp, mcp_bp
from .services import McpService
from .tools import build_prompt_registry, build_tool_registry

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_app(
    config: Config | None = None,
    tools: ToolRegistry | None = None,
    prompts: ToolRegistry | None = None,
) -> Flask:
    """Create and configure the Flask application."""
    if config is None:
        config = Config.load()

    configure_logging()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_request_bytes
    CORS(app, resources={
        r"/api/*": {"origins": config.cors_origins},
        r"/mcp/*": {"origins": config.cors_origins},
    })

    app.config["mcp_service"] = McpService(
        config,
        tools if tools is not None else build_tool_registry(),
        prompts if prompts is not None else build_prompt_registry(),
    )

    app.register_blueprint(mcp_bp)
    app.register_blueprint(api_bp)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return jsonify({"success": False, "error": e.description}), e.code

    logger.info("WebP MCP backend initialized")
    return app
