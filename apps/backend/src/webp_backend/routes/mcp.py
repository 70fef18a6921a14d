"""MCP discovery, execution and prompt routes."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from .common import json_body, read_attachment, respond

logger = logging.getLogger(__name__)

mcp_bp = Blueprint("mcp", __name__, url_prefix="/mcp")


@mcp_bp.get("/discover")
def discover():
    """List every tool and prompt with its input schema."""
    service = current_app.config["mcp_service"]
    try:
        return jsonify(service.discover())
    except Exception as e:
        logger.exception("Error in /mcp/discover")
        return jsonify({
            "error": "Failed to discover tools/prompts.",
            "message": str(e),
        }), 500


@mcp_bp.post("/execute")
def execute():
    """Run a tool by name. Accepts JSON or multipart with an uploaded file."""
    service = current_app.config["mcp_service"]

    if request.is_json:
        body = json_body()
    else:
        # both fields stay text; the dispatcher decodes input
        body = {
            "toolName": request.form.get("toolName"),
            "input": request.form.get("input"),
        }

    tool_name = body.get("toolName")
    raw_input = body.get("input")

    field = None
    if isinstance(tool_name, str) and tool_name in service.tools:
        field = service.tools.resolve(tool_name).descriptor.attachment
    attachment = read_attachment(field, service.config.max_upload_bytes)

    result = service.execute(tool_name, raw_input, attachment)
    if result.error_kind is not None:
        logger.info("/mcp/execute (%s): %s", tool_name, result.error)
    return respond(result)


@mcp_bp.post("/prompt")
def prompt():
    """Render a prompt by name."""
    service = current_app.config["mcp_service"]
    body = json_body()
    return respond(service.render_prompt(body.get("promptName"), body.get("input")))
