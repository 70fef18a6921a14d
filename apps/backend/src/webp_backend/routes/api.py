"""Per-tool convenience routes and server metadata."""

from __future__ import annotations

import logging

from flask import Blueprint, abort, current_app, jsonify, request

from .. import __version__
from .common import form_params, json_body, read_attachment, respond

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.get("/mcp-info")
def mcp_info():
    """Describe the server and its per-tool endpoints."""
    service = current_app.config["mcp_service"]
    return jsonify(service.info(__version__))


@api_bp.post("/<string:route>")
def run_tool(route: str):
    """Run the tool bound to this route with its own parameter object."""
    service = current_app.config["mcp_service"]

    entry = service.tool_for_route(route)
    if entry is None:
        abort(404, description=f"No tool is served at /api/{route}")

    params = json_body() if request.is_json else form_params(entry.descriptor)
    attachment = read_attachment(entry.descriptor.attachment, service.config.max_upload_bytes)

    result = service.execute(entry.name, params, attachment)
    if result.error_kind is not None:
        logger.info("/api/%s: %s", route, result.error)
    return respond(result)
