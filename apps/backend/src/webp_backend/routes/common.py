"""Request parsing and response helpers shared by the blueprints."""

from __future__ import annotations

import json
from typing import Any

from flask import abort, jsonify, request
from werkzeug.utils import secure_filename

from webp_toolkit import (
    Attachment,
    ErrorKind,
    ExecutionResult,
    ToolDescriptor,
    describe_parameter,
)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.UNKNOWN_TOOL: 400,
    ErrorKind.INVALID_ENCODING: 400,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.MISSING_ATTACHMENT: 400,
    ErrorKind.UNSUPPORTED_SCHEMA_SHAPE: 500,
    ErrorKind.EXECUTION_ERROR: 500,
}

COERCED_KINDS = frozenset({"number", "boolean"})


def respond(result: ExecutionResult):
    """Serialize a dispatch result. Tool-reported failures keep status 200."""
    if result.success or result.reported_by_tool:
        status = 200
    else:
        status = STATUS_BY_KIND[result.error_kind]
    return jsonify(result.to_dict()), status


def json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        abort(400, description="Request body must be a JSON object")
    return body


def _coerce_form_value(value: str, kind: str) -> Any:
    """Form fields arrive as text; read "80" and "true" for number and boolean fields."""
    try:
        parsed = json.loads(value)
    except (ValueError, RecursionError):
        return value
    if kind == "boolean":
        return parsed if isinstance(parsed, bool) else value
    if isinstance(parsed, (int, float)) and not isinstance(parsed, bool):
        return parsed
    return value


def form_params(descriptor: ToolDescriptor) -> dict[str, Any]:
    """Collect form fields as tool parameters. Only numbers and booleans are coerced."""
    kinds = {
        name: describe_parameter(name, validator).kind
        for name, validator in descriptor.parameters.items()
    }
    params: dict[str, Any] = {}
    for key, value in request.form.items():
        kind = kinds.get(key)
        params[key] = _coerce_form_value(value, kind) if kind in COERCED_KINDS else value
    return params


def read_attachment(field: str | None, max_bytes: int) -> Attachment | None:
    """Read an uploaded file into memory, enforcing the upload ceiling."""
    if field is None:
        return None

    f = request.files.get(field)
    if f is None:
        return None

    data = f.read(max_bytes + 1)
    if len(data) > max_bytes:
        abort(413, description=f"'{field}' exceeds the {max_bytes} byte upload limit")
    if not data and not f.filename:
        return None

    return Attachment(
        field=field,
        data=data,
        filename=secure_filename(f.filename or "") or None,
        content_type=f.mimetype or None,
    )
