"""
Error taxonomy for tool discovery and dispatch.

Resolution, decoding, validation and attachment errors are raised before
a tool runs. Execution failures never leave the dispatcher as exceptions;
they only exist as an ErrorKind on an ExecutionResult.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    UNSUPPORTED_SCHEMA_SHAPE = "UnsupportedSchemaShape"
    UNKNOWN_TOOL = "UnknownTool"
    INVALID_ENCODING = "InvalidEncoding"
    VALIDATION_ERROR = "ValidationError"
    MISSING_ATTACHMENT = "MissingAttachment"
    EXECUTION_ERROR = "ExecutionError"


class ToolkitError(Exception):
    """Base exception for schema, registry and dispatch failures."""

    kind: ErrorKind = ErrorKind.EXECUTION_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedSchemaShape(ToolkitError):
    """Raised when a schema is not an object of named parameters."""

    kind = ErrorKind.UNSUPPORTED_SCHEMA_SHAPE


class UnknownTool(ToolkitError):
    """Raised when a name is not present in a registry."""

    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidEncoding(ToolkitError):
    """Raised when textual input cannot be decoded as JSON."""

    kind = ErrorKind.INVALID_ENCODING

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Invalid JSON input for {tool_name}")


class ValidationError(ToolkitError):
    """Raised when input fails a schema. Carries one issue per failing field."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, details: list[dict[str, Any]], message: str = "Invalid input"):
        self.details = details
        super().__init__(message)


class MissingAttachment(ToolkitError):
    """Raised when a tool needs a binary attachment and none was sent."""

    kind = ErrorKind.MISSING_ATTACHMENT

    def __init__(self, field: str, tool_name: str):
        self.field = field
        self.tool_name = tool_name
        super().__init__(f"'{field}' is required for {tool_name}.")
