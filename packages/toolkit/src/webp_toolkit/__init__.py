"""
Tool discovery and dispatch for the WebP MCP server.

The package is used by the backend for:
- Declaring tool and prompt parameters (schema)
- Building discovery documents from those declarations (reflect)
- Looking tools up by name and running them safely (registry, dispatch)

It has no web or image dependencies.

Deployment:
    pip install webp-mcp
"""

from .dispatch import (
    Attachment,
    Dispatcher,
    ExecutionResult,
    decode_input,
)
from .errors import (
    ErrorKind,
    InvalidEncoding,
    MissingAttachment,
    ToolkitError,
    UnknownTool,
    UnsupportedSchemaShape,
    ValidationError,
)
from .reflect import (
    describe_parameter,
    describe_parameters,
    reflect,
)
from .registry import (
    ToolContext,
    ToolRegistry,
    ToolRegistryEntry,
)
from .schema import (
    ArrayValidator,
    BooleanValidator,
    Defaulted,
    NumberValidator,
    ObjectValidator,
    Optional,
    ParameterDescriptor,
    StringValidator,
    ToolDescriptor,
    Validator,
)

__all__ = [
    # Schema
    "Validator",
    "StringValidator",
    "NumberValidator",
    "BooleanValidator",
    "ArrayValidator",
    "ObjectValidator",
    "Optional",
    "Defaulted",
    "ParameterDescriptor",
    "ToolDescriptor",
    # Errors
    "ErrorKind",
    "ToolkitError",
    "UnsupportedSchemaShape",
    "UnknownTool",
    "InvalidEncoding",
    "ValidationError",
    "MissingAttachment",
    # Reflection
    "reflect",
    "describe_parameter",
    "describe_parameters",
    # Registry
    "ToolContext",
    "ToolRegistry",
    "ToolRegistryEntry",
    # Dispatch
    "Attachment",
    "Dispatcher",
    "ExecutionResult",
    "decode_input",
]
