"""
Schema reflection for the discovery endpoint.

Turns a tool's object schema into a JSON-Schema-like document:

    {
        "type": "object",
        "properties": {name: {"type", "default"?, "description"?, "optional"?}},
        "required": [names...],      # omitted when empty
    }

Nested object and array validators are reported by kind only; their
contents are not expanded.
"""

from __future__ import annotations

from typing import Any

from .errors import UnsupportedSchemaShape
from .schema import (
    Defaulted,
    ObjectValidator,
    Optional,
    ParameterDescriptor,
    ToolDescriptor,
    Validator,
)

PRIMITIVE_KINDS = frozenset({"string", "number", "boolean"})


def kind_label(validator: Validator) -> str:
    if validator.kind in PRIMITIVE_KINDS:
        return validator.kind
    # validators that never declared a kind are labelled by class name
    name = validator.kind if validator.kind != "any" else type(validator).__name__
    return name.removesuffix("Validator").lower() or "any"


def describe_parameter(name: str, validator: Validator) -> ParameterDescriptor:
    """Unwrap one optional layer, then one default layer, then classify."""
    current = validator
    is_optional = False
    has_default = False
    default_value: Any = None

    if isinstance(current, Optional):
        is_optional = True
        current = current.inner

    if isinstance(current, Defaulted):
        has_default = True
        default_value = current.default_value()
        current = current.inner

    kind = kind_label(current)

    return ParameterDescriptor(
        name=name,
        validator=current,
        kind=kind,
        is_optional=is_optional,
        has_default=has_default,
        default_value=default_value,
        description=current.description,
    )


def describe_parameters(schema: Validator | ToolDescriptor) -> list[ParameterDescriptor]:
    if isinstance(schema, ToolDescriptor):
        schema = schema.schema

    if not isinstance(schema, ObjectValidator) or schema.shape is None:
        raise UnsupportedSchemaShape(
            "Only object schemas are currently supported for detailed discovery."
        )

    return [describe_parameter(name, v) for name, v in schema.shape.items()]


def property_info(param: ParameterDescriptor) -> dict[str, Any]:
    info: dict[str, Any] = {"type": param.kind}
    if param.has_default:
        info["default"] = param.default_value
    if param.description:
        info["description"] = param.description
    if not param.is_required:
        info["optional"] = True
    return info


def reflect(schema: Validator | ToolDescriptor) -> dict[str, Any]:
    """Build the discovery document for a schema or tool descriptor."""
    properties: dict[str, Any] = {}
    required: list[str] = []

    for param in describe_parameters(schema):
        properties[param.name] = property_info(param)
        if param.is_required:
            required.append(param.name)

    doc: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        doc["required"] = required
    return doc
