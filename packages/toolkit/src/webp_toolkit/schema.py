"""
Parameter schemas for tools and prompts.

A schema is a tree of validators. Leaves check one primitive kind
(string, number, boolean) or a container (object, array). Two wrappers
change how absence is handled:

    Optional(inner)          absent -> None
    Defaulted(inner, value)  absent -> a fresh copy of value

A bare validator is required. Wrappers are declared when a tool is
registered, so discovery never has to guess at validator internals.

Example:
    ObjectValidator({
        "imageData": StringValidator(description="Base64 PNG data"),
        "quality": NumberValidator(minimum=1, maximum=100).default(80),
    })
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlparse

from .errors import ValidationError


def issue(code: str, message: str, path: list[Any] | None = None) -> dict[str, Any]:
    return {"code": code, "path": list(path or []), "message": message}


def type_name(value: Any) -> str:
    """Name a raw value the way JSON would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__.lower()


class Validator:
    """Base validator. Subclasses set ``kind`` and implement ``_check``."""

    kind: str = "any"

    def __init__(self, description: str | None = None):
        self.description = description

    def parse(self, value: Any) -> Any:
        """Return the coerced value or raise ValidationError."""
        if value is None:
            raise ValidationError([issue("invalid_type", "Required")])
        return self._check(value)

    def _check(self, value: Any) -> Any:
        return value

    def _type_error(self, value: Any) -> ValidationError:
        return ValidationError([
            issue("invalid_type", f"Expected {self.kind}, received {type_name(value)}")
        ])

    def describe(self, text: str) -> Validator:
        clone = copy.copy(self)
        clone.description = text
        return clone

    def optional(self) -> Optional:
        return Optional(self)

    def default(self, value: Any) -> Defaulted:
        return Defaulted(self, value)


class StringValidator(Validator):
    kind = "string"

    def __init__(
        self,
        description: str | None = None,
        min_length: int | None = None,
        max_length: int | None = None,
        url: bool = False,
    ):
        super().__init__(description)
        self.min_length = min_length
        self.max_length = max_length
        self.url = url

    def _check(self, value: Any) -> str:
        if not isinstance(value, str):
            raise self._type_error(value)
        if self.min_length is not None and len(value) < self.min_length:
            raise ValidationError([issue(
                "too_small",
                f"String must contain at least {self.min_length} character(s)",
            )])
        if self.max_length is not None and len(value) > self.max_length:
            raise ValidationError([issue(
                "too_big",
                f"String must contain at most {self.max_length} character(s)",
            )])
        if self.url:
            parsed = urlparse(value)
            if not parsed.scheme or not parsed.netloc:
                raise ValidationError([issue("invalid_string", "Invalid url")])
        return value


class NumberValidator(Validator):
    kind = "number"

    def __init__(
        self,
        description: str | None = None,
        minimum: float | None = None,
        maximum: float | None = None,
        integer: bool = False,
    ):
        super().__init__(description)
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer

    def _check(self, value: Any) -> int | float:
        # bool is an int subclass; JSON never means a number by true/false
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._type_error(value)
        if isinstance(value, float) and not math.isfinite(value):
            raise ValidationError([issue("invalid_type", "Expected number, received nan")])
        if self.integer and value != int(value):
            raise ValidationError([issue("invalid_type", "Expected integer, received float")])
        if self.minimum is not None and value < self.minimum:
            raise ValidationError([issue(
                "too_small", f"Number must be greater than or equal to {self.minimum}"
            )])
        if self.maximum is not None and value > self.maximum:
            raise ValidationError([issue(
                "too_big", f"Number must be less than or equal to {self.maximum}"
            )])
        return value


class BooleanValidator(Validator):
    kind = "boolean"

    def _check(self, value: Any) -> bool:
        if not isinstance(value, bool):
            raise self._type_error(value)
        return value


class ArrayValidator(Validator):
    kind = "array"

    def __init__(self, items: Validator | None = None, description: str | None = None):
        super().__init__(description)
        self.items = items

    def _check(self, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise self._type_error(value)
        if self.items is None:
            return list(value)

        out: list[Any] = []
        problems: list[dict[str, Any]] = []
        for index, item in enumerate(value):
            try:
                out.append(self.items.parse(item))
            except ValidationError as e:
                problems.extend(_nest(e.details, index))
        if problems:
            raise ValidationError(problems)
        return out


class ObjectValidator(Validator):
    """
    Validates a mapping against a shape of named validators.

    Keys not in the shape are dropped. Absent keys and explicit nulls are
    treated the same way, so optional and defaulted fields accept both.
    """

    kind = "object"

    def __init__(
        self,
        shape: Mapping[str, Validator] | None = None,
        description: str | None = None,
    ):
        super().__init__(description)
        self.shape = shape

    def _check(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            raise self._type_error(value)
        if self.shape is None:
            return dict(value)

        out: dict[str, Any] = {}
        problems: list[dict[str, Any]] = []
        for name, validator in self.shape.items():
            try:
                out[name] = validator.parse(value.get(name))
            except ValidationError as e:
                problems.extend(_nest(e.details, name))
        if problems:
            raise ValidationError(problems)
        return out


class Wrapper(Validator):
    """A validator that changes absence handling around an inner validator."""

    def __init__(self, inner: Validator):
        self.inner = inner

    @property
    def description(self) -> str | None:
        return self.inner.description

    def describe(self, text: str) -> Validator:
        clone = copy.copy(self)
        clone.inner = self.inner.describe(text)
        return clone


class Optional(Wrapper):
    kind = "optional"

    def parse(self, value: Any) -> Any:
        # an inner wrapper (a default) still decides what absence means
        if value is None and not isinstance(self.inner, Wrapper):
            return None
        return self.inner.parse(value)


class Defaulted(Wrapper):
    kind = "default"

    def __init__(self, inner: Validator, default: Any):
        super().__init__(inner)
        self._default = default

    def default_value(self) -> Any:
        if callable(self._default):
            return self._default()
        return copy.deepcopy(self._default)

    def parse(self, value: Any) -> Any:
        if value is None:
            return self.default_value()
        return self.inner.parse(value)


def _nest(details: list[dict[str, Any]], key: Any) -> list[dict[str, Any]]:
    return [{**d, "path": [key, *d.get("path", [])]} for d in details]


@dataclass(frozen=True)
class ParameterDescriptor:
    """One reflected parameter of a tool."""

    name: str
    validator: Validator
    kind: str
    is_optional: bool = False
    has_default: bool = False
    default_value: Any = None
    description: str | None = None

    @property
    def is_required(self) -> bool:
        return not (self.is_optional or self.has_default)


@dataclass(frozen=True)
class ToolDescriptor:
    """Static declaration of a tool or prompt and its accepted parameters."""

    name: str
    description: str
    schema: Validator
    # Name of the binary attachment field the tool cannot run without.
    attachment: str | None = None

    @property
    def parameters(self) -> Mapping[str, Validator]:
        if isinstance(self.schema, ObjectValidator) and self.schema.shape is not None:
            return self.schema.shape
        return {}

    def validate(self, raw: Any) -> Any:
        return self.schema.parse({} if raw is None else raw)


