"""
Dispatcher: tool name + raw input (+ attachment) -> ExecutionResult.

Steps, in order:
1. Resolve the name in the registry.
2. Decode textual input as JSON.
3. Validate against the tool's schema (defaults applied).
4. Check the tool's attachment precondition.
5. Execute, containing any exception.

Steps 1-4 run before the tool does anything, so a rejected call has no
side effects. The dispatcher never raises; every outcome is a result.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import ErrorKind, InvalidEncoding, MissingAttachment, ToolkitError
from .registry import ToolContext, ToolRegistry, ToolRegistryEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attachment:
    """Binary payload sent alongside structured parameters."""

    field: str
    data: bytes
    filename: str | None = None
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ExecutionResult:
    """Either a success payload or a failure with a stable error kind."""

    success: bool
    payload: dict[str, Any] = field(default_factory=dict)
    error_kind: ErrorKind | None = None
    error: str | None = None
    details: list[dict[str, Any]] | None = None

    @classmethod
    def ok(cls, payload: Mapping[str, Any]) -> ExecutionResult:
        return cls(success=True, payload=dict(payload))

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        error: str,
        details: list[dict[str, Any]] | None = None,
    ) -> ExecutionResult:
        return cls(success=False, error_kind=kind, error=error, details=details)

    @classmethod
    def from_error(cls, exc: ToolkitError) -> ExecutionResult:
        return cls.failure(exc.kind, exc.message, getattr(exc, "details", None))

    @property
    def reported_by_tool(self) -> bool:
        """True when the tool itself returned success=false."""
        return not self.success and self.error_kind is None

    def to_dict(self) -> dict[str, Any]:
        if self.error_kind is None:
            return {**self.payload, "success": self.success}
        body: dict[str, Any] = {"success": False, "error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


def decode_input(tool_name: str, raw: Any) -> Any:
    """JSON-decode textual input; pass structured input through."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidEncoding(tool_name) from None
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, RecursionError):
            raise InvalidEncoding(tool_name) from None
    return raw


def is_result_shaped(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("success"), bool)


class Dispatcher:
    """Routes named calls to validated execution over one registry."""

    def __init__(self, registry: ToolRegistry, executor: Executor | None = None):
        self._registry = registry
        self._executor = executor

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def dispatch(
        self,
        tool_name: str | None,
        raw_input: Any = None,
        attachment: Attachment | None = None,
    ) -> ExecutionResult:
        try:
            entry = self._registry.resolve(tool_name)
            validated = self._prepare(entry, raw_input, attachment)
        except ToolkitError as e:
            logger.info("Rejected %s: %s (%s)", tool_name, e.message, e.kind.value)
            return ExecutionResult.from_error(e)

        try:
            value = self._run(entry, validated, ToolContext(attachment=attachment))
        except Exception as e:
            logger.exception("Tool %s failed", entry.name)
            return ExecutionResult.failure(
                ErrorKind.EXECUTION_ERROR, str(e) or "Internal server error"
            )

        if is_result_shaped(value):
            result = ExecutionResult(success=value["success"], payload=dict(value))
        else:
            result = ExecutionResult.ok({"result": value})

        logger.debug("Tool %s finished: success=%s", entry.name, result.success)
        return result

    def _prepare(
        self,
        entry: ToolRegistryEntry,
        raw_input: Any,
        attachment: Attachment | None,
    ) -> dict[str, Any]:
        descriptor = entry.descriptor
        validated = descriptor.validate(decode_input(descriptor.name, raw_input))

        if descriptor.attachment is not None and attachment is None:
            raise MissingAttachment(descriptor.attachment, descriptor.name)

        return validated

    def _run(self, entry: ToolRegistryEntry, validated: dict[str, Any], context: ToolContext) -> Any:
        if self._executor is None:
            return entry.execute(validated, context)
        return self._executor.submit(entry.execute, validated, context).result()
