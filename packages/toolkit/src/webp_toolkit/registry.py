"""Static catalog of tools (or prompts) built once at startup."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator

from .errors import UnknownTool
from .schema import ToolDescriptor

Execute = Callable[[dict[str, Any], "ToolContext"], Any]


@dataclass(frozen=True)
class ToolContext:
    """Per-call context handed to a tool's execute function."""

    attachment: Any = None


@dataclass(frozen=True)
class ToolRegistryEntry:
    descriptor: ToolDescriptor
    execute: Execute
    # Slug for the per-tool convenience endpoint, e.g. "png_to_webp".
    route: str | None = None

    @property
    def name(self) -> str:
        return self.descriptor.name


class ToolRegistry:
    """Immutable name -> entry mapping. Names match exactly."""

    def __init__(self, entries: Iterable[ToolRegistryEntry] = ()):
        table: dict[str, ToolRegistryEntry] = {}
        for entry in entries:
            if entry.name in table:
                raise ValueError(f"Duplicate tool name detected: {entry.name}")
            table[entry.name] = entry
        self._entries = MappingProxyType(table)

    def list(self) -> list[ToolRegistryEntry]:
        return list(self._entries.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries.keys())

    def resolve(self, name: str | None) -> ToolRegistryEntry:
        if not isinstance(name, str) or name not in self._entries:
            raise UnknownTool(name)
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ToolRegistryEntry]:
        return iter(self._entries.values())
