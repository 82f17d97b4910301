"""Name-keyed registry of the tools visible to the model for one session."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from curiosity.tools.core.types import ToolDefinition
from curiosity.tools.schema import to_model_schemas


class ToolRegistry:
    """Map from tool name to definition.

    Lookup is case-insensitive because some backends change the case of
    function names they echo back.
    """

    def __init__(self, tools: Iterable[ToolDefinition] = ()) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools:
            self.register(tool)

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def register(self, tool: ToolDefinition) -> None:
        key = self._key(tool.name)
        if key in self._tools:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        self._tools[key] = tool

    def get(self, name: str | None) -> ToolDefinition | None:
        if not name:
            return None
        return self._tools.get(self._key(name))

    def has_tool(self, name: str | None) -> bool:
        return self.get(name) is not None

    def names(self) -> list[str]:
        return [tool.name for tool in self._tools.values()]

    def schemas(self) -> list[dict[str, Any]]:
        """Function schemas for every tool, ready for ``bind_tools``."""
        return to_model_schemas(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_tool(name)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
