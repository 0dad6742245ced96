"""Tool Registry."""

from typing import Any


class ToolRegistry:
    """Static tool catalog, kept in registration order."""

    def __init__(self):
        self._tools: dict[str, Any] = {}

    def register(self, tool: Any) -> None:
        """Register a tool."""
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Any | None:
        """Get tool by name."""
        return self._tools.get(name)

    def all(self) -> list[Any]:
        """All registered tools in registration order."""
        return list(self._tools.values())

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
