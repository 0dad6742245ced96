"""Tool Interface & Metadata."""

from typing import Any, Protocol

from pydantic import BaseModel


class ToolMetadata(BaseModel):
    """Tool behaviour hints, published to MCP clients as annotations."""

    read_only: bool = False
    idempotent: bool = False
    destructive: bool = False
    open_world: bool = True


class Tool(Protocol):
    """Tool interface.

    ``input_model`` declares the argument schema. ``execute`` receives an
    already-validated instance of it and returns a JSON-serializable dict.
    """

    name: str
    description: str
    metadata: ToolMetadata
    input_model: type[BaseModel]

    async def execute(self, ctx: dict, input_obj: BaseModel) -> dict[str, Any]:
        """Execute tool action."""
        ...
