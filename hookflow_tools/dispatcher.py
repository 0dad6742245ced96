"""Tool Dispatcher.

Request/response boundary between the MCP transport and the tools: looks a
tool up by name, validates its arguments against the tool's input model,
delegates, and serializes the result as a single text payload.
"""

import json
import time
import uuid
from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    ErrorData,
    TextContent,
    Tool as McpTool,
    ToolAnnotations,
)
from pydantic import ValidationError

from hookflow_obs.logging import get_logger
from hookflow_obs.metrics import tool_execution_duration, tool_executions_total
from hookflow_tools.registry import ToolRegistry

logger = get_logger(__name__)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class ToolDispatcher:
    """Routes MCP tool calls to registered tools."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def list_tools(self) -> list[McpTool]:
        """Describe the catalog as MCP tool descriptors."""
        return [
            McpTool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_model.model_json_schema(by_alias=True),
                annotations=ToolAnnotations(
                    readOnlyHint=tool.metadata.read_only,
                    idempotentHint=tool.metadata.idempotent,
                    destructiveHint=tool.metadata.destructive,
                    openWorldHint=tool.metadata.open_world,
                ),
            )
            for tool in self.registry.all()
        ]

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """Validate, delegate and serialize one tool call.

        Raises:
            McpError: METHOD_NOT_FOUND for unknown tools, INVALID_PARAMS for
                arguments that fail the input model, or whatever fault the
                tool itself raises.
        """
        tool = self.registry.get(name)
        if tool is None:
            logger.warning("tool_not_found", tool_name=name)
            raise McpError(
                ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}")
            )

        try:
            input_obj = tool.input_model.model_validate(arguments or {})
        except ValidationError as e:
            logger.warning("tool_arguments_invalid", tool_name=name, errors=e.error_count())
            raise McpError(
                ErrorData(
                    code=INVALID_PARAMS,
                    message=f"Invalid arguments for {name}: {_format_validation_error(e)}",
                )
            ) from e

        ctx = {"call_id": str(uuid.uuid4()), "tool_name": name}
        log = logger.bind(**ctx)
        log.info("tool_call_started")

        start = time.perf_counter()
        try:
            result = await tool.execute(ctx, input_obj)
        except Exception as e:
            tool_executions_total.labels(tool_name=name, status="failure").inc()
            log.error("tool_call_failed", error=str(e))
            raise
        finally:
            tool_execution_duration.labels(tool_name=name).observe(
                time.perf_counter() - start
            )

        tool_executions_total.labels(tool_name=name, status="success").inc()
        log.info("tool_call_completed")
        return [TextContent(type="text", text=json.dumps(result, indent=2))]
