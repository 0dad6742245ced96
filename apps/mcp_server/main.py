"""
Hookflow MCP Server Entry Point.

Serves the n8n tool catalog over the MCP stdio transport:
- Settings loaded once from the environment (N8N_API_KEY is required)
- Structured logging to stderr
- Optional Prometheus exporter
- `--check` checks the n8n API connection and exits

Usage:
    hookflow-mcp            # serve over stdio
    hookflow-mcp --check    # verify API key and base URL
"""

import argparse
import asyncio
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from hookflow_config.settings import Settings
from hookflow_obs.logging import get_logger, setup_logging
from hookflow_obs.metrics import start_metrics_server
from hookflow_tools.adapters.n8n import (
    N8nAPIError,
    N8nApiClient,
    N8nWebhookInvoker,
    register_n8n_tools,
)
from hookflow_tools.dispatcher import ToolDispatcher
from hookflow_tools.registry import ToolRegistry

logger = get_logger(__name__)


def create_server(dispatcher: ToolDispatcher, settings: Settings) -> Server:
    """Wire the dispatcher into a low-level MCP server."""
    server = Server(settings.MCP_SERVER_NAME, version=settings.MCP_SERVER_VERSION)

    @server.list_tools()
    async def _list_tools() -> list[Tool]:
        return dispatcher.list_tools()

    @server.call_tool()
    async def _call_tool(name: str, arguments: dict) -> list[TextContent]:
        return await dispatcher.call_tool(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    async with N8nApiClient(settings) as api_client, N8nWebhookInvoker(settings) as invoker:
        registry = ToolRegistry()
        register_n8n_tools(registry, settings, api_client, invoker)
        server = create_server(ToolDispatcher(registry), settings)

        if start_metrics_server(settings.METRICS_PORT):
            logger.info("metrics_exporter_started", port=settings.METRICS_PORT)

        logger.info(
            "mcp_server_starting",
            server_name=settings.MCP_SERVER_NAME,
            n8n_api_url=settings.api_url,
            tools=len(registry),
        )
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


async def check_connection(settings: Settings) -> int:
    """List workflows once to verify the API key and base URL.

    Returns:
        Process exit status (0 when n8n answered)
    """
    async with N8nApiClient(settings) as api_client:
        try:
            payload = await api_client.list_workflows()
        except N8nAPIError as e:
            print(f"n8n API connection failed: {e.message}", file=sys.stderr)
            return 1

    workflows = payload.get("data", []) if isinstance(payload, dict) else payload
    print(f"n8n API connection successful ({settings.api_url})")
    print(f"Found {len(workflows or [])} existing workflows")
    print(f"Production webhook URL format: {settings.webhook_url}/<path>")
    print(f"Test webhook URL format: {settings.webhook_test_url}/<path>")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hookflow-mcp",
        description="MCP server that creates and executes n8n workflows",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="verify the n8n API connection and exit",
    )
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ValidationError as e:
        missing = [err["loc"][0] for err in e.errors() if err["type"] == "missing"]
        if "N8N_API_KEY" in missing:
            print("N8N_API_KEY environment variable is required", file=sys.stderr)
        else:
            print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    if args.check:
        return asyncio.run(check_connection(settings))

    asyncio.run(serve(settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
