"""
Structured Logging (structlog).

Logs are written to stderr: stdout is reserved for the MCP stdio stream.
Every event carries the MCP server name and version so several servers
logging into one collector stay distinguishable.
"""

import logging
import sys
from typing import Any

import structlog

from hookflow_config.settings import Settings


def add_server_identity(server_name: str, server_version: str):
    """Build a processor stamping ``server`` and ``server_version`` onto events.

    Values bound explicitly on a logger win over the defaults.
    """

    def processor(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("server", server_name)
        event_dict.setdefault("server_version", server_version)
        return event_dict

    return processor


def setup_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging on stderr.

    LOG_FORMAT selects JSON lines or plain console text.
    """
    logging.basicConfig(
        format="%(message)s", stream=sys.stderr, level=settings.LOG_LEVEL.upper()
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_server_identity(settings.MCP_SERVER_NAME, settings.MCP_SERVER_VERSION),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured logger."""
    return structlog.get_logger(name)
