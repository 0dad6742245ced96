"""Hookflow Tool System."""

from hookflow_tools.base import Tool, ToolMetadata
from hookflow_tools.dispatcher import ToolDispatcher
from hookflow_tools.registry import ToolRegistry

__all__ = ["Tool", "ToolMetadata", "ToolDispatcher", "ToolRegistry"]
