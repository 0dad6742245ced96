"""
Hookflow Applications Package.

Contains:
- mcp_server: MCP stdio server exposing the n8n tools
"""

__version__ = "1.0.0"
