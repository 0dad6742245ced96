"""MCP stdio server for the n8n workflow tools."""
