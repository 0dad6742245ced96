"""Tool Adapters.

Available adapters:
- n8n: workflow creation, lifecycle and webhook execution against n8n
"""

__all__ = ["n8n"]
