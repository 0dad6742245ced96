"""n8n adapter.

Provides tools for driving an n8n instance:
- Create webhook-triggered workflows (auto-activated)
- Execute workflows through their webhooks
- List, get, activate and deactivate workflows

Usage:
    from hookflow_tools.adapters.n8n import register_n8n_tools
    from hookflow_tools.registry import ToolRegistry

    registry = ToolRegistry()
    register_n8n_tools(registry, settings, api_client, invoker)
"""

from hookflow_config.settings import Settings

from .client import N8nApiClient
from .exceptions import N8nAPIError, N8nAuthError, N8nNotFoundError
from .graph import BuiltWorkflow, build_workflow, generate_webhook_path
from .schemas import (
    ConnectionTarget,
    CreateWorkflowInput,
    ExecuteWebhookInput,
    N8nWebhookResponse,
    NodeInput,
    WorkflowConnection,
    WorkflowDocument,
    WorkflowIdInput,
    WorkflowNode,
)
from .tools import (
    ActivateWorkflowTool,
    CreateWorkflowTool,
    DeactivateWorkflowTool,
    ExecuteWorkflowWebhookTool,
    GetWorkflowTool,
    ListWorkflowsTool,
)
from .webhook import N8nWebhookInvoker

__all__ = [
    # Clients
    "N8nApiClient",
    "N8nWebhookInvoker",
    # Exceptions
    "N8nAPIError",
    "N8nAuthError",
    "N8nNotFoundError",
    # Graph
    "BuiltWorkflow",
    "build_workflow",
    "generate_webhook_path",
    # Schemas
    "ConnectionTarget",
    "CreateWorkflowInput",
    "ExecuteWebhookInput",
    "N8nWebhookResponse",
    "NodeInput",
    "WorkflowConnection",
    "WorkflowDocument",
    "WorkflowIdInput",
    "WorkflowNode",
    # Tools
    "CreateWorkflowTool",
    "ExecuteWorkflowWebhookTool",
    "ListWorkflowsTool",
    "GetWorkflowTool",
    "ActivateWorkflowTool",
    "DeactivateWorkflowTool",
]


def register_n8n_tools(
    registry,
    settings: Settings,
    api_client: N8nApiClient,
    invoker: N8nWebhookInvoker,
) -> None:
    """Register the six n8n tools with the tool registry, in catalog order.

    Args:
        registry: ToolRegistry instance
        settings: Application settings
        api_client: Shared REST API client
        invoker: Shared webhook invoker
    """
    registry.register(CreateWorkflowTool(client=api_client, settings=settings))
    registry.register(ExecuteWorkflowWebhookTool(invoker=invoker))
    registry.register(ListWorkflowsTool(client=api_client))
    registry.register(GetWorkflowTool(client=api_client))
    registry.register(ActivateWorkflowTool(client=api_client))
    registry.register(DeactivateWorkflowTool(client=api_client))
