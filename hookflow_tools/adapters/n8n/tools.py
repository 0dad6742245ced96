"""n8n tools.

One class per catalog entry. Each receives an already-validated input model.
REST failures surface as McpError(INTERNAL_ERROR); webhook failures come back
as data.
"""

from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData

from hookflow_config.settings import Settings
from hookflow_obs.logging import get_logger
from hookflow_tools.base import ToolMetadata

from .client import N8nApiClient
from .exceptions import N8nAPIError
from .graph import build_workflow
from .schemas import (
    CreatedWorkflowSummary,
    CreateWorkflowInput,
    CreateWorkflowOutput,
    ExecuteWebhookInput,
    ListWorkflowsInput,
    StatusChangeOutput,
    WorkflowIdInput,
)
from .webhook import N8nWebhookInvoker

logger = get_logger(__name__)


def internal_error(action: str, exc: N8nAPIError) -> McpError:
    return McpError(
        ErrorData(code=INTERNAL_ERROR, message=f"Failed to {action} workflow: {exc.message}")
    )


class CreateWorkflowTool:
    """Builds a webhook-triggered workflow, creates it, then activates it."""

    name = "create_workflow"
    description = (
        "Create a new n8n workflow with automatic webhook triggers. All workflows are "
        "created with webhook triggers and auto-activated for immediate execution."
    )
    metadata = ToolMetadata()
    input_model = CreateWorkflowInput

    def __init__(self, client: N8nApiClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def execute(self, ctx: dict[str, Any], input_obj: CreateWorkflowInput) -> dict[str, Any]:
        built = build_workflow(
            name=input_obj.name,
            description=input_obj.description,
            nodes=input_obj.nodes,
            connections=input_obj.connections,
            provenance=self.settings.WORKFLOW_PROVENANCE_TAG,
        )

        # Two phases, no rollback: a failed activation leaves an inactive workflow behind.
        try:
            created = await self.client.create_workflow(built.document)
        except N8nAPIError as e:
            raise internal_error("create", e) from e

        workflow_id = str(created["id"])
        try:
            await self.client.activate_workflow(workflow_id)
        except N8nAPIError as e:
            logger.warning(
                "workflow_created_but_not_activated",
                call_id=ctx.get("call_id"),
                workflow_id=workflow_id,
                error=e.message,
            )
            raise internal_error("create", e) from e

        output = CreateWorkflowOutput(
            workflow=CreatedWorkflowSummary(
                id=workflow_id,
                name=input_obj.name,
                description=input_obj.description,
                active=True,
                webhook_path=built.webhook_path,
                production_url=f"{self.settings.webhook_url}/{built.webhook_path}",
                test_url=f"{self.settings.webhook_test_url}/{built.webhook_path}",
                nodes=built.node_count,
                connections=built.connection_count,
            )
        )
        return output.model_dump(by_alias=True)


class ExecuteWorkflowWebhookTool:
    """Triggers a workflow through its webhook URL."""

    name = "execute_workflow_webhook"
    description = (
        "Execute an n8n workflow via its webhook URL. Works with both production "
        "and test webhook URLs."
    )
    metadata = ToolMetadata()
    input_model = ExecuteWebhookInput

    def __init__(self, invoker: N8nWebhookInvoker):
        self.invoker = invoker

    async def execute(self, ctx: dict[str, Any], input_obj: ExecuteWebhookInput) -> dict[str, Any]:
        response = await self.invoker.execute(
            webhook_url=input_obj.webhook_url,
            payload=input_obj.payload,
            use_test_url=input_obj.use_test_url,
        )
        return response.to_result()


class ListWorkflowsTool:
    name = "list_workflows"
    description = "List all workflows from n8n"
    metadata = ToolMetadata(read_only=True, idempotent=True)
    input_model = ListWorkflowsInput

    def __init__(self, client: N8nApiClient):
        self.client = client

    async def execute(self, ctx: dict[str, Any], input_obj: ListWorkflowsInput) -> Any:
        try:
            return await self.client.list_workflows()
        except N8nAPIError as e:
            raise McpError(
                ErrorData(code=INTERNAL_ERROR, message=f"Failed to list workflows: {e.message}")
            ) from e


class GetWorkflowTool:
    name = "get_workflow"
    description = "Get a workflow by ID"
    metadata = ToolMetadata(read_only=True, idempotent=True)
    input_model = WorkflowIdInput

    def __init__(self, client: N8nApiClient):
        self.client = client

    async def execute(self, ctx: dict[str, Any], input_obj: WorkflowIdInput) -> Any:
        try:
            return await self.client.get_workflow(input_obj.id)
        except N8nAPIError as e:
            raise internal_error("get", e) from e


class ActivateWorkflowTool:
    name = "activate_workflow"
    description = "Activate a workflow by ID"
    metadata = ToolMetadata(idempotent=True)
    input_model = WorkflowIdInput

    def __init__(self, client: N8nApiClient):
        self.client = client

    async def execute(self, ctx: dict[str, Any], input_obj: WorkflowIdInput) -> dict[str, Any]:
        try:
            await self.client.activate_workflow(input_obj.id)
        except N8nAPIError as e:
            raise internal_error("activate", e) from e
        return StatusChangeOutput(message="Workflow activated successfully").model_dump()


class DeactivateWorkflowTool:
    name = "deactivate_workflow"
    description = "Deactivate a workflow by ID"
    metadata = ToolMetadata(idempotent=True)
    input_model = WorkflowIdInput

    def __init__(self, client: N8nApiClient):
        self.client = client

    async def execute(self, ctx: dict[str, Any], input_obj: WorkflowIdInput) -> dict[str, Any]:
        try:
            await self.client.deactivate_workflow(input_obj.id)
        except N8nAPIError as e:
            raise internal_error("deactivate", e) from e
        return StatusChangeOutput(message="Workflow deactivated successfully").model_dump()
