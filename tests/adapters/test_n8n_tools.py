"""Tests for the n8n tools."""

from unittest.mock import AsyncMock

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR

from hookflow_tools.adapters.n8n import (
    ActivateWorkflowTool,
    CreateWorkflowInput,
    CreateWorkflowTool,
    DeactivateWorkflowTool,
    ExecuteWebhookInput,
    ExecuteWorkflowWebhookTool,
    GetWorkflowTool,
    ListWorkflowsTool,
    N8nAPIError,
    N8nApiClient,
    N8nNotFoundError,
    N8nWebhookInvoker,
    N8nWebhookResponse,
    WorkflowIdInput,
)
from hookflow_tools.adapters.n8n.schemas import ListWorkflowsInput


@pytest.fixture
def mock_ctx():
    """Mock execution context."""
    return {"call_id": "test-call", "tool_name": "test"}


@pytest.fixture
def api_client():
    client = AsyncMock(spec=N8nApiClient)
    client.create_workflow.return_value = {"id": "wf-42", "name": "Flow", "active": False}
    client.activate_workflow.return_value = {"id": "wf-42", "active": True}
    return client


class TestCreateWorkflowTool:
    """Tests for CreateWorkflowTool."""

    @pytest.mark.asyncio
    async def test_create_and_activate(self, api_client, settings, mock_ctx):
        tool = CreateWorkflowTool(client=api_client, settings=settings)

        result = await tool.execute(mock_ctx, CreateWorkflowInput(name="Flow"))

        document = api_client.create_workflow.call_args[0][0]
        assert document.active is False
        assert len(document.nodes) == 2
        api_client.activate_workflow.assert_awaited_once_with("wf-42")

        workflow = result["workflow"]
        assert result["success"] is True
        assert result["message"] == (
            "Workflow created successfully with webhook triggers and auto-activated"
        )
        assert workflow["id"] == "wf-42"
        assert workflow["active"] is True
        assert workflow["nodes"] == 2
        assert workflow["connections"] == 1
        assert workflow["description"] == ""
        assert workflow["webhookPath"].startswith("auto-flow-")
        assert workflow["productionUrl"] == (
            f"https://n8n.example.com/webhook/{workflow['webhookPath']}"
        )
        assert workflow["testUrl"] == (
            f"https://n8n.example.com/webhook-test/{workflow['webhookPath']}"
        )

    @pytest.mark.asyncio
    async def test_counts_include_caller_graph(self, api_client, settings, mock_ctx):
        tool = CreateWorkflowTool(client=api_client, settings=settings)
        input_obj = CreateWorkflowInput.model_validate(
            {
                "name": "Flow",
                "description": "Two steps",
                "nodes": [
                    {"id": "a", "name": "A", "type": "n8n-nodes-base.set"},
                    {"id": "b", "name": "B", "type": "n8n-nodes-base.respondToWebhook"},
                ],
                "connections": [{"source": "a", "target": "b"}],
            }
        )

        result = await tool.execute(mock_ctx, input_obj)

        assert result["workflow"]["nodes"] == 4
        assert result["workflow"]["connections"] == 2
        assert result["workflow"]["description"] == "Two steps"

    @pytest.mark.asyncio
    async def test_create_failure_raises_internal_error(self, api_client, settings, mock_ctx):
        api_client.create_workflow.side_effect = N8nAPIError("request/body must have required property 'settings'", 400)
        tool = CreateWorkflowTool(client=api_client, settings=settings)

        with pytest.raises(McpError) as exc_info:
            await tool.execute(mock_ctx, CreateWorkflowInput(name="Flow"))

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert exc_info.value.error.message == (
            "Failed to create workflow: request/body must have required property 'settings'"
        )
        api_client.activate_workflow.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_activation_failure_fails_creation_without_rollback(self, api_client, settings, mock_ctx):
        api_client.activate_workflow.side_effect = N8nAPIError("Workflow has no trigger", 400)
        tool = CreateWorkflowTool(client=api_client, settings=settings)

        with pytest.raises(McpError) as exc_info:
            await tool.execute(mock_ctx, CreateWorkflowInput(name="Flow"))

        assert exc_info.value.error.message == "Failed to create workflow: Workflow has no trigger"
        api_client.create_workflow.assert_awaited_once()
        api_client.deactivate_workflow.assert_not_awaited()


class TestExecuteWorkflowWebhookTool:
    """Tests for ExecuteWorkflowWebhookTool."""

    @pytest.mark.asyncio
    async def test_failure_is_returned_not_raised(self, mock_ctx):
        invoker = AsyncMock(spec=N8nWebhookInvoker)
        invoker.execute.return_value = N8nWebhookResponse(
            success=False, error="boom", status=500, message="Workflow execution failed"
        )
        tool = ExecuteWorkflowWebhookTool(invoker=invoker)

        result = await tool.execute(
            mock_ctx,
            ExecuteWebhookInput(webhookUrl="https://n8n.example.com/webhook/x", useTestUrl=True),
        )

        assert result == {
            "success": False,
            "error": "boom",
            "status": 500,
            "message": "Workflow execution failed",
        }
        invoker.execute.assert_awaited_once_with(
            webhook_url="https://n8n.example.com/webhook/x",
            payload={},
            use_test_url=True,
        )


class TestLifecycleTools:
    """Tests for list/get/activate/deactivate."""

    @pytest.mark.asyncio
    async def test_list_returns_remote_payload(self, api_client, mock_ctx):
        api_client.list_workflows.return_value = {"data": [{"id": "1"}], "nextCursor": None}
        tool = ListWorkflowsTool(client=api_client)

        result = await tool.execute(mock_ctx, ListWorkflowsInput())

        assert result == {"data": [{"id": "1"}], "nextCursor": None}

    @pytest.mark.asyncio
    async def test_list_failure(self, api_client, mock_ctx):
        api_client.list_workflows.side_effect = N8nAPIError("unauthorized", 401)
        tool = ListWorkflowsTool(client=api_client)

        with pytest.raises(McpError) as exc_info:
            await tool.execute(mock_ctx, ListWorkflowsInput())

        assert exc_info.value.error.message == "Failed to list workflows: unauthorized"

    @pytest.mark.asyncio
    async def test_get_returns_remote_payload(self, api_client, mock_ctx):
        api_client.get_workflow.return_value = {"id": "7", "name": "Seven"}
        tool = GetWorkflowTool(client=api_client)

        result = await tool.execute(mock_ctx, WorkflowIdInput(id="7"))

        assert result == {"id": "7", "name": "Seven"}
        api_client.get_workflow.assert_awaited_once_with("7")

    @pytest.mark.asyncio
    async def test_activate_success(self, api_client, mock_ctx):
        tool = ActivateWorkflowTool(client=api_client)

        result = await tool.execute(mock_ctx, WorkflowIdInput(id="7"))

        assert result == {"success": True, "message": "Workflow activated successfully"}

    @pytest.mark.asyncio
    async def test_activate_unknown_id_surfaces_remote_message(self, api_client, mock_ctx):
        api_client.activate_workflow.side_effect = N8nNotFoundError("Not Found", 404)
        tool = ActivateWorkflowTool(client=api_client)

        with pytest.raises(McpError) as exc_info:
            await tool.execute(mock_ctx, WorkflowIdInput(id="nope"))

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert "Not Found" in str(exc_info.value)
        assert exc_info.value.error.message == "Failed to activate workflow: Not Found"

    @pytest.mark.asyncio
    async def test_deactivate_success(self, api_client, mock_ctx):
        tool = DeactivateWorkflowTool(client=api_client)

        result = await tool.execute(mock_ctx, WorkflowIdInput(id="7"))

        assert result == {"success": True, "message": "Workflow deactivated successfully"}
        api_client.deactivate_workflow.assert_awaited_once_with("7")

    @pytest.mark.asyncio
    async def test_deactivate_failure(self, api_client, mock_ctx):
        api_client.deactivate_workflow.side_effect = N8nAPIError("Server Error", 500)
        tool = DeactivateWorkflowTool(client=api_client)

        with pytest.raises(McpError, match="Failed to deactivate workflow: Server Error"):
            await tool.execute(mock_ctx, WorkflowIdInput(id="7"))
