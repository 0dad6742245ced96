"""n8n adapter Pydantic schemas.

Workflow document types plus input and output schemas for all n8n tools.
Field aliases carry the camelCase names used by n8n and by tool arguments.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

TRIGGER_NODE_NAME = "Webhook Trigger"
RESPONSE_NODE_NAME = "Respond to Webhook"
RESERVED_NODE_NAMES = frozenset({TRIGGER_NODE_NAME, RESPONSE_NODE_NAME})


# ============================================================================
# WORKFLOW DOCUMENT
# ============================================================================


class WorkflowNode(BaseModel):
    """A node as n8n stores it. Unknown keys are passed through."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str
    type: str
    type_version: int | float = Field(1, alias="typeVersion")
    position: list[int | float] = Field(default_factory=lambda: [0, 0])
    parameters: dict[str, Any] = Field(default_factory=dict)


class WorkflowConnection(BaseModel):
    """Edge between two nodes, referenced by node id."""

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., description="Source node id")
    source_output: int = Field(0, ge=0, alias="sourceOutput", description="Source output index")
    target: str = Field(..., description="Target node id")
    target_input: int = Field(0, ge=0, alias="targetInput", description="Target input index")


class ConnectionTarget(BaseModel):
    """One entry of n8n's connection mapping."""

    node: str
    type: str = "main"
    index: int = 0


class WorkflowDocument(BaseModel):
    """Payload for POST /workflows."""

    name: str
    nodes: list[WorkflowNode]
    connections: dict[str, dict[str, list[list[ConnectionTarget]]]]
    active: bool = False
    settings: dict[str, Any] = Field(default_factory=dict)
    meta: dict[str, Any] = Field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ============================================================================
# CREATE WORKFLOW TOOL SCHEMAS
# ============================================================================


class NodeInput(BaseModel):
    """Caller-supplied node for create_workflow."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | None = Field(None, description="Node id (defaults to the node name)")
    name: str = Field(..., min_length=1, description="Unique node name")
    type: str = Field(..., min_length=1, description="n8n node type, e.g. n8n-nodes-base.set")
    type_version: int | float = Field(1, alias="typeVersion")
    position: Annotated[list[int | float], Field(min_length=2, max_length=2)] | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)

    def to_node(self, default_position: list[int | float]) -> WorkflowNode:
        data = self.model_dump(by_alias=True, exclude={"id", "position"})
        return WorkflowNode(
            id=self.id or self.name,
            position=self.position or default_position,
            **data,
        )


class CreateWorkflowInput(BaseModel):
    """Input schema for CreateWorkflowTool."""

    name: str = Field(..., description="Name of the workflow")
    description: str = Field("", description="Optional description of the workflow")
    nodes: list[NodeInput] = Field(
        default_factory=list,
        description="Additional nodes to include in the workflow (beyond webhook trigger)",
    )
    connections: list[WorkflowConnection] = Field(
        default_factory=list, description="Additional connections between nodes"
    )

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("nodes")
    @classmethod
    def _unique_node_names(cls, nodes: list[NodeInput]) -> list[NodeInput]:
        seen: set[str] = set()
        for node in nodes:
            if node.name in RESERVED_NODE_NAMES:
                raise ValueError(f"node name '{node.name}' is reserved")
            if node.name in seen:
                raise ValueError(f"duplicate node name '{node.name}'")
            seen.add(node.name)
        return nodes


class CreatedWorkflowSummary(BaseModel):
    """Normalized view of a created workflow."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    active: bool = True
    webhook_path: str = Field(..., alias="webhookPath")
    production_url: str = Field(..., alias="productionUrl")
    test_url: str = Field(..., alias="testUrl")
    nodes: int
    connections: int


class CreateWorkflowOutput(BaseModel):
    """Output schema for CreateWorkflowTool."""

    success: bool = True
    workflow: CreatedWorkflowSummary
    message: str = "Workflow created successfully with webhook triggers and auto-activated"


# ============================================================================
# EXECUTE WORKFLOW WEBHOOK TOOL SCHEMAS
# ============================================================================


class ExecuteWebhookInput(BaseModel):
    """Input schema for ExecuteWorkflowWebhookTool."""

    model_config = ConfigDict(populate_by_name=True)

    webhook_url: str = Field(
        ..., alias="webhookUrl", description="The webhook URL to execute (production or test)"
    )
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Optional JSON payload to send with the webhook request",
    )
    use_test_url: bool = Field(
        False,
        alias="useTestUrl",
        description="Force use of test URL even if production URL is provided",
    )

    @field_validator("payload", mode="before")
    @classmethod
    def _none_payload(cls, value: Any) -> Any:
        return {} if value is None else value


class N8nWebhookResponse(BaseModel):
    """Result of a webhook execution, successful or not."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    execution_id: str | None = Field(None, alias="executionId")
    data: Any = None
    error: Any = None
    status: int
    message: str

    def to_result(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


# ============================================================================
# LIST / GET / ACTIVATE / DEACTIVATE TOOL SCHEMAS
# ============================================================================


class ListWorkflowsInput(BaseModel):
    """Input schema for ListWorkflowsTool (no arguments)."""


class WorkflowIdInput(BaseModel):
    """Input schema for tools addressing one workflow."""

    id: str = Field(..., min_length=1, description="Workflow ID")


class StatusChangeOutput(BaseModel):
    """Output schema for activate/deactivate tools."""

    success: bool = True
    message: str
