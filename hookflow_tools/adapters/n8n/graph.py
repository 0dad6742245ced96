"""Webhook path generation and workflow graph construction.

Every workflow created through the server gets a webhook trigger as its first
node and a default "respond to webhook" node. Connections are collected as a
flat list of id-to-id edges and folded into n8n's mapping, which is keyed by
source node *name*.
"""

import json
import re
import time
import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from hookflow_obs.logging import get_logger

from .schemas import (
    RESPONSE_NODE_NAME,
    TRIGGER_NODE_NAME,
    ConnectionTarget,
    NodeInput,
    WorkflowConnection,
    WorkflowDocument,
    WorkflowNode,
)

logger = get_logger(__name__)

_UNSAFE_PATH_CHARS = re.compile(r"[^a-zA-Z0-9-]")

# Left as literal text; n8n evaluates the expression when the workflow runs.
RESPONSE_TIMESTAMP_EXPRESSION = "={{ new Date().toISOString() }}"

TRIGGER_POSITION = [250, 300]
RESPONSE_POSITION = [450, 300]
NODE_SPACING = 200


def generate_webhook_path(workflow_name: str, timestamp_ms: int | None = None) -> str:
    """Derive a webhook path from a workflow name and the current time.

    Uniqueness rests on the millisecond timestamp alone; two calls with the
    same name in the same millisecond yield the same path.
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    sanitized = _UNSAFE_PATH_CHARS.sub("-", workflow_name.lower())
    return f"auto-{sanitized}-{timestamp_ms}"


def create_webhook_trigger_node(webhook_path: str) -> WorkflowNode:
    return WorkflowNode(
        id=str(uuid.uuid4()),
        name=TRIGGER_NODE_NAME,
        type="n8n-nodes-base.webhook",
        type_version=1,
        position=list(TRIGGER_POSITION),
        parameters={
            "path": webhook_path,
            "httpMethod": "POST",
            "responseMode": "responseNode",
        },
    )


def create_response_node() -> WorkflowNode:
    body = {
        "success": True,
        "message": "Workflow executed successfully",
        "timestamp": RESPONSE_TIMESTAMP_EXPRESSION,
    }
    return WorkflowNode(
        id=str(uuid.uuid4()),
        name=RESPONSE_NODE_NAME,
        type="n8n-nodes-base.respondToWebhook",
        type_version=1,
        position=list(RESPONSE_POSITION),
        parameters={
            "respondWith": "json",
            "responseBody": json.dumps(body, indent=2),
        },
    )


def fold_connections(
    nodes: Sequence[WorkflowNode],
    connections: Sequence[WorkflowConnection],
    trigger: WorkflowNode,
) -> dict[str, dict[str, list[list[ConnectionTarget]]]]:
    """Fold id-to-id edges into n8n's ``{sourceName: {"main": [[...]]}}`` form.

    Ids missing from ``nodes`` resolve to an empty name instead of raising.
    The trigger entry is always present, even without outgoing edges.
    """
    names = {node.id: node.name for node in nodes}

    def target(conn: WorkflowConnection) -> ConnectionTarget:
        return ConnectionTarget(node=names.get(conn.target, ""), index=conn.target_input)

    mapping: dict[str, dict[str, list[list[ConnectionTarget]]]] = {
        trigger.name: {
            "main": [[target(c) for c in connections if c.source == trigger.id]]
        }
    }

    for conn in connections:
        if conn.source == trigger.id:
            continue
        slots = mapping.setdefault(names.get(conn.source, ""), {"main": []})["main"]
        while len(slots) <= conn.source_output:
            slots.append([])
        slots[conn.source_output].append(target(conn))

    return mapping


@dataclass
class BuiltWorkflow:
    """A workflow document plus what the caller needs after creating it."""

    document: WorkflowDocument
    webhook_path: str
    connections: list[WorkflowConnection]

    @property
    def node_count(self) -> int:
        return len(self.document.nodes)

    @property
    def connection_count(self) -> int:
        return len(self.connections)


def build_workflow(
    name: str,
    description: str = "",
    nodes: Sequence[NodeInput] = (),
    connections: Sequence[WorkflowConnection] = (),
    provenance: str = "n8n-mcp-execution-server",
    timestamp_ms: int | None = None,
) -> BuiltWorkflow:
    """Assemble a complete workflow document around a webhook trigger.

    With caller nodes, the trigger feeds the first of them and the default
    response node is left unconnected; the webhook then only answers if the
    caller's graph reaches a respond node of its own.
    """
    webhook_path = generate_webhook_path(name, timestamp_ms)
    trigger = create_webhook_trigger_node(webhook_path)
    response = create_response_node()

    first_free_x = RESPONSE_POSITION[0] + NODE_SPACING
    extra_nodes = [
        node.to_node([first_free_x + i * NODE_SPACING, TRIGGER_POSITION[1]])
        for i, node in enumerate(nodes)
    ]
    all_nodes = [trigger, response, *extra_nodes]

    if extra_nodes:
        edges = [
            WorkflowConnection(source=trigger.id, source_output=0, target=extra_nodes[0].id, target_input=0),
            *connections,
        ]
        logger.warning(
            "response_node_unconnected",
            workflow_name=name,
            first_node=extra_nodes[0].name,
        )
    else:
        edges = [
            WorkflowConnection(source=trigger.id, source_output=0, target=response.id, target_input=0)
        ]

    meta = {"templateCreatedBy": provenance}
    if description:
        meta["description"] = description

    document = WorkflowDocument(
        name=name,
        nodes=all_nodes,
        connections=fold_connections(all_nodes, edges, trigger),
        active=False,
        settings={},
        meta=meta,
    )
    return BuiltWorkflow(document=document, webhook_path=webhook_path, connections=edges)
