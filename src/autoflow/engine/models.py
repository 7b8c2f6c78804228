"""
Engine data models.

JSON field names follow the external document shapes (camelCase); Python
attributes are snake_case. Models accept either form on input and dump the
camelCase form with ``by_alias=True``.
"""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Node(BaseModel):
    """
    A configured instance of a node type within a workflow graph.

    Also accepts the editor's stored form ``{"id", "data": {"type", "label", "config"}}``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., description="Node ID, unique within a workflow")
    type: str = Field(..., description="Node type, must match a NodeSchema")
    label: str = Field(default="", description="Display label")
    config: dict[str, Any] = Field(default_factory=dict, description="Parameter values")

    @model_validator(mode="before")
    @classmethod
    def lift_editor_data(cls, value: Any) -> Any:
        """Flatten the editor's ``data`` envelope into the node itself."""
        if isinstance(value, dict) and isinstance(value.get("data"), dict):
            data = value["data"]
            lifted = {k: v for k, v in value.items() if k != "data"}
            # the editor's top-level type is a renderer hint; data.type is the action type
            for key in ("type", "label", "config"):
                if key in data:
                    lifted[key] = data[key]
            return lifted
        return value

    @field_validator("config", mode="before")
    @classmethod
    def default_config(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("label", mode="before")
    @classmethod
    def default_label(cls, v: Any) -> Any:
        return "" if v is None else v


class Edge(BaseModel):
    """A directed connection from one node to another."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    source: str = Field(..., description="Source node ID")
    target: str = Field(..., description="Target node ID")


class WorkflowGraph(BaseModel):
    """Node and edge set of a workflow."""

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


class Workflow(BaseModel):
    """A user-owned workflow document."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Workflow ID")
    name: str = Field(default="Untitled workflow")
    graph: WorkflowGraph = Field(
        default_factory=WorkflowGraph,
        validation_alias=AliasChoices("graph", "data"),
        serialization_alias="graph",
    )
    owner_id: str = Field(
        ...,
        validation_alias=AliasChoices("ownerId", "owner_id", "userId"),
        serialization_alias="ownerId",
    )


class WebhookPayload(BaseModel):
    """Snapshot of an inbound webhook request."""

    method: str = Field(..., description="HTTP method")
    headers: dict[str, Any] = Field(default_factory=dict)
    query: dict[str, Any] = Field(default_factory=dict)
    body: Any = Field(default_factory=dict)


class Job(BaseModel):
    """A queued request to execute one workflow run."""

    model_config = ConfigDict(populate_by_name=True)

    workflow_id: str = Field(..., alias="workflowId")
    user_id: str = Field(..., alias="userId")
    webhook_payload: WebhookPayload | None = Field(default=None, alias="webhookPayload")
    start_node_id: str | None = Field(default=None, alias="startNodeId")

    def initial_context(self) -> dict[str, Any]:
        """Context the traversal is seeded with."""
        if self.webhook_payload is None:
            return {}
        return self.webhook_payload.model_dump(mode="json")


class RunStatus(str, Enum):
    """Run execution status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.COMPLETED, RunStatus.FAILED)


class Run(BaseModel):
    """Persisted record of one execution attempt and its outcome."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    workflow_id: str = Field(..., alias="workflowId")
    user_id: str = Field(..., alias="userId")
    status: RunStatus = RunStatus.PENDING
    started_at: datetime = Field(..., alias="startedAt")
    finished_at: datetime | None = Field(default=None, alias="finishedAt")
    result: Any = None


class ValidationResult(BaseModel):
    """Outcome of validating one node's configuration."""

    ok: bool
    errors: list[str] = Field(default_factory=list)


class NodeValidationReport(BaseModel):
    """Validation errors for one node of a workflow."""

    model_config = ConfigDict(populate_by_name=True)

    node_id: str = Field(..., alias="nodeId")
    label: str = ""
    errors: list[str] = Field(default_factory=list)


__all__ = [
    "Edge",
    "Job",
    "Node",
    "NodeValidationReport",
    "Run",
    "RunStatus",
    "ValidationResult",
    "WebhookPayload",
    "Workflow",
    "WorkflowGraph",
]
