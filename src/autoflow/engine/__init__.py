"""
Workflow engine - schema validation, graph resolution and traversal.

This package provides:
- Node/Edge/Workflow/Job/Run models
- Schema registry and config validator
- GraphResolver: adjacency and entry-point discovery
- GraphExecutor: depth-first, context-threading traversal
"""

from .errors import (
    AutoflowError,
    ConfigValidationError,
    NodeExecutionError,
    RunAlreadyFinalized,
    RunFailure,
    TraversalLimitExceeded,
    WorkflowNotFound,
)
from .models import (
    Edge,
    Job,
    Node,
    NodeValidationReport,
    Run,
    RunStatus,
    ValidationResult,
    WebhookPayload,
    Workflow,
    WorkflowGraph,
)
from .schemas import NodeSchema, ParameterKind, ParameterSpec, SchemaRegistry, get_schema, list_schemas
from .validation import validate, validate_node, validate_workflow_nodes
from .graph import GraphResolver, ResolvedGraph, resolve
from .executor import GraphExecutor

__all__ = [
    # Errors
    "AutoflowError",
    "ConfigValidationError",
    "NodeExecutionError",
    "RunAlreadyFinalized",
    "RunFailure",
    "TraversalLimitExceeded",
    "WorkflowNotFound",
    # Models
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
    # Schemas and validation
    "NodeSchema",
    "ParameterKind",
    "ParameterSpec",
    "SchemaRegistry",
    "get_schema",
    "list_schemas",
    "validate",
    "validate_node",
    "validate_workflow_nodes",
    # Graph
    "GraphResolver",
    "ResolvedGraph",
    "resolve",
    # Executor
    "GraphExecutor",
]
