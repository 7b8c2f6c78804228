"""Engine exception hierarchy."""
from typing import Any


class AutoflowError(Exception):
    """Base exception for autoflow errors."""

    pass


class ConfigValidationError(AutoflowError):
    """
    Raised when one or more nodes fail schema validation.

    Carries the per-node reports so the caller can return all of them at once.
    """

    def __init__(self, reports: list[Any]):
        self.reports = list(reports)
        node_ids = ", ".join(str(getattr(r, "node_id", r)) for r in self.reports)
        super().__init__(f"Validation failed for nodes: {node_ids}")


class NodeExecutionError(AutoflowError):
    """Raised by an action handler when a node cannot be executed."""

    pass


class RunFailure(AutoflowError):
    """Raised when a whole run fails outside the per-node boundary."""

    pass


class WorkflowNotFound(RunFailure):
    """Raised when a job references a workflow the store does not hold."""

    def __init__(self, workflow_id: str, user_id: str | None = None):
        self.workflow_id = workflow_id
        self.user_id = user_id
        super().__init__(f"Workflow not found: {workflow_id}")


class TraversalLimitExceeded(RunFailure):
    """Raised when a traversal exceeds its depth or visit budget (cyclic graphs)."""

    pass


class RunAlreadyFinalized(AutoflowError):
    """Raised on a second terminal update of the same run."""

    pass
