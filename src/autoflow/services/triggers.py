"""Trigger paths: manual runs (validated) and webhooks (not validated)."""
from typing import Any

from autoflow.engine.errors import ConfigValidationError
from autoflow.engine.models import Job, WebhookPayload, Workflow
from autoflow.engine.schemas import SchemaRegistry
from autoflow.engine.validation import validate_workflow_nodes
from autoflow.integrations.queue import JobQueue
from autoflow.observability import get_logger, with_run_context

logger = get_logger(__name__)


def start_manual_run(
    workflow: Workflow,
    user_id: str,
    queue: JobQueue,
    registry: SchemaRegistry | None = None,
) -> Job:
    """
    Validate every node and enqueue a run.

    Raises:
        ConfigValidationError: With every failing node's report; nothing is enqueued
    """
    reports = validate_workflow_nodes(workflow.graph.nodes, registry)
    if reports:
        logger.warning(
            "Manual run rejected",
            extra=with_run_context(
                workflow_id=workflow.id, user_id=user_id, failing_nodes=len(reports)
            ),
        )
        raise ConfigValidationError(reports)

    job = Job(workflow_id=workflow.id, user_id=user_id)
    queue.enqueue(job)
    return job


def trigger_webhook(
    workflow: Workflow,
    payload: WebhookPayload | dict[str, Any],
    queue: JobQueue,
    start_node_id: str | None = None,
) -> Job:
    """Enqueue a run for the workflow's owner carrying the request snapshot."""
    if not isinstance(payload, WebhookPayload):
        payload = WebhookPayload.model_validate(payload)

    job = Job(
        workflow_id=workflow.id,
        user_id=workflow.owner_id,
        webhook_payload=payload,
        start_node_id=start_node_id,
    )
    queue.enqueue(job)
    logger.info(
        "Webhook triggered",
        extra=with_run_context(
            workflow_id=workflow.id, user_id=workflow.owner_id, method=payload.method
        ),
    )
    return job


__all__ = ["start_manual_run", "trigger_webhook", "validate_workflow_nodes"]
