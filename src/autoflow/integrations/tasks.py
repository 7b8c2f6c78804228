"""Celery tasks for workflow execution."""
from typing import Any

from autoflow.engine import GraphExecutor, Job, WorkflowNotFound
from autoflow.integrations.celery_app import celery_app
from autoflow.observability import get_logger, setup_logging, with_run_context
from autoflow.services.worker import process_job
from autoflow.storage import get_run_ledger, get_workflow_store

setup_logging()
logger = get_logger(__name__)


@celery_app.task(name="workflow.run_job")
def run_job(job: dict[str, Any]) -> dict[str, Any]:
    """
    Execute one queued workflow run.

    Args:
        job: Enqueue payload ``{workflowId, userId, webhookPayload?, startNodeId?}``

    Returns:
        The finalized run record
    """
    parsed = Job.model_validate(job)
    try:
        run = process_job(
            parsed,
            workflows=get_workflow_store(),
            ledger=get_run_ledger(),
            executor=GraphExecutor(),
        )
    except WorkflowNotFound:
        logger.error(
            "Workflow not found, no run recorded",
            extra=with_run_context(workflow_id=parsed.workflow_id, user_id=parsed.user_id),
        )
        raise

    return run.model_dump(mode="json", by_alias=True)
