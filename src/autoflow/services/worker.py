"""
Worker - turns one dequeued job into one finalized run.

A job whose workflow cannot be loaded fails without a run record. Otherwise
exactly one run is created as ``running`` and finalized exactly once, as
``completed`` with the final context or ``failed`` with the error.

The stored result is the JSON-safe form of the final context: bytes become
base64 strings and values with no JSON form are stored as their repr.
"""
from datetime import datetime, timezone

from pydantic_core import to_jsonable_python

from autoflow.engine.errors import WorkflowNotFound
from autoflow.engine.executor import GraphExecutor
from autoflow.engine.models import Job, Run, RunStatus
from autoflow.observability import get_logger, with_run_context
from autoflow.storage.run_ledger import RunLedger
from autoflow.storage.workflow_store import WorkflowStore

logger = get_logger(__name__)


def process_job(
    job: Job,
    workflows: WorkflowStore,
    ledger: RunLedger,
    executor: GraphExecutor,
) -> Run:
    """
    Execute a job and record its run.

    Args:
        job: Dequeued job
        workflows: Store the workflow is loaded from
        ledger: Run ledger
        executor: Graph executor

    Returns:
        The finalized run

    Raises:
        WorkflowNotFound: If the store has no such workflow for the job's user
    """
    workflow = workflows.get(job.workflow_id, job.user_id)
    if workflow is None:
        raise WorkflowNotFound(job.workflow_id, job.user_id)

    run = Run(
        workflow_id=job.workflow_id,
        user_id=job.user_id,
        status=RunStatus.RUNNING,
        started_at=datetime.now(timezone.utc),
    )
    run_id = ledger.create(run)
    extra = with_run_context(run_id=run_id, workflow_id=job.workflow_id, user_id=job.user_id)
    logger.info("Starting run", extra=extra)

    try:
        context = executor.run(
            workflow.graph.nodes,
            workflow.graph.edges,
            job.user_id,
            job.initial_context(),
            job.start_node_id,
            run_id=run_id,
        )
        result = to_jsonable_python(context, bytes_mode="base64", fallback=repr)
    except Exception as e:
        logger.error("Run failed", extra={**extra, "error": str(e)}, exc_info=True)
        finalized = ledger.update(run_id, RunStatus.FAILED, result={"error": str(e)})
    else:
        logger.info("Run completed", extra=extra)
        finalized = ledger.update(run_id, RunStatus.COMPLETED, result=result)

    return finalized
