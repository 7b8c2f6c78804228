"""Manual run, run history and node schema routes."""
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from autoflow.api.dependencies import current_user_id, job_queue, run_ledger, workflow_store
from autoflow.config import get_settings
from autoflow.engine import ConfigValidationError, list_schemas
from autoflow.integrations.queue import JobQueue
from autoflow.observability import get_logger, with_run_context
from autoflow.services import start_manual_run
from autoflow.storage import RunLedger, WorkflowStore

logger = get_logger(__name__)
router = APIRouter()


@router.get("/v1/node-schemas")
def get_node_schemas() -> list[dict[str, Any]]:
    """Every node type's parameter contract, in the shared NodeSchema format."""
    return [schema.to_document() for schema in list_schemas()]


@router.post("/v1/workflows/{workflow_id}/run")
def run_workflow(
    workflow_id: str,
    user_id: str = Depends(current_user_id),
    workflows: WorkflowStore = Depends(workflow_store),
    queue: JobQueue = Depends(job_queue),
):
    """
    Validate a workflow and enqueue a manual run.

    Returns:
        Acknowledgement, or 400 with every failing node's errors
    """
    workflow = workflows.get(workflow_id, user_id)
    if workflow is None:
        raise HTTPException(status_code=404, detail="Workflow not found")

    try:
        start_manual_run(workflow, user_id, queue)
    except ConfigValidationError as e:
        return JSONResponse(
            status_code=400,
            content={
                "message": "Validation failed",
                "errors": [report.model_dump(by_alias=True) for report in e.reports],
            },
        )

    logger.info(
        "Manual run enqueued via API",
        extra=with_run_context(workflow_id=workflow_id, user_id=user_id),
    )
    return {"message": "Workflow execution started"}


@router.get("/v1/workflows/{workflow_id}/runs")
def list_runs(
    workflow_id: str,
    limit: int | None = Query(default=None, ge=1),
    user_id: str = Depends(current_user_id),
    ledger: RunLedger = Depends(run_ledger),
) -> dict[str, Any]:
    """Most recent runs of a workflow, newest first."""
    runs = ledger.list(
        workflow_id,
        user_id,
        limit=limit or get_settings().run_history_limit,
        most_recent_first=True,
    )
    return {"runs": [run.model_dump(mode="json", by_alias=True) for run in runs]}
