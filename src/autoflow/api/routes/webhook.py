"""Webhook ingress routes."""
import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from autoflow.api.dependencies import job_queue, request_body, workflow_store
from autoflow.engine import WebhookPayload
from autoflow.integrations.queue import JobQueue
from autoflow.services import trigger_webhook
from autoflow.storage import WorkflowStore

router = APIRouter()

WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def parse_body(raw: bytes) -> Any:
    """JSON body when it parses, ``{"raw": text}`` otherwise, ``{}`` when empty."""
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        return {"raw": raw.decode(errors="ignore")}


@router.api_route("/v1/webhook/{workflow_id}", methods=WEBHOOK_METHODS)
def webhook_listener(
    workflow_id: str,
    request: Request,
    raw_body: bytes = Depends(request_body),
    workflows: WorkflowStore = Depends(workflow_store),
    queue: JobQueue = Depends(job_queue),
) -> dict[str, Any]:
    """
    Enqueue a run carrying the request snapshot.

    No node validation happens here; the caller gets an acknowledgement, not
    the workflow's result.
    """
    workflow = workflows.get(workflow_id)
    if workflow is None:
        raise HTTPException(status_code=404, detail="Workflow not found")

    payload = WebhookPayload(
        method=request.method,
        headers=dict(request.headers),
        query=dict(request.query_params),
        body=parse_body(raw_body),
    )
    trigger_webhook(workflow, payload, queue)

    return {"message": "Workflow triggered", "workflowId": workflow_id}
