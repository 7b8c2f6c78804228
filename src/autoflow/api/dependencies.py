"""Request-scoped collaborators, overridable via ``app.dependency_overrides``."""
from fastapi import Header, HTTPException, Request

from autoflow.integrations.queue import JobQueue, get_job_queue
from autoflow.storage import RunLedger, WorkflowStore, get_run_ledger, get_workflow_store


def workflow_store() -> WorkflowStore:
    return get_workflow_store()


def run_ledger() -> RunLedger:
    return get_run_ledger()


def job_queue() -> JobQueue:
    return get_job_queue()


def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Caller identity, set by the authentication layer in front of the API.

    Raises:
        HTTPException: 401 if the header is missing
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing user identity")
    return x_user_id


async def request_body(request: Request) -> bytes:
    """Raw request body, read on the event loop so handlers can stay sync."""
    return await request.body()
