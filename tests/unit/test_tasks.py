"""Tests for the Celery task and job queue."""
import pytest

from autoflow.engine import Job, WorkflowNotFound
from autoflow.integrations import CeleryJobQueue
from autoflow.integrations import tasks
from autoflow.integrations.celery_app import celery_app


def test_celery_app_configuration():
    conf = celery_app.conf

    assert conf.task_acks_late is True
    assert conf.task_reject_on_worker_lost is True
    assert conf.worker_prefetch_multiplier == 1
    assert conf.task_time_limit is None
    assert "workflow.run_job" in celery_app.tasks


def test_queue_sends_camel_case_payload(monkeypatch):
    sent = []

    class FakeTask:
        def delay(self, payload):
            sent.append(payload)

    monkeypatch.setattr(tasks, "run_job", FakeTask())

    CeleryJobQueue().enqueue(Job(workflow_id="wf", user_id="u1", start_node_id="n2"))

    assert sent == [{"workflowId": "wf", "userId": "u1", "startNodeId": "n2"}]


@pytest.fixture
def task_stores(monkeypatch, workflow_store, run_ledger, email_transport, credential_store, redis_client):
    from autoflow.actions import build_action_registry
    from autoflow.engine import GraphExecutor

    registry = build_action_registry(
        credential_store=credential_store,
        email_transport=email_transport,
        redis_client=redis_client,
    )
    monkeypatch.setattr(tasks, "get_workflow_store", lambda: workflow_store)
    monkeypatch.setattr(tasks, "get_run_ledger", lambda: run_ledger)
    monkeypatch.setattr(tasks, "GraphExecutor", lambda: GraphExecutor(dispatcher=registry))
    return workflow_store, run_ledger


def test_run_job_executes_and_returns_run(task_stores, sample_workflow, email_transport):
    workflow_store, run_ledger = task_stores
    workflow_store.save(sample_workflow)

    result = tasks.run_job(
        {
            "workflowId": "wf-1",
            "userId": "user-1",
            "webhookPayload": {
                "method": "POST",
                "headers": {},
                "query": {},
                "body": {"email": "ada@example.com", "name": "Ada"},
            },
        }
    )

    assert result["status"] == "completed"
    assert result["workflowId"] == "wf-1"
    assert email_transport.sent[0]["to"] == "ada@example.com"
    assert run_ledger.get(result["id"]).status.value == "completed"


def test_run_job_missing_workflow_reraises(task_stores):
    with pytest.raises(WorkflowNotFound):
        tasks.run_job({"workflowId": "ghost", "userId": "u1"})
