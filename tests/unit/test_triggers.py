"""Tests for the manual and webhook trigger paths."""
import pytest

from autoflow.engine import ConfigValidationError, WebhookPayload, Workflow
from autoflow.services import start_manual_run, trigger_webhook


def _broken_workflow():
    return Workflow.model_validate(
        {
            "id": "wf-broken",
            "ownerId": "owner",
            "graph": {
                "nodes": [
                    {"id": "hook", "type": "webhook", "label": "Hook", "config": {}},
                    {"id": "mystery", "type": "teleport", "label": "???"},
                ],
                "edges": [{"source": "hook", "target": "mystery"}],
            },
        }
    )


def test_manual_run_enqueues_job(sample_workflow, recording_queue):
    job = start_manual_run(sample_workflow, "user-1", recording_queue)

    assert recording_queue.jobs == [job]
    assert job.workflow_id == "wf-1"
    assert job.user_id == "user-1"
    assert job.webhook_payload is None


def test_manual_run_rejects_invalid_nodes(recording_queue):
    with pytest.raises(ConfigValidationError) as exc_info:
        start_manual_run(_broken_workflow(), "owner", recording_queue)

    reports = exc_info.value.reports
    assert [r.node_id for r in reports] == ["hook", "mystery"]
    assert reports[0].errors == ["missing required field: httpMethod", "missing required field: path"]
    assert reports[1].errors == ["unknown node type: teleport"]
    assert recording_queue.jobs == []


def test_webhook_skips_validation_and_carries_payload(recording_queue):
    payload = {"method": "POST", "headers": {"x-a": "1"}, "query": {"q": "v"}, "body": {"email": "a@b.c"}}

    job = trigger_webhook(_broken_workflow(), payload, recording_queue)

    assert recording_queue.jobs == [job]
    assert job.user_id == "owner"
    assert job.webhook_payload == WebhookPayload(**payload)
    assert job.model_dump(by_alias=True, mode="json")["webhookPayload"]["body"] == {"email": "a@b.c"}


def test_webhook_start_node(sample_workflow, recording_queue):
    job = trigger_webhook(
        sample_workflow, WebhookPayload(method="GET"), recording_queue, start_node_id="mail"
    )

    assert job.start_node_id == "mail"
