"""Tests for the Redis-backed stores."""
from datetime import datetime, timedelta, timezone

import pytest

from autoflow.engine import Run, RunAlreadyFinalized, RunStatus, Workflow


def _run(started_at, workflow_id="wf", user_id="u1"):
    return Run(
        workflow_id=workflow_id,
        user_id=user_id,
        status=RunStatus.RUNNING,
        started_at=started_at,
    )


class TestWorkflowStore:
    def test_save_and_get(self, workflow_store, sample_workflow):
        workflow_store.save(sample_workflow)

        loaded = workflow_store.get("wf-1")

        assert loaded == sample_workflow

    def test_owner_filter(self, workflow_store, sample_workflow):
        workflow_store.save(sample_workflow)

        assert workflow_store.get("wf-1", "user-1") is not None
        assert workflow_store.get("wf-1", "someone-else") is None

    def test_missing(self, workflow_store):
        assert workflow_store.get("nope") is None

    def test_delete(self, workflow_store, sample_workflow):
        workflow_store.save(sample_workflow)

        assert workflow_store.delete("wf-1") is True
        assert workflow_store.get("wf-1") is None
        assert workflow_store.delete("wf-1") is False

    def test_stored_document_uses_external_field_names(self, workflow_store, redis_client):
        workflow_store.save(Workflow(id="wf-2", owner_id="u2"))

        assert '"ownerId":"u2"' in redis_client.get("workflow:wf-2")


class TestRunLedger:
    def test_create_assigns_id(self, run_ledger):
        run_id = run_ledger.create(_run(datetime.now(timezone.utc)))

        stored = run_ledger.get(run_id)
        assert stored.id == run_id
        assert stored.status == RunStatus.RUNNING
        assert stored.finished_at is None

    def test_update_finalizes(self, run_ledger):
        run_id = run_ledger.create(_run(datetime.now(timezone.utc)))

        updated = run_ledger.update(run_id, RunStatus.COMPLETED, result={"k": "v"})

        assert updated.status == RunStatus.COMPLETED
        assert updated.result == {"k": "v"}
        assert updated.finished_at is not None
        assert run_ledger.get(run_id) == updated

    def test_second_terminal_update_refused(self, run_ledger):
        run_id = run_ledger.create(_run(datetime.now(timezone.utc)))
        run_ledger.update(run_id, RunStatus.FAILED, result={"error": "x"})

        with pytest.raises(RunAlreadyFinalized):
            run_ledger.update(run_id, RunStatus.COMPLETED, result={})

        assert run_ledger.get(run_id).status == RunStatus.FAILED

    def test_update_missing_run(self, run_ledger):
        assert run_ledger.update("ghost", RunStatus.COMPLETED) is None

    def test_list_orders_by_start_time(self, run_ledger):
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        ids = [run_ledger.create(_run(base + timedelta(minutes=i))) for i in range(3)]
        run_ledger.create(_run(base, workflow_id="other"))
        run_ledger.create(_run(base, user_id="u2"))

        newest_first = [run.id for run in run_ledger.list("wf", "u1")]
        oldest_first = [run.id for run in run_ledger.list("wf", "u1", most_recent_first=False)]

        assert newest_first == list(reversed(ids))
        assert oldest_first == ids

    def test_list_limit(self, run_ledger):
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        ids = [run_ledger.create(_run(base + timedelta(minutes=i))) for i in range(5)]

        assert [run.id for run in run_ledger.list("wf", "u1", limit=2)] == [ids[4], ids[3]]
        assert run_ledger.list("wf", "u1", limit=0) == []

    def test_list_empty(self, run_ledger):
        assert run_ledger.list("wf", "u1") == []


class TestCredentialStore:
    def test_tokens_are_per_user_and_provider(self, credential_store):
        credential_store.set_access_token("u1", "slack", "t1")

        assert credential_store.get_access_token("u1", "slack") == "t1"
        assert credential_store.get_access_token("u2", "slack") is None
        assert credential_store.get_access_token("u1", "github") is None

    def test_delete(self, credential_store):
        credential_store.set_access_token("u1", "slack", "t1")
        credential_store.delete_access_token("u1", "slack")

        assert credential_store.get_access_token("u1", "slack") is None
