"""Storage package."""
from autoflow.storage.credential_store import CredentialStore, get_credential_store
from autoflow.storage.run_ledger import RunLedger, get_run_ledger
from autoflow.storage.workflow_store import WorkflowStore, get_workflow_store

__all__ = [
    "CredentialStore",
    "RunLedger",
    "WorkflowStore",
    "get_credential_store",
    "get_run_ledger",
    "get_workflow_store",
]
