"""Run orchestration services."""
from autoflow.services.triggers import start_manual_run, trigger_webhook, validate_workflow_nodes
from autoflow.services.worker import process_job

__all__ = ["process_job", "start_manual_run", "trigger_webhook", "validate_workflow_nodes"]
