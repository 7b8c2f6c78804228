"""Job submission."""
from typing import Protocol

from autoflow.engine.models import Job
from autoflow.observability import get_logger, with_run_context

logger = get_logger(__name__)


class JobQueue(Protocol):
    """Protocol for job queues."""

    def enqueue(self, job: Job) -> None:
        """Submit a job for at-least-once execution."""
        ...


class CeleryJobQueue:
    """Submits jobs as ``workflow.run_job`` Celery tasks."""

    def enqueue(self, job: Job) -> None:
        # Import here so the API does not configure the worker on import
        from autoflow.integrations.tasks import run_job

        run_job.delay(job.model_dump(mode="json", by_alias=True, exclude_none=True))
        logger.info(
            "Job enqueued",
            extra=with_run_context(workflow_id=job.workflow_id, user_id=job.user_id),
        )


def get_job_queue() -> JobQueue:
    """Get the default job queue."""
    return CeleryJobQueue()
