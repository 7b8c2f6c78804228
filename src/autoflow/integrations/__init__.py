"""Queue integration package."""
from autoflow.integrations.queue import CeleryJobQueue, JobQueue, get_job_queue

__all__ = ["CeleryJobQueue", "JobQueue", "get_job_queue"]
