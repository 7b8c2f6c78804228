"""Celery application configuration."""
from celery import Celery

from autoflow.config import get_settings

settings = get_settings()

celery_app = Celery(
    "autoflow",
    broker=settings.broker_url,
    backend=settings.redis_url,
    include=["autoflow.integrations.tasks"],
)

# A run is never cancelled once dequeued, so no task time limits are set.
celery_app.conf.update(
    # Task execution
    task_acks_late=True,  # Acknowledge after the run is finalized
    task_reject_on_worker_lost=True,  # Redeliver if the worker dies mid-run
    worker_prefetch_multiplier=1,  # One run per worker at a time
    task_always_eager=settings.celery_task_always_eager,
    # Serialization
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    # Results
    result_expires=3600,
    # Timezone
    timezone="UTC",
    enable_utc=True,
)
