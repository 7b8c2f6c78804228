"""Structured JSON logging with run context."""
import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from autoflow.config import get_settings

RUN_CONTEXT_FIELDS = ("run_id", "workflow_id", "user_id", "node_id", "node_type")


class RunContextFilter(logging.Filter):
    """Add run context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add default run context fields if not present."""
        for name in RUN_CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, None)
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with standardized field names."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        for name in RUN_CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value:
                log_record[name] = value
            else:
                log_record.pop(name, None)


def setup_logging() -> None:
    """Configure structured JSON logging for the application."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(RunContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("celery").setLevel(logging.INFO)


class RunContextAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges per-call extra into the adapter extra."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str) -> logging.LoggerAdapter:
    """
    Get a logger with run context support.

    Args:
        name: Logger name (typically __name__)

    Returns:
        LoggerAdapter that can accept run context in extra dict
    """
    logger = logging.getLogger(name)
    return RunContextAdapter(logger, extra={})


def with_run_context(
    run_id: str | None = None,
    workflow_id: str | None = None,
    user_id: str | None = None,
    node_id: str | None = None,
    node_type: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create an extra dict with run context for logging.

    Only the fields that are set end up in the dict, so the result can be
    extended with ``{**extra, ...}`` without clobbering anything.
    """
    extra = kwargs.copy()
    if run_id:
        extra["run_id"] = run_id
    if workflow_id:
        extra["workflow_id"] = workflow_id
    if user_id:
        extra["user_id"] = user_id
    if node_id:
        extra["node_id"] = node_id
    if node_type:
        extra["node_type"] = node_type
    return extra
