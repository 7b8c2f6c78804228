"""Observability package."""
from autoflow.observability.logging import (
    get_logger,
    setup_logging,
    with_run_context,
)

__all__ = ["get_logger", "setup_logging", "with_run_context"]
