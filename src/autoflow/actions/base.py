"""Base action class with result normalization and structured error handling."""
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from autoflow.engine.errors import NodeExecutionError
from autoflow.observability import get_logger, with_run_context

logger = get_logger(__name__)


class SideEffect(str, Enum):
    """Side effect classification for actions."""

    NONE = "none"  # Pure computation, no side effects
    NETWORK = "network"  # Makes network calls
    STORAGE = "storage"  # Reads/writes storage
    BOTH = "both"  # Both network and storage


class ActionSpec(BaseModel):
    """Specification for an action handler."""

    node_type: str = Field(..., description="Node type handled by the action")
    side_effect: SideEffect = Field(
        default=SideEffect.NONE,
        description="Side effect classification",
    )
    idempotent: bool = Field(
        default=False,
        description="Whether repeating the action is harmless",
    )

    def __str__(self) -> str:
        """String representation."""
        return self.node_type


class Action(ABC):
    """
    Base class for all action handlers.

    Handlers receive the node's validated configuration, the run owner and the
    propagated context, and return a partial result that the executor merges
    into the context. Side effects are not deduplicated: a redelivered job
    repeats them.
    """

    def __init__(self):
        """Initialize action."""
        self._spec = self.spec()

    @abstractmethod
    def spec(self) -> ActionSpec:
        """
        Return action specification.

        Returns:
            ActionSpec defining the action's metadata
        """
        pass

    @abstractmethod
    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any] | None:
        """
        Execute action logic (implemented by subclasses).

        Args:
            config: Node configuration
            user_id: Owner of the run
            context: Context propagated from upstream nodes

        Returns:
            Partial result, or None for "no new keys"
        """
        pass

    def execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> dict[str, Any]:
        """
        Execute action with result normalization and error wrapping.

        Returns:
            Partial result as a dict

        Raises:
            NodeExecutionError: For any failure of the action
        """
        extra = with_run_context(user_id=user_id, node_type=self._spec.node_type)
        logger.debug("Action execution started", extra=extra)

        try:
            result = self._execute(config, user_id, context)
        except NodeExecutionError:
            logger.debug("Action execution failed", extra=extra, exc_info=True)
            raise
        except Exception as e:
            logger.debug("Unexpected action error", extra=extra, exc_info=True)
            raise NodeExecutionError(f"Unexpected error: {e}") from e

        if result is None:
            return {}
        if not isinstance(result, Mapping):
            raise NodeExecutionError(
                f"Action {self._spec} returned {type(result).__name__}, expected a mapping"
            )

        logger.debug("Action execution completed", extra=extra)
        return dict(result)
