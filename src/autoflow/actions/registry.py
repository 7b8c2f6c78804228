"""Action Dispatcher - node type to handler registry."""
from collections.abc import Mapping
from typing import Any

from autoflow.actions.base import Action
from autoflow.actions.triggers import EchoAction
from autoflow.engine.models import Node
from autoflow.observability import get_logger, with_run_context

logger = get_logger(__name__)


class ActionRegistry:
    """
    Registry mapping node types to action handlers.

    Node types with no registered handler fall back to an echo action that
    returns the context unchanged.
    """

    def __init__(self, fallback: Action | None = None):
        """Initialize action registry."""
        self._actions: dict[str, Action] = {}
        self._fallback = fallback or EchoAction()

    def register(self, action: Action) -> None:
        """
        Register an action under its spec's node type.

        Args:
            action: Action instance to register
        """
        node_type = action.spec().node_type
        self._actions[node_type] = action
        logger.debug(f"Action registered: {node_type}")

    def get(self, node_type: str) -> Action | None:
        """
        Get the action registered for a node type.

        Returns:
            Action instance or None if not registered
        """
        return self._actions.get(node_type)

    def dispatch(
        self,
        node: Node,
        user_id: str,
        context: Mapping[str, Any],
    ) -> dict[str, Any]:
        """
        Execute a node with its registered action (or the fallback).

        Args:
            node: Node to execute
            user_id: Owner of the run
            context: Propagated context

        Returns:
            Partial result

        Raises:
            NodeExecutionError: If the action fails
        """
        action = self.get(node.type)
        if action is None:
            logger.info(
                "No action registered, echoing context",
                extra=with_run_context(node_id=node.id, node_type=node.type),
            )
            action = self._fallback
        return action.execute(node.config, user_id, context)

    def list_actions(self) -> list[str]:
        """
        List all registered node types.

        Returns:
            Node types with a dedicated handler
        """
        return list(self._actions.keys())


def build_action_registry(
    credential_store: Any = None,
    email_transport: Any = None,
    redis_client: Any = None,
) -> ActionRegistry:
    """
    Build a registry holding every built-in action.

    Collaborators left as None are resolved lazily from settings on first use.
    """
    # Imported here so that importing the registry does not pull in every driver
    from autoflow.actions.http_request import ApiRequestAction
    from autoflow.actions.pdf_extract import PdfExtractAction
    from autoflow.actions.postgres import PostgresQueryAction
    from autoflow.actions.redis_ops import RedisAction
    from autoflow.actions.send_email import SendEmailAction
    from autoflow.actions.slack import SlackAction
    from autoflow.actions.triggers import TriggerAction

    registry = ActionRegistry()
    registry.register(TriggerAction("webhook"))
    registry.register(TriggerAction("schedule"))
    registry.register(SendEmailAction(transport=email_transport))
    registry.register(SlackAction(credential_store=credential_store))
    registry.register(ApiRequestAction())
    registry.register(PostgresQueryAction())
    registry.register(PdfExtractAction())
    registry.register(RedisAction(redis_client=redis_client))
    return registry


# Global registry
_action_registry: ActionRegistry | None = None


def get_action_registry() -> ActionRegistry:
    """Get or create the global action registry."""
    global _action_registry
    if _action_registry is None:
        _action_registry = build_action_registry()
    return _action_registry


def reset_action_registry() -> None:
    """Reset the global registry (useful for testing)."""
    global _action_registry
    _action_registry = None
