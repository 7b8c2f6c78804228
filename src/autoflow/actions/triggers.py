"""Pass-through actions: trigger nodes and the fallback for unhandled node types."""
from collections.abc import Mapping
from typing import Any

from autoflow.actions.base import Action, ActionSpec, SideEffect


class TriggerAction(Action):
    """
    Trigger node: the run's seed context (e.g. a webhook payload) flows on unchanged.
    """

    def __init__(self, node_type: str = "webhook"):
        self._node_type = node_type
        super().__init__()

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type=self._node_type, side_effect=SideEffect.NONE, idempotent=True)

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        return dict(context)


class EchoAction(Action):
    """Fallback for node types with no handler (editor-only placeholders)."""

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="*", side_effect=SideEffect.NONE, idempotent=True)

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        return dict(context)
