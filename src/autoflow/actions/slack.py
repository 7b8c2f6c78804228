"""Slack message post action."""
from collections.abc import Mapping
from typing import Any

from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.actions.http import response_data, send_request
from autoflow.config import get_settings
from autoflow.engine.errors import NodeExecutionError
from autoflow.observability import get_logger

logger = get_logger(__name__)

PROVIDER = "slack"


class SlackAction(Action):
    """
    Slack Notification - posts ``message`` to ``channel`` with the run owner's
    stored Slack access token. Token issuance and refresh live elsewhere; this
    action only reads it.
    """

    def __init__(self, credential_store: Any = None):
        self._credential_store = credential_store
        super().__init__()

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="slack", side_effect=SideEffect.NETWORK)

    @property
    def credential_store(self) -> Any:
        if self._credential_store is None:
            from autoflow.storage import get_credential_store

            self._credential_store = get_credential_store()
        return self._credential_store

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any] | None:
        token = self.credential_store.get_access_token(user_id, PROVIDER)
        if not token:
            raise NodeExecutionError("Slack not connected")

        channel = config.get("channel")
        url = f"{get_settings().slack_api_base_url}/chat.postMessage"
        response = send_request(
            "POST",
            url,
            json={"channel": channel, "text": config.get("message", "")},
            headers={"Authorization": f"Bearer {token}"},
        )

        data = response_data(response)
        if not isinstance(data, Mapping) or not data.get("ok", False):
            error = data.get("error") if isinstance(data, Mapping) else data
            raise NodeExecutionError(f"Slack API error: {error}")

        logger.info("Slack message sent", extra={"channel": channel, "user_id": user_id})
        return None
