"""Redis key operation action."""
from collections.abc import Mapping
from typing import Any

import redis

from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.config import get_settings
from autoflow.engine.errors import NodeExecutionError


class RedisAction(Action):
    """Redis Operation - ``set``, ``get`` or ``delete`` on ``key``."""

    def __init__(self, redis_client: redis.Redis | None = None):
        self._redis_client = redis_client
        super().__init__()

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="redis", side_effect=SideEffect.STORAGE)

    @property
    def redis_client(self) -> redis.Redis:
        if self._redis_client is None:
            self._redis_client = redis.from_url(get_settings().redis_url, decode_responses=True)
        return self._redis_client

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        action = config.get("action")
        key = config.get("key")

        if action == "set":
            value = config.get("value", "")
            self.redis_client.set(key, value)
            return {"redis": {"action": action, "key": key, "value": value}}
        if action == "get":
            value = self.redis_client.get(key)
            return {"redis": {"action": action, "key": key, "value": value}}
        if action == "delete":
            deleted = self.redis_client.delete(key)
            return {"redis": {"action": action, "key": key, "deleted": deleted}}

        raise NodeExecutionError(f"Unsupported redis action: {action}")
