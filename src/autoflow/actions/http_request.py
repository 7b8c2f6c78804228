"""Outbound HTTP call action."""
from collections.abc import Mapping
from typing import Any

from autoflow.actions.base import Action, ActionSpec, SideEffect
from autoflow.actions.http import normalize_url, response_data, response_headers, send_request
from autoflow.observability import get_logger

logger = get_logger(__name__)


class ApiRequestAction(Action):
    """
    API Request - calls ``url`` with ``method``, optional ``headers``, JSON
    ``body`` and ``queryParams``. A bare host gets an ``http://`` scheme.
    """

    def spec(self) -> ActionSpec:
        """Return action specification."""
        return ActionSpec(node_type="api_request", side_effect=SideEffect.NETWORK)

    def _execute(
        self,
        config: Mapping[str, Any],
        user_id: str,
        context: Mapping[str, Any],
    ) -> Mapping[str, Any]:
        method = str(config.get("method", "GET")).upper()
        url = normalize_url(config.get("url", ""))

        response = send_request(
            method,
            url,
            headers=config.get("headers") or None,
            json=config.get("body"),
            params=config.get("queryParams") or None,
        )
        logger.info(
            "API request completed",
            extra={"url": url, "method": method, "status": response.status_code},
        )

        return {
            "status": response.status_code,
            "statusText": response.reason,
            "headers": response_headers(response),
            "data": response_data(response),
        }
