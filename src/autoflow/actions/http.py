"""
HTTP helpers - timeout-bounded requests for action handlers.

Every outbound call goes through ``send_request`` so it carries a timeout and
fails as a node error rather than a raw ``requests`` exception.
"""

import re
from typing import Any

import requests
from requests.exceptions import RequestException, Timeout

from autoflow.config import get_settings
from autoflow.engine.errors import NodeExecutionError

SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


class HttpActionError(NodeExecutionError):
    """Error from an outbound HTTP request."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        url: str | None = None,
        method: str | None = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        self.url = url
        self.method = method
        super().__init__(message)


def normalize_url(url: str) -> str:
    """Prefix ``http://`` when the URL has no http(s) scheme."""
    if url and not SCHEME_PATTERN.match(url):
        return "http://" + url
    return url


def send_request(
    method: str,
    url: str,
    *,
    timeout: float | None = None,
    raise_for_status: bool = True,
    **kwargs: Any,
) -> requests.Response:
    """
    Make an HTTP request with timeout enforcement.

    Args:
        method: HTTP method
        url: Absolute URL
        timeout: Override the configured timeout
        raise_for_status: Turn 4xx/5xx replies into HttpActionError
        **kwargs: Passed to ``requests.request`` (params, json, headers, ...)

    Raises:
        HttpActionError: On timeout, transport failure or error status
    """
    request_timeout = timeout or get_settings().http_timeout_s
    try:
        response = requests.request(method=method, url=url, timeout=request_timeout, **kwargs)
    except Timeout as e:
        raise HttpActionError(
            f"Request timed out after {request_timeout}s", url=url, method=method
        ) from e
    except RequestException as e:
        raise HttpActionError(f"Request failed: {e}", url=url, method=method) from e

    if raise_for_status and not response.ok:
        raise HttpActionError(
            f"HTTP {response.status_code}: {response.reason}",
            status_code=response.status_code,
            response_body=response.text[:1000] if response.text else None,
            url=url,
            method=method,
        )
    return response


def response_data(response: requests.Response) -> Any:
    """Parsed JSON body when possible, otherwise the text body."""
    try:
        return response.json()
    except ValueError:
        return response.text


def response_headers(response: requests.Response) -> dict[str, str]:
    return dict(response.headers)


__all__ = [
    "HttpActionError",
    "normalize_url",
    "response_data",
    "response_headers",
    "send_request",
]
