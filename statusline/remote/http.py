"""Shared HTTP helper for remote collaborators."""

import logging
from typing import Any, Optional

import httpx

from statusline.remote.exceptions import FetchError, MalformedResponseError

log = logging.getLogger(__name__)

USER_AGENT = "pastel-statusline"


def get_json(url: str, timeout: float, headers: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """GET a URL and decode a JSON object body.

    Args:
        url: Endpoint to call.
        timeout: Overall time limit in seconds.
        headers: Extra request headers.

    Returns:
        The decoded JSON object.

    Raises:
        FetchError: On timeouts, transport errors and non-2xx responses.
        MalformedResponseError: If the body is not a JSON object.
    """
    request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    request_headers.update(headers or {})

    try:
        resp = httpx.get(url, headers=request_headers, timeout=timeout, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"{url} returned HTTP {e.response.status_code}")
    except httpx.HTTPError as e:
        raise FetchError(f"Request to {url} failed: {e}")

    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(f"{url} returned invalid JSON: {e}")

    if not isinstance(data, dict):
        raise MalformedResponseError(f"{url} returned {type(data).__name__}, expected an object")

    log.debug(f"Fetched {url}")
    return data
