"""Quota usage API client.

Consumed response fields:
- five_hour / seven_day: {utilization: float, resets_at: ISO 8601 | null}
- extra_usage: {is_enabled, used_credits, monthly_limit, utilization}
  (credits and limit are in cents)
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import ValidationError

from statusline.cache.models import UsageFact
from statusline.remote.exceptions import MalformedResponseError, MissingCredentialError
from statusline.remote.http import get_json

USAGE_URL = "https://api.anthropic.com/api/oauth/usage"
OAUTH_BETA = "oauth-2025-04-20"
DEFAULT_TIMEOUT = 5.0

_CENT = Decimal("0.01")


def _round_pct(value: Any) -> int:
    """Round a utilization figure half-up to a whole percent."""
    try:
        return int(math.floor(float(value or 0) + 0.5))
    except (TypeError, ValueError, OverflowError):
        raise MalformedResponseError(f"Utilization is not a number: {value!r}")


def _cents_to_dollars(value: Any) -> Decimal:
    try:
        return (Decimal(str(value or 0)) / 100).quantize(_CENT)
    except InvalidOperation:
        raise MalformedResponseError(f"Credit amount is not a number: {value!r}")


def _window(data: dict[str, Any], name: str) -> dict[str, Any]:
    window = data.get(name) or {}
    if not isinstance(window, dict):
        raise MalformedResponseError(f"'{name}' is not an object")
    return window


def parse_usage(data: dict[str, Any]) -> UsageFact:
    """Convert a usage API response into a UsageFact.

    Raises:
        MalformedResponseError: If a consumed field has the wrong type.
    """
    five_hour = _window(data, "five_hour")
    seven_day = _window(data, "seven_day")
    extra = _window(data, "extra_usage")

    try:
        return UsageFact(
            five_hour_pct=_round_pct(five_hour.get("utilization")),
            five_hour_reset_at=five_hour.get("resets_at") or None,
            seven_day_pct=_round_pct(seven_day.get("utilization")),
            seven_day_reset_at=seven_day.get("resets_at") or None,
            extra_enabled=extra.get("is_enabled") is True,
            extra_used=_cents_to_dollars(extra.get("used_credits")),
            extra_limit=_cents_to_dollars(extra.get("monthly_limit")),
            extra_pct=_round_pct(extra.get("utilization")),
        )
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected usage response: {e}")


def fetch_usage(token: Optional[str], timeout: float = DEFAULT_TIMEOUT) -> UsageFact:
    """Fetch current quota usage for the signed-in account.

    Args:
        token: OAuth bearer token.
        timeout: Request time limit in seconds.

    Returns:
        The parsed UsageFact.

    Raises:
        MissingCredentialError: If there is no token.
        FetchError: On transport, HTTP or parsing failures.
    """
    if not token:
        raise MissingCredentialError("No OAuth access token available")

    data = get_json(
        USAGE_URL,
        timeout=timeout,
        headers={
            "Authorization": f"Bearer {token}",
            "anthropic-beta": OAUTH_BETA,
        },
    )
    return parse_usage(data)
