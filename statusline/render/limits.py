"""Rate-limit bar composer.

Builds the quota part of line 2: a bar per quota window, reset times when
they matter, and the extra-usage indicator.

Contains:
- ExtraUsageState: The four mutually exclusive indicator states
- extra_usage_state: Pick the indicator state for a UsageFact
- should_show_reset: Reset-time visibility policy
- render_limit_bar: One quota bar
- render_extra_usage: Indicator text for a state
- render_quota_segment: Both bars with their reset annotations
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from statusline.cache.models import UsageFact
from statusline.config import RGB, Palette, Thresholds
from statusline.render.bars import LIMIT_BAR, render_bar
from statusline.render.colors import paint
from statusline.render.gradient import limit_gradient

MINUTE = 60
HOUR = 3600


class ExtraUsageState(Enum):
    """Extra-usage indicator states, in priority order."""

    ACTIVE = "active"
    NEAR_ENTITLED = "near-entitled"
    NEAR_UNENTITLED = "near-unentitled"
    NONE = "none"


def extra_usage_state(usage: UsageFact, near_pct: int = 95) -> ExtraUsageState:
    """Classify the account's position relative to its quotas.

    Active overage needs the entitlement; without it, even a window at 100%
    is only reported as near the limit.
    """
    peak = max(usage.five_hour_pct, usage.seven_day_pct)
    if usage.extra_enabled and peak >= 100:
        return ExtraUsageState.ACTIVE
    if peak >= near_pct:
        if usage.extra_enabled:
            return ExtraUsageState.NEAR_ENTITLED
        return ExtraUsageState.NEAR_UNENTITLED
    return ExtraUsageState.NONE


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def units_until(reset_at: Optional[datetime], now: datetime, unit_seconds: int) -> Optional[int]:
    """Whole units (truncated toward zero) until reset, or None if unknown."""
    if reset_at is None:
        return None
    seconds = (_aware(reset_at) - _aware(now)).total_seconds()
    return int(seconds / unit_seconds)


def should_show_reset(
    pct: int,
    reset_at: Optional[datetime],
    now: datetime,
    pct_threshold: int,
    within: int,
    unit_seconds: int,
) -> bool:
    """Show a reset time when usage is high or the reset is close.

    Args:
        pct: Window utilisation.
        reset_at: When the window resets.
        now: Current time.
        pct_threshold: Utilisation at which the reset is always shown.
        within: Show when 0 <= units-to-reset <= within.
        unit_seconds: Length of one unit (minutes or hours).
    """
    if pct >= pct_threshold:
        return True
    remaining = units_until(reset_at, now, unit_seconds)
    return remaining is not None and 0 <= remaining <= within


def format_time(dt: datetime) -> str:
    """Local clock time, e.g. 3:45pm."""
    return _aware(dt).astimezone().strftime("%I:%M%p").lstrip("0").lower()


def format_day_time(dt: datetime) -> str:
    """Local weekday and time, e.g. Wed 3:45pm."""
    local = _aware(dt).astimezone()
    return f"{local.strftime('%a')} {format_time(local)}"


def render_limit_bar(
    pct: int,
    identity_rgb: RGB,
    palette: Palette,
    overlay_pct: int = 80,
    force_show: bool = False,
) -> str:
    """Render one five-pip quota bar.

    The percentage replaces the middle pips when forced (first render of a
    session) or once usage reaches overlay_pct.
    """
    pct = max(0, min(100, pct))
    return render_bar(
        pct,
        LIMIT_BAR,
        base_rgb=identity_rgb,
        gradient_rgb=limit_gradient(pct, palette.dim_base),
        empty_rgb=palette.dim,
        dim=palette.dim_base,
        show_text=force_show or pct >= overlay_pct,
    )


def render_extra_usage(state: ExtraUsageState, usage: UsageFact, palette: Palette) -> str:
    """Indicator text for a state; empty when there's nothing to say."""
    if state is ExtraUsageState.ACTIVE:
        return paint(f"⚡ ${usage.extra_used:.2f}/${usage.extra_limit:.2f}", palette.amber)
    if state is ExtraUsageState.NEAR_ENTITLED:
        return paint("⚡ Extra", palette.dim)
    if state is ExtraUsageState.NEAR_UNENTITLED:
        return paint("⚡ No extra", palette.dimmer)
    return ""


def render_quota_segment(
    usage: UsageFact,
    now: datetime,
    palette: Palette,
    thresholds: Thresholds,
    force_show: bool = False,
) -> str:
    """Both quota bars, each followed by its reset time when relevant."""
    short_bar = render_limit_bar(
        usage.five_hour_pct, palette.sage, palette, thresholds.overlay_pct, force_show
    )
    long_bar = render_limit_bar(
        usage.seven_day_pct, palette.mauve, palette, thresholds.overlay_pct, force_show
    )

    short_reset = ""
    if usage.five_hour_reset_at is not None and should_show_reset(
        usage.five_hour_pct,
        usage.five_hour_reset_at,
        now,
        thresholds.short_reset_pct,
        thresholds.short_reset_minutes,
        MINUTE,
    ):
        short_reset = " " + paint(format_time(usage.five_hour_reset_at), palette.sage)

    long_reset = ""
    if usage.seven_day_reset_at is not None and should_show_reset(
        usage.seven_day_pct,
        usage.seven_day_reset_at,
        now,
        thresholds.long_reset_pct,
        thresholds.long_reset_hours,
        HOUR,
    ):
        long_reset = " " + paint(format_day_time(usage.seven_day_reset_at), palette.mauve)

    return f"{short_bar}{short_reset}  {long_bar}{long_reset}"
