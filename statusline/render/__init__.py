"""Rendering for statusline.

This package turns percentages and cached facts into coloured text:
- colors: ANSI escape helpers (fg, paint, hyperlink)
- gradient: display_gradient, limit_gradient, blend
- bars: BarStyle, render_bar, CONTEXT_BAR, LIMIT_BAR
- limits: Quota bars, reset visibility and extra-usage indicator
- lines: Output composer for both display lines
"""

from statusline.render.bars import (
    CONTEXT_BAR,
    LIMIT_BAR,
    BarStyle,
    overlay_text,
    render_bar,
    render_pip,
)
from statusline.render.colors import BEL, ESC, RESET, fg, hyperlink, paint
from statusline.render.gradient import (
    blend,
    clamp_percent,
    display_gradient,
    lerp,
    limit_gradient,
    limit_saturation,
    limit_stop,
)
from statusline.render.limits import (
    ExtraUsageState,
    extra_usage_state,
    format_day_time,
    format_time,
    render_extra_usage,
    render_limit_bar,
    render_quota_segment,
    should_show_reset,
    units_until,
)
from statusline.render.lines import (
    LineInputs,
    compose_lines,
    directory_label,
    render_snapshot,
)


__all__ = [
    # Bars
    "CONTEXT_BAR",
    "LIMIT_BAR",
    "BarStyle",
    "overlay_text",
    "render_bar",
    "render_pip",
    # Colors
    "BEL",
    "ESC",
    "RESET",
    "fg",
    "hyperlink",
    "paint",
    # Gradients
    "blend",
    "clamp_percent",
    "display_gradient",
    "lerp",
    "limit_gradient",
    "limit_saturation",
    "limit_stop",
    # Limits
    "ExtraUsageState",
    "extra_usage_state",
    "format_day_time",
    "format_time",
    "render_extra_usage",
    "render_limit_bar",
    "render_quota_segment",
    "should_show_reset",
    "units_until",
    # Lines
    "LineInputs",
    "compose_lines",
    "directory_label",
    "render_snapshot",
]
