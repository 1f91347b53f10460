"""Context window percentage.

The host's own percentage counts the whole window, but auto-compaction
fires before the window is full. The percentage shown here is measured
against the usable part of the window (window minus the compaction buffer),
so 100% means "compaction is imminent".
"""

import math
from typing import Optional

from statusline.snapshot import ContextWindow

AUTOCOMPACT_BUFFER_TOKENS = 33000


def _round_half_up(numerator: int, denominator: int) -> int:
    return (numerator * 100 + denominator // 2) // denominator


def compute_context_percent(
    window_size: float,
    auto_compact: bool = True,
    input_tokens: Optional[float] = None,
    cache_create: float = 0,
    cache_read: float = 0,
    raw_percent: Optional[float] = None,
    buffer: int = AUTOCOMPACT_BUFFER_TOKENS,
) -> int:
    """Compute the buffer-adjusted context usage percentage.

    Args:
        window_size: Total context window size in tokens.
        auto_compact: Whether auto-compaction is enabled in host settings.
        input_tokens: Input tokens of the current usage, if known.
        cache_create: Cache-creation tokens of the current usage.
        cache_read: Cache-read tokens of the current usage.
        raw_percent: The host's unadjusted used percentage (fallback).
        buffer: Tokens reserved for auto-compaction.

    Returns:
        Integer percentage clamped to [0, 100].
    """
    # JSON numbers like 1e999 decode to inf
    if not math.isfinite(window_size):
        return 0
    window = int(window_size)
    if window <= 0:
        return 0

    reserved = buffer if auto_compact else 0
    usable = max(1, window - reserved)

    has_tokens = (
        input_tokens is not None
        and input_tokens >= 0
        and all(math.isfinite(n) for n in (input_tokens, cache_create, cache_read))
    )
    if has_tokens:
        used = int(input_tokens) + int(cache_create) + int(cache_read)
        pct = _round_half_up(used, usable)
    elif raw_percent is not None and math.isfinite(raw_percent):
        # Back to tokens so both paths share the buffer-adjusted scale.
        # Anything outside [0, 100] clamps to the same result anyway.
        raw = max(0.0, min(100.0, raw_percent))
        used = int(window * raw / 100)
        pct = _round_half_up(used, usable)
    else:
        pct = 0

    return max(0, min(100, pct))


def context_percent_for(window: ContextWindow, auto_compact: bool, buffer: int) -> int:
    """Compute the context percentage straight from a snapshot's window."""
    usage = window.current_usage
    if usage is not None and usage.input_tokens is not None:
        return compute_context_percent(
            window.context_window_size,
            auto_compact=auto_compact,
            input_tokens=usage.input_tokens,
            cache_create=usage.cache_creation_input_tokens,
            cache_read=usage.cache_read_input_tokens,
            buffer=buffer,
        )
    return compute_context_percent(
        window.context_window_size,
        auto_compact=auto_compact,
        raw_percent=window.used_percentage,
        buffer=buffer,
    )
