"""Glyph bar rendering.

A bar is a fixed number of pips, each covering an equal span of the
percentage range. Pips are either fully lit, partially lit (dimmer, and on
three-pip bars a different shape), or empty. The trailing pip always tracks
the live gradient colour so the bar's overall state stays readable even at
a handful of characters.

Contains:
- BarStyle: Pip count, glyph set and colour roles for one kind of bar
- CONTEXT_BAR / LIMIT_BAR: The two bar styles the status line uses
- render_bar: Render a percentage as coloured glyphs
- overlay_text: The percentage text centred over quota bars
"""

from dataclasses import dataclass
from typing import Optional

from statusline.config import RGB
from statusline.render.colors import RESET, fg
from statusline.render.gradient import DIM_BASE, blend


@dataclass(frozen=True)
class BarStyle:
    """Shape of a glyph bar."""

    pips: int
    full: str
    empty: str
    # Three-pip bars also show a half-filled shape; None means one filled shape
    half: Optional[str] = None
    # Partial pips target the gradient colour instead of the identity colour
    gradient_partials: bool = False


CONTEXT_BAR = BarStyle(pips=3, full="■", half="⬓", empty="□", gradient_partials=True)
LIMIT_BAR = BarStyle(pips=5, full="▰", empty="▱")

FULL_THRESHOLD = 0.75
HALF_THRESHOLD = 0.25


def overlay_text(pct: int) -> str:
    """Text drawn over a quota bar. 100 drops the % sign to fit."""
    return "100" if pct >= 100 else f"{pct}%"


def _overlay_span(text: str, pips: int) -> tuple[int, int]:
    start = (pips - len(text) + 1) // 2
    return start, start + len(text)


def _partial_shape(style: BarStyle, fill: float) -> str:
    if style.half is None:
        return style.full
    if fill >= FULL_THRESHOLD:
        return style.full
    if fill >= HALF_THRESHOLD:
        return style.half
    return style.empty


def render_pip(
    index: int,
    pct: int,
    style: BarStyle,
    base_rgb: RGB,
    gradient_rgb: RGB,
    empty_rgb: RGB,
    dim: RGB = DIM_BASE,
) -> str:
    """Render a single pip.

    Args:
        index: Pip position, 0-based.
        pct: Percentage in [0, 100].
        style: Bar style.
        base_rgb: Identity colour for fully lit pips.
        gradient_rgb: Live gradient colour for pct.
        empty_rgb: Colour of unlit pips.
        dim: Baseline partially lit pips blend toward.

    Returns:
        Escape sequence followed by the glyph.
    """
    # Integer spans of 100 per pip avoid float drift at pip boundaries
    scaled = pct * style.pips
    start = index * 100
    end = start + 100
    is_last = index == style.pips - 1

    if scaled >= end:
        rgb = gradient_rgb if is_last else base_rgb
        return f"{fg(rgb)}{style.full}"

    if scaled > start:
        fill = (scaled - start) / 100
        brightness = 0.25 + 0.75 * fill
        target = gradient_rgb if (is_last or style.gradient_partials) else base_rgb
        rgb = blend(dim, target, brightness)
        return f"{fg(rgb)}{_partial_shape(style, fill)}"

    return f"{fg(empty_rgb)}{style.empty}"


def render_bar(
    pct: int,
    style: BarStyle,
    base_rgb: RGB,
    gradient_rgb: RGB,
    empty_rgb: RGB = DIM_BASE,
    dim: RGB = DIM_BASE,
    show_text: bool = False,
) -> str:
    """Render a percentage as a bar of coloured pips.

    When show_text is set, the percentage is drawn in the gradient colour
    over the middle pips and only the flanking pips are rendered.

    Returns:
        The bar, terminated by a reset sequence.
    """
    pct = max(0, min(100, int(pct)))
    text = overlay_text(pct) if show_text else ""
    text_start, text_end = _overlay_span(text, style.pips)

    parts = []
    for i in range(style.pips):
        if text and text_start <= i < text_end:
            parts.append(f"{fg(gradient_rgb)}{text[i - text_start]}")
            continue
        parts.append(render_pip(i, pct, style, base_rgb, gradient_rgb, empty_rgb, dim))

    return "".join(parts) + RESET
