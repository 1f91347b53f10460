"""Percentage-to-colour gradients.

Two piecewise-linear interpolators over [0, 100]:
- display_gradient: free-form percentages (context usage)
- limit_gradient: quota bars, muted while usage is low

Both clamp their input and are continuous at every breakpoint.
"""

from statusline.config import RGB

LOW: RGB = (130, 190, 150)
MID: RGB = (180, 195, 120)
HIGH: RGB = (210, 175, 100)
DANGER: RGB = (210, 95, 85)

DIM_BASE: RGB = (50, 48, 45)


def clamp_percent(p: float) -> float:
    return max(0.0, min(100.0, float(p)))


def lerp(start: RGB, end: RGB, t: float) -> RGB:
    """Linear interpolation between two colours, t in [0, 1]."""
    return tuple(round(a + (b - a) * t) for a, b in zip(start, end))


def blend(base: RGB, target: RGB, factor: float) -> RGB:
    """Move from base toward target: base + (target - base) * factor."""
    return lerp(base, target, factor)


def display_gradient(p: float) -> RGB:
    """Green below 60, through amber at 80, to red at 100."""
    p = clamp_percent(p)
    if p <= 60:
        return lerp(LOW, MID, p / 60)
    if p <= 80:
        return lerp(MID, HIGH, (p - 60) / 20)
    return lerp(HIGH, DANGER, (p - 80) / 20)


def limit_stop(p: float) -> RGB:
    """Unmuted quota colour: flat green to 80, amber at 90, red at 100."""
    p = clamp_percent(p)
    if p <= 80:
        return LOW
    if p <= 90:
        return lerp(LOW, HIGH, (p - 80) / 10)
    return lerp(HIGH, DANGER, (p - 90) / 10)


def limit_saturation(p: float) -> float:
    """Blend factor toward full colour: 0.75 up to 80%, 1.0 at 100%."""
    p = clamp_percent(p)
    if p <= 80:
        return 0.75
    return 0.75 + 0.25 * (p - 80) / 20


def limit_gradient(p: float, dim: RGB = DIM_BASE) -> RGB:
    """Quota colour, desaturated toward dim while usage is comfortable."""
    return blend(dim, limit_stop(p), limit_saturation(p))
