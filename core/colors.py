from typing import Tuple

from core.period import round_half_up

RGB = Tuple[int, int, int]

LIGHT_GREEN: RGB = (144, 238, 144)
DARK_GREEN: RGB = (0, 204, 0)
YELLOW: RGB = (255, 255, 0)
ORANGE: RGB = (255, 165, 0)
RED: RGB = (255, 0, 0)

# (upper bound of band, band start, color at start, color at upper bound)
BANDS = (
    (60, 0, LIGHT_GREEN, DARK_GREEN),
    (80, 60, YELLOW, ORANGE),
    (100, 80, ORANGE, RED),
)


def clamp(p: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, p))


def _lerp(a: RGB, b: RGB, t: float) -> RGB:
    return tuple(round_half_up(x + (y - x) * t) for x, y in zip(a, b))


def progress_color(percentage: float) -> RGB:
    """Map a spending percentage to a color: greener is better, redder is worse.

    Each band includes its upper bound, so 60% is still dark green and 80% is
    orange.
    """
    p = clamp(percentage)
    for upper, lower, start, end in BANDS:
        if p <= upper:
            return _lerp(start, end, (p - lower) / (upper - lower))
    return RED


def to_css(rgb: RGB) -> str:
    return "rgb({}, {}, {})".format(*rgb)


def to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def status_tier(percentage: float) -> str:
    if percentage > 100:
        return "over budget"
    if percentage >= 80:
        return "warning"
    if percentage >= 60:
        return "caution"
    return "on track"
