import math
from typing import Tuple


def round_half_up(value: float) -> int:
    """Rounds .5 upwards, the way the browser-side layout always did (Math.round)."""
    return int(math.floor(value + 0.5))


def clamp_size(requested_size, line_capacity: int) -> int:
    """
    Converts a raw footprint (int, float, numeric string, None...) into a slot width.
    Garbage counts as 0 and ends up as a single slot.
    """
    try:
        size = int(math.floor(float(requested_size)))
    except (TypeError, ValueError, OverflowError):
        size = 0
    return max(1, min(size, line_capacity))


def derive_shape(requested_size, line_capacity: int) -> Tuple[int, int]:
    """
    Returns (width, height) in slots.
    Narrow cards (1-2 slots) are square, wider ones are 1.5 times wider than tall.
    """
    width = clamp_size(requested_size, line_capacity)
    if width <= 2:
        height = width
    else:
        height = round_half_up(width / 1.5)
    return width, max(height, 1)
