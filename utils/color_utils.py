"""
Color conversion helpers
"""

import math
import re
from typing import Tuple

from utils.math_utils import round_half_up, clamp

RGB = Tuple[int, int, int]

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse "#RRGGBB" (leading # optional)

    Returns:
        (r, g, b); unparseable input gives black
    """
    match = _HEX_PATTERN.match(hex_color or "")
    if not match:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format channels (rounded, clamped to 0-255) as lowercase "#rrggbb" """
    channels = (int(clamp(round_half_up(v), 0, 255)) for v in (r, g, b))
    return "#" + "".join(f"{c:02x}" for c in channels)


def color_distance(color1: str, color2: str) -> float:
    """Euclidean distance in RGB space"""
    r1, g1, b1 = hex_to_rgb(color1)
    r2, g2, b2 = hex_to_rgb(color2)
    return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)
