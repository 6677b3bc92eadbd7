"""
Numeric helpers shared by the layout modules
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)"""
    return int(math.floor(value + 0.5))


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]; minimum wins when the range is empty."""
    return max(minimum, min(maximum, value))
