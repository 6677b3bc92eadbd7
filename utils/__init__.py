"""
Utility Functions
"""

from .color_utils import (
    hex_to_rgb,
    rgb_to_hex,
    color_distance,
)
from .exceptions import (
    LayoutInputError,
    DiscouragedPositionError,
)
from .image_utils import (
    BackgroundSampler,
    Sampled,
    DefaultedTo,
    load_image_bytes,
)
from .math_utils import (
    round_half_up,
    clamp,
)

__all__ = [
    "hex_to_rgb",
    "rgb_to_hex",
    "color_distance",
    "LayoutInputError",
    "DiscouragedPositionError",
    "BackgroundSampler",
    "Sampled",
    "DefaultedTo",
    "load_image_bytes",
    "round_half_up",
    "clamp",
]
