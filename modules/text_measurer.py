"""
Text Measurer - Pixel dimensions of lines and multi-line blocks
"""

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from modules.font_metrics import get_font_metrics, char_width


# Heavier weights render slightly wider
BOLD_WEIGHT = 700
BOLD_WIDTH_MULTIPLIER = 1.05


@dataclass
class LineMeasurement:
    """Measured single line"""
    width: int
    height: int
    font_size: float
    ascent: float = 0.0
    descent: float = 0.0
    line_height: float = 0.0

    @property
    def bounding_box(self) -> dict:
        return {
            "left": 0,
            "right": self.width,
            "top": -self.ascent,
            "bottom": self.descent,
        }


@dataclass
class BlockMeasurement:
    """Measured multi-line block"""
    width: int
    height: int
    line_height: int
    font_size: float
    lines: List[LineMeasurement] = field(default_factory=list)


def measure_text_width(
    text: str,
    font_size: float,
    font_family: str = "Impact",
    font_weight: int = 900
) -> LineMeasurement:
    """
    Measure the width of a single line of text

    Each character is classified (space, wide, narrow, uppercase, lowercase,
    digit, other) and weighted by the matching ratio of the font's metrics.

    Args:
        text: Line to measure
        font_size: Font size in pixels
        font_family: Font family name
        font_weight: Font weight (>= 700 adds 5% width)

    Returns:
        LineMeasurement with ceiled width/height
    """
    if not text:
        return LineMeasurement(width=0, height=0, font_size=font_size)

    metrics = get_font_metrics(font_family)

    total_width = sum(char_width(ch, font_size, metrics) for ch in text)

    if font_weight >= BOLD_WEIGHT:
        total_width *= BOLD_WIDTH_MULTIPLIER

    height = font_size * metrics.height_ratio

    return LineMeasurement(
        width=math.ceil(total_width),
        height=math.ceil(height),
        font_size=font_size,
        ascent=font_size * metrics.ascent_ratio,
        descent=font_size * metrics.descent_ratio,
        line_height=height,
    )


def measure_text_block(
    lines: Sequence[str],
    font_size: float,
    font_family: str = "Impact",
    font_weight: int = 900,
    line_height_multiplier: float = 1.1
) -> BlockMeasurement:
    """
    Measure a block of lines

    Width is the widest line. Height is (n-1) line heights plus one font size
    for the last line.

    Args:
        lines: Lines of text
        font_size: Font size in pixels
        font_family: Font family name
        font_weight: Font weight
        line_height_multiplier: Spacing multiplier on the font's height ratio

    Returns:
        BlockMeasurement
    """
    if not lines:
        return BlockMeasurement(width=0, height=0, line_height=0, font_size=font_size)

    metrics = get_font_metrics(font_family)
    line_height = font_size * metrics.height_ratio * line_height_multiplier

    measurements = [
        measure_text_width(line, font_size, font_family, font_weight)
        for line in lines
    ]
    max_width = max(m.width for m in measurements)

    total_height = (len(lines) - 1) * line_height + font_size

    return BlockMeasurement(
        width=math.ceil(max_width),
        height=math.ceil(total_height),
        line_height=math.ceil(line_height),
        font_size=font_size,
        lines=measurements,
    )


def will_text_fit(text: str, font_size: float, max_width: float, font_family: str = "Impact") -> bool:
    """Quick check whether a single line fits max_width at font_size"""
    return measure_text_width(text, font_size, font_family).width <= max_width


def find_optimal_font_size(
    text: str,
    max_width: float,
    min_size: int = 60,
    max_size: int = 280,
    font_family: str = "Impact"
) -> int:
    """
    Binary search for the largest font size whose single line fits max_width

    Returns:
        Largest fitting size, or min_size if nothing fits
    """
    low, high = min_size, max_size
    optimal = min_size

    while low <= high:
        mid = (low + high) // 2
        if measure_text_width(text, mid, font_family).width <= max_width:
            optimal = mid
            low = mid + 1
        else:
            high = mid - 1

    return optimal
