"""
Font Metrics - Static per-family character width/height ratios

Ratios are relative to font size and approximate the rendered glyphs of the
display fonts commonly used on thumbnails. They are loaded once and never
mutated.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class FontMetrics:
    """Width and height ratios for one font family"""
    avg_char_width: float
    capital_ratio: float
    lower_ratio: float
    number_ratio: float
    space_ratio: float
    height_ratio: float
    ascent_ratio: float
    descent_ratio: float


DEFAULT_FONT = "default"

FONT_METRICS = MappingProxyType({
    # Impact is very wide and condensed
    "Impact": FontMetrics(
        avg_char_width=0.55,
        capital_ratio=0.70,
        lower_ratio=0.50,
        number_ratio=0.60,
        space_ratio=0.25,
        height_ratio=1.15,
        ascent_ratio=0.85,
        descent_ratio=0.15,
    ),
    "Arial Black": FontMetrics(
        avg_char_width=0.65,
        capital_ratio=0.75,
        lower_ratio=0.55,
        number_ratio=0.65,
        space_ratio=0.28,
        height_ratio=1.20,
        ascent_ratio=0.85,
        descent_ratio=0.20,
    ),
    "Helvetica Neue": FontMetrics(
        avg_char_width=0.55,
        capital_ratio=0.70,
        lower_ratio=0.50,
        number_ratio=0.60,
        space_ratio=0.28,
        height_ratio=1.15,
        ascent_ratio=0.80,
        descent_ratio=0.20,
    ),
    "Arial": FontMetrics(
        avg_char_width=0.55,
        capital_ratio=0.70,
        lower_ratio=0.50,
        number_ratio=0.60,
        space_ratio=0.28,
        height_ratio=1.15,
        ascent_ratio=0.80,
        descent_ratio=0.20,
    ),
    "Georgia": FontMetrics(
        avg_char_width=0.52,
        capital_ratio=0.72,
        lower_ratio=0.48,
        number_ratio=0.58,
        space_ratio=0.25,
        height_ratio=1.20,
        ascent_ratio=0.80,
        descent_ratio=0.25,
    ),
    DEFAULT_FONT: FontMetrics(
        avg_char_width=0.58,
        capital_ratio=0.70,
        lower_ratio=0.52,
        number_ratio=0.60,
        space_ratio=0.27,
        height_ratio=1.18,
        ascent_ratio=0.82,
        descent_ratio=0.18,
    ),
})

# Characters that take more / less horizontal space than their class average
WIDE_CHARS = frozenset("WMOQGDwm@%")
NARROW_CHARS = frozenset("ilIjtfr1!.,:;'\"")


def primary_font_name(font_family: str) -> str:
    """
    Extract the primary font from a CSS-style font-family string

    Args:
        font_family: e.g. "'Arial Black', Impact, sans-serif"

    Returns:
        First family name without quotes, e.g. "Arial Black"
    """
    first = (font_family or "").split(",")[0]
    return first.strip().replace("'", "").replace('"', "")


def get_font_metrics(font_family: str) -> FontMetrics:
    """
    Look up metrics for a font family, falling back to the default record

    Args:
        font_family: Font family name or font-family string

    Returns:
        FontMetrics for the primary font (never fails)
    """
    return FONT_METRICS.get(primary_font_name(font_family), FONT_METRICS[DEFAULT_FONT])


def char_width(char: str, font_size: float, metrics: FontMetrics) -> float:
    """Estimated width of a single character in pixels"""
    if char == " ":
        return font_size * metrics.space_ratio
    if char in WIDE_CHARS:
        return font_size * metrics.capital_ratio * 1.15
    if char in NARROW_CHARS:
        return font_size * metrics.lower_ratio * 0.5
    if "A" <= char <= "Z":
        return font_size * metrics.capital_ratio
    if "a" <= char <= "z":
        return font_size * metrics.lower_ratio
    if "0" <= char <= "9":
        return font_size * metrics.number_ratio
    return font_size * metrics.avg_char_width
