"""
Contrast Engine - WCAG luminance math and readable text color selection
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Optional, Sequence

from loguru import logger

from config import settings
from utils.color_utils import hex_to_rgb
from utils.image_utils import SampleResult


TEXT_COLOR_PALETTE = MappingProxyType({
    "primary": ("#FFFFFF", "#000000", "#1A1A1A", "#F5F5F5"),
    "accents": ("#FF5500", "#FFD700", "#00D68F", "#FF3D71"),
    "neutral": ("#2D3436", "#636E72", "#B2BEC3"),
})

DEFAULT_CANDIDATES = TEXT_COLOR_PALETTE["primary"] + TEXT_COLOR_PALETTE["accents"]

LIGHT_BACKGROUND_LUMINANCE = 0.5


@dataclass(frozen=True)
class BackingTreatment:
    """Outline or drop shadow drawn behind low-contrast text"""
    type: str  # 'stroke' or 'shadow'
    color: str
    width: int = 0
    blur: int = 0
    offset_x: int = 0
    offset_y: int = 0

    def to_dict(self) -> Dict:
        if self.type == "stroke":
            return {"type": self.type, "color": self.color, "width": self.width}
        return {
            "type": self.type,
            "color": self.color,
            "blur": self.blur,
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
        }


DARK_STROKE = BackingTreatment(type="stroke", color="rgba(0,0,0,0.8)", width=4)
DROP_SHADOW = BackingTreatment(type="shadow", color="rgba(0,0,0,0.6)", blur=8, offset_x=3, offset_y=3)


@dataclass
class ColorSelection:
    """Chosen text color and how readable it is"""
    text_color: str
    contrast: float
    meets_wcag: bool
    meets_wcag_aa: bool
    needs_backing: bool
    backing: Optional[BackingTreatment]
    mode: str
    background_color: Optional[str] = None
    background_luminance: Optional[float] = None
    background_defaulted: bool = False
    outline_color: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "textColor": self.text_color,
            "outlineColor": self.outline_color,
            "contrast": self.contrast,
            "meetsWCAG": self.meets_wcag,
            "meetsWCAGAA": self.meets_wcag_aa,
            "needsBacking": self.needs_backing,
            "backingConfig": self.backing.to_dict() if self.backing else None,
            "bgColor": self.background_color,
            "bgLuminance": self.background_luminance,
            "bgDefaulted": self.background_defaulted,
            "mode": self.mode,
        }


def _linearize(channel: int) -> float:
    v = channel / 255
    return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_color: str) -> float:
    """
    WCAG relative luminance of a color

    Args:
        hex_color: "#RRGGBB"

    Returns:
        Luminance in [0, 1]
    """
    r, g, b = (_linearize(c) for c in hex_to_rgb(hex_color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1: str, color2: str) -> float:
    """WCAG contrast ratio, symmetric, in [1, 21]"""
    lum1 = relative_luminance(color1)
    lum2 = relative_luminance(color2)
    lighter = max(lum1, lum2)
    darker = min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def best_black_or_white_contrast(background_color: str) -> float:
    """Best contrast achievable with pure white or pure black text"""
    return max(contrast_ratio("#FFFFFF", background_color), contrast_ratio("#000000", background_color))


class ContrastEngine:
    """
    Picks a readable text color against a sampled background

    Thresholds come from settings: AA (normal text) and AA-large.
    """

    def __init__(self, palette: Sequence[str] = None):
        self.palette = tuple(palette or DEFAULT_CANDIDATES)
        self.aa = settings.CONTRAST_AA
        self.aa_large = settings.CONTRAST_AA_LARGE

    def select_optimal_text_color(
        self,
        background_color: str,
        palette: Sequence[str] = None
    ) -> ColorSelection:
        """
        Rank the palette by contrast and choose the first readable color

        Picks the first color meeting AA, else AA-large, else the best one.
        Below AA a backing is added: a dark stroke on light backgrounds
        (luminance > 0.5), a drop shadow otherwise.

        Args:
            background_color: Sampled background "#RRGGBB"
            palette: Candidate colors (defaults to primary + accents)

        Returns:
            ColorSelection in auto mode
        """
        candidates = tuple(palette or self.palette)
        bg_luminance = relative_luminance(background_color)

        # sorted() is stable, so palette order breaks ties
        scores = sorted(
            ((color, contrast_ratio(color, background_color)) for color in candidates),
            key=lambda item: item[1],
            reverse=True,
        )

        selected = (
            next((s for s in scores if s[1] >= self.aa), None)
            or next((s for s in scores if s[1] >= self.aa_large), None)
            or scores[0]
        )
        color, contrast = selected

        needs_backing = contrast < self.aa
        backing = None
        if needs_backing:
            backing = DARK_STROKE if bg_luminance > LIGHT_BACKGROUND_LUMINANCE else DROP_SHADOW

        logger.debug(
            f"Text color {color} on {background_color}: contrast {contrast:.2f}"
            + (f", backing {backing.type}" if backing else "")
        )

        return ColorSelection(
            text_color=color,
            contrast=round(contrast, 1),
            meets_wcag=contrast >= self.aa_large,
            meets_wcag_aa=contrast >= self.aa,
            needs_backing=needs_backing,
            backing=backing,
            mode="auto",
            background_color=background_color,
            background_luminance=round(bg_luminance, 2),
        )

    def select_for_sample(self, sample: SampleResult) -> ColorSelection:
        """select_optimal_text_color on a sampling result, flagging fallbacks"""
        selection = self.select_optimal_text_color(sample.color)
        selection.background_defaulted = sample.is_fallback
        return selection

    def validate_manual_color(
        self,
        text_color: str,
        background_color: str,
        outline_color: str = None
    ) -> ColorSelection:
        """
        Keep a user-chosen color and report its contrast

        A stroke backing (in the outline color when given) is added only
        below AA-large.
        """
        contrast = contrast_ratio(text_color, background_color)
        needs_backing = contrast < self.aa_large
        backing = None
        if needs_backing:
            backing = BackingTreatment(
                type="stroke",
                color=outline_color or DARK_STROKE.color,
                width=DARK_STROKE.width,
            )

        return ColorSelection(
            text_color=text_color,
            contrast=round(contrast, 1),
            meets_wcag=contrast >= self.aa_large,
            meets_wcag_aa=contrast >= self.aa,
            needs_backing=needs_backing,
            backing=backing,
            mode="manual",
            background_color=background_color,
            outline_color=outline_color,
        )

    def default_selection(self) -> ColorSelection:
        """White text with a dark stroke, used when there is no background to sample"""
        return ColorSelection(
            text_color="#FFFFFF",
            contrast=0,
            meets_wcag=True,
            meets_wcag_aa=True,
            needs_backing=True,
            backing=DARK_STROKE,
            mode="default",
        )
