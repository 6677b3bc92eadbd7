"""
Layout Engine - Text and logo layout for a thumbnail canvas
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from config import settings
from modules.auto_fit import AutoFitOptions, FitResult, auto_fit_text
from modules.collision import (
    START, MIDDLE, END,
    AnchoredPoint, SafeZoneCheck,
    adjust_position_for_text, validate_safe_zone, get_text_bounds, find_danger_zone,
)
from modules.contrast import ContrastEngine, ColorSelection
from modules.logo_grid import align_logos_to_grid
from modules.logo_sizer import (
    LOGO_POSITIONS,
    DEFAULT_POSITION,
    LogoElement,
    calculate_multiple_logo_sizes,
    resolve_position_key,
)
from modules.position_scorer import PositionScorer, TextPosition
from modules.prompts import generate_logo_prompt_instructions
from modules.safe_zones import Canvas, Rect, SafeZoneRegistry, DESKTOP
from modules.validator import PlacementElement, ValidationResult, validate_placement, LOGO, TEXT
from utils.image_utils import BackgroundSampler


# Text anchor presets on the 1920x1080 reference canvas (y is the text center)
TEXT_POSITION_PRESETS = MappingProxyType({
    "topLeft": AnchoredPoint(90, 100, START),
    "topCenter": AnchoredPoint(960, 100, MIDDLE),
    "topRight": AnchoredPoint(1830, 100, END),
    "centerLeft": AnchoredPoint(90, 540, START),
    "center": AnchoredPoint(960, 540, MIDDLE),
    "centerRight": AnchoredPoint(1830, 540, END),
    "bottomLeft": AnchoredPoint(90, 980, START),
    "bottomCenter": AnchoredPoint(960, 980, MIDDLE),
    "bottomRight": AnchoredPoint(1830, 980, END),
    "rightCenter": AnchoredPoint(1700, 400, END),
    "rightUpper": AnchoredPoint(1700, 280, END),
    "rightThird": AnchoredPoint(1700, 400, END),
    "leftThird": AnchoredPoint(220, 400, START),
})

DEFAULT_TEXT_POSITION = "rightCenter"
FALLBACK_TEXT_POSITION = "center"


@dataclass
class TextStyle:
    """Font and effect bounds for a text block"""
    font_family: str = settings.TEXT_FONT_FAMILY
    font_weight: int = settings.TEXT_FONT_WEIGHT
    min_font_size: int = settings.TEXT_MIN_FONT_SIZE
    max_font_size: int = settings.TEXT_MAX_FONT_SIZE
    line_height: float = settings.TEXT_LINE_HEIGHT
    stroke_width: float = 0
    shadow_offset: Tuple[float, float] = (0, 0)


@dataclass
class AutoPlacement:
    """Score candidate positions against subject, logos and background"""


@dataclass
class ManualPlacement:
    """3x3 grid slot such as "top-left" or "bottom-right" """
    position_key: str


@dataclass
class FreePlacement:
    """User coordinates (x is the left edge, y the vertical center)"""
    x: float
    y: float


Placement = Union[AutoPlacement, ManualPlacement, FreePlacement]


@dataclass
class AutoColor:
    """Pick the most readable palette color"""


@dataclass
class ManualColor:
    """Keep the user's color and report its contrast"""
    text_color: str
    outline_color: Optional[str] = None


ColorMode = Union[AutoColor, ManualColor]


@dataclass
class TextLayoutRequest:
    """Everything calculate_text_layout needs"""
    text: str
    placement: Placement = field(default_factory=AutoPlacement)
    color: ColorMode = field(default_factory=AutoColor)
    style: TextStyle = field(default_factory=TextStyle)
    background: Optional[bytes] = None
    subject: Optional[Rect] = None
    logo_bounds: Sequence[Rect] = ()
    device: str = DESKTOP
    max_lines: int = settings.TEXT_MAX_LINES


@dataclass
class TextOverlay:
    """Result of prepare_text_overlay"""
    font_size: int
    lines: List[str]
    line_height: float
    width: int
    height: int
    x: int
    y: int
    anchor: str
    fits: bool
    position_adjusted: bool
    warnings: List[str]
    validation: SafeZoneCheck
    max_width: float
    max_height: float

    def to_dict(self) -> Dict:
        return {
            "fontSize": self.font_size,
            "lines": self.lines,
            "lineHeight": self.line_height,
            "textWidth": self.width,
            "textHeight": self.height,
            "x": self.x,
            "y": self.y,
            "anchor": self.anchor,
            "fits": self.fits,
            "positionAdjusted": self.position_adjusted,
            "warnings": self.warnings,
            "validation": {
                "valid": self.validation.valid,
                "overflow": self.validation.overflow,
                "inDurationZone": self.validation.in_duration_zone,
                "textBounds": self.validation.text_bounds,
                "safeBounds": self.validation.safe_bounds,
            },
            "maxWidth": self.max_width,
            "maxHeight": self.max_height,
        }


@dataclass
class TextLayout:
    """Result of calculate_text_layout"""
    font_size: int
    lines: List[str]
    x: int
    y: int
    anchor: str
    mode: str
    width: int
    height: int
    bounds: Rect
    color: ColorSelection
    warnings: List[str]
    validation: ValidationResult
    score: Optional[int] = None
    word_count: int = 0

    def to_dict(self) -> Dict:
        return {
            "fontSize": self.font_size,
            "lines": self.lines,
            "x": self.x,
            "y": self.y,
            "anchor": self.anchor,
            "mode": self.mode,
            "textWidth": self.width,
            "textHeight": self.height,
            "textBounds": self.bounds.as_dict(),
            "textColor": self.color.text_color,
            "backingTreatment": self.color.backing.to_dict() if self.color.backing else None,
            "color": self.color.to_dict(),
            "warnings": self.warnings,
            "validation": self.validation.to_dict(),
            "positionScore": self.score,
            "wordCount": self.word_count,
        }


@dataclass
class LogoOverlay:
    """Result of prepare_logo_overlay"""
    positions: List[LogoElement]
    prompt_instructions: str
    valid: bool
    warnings: List[str]
    validation: ValidationResult

    def to_dict(self) -> Dict:
        return {
            "positions": [logo.to_dict() for logo in self.positions],
            "promptInstructions": self.prompt_instructions,
            "valid": self.valid,
            "warnings": self.warnings,
            "validation": self.validation.to_dict(),
        }


class LayoutEngine:
    """
    Lays out text and logos on one canvas

    Text: auto-fit, placement (auto, manual or free), safe-zone correction,
    color selection and validation. Logos: sizing, grid alignment,
    validation and generator instructions.
    """

    def __init__(self, canvas: Canvas = None):
        """
        Initialize Layout Engine

        Args:
            canvas: Output canvas (defaults to the configured output size)
        """
        self.canvas = canvas or Canvas()
        self.registry = SafeZoneRegistry(self.canvas)
        self.scorer = PositionScorer(self.canvas)
        self.contrast = ContrastEngine()

        logger.info(f"LayoutEngine initialized ({self.canvas.width}x{self.canvas.height})")

    def resolve_text_position(self, position: Union[str, AnchoredPoint, None]) -> AnchoredPoint:
        """Preset name (scaled to the canvas) or a custom anchored point"""
        if isinstance(position, AnchoredPoint):
            return position

        key = position or DEFAULT_TEXT_POSITION
        preset = TEXT_POSITION_PRESETS.get(key)
        if preset is None:
            logger.warning(f"Unknown text position preset '{key}', using {FALLBACK_TEXT_POSITION}")
            preset = TEXT_POSITION_PRESETS[FALLBACK_TEXT_POSITION]

        return AnchoredPoint(
            preset.x * self.canvas.scale_x,
            preset.y * self.canvas.scale_y,
            preset.anchor,
        )

    def available_box(self, position: AnchoredPoint, device: str = DESKTOP) -> Tuple[float, float]:
        """
        Space a block anchored at position can take inside the safe zone

        Start anchors reach to the right margin, end anchors to the left
        margin, middle anchors twice the distance to the nearer margin.
        """
        zone = self.registry.text_safe_zone(device)
        width = self.canvas.width

        if position.anchor == START:
            max_width = (width - zone.margin_x) - position.x
        elif position.anchor == END:
            max_width = position.x - zone.margin_x
        else:
            left_space = position.x - zone.margin_x
            right_space = (width - zone.margin_x) - position.x
            max_width = min(left_space, right_space) * 2

        max_height = self.canvas.height - zone.margin_y * 2
        return max_width, max_height

    def _fit(self, text: str, style: TextStyle, max_width: float, max_height: float, max_lines: int) -> FitResult:
        return auto_fit_text(text, AutoFitOptions(
            max_width=max_width,
            max_height=max_height,
            min_font_size=style.min_font_size,
            max_font_size=style.max_font_size,
            font_family=style.font_family,
            font_weight=style.font_weight,
            line_height_multiplier=style.line_height,
            max_lines=max_lines,
            stroke_width=style.stroke_width,
            shadow_offset=style.shadow_offset,
        ))

    def prepare_text_overlay(
        self,
        text: str,
        style: TextStyle = None,
        position: Union[str, AnchoredPoint] = DEFAULT_TEXT_POSITION,
        device: str = DESKTOP,
        max_width: float = None,
        max_height: float = None,
        max_lines: int = None
    ) -> TextOverlay:
        """
        Fit text to the space available at a position and keep it in the safe zone

        Args:
            text: Text to place
            style: Font and effect bounds
            position: Preset name or custom AnchoredPoint
            device: desktop or mobile margins
            max_width: Override the derived fit width
            max_height: Override the derived fit height
            max_lines: Maximum number of lines

        Returns:
            TextOverlay; fits is False when the block overflows or the
            corrected position is still outside the safe zone
        """
        style = style or TextStyle()
        anchored = self.resolve_text_position(position)
        safe_zone = self.registry.text_safe_zone(device)

        box_width, box_height = self.available_box(anchored, device)
        box_width = max_width or box_width
        box_height = max_height or box_height

        fit = self._fit(text, style, box_width, box_height, max_lines or settings.TEXT_MAX_LINES)

        adjusted = adjust_position_for_text(fit, anchored, self.canvas, safe_zone)
        check = validate_safe_zone(
            fit,
            AnchoredPoint(adjusted.x, adjusted.y, adjusted.anchor),
            self.canvas,
            safe_zone,
        )

        warnings = list(fit.warnings) + list(adjusted.adjustments)
        if not check.valid:
            if check.in_duration_zone:
                warnings.append("Text may conflict with YouTube duration overlay")
            for side, amount in check.overflow.items():
                if amount > 0:
                    warnings.append(f"{side.capitalize()} overflow: {amount:g}px")

        return TextOverlay(
            font_size=fit.font_size,
            lines=fit.lines,
            line_height=fit.line_height,
            width=fit.width,
            height=fit.height,
            x=adjusted.x,
            y=adjusted.y,
            anchor=adjusted.anchor,
            fits=fit.fits and check.valid,
            position_adjusted=adjusted.adjusted,
            warnings=warnings,
            validation=check,
            max_width=box_width,
            max_height=box_height,
        )

    def _place(self, request: TextLayoutRequest, fit: FitResult, sampler: Optional[BackgroundSampler]) -> TextPosition:
        placement = request.placement
        if isinstance(placement, ManualPlacement):
            return self.scorer.manual_position(placement.position_key)
        if isinstance(placement, FreePlacement):
            return self.scorer.free_position(placement.x, placement.y, fit.width, fit.height)
        return self.scorer.find_best_position(
            fit.width,
            fit.height,
            subject=request.subject,
            logo_bounds=request.logo_bounds,
            sampler=sampler,
        )

    def _select_color(self, request: TextLayoutRequest, bounds: Rect, sampler: Optional[BackgroundSampler]) -> ColorSelection:
        region = (bounds.x, bounds.y, bounds.width, bounds.height)

        if isinstance(request.color, ManualColor):
            if sampler is not None:
                background = sampler.sample_background_colors(region)
                bg_color, defaulted = background.color, background.is_fallback
            else:
                bg_color, defaulted = settings.SAMPLE_FALLBACK_COLOR, True
            selection = self.contrast.validate_manual_color(
                request.color.text_color,
                bg_color,
                request.color.outline_color,
            )
            selection.background_defaulted = defaulted
            return selection

        if sampler is not None:
            return self.contrast.select_for_sample(sampler.sample_background_colors(region))

        return self.contrast.default_selection()

    def calculate_text_layout(self, request: TextLayoutRequest) -> TextLayout:
        """
        Full text layout: fit, place, correct, color and validate

        Args:
            request: TextLayoutRequest

        Returns:
            TextLayout with font size, lines, anchor point, color, backing
            treatment, warnings and validation
        """
        words = request.text.split()
        warnings: List[str] = []

        if len(words) > settings.TEXT_MAX_WORDS:
            logger.warning(f"Text has {len(words)} words, max recommended is {settings.TEXT_MAX_WORDS}")

        sampler = BackgroundSampler.from_bytes(request.background) if request.background else None

        fit = self._fit(
            request.text,
            request.style,
            settings.TEXT_MAX_WIDTH * self.canvas.scale_x,
            settings.TEXT_MAX_HEIGHT * self.canvas.scale_y,
            request.max_lines,
        )
        warnings.extend(fit.warnings)

        position = self._place(request, fit, sampler)

        adjusted = adjust_position_for_text(
            fit,
            AnchoredPoint(position.x, position.y, position.anchor),
            self.canvas,
            self.registry.text_safe_zone(request.device),
        )
        warnings.extend(adjusted.adjustments)

        bounds = get_text_bounds(AnchoredPoint(adjusted.x, adjusted.y, adjusted.anchor), fit.width, fit.height)

        color = self._select_color(request, bounds, sampler)

        zone = find_danger_zone(bounds, self.registry.danger_zones())
        if zone is not None:
            warnings.append(f"Text overlaps YouTube {zone.label}")
        if len(words) > settings.TEXT_MAX_WORDS:
            warnings.append(f"Text has {len(words)} words, recommend {settings.TEXT_MAX_WORDS} max")
        if not color.meets_wcag:
            warnings.append("Low contrast - text may be hard to read")

        elements = [PlacementElement("Text", bounds.x, bounds.y, bounds.width, bounds.height, START, TEXT)]
        elements.extend(
            PlacementElement(f"Logo {i}", logo.x, logo.y, logo.width, logo.height, START, LOGO)
            for i, logo in enumerate(request.logo_bounds, start=1)
        )
        validation = validate_placement(elements, request.subject, bounds, self.canvas)

        logger.info(
            f"Text layout ({position.mode}): {fit.font_size}px, {len(fit.lines)} line(s) "
            f"at ({adjusted.x}, {adjusted.y}) {adjusted.anchor}, color {color.text_color}"
        )

        return TextLayout(
            font_size=fit.font_size,
            lines=fit.lines,
            x=adjusted.x,
            y=adjusted.y,
            anchor=adjusted.anchor,
            mode=position.mode,
            width=fit.width,
            height=fit.height,
            bounds=bounds,
            color=color,
            warnings=warnings,
            validation=validation,
            score=position.score,
            word_count=len(words),
        )

    def prepare_logo_overlay(
        self,
        logos: Sequence[Dict],
        subject: Optional[Rect] = None,
        text_bounds: Optional[Rect] = None,
        spacing: float = None,
        allow_discouraged: bool = False
    ) -> LogoOverlay:
        """
        Size, align and validate logos grouped by preset

        Groups with more than one logo switch to the "<preset>Cluster"
        preset where one exists.

        Args:
            logos: Dicts with "name", optional "position" and "aspect_ratio"
            subject: Subject bounding box, if known
            text_bounds: Text bounding box, if known
            spacing: Gap between logos in a group
            allow_discouraged: Acknowledge discouraged presets

        Returns:
            LogoOverlay

        Raises:
            DiscouragedPositionError: If a discouraged preset is requested without acknowledgement
        """
        if not logos:
            validation = ValidationResult(is_valid=True, warnings=["No logos provided"])
            return LogoOverlay(
                positions=[],
                prompt_instructions="",
                valid=True,
                warnings=["No logos provided"],
                validation=validation,
            )

        groups: Dict[str, List[Dict]] = {}
        for logo in logos:
            groups.setdefault(resolve_position_key(logo.get("position") or DEFAULT_POSITION), []).append(logo)

        placed: List[LogoElement] = []
        for position_key, group in groups.items():
            sizes = calculate_multiple_logo_sizes(group, self.canvas, position_key)

            layout_key = position_key
            if len(group) > 1 and f"{position_key}Cluster" in LOGO_POSITIONS:
                layout_key = f"{position_key}Cluster"

            placed.extend(align_logos_to_grid(
                sizes,
                layout_key,
                spacing=spacing,
                canvas=self.canvas,
                allow_discouraged=allow_discouraged,
            ))

        validation = validate_placement(
            [PlacementElement.from_logo(logo) for logo in placed],
            subject,
            text_bounds,
            self.canvas,
        )

        warnings = list(validation.warnings)
        warnings.extend(f"ERROR: {error}" for error in validation.errors)

        logger.info(f"Logo overlay: {len(placed)} logo(s) in {len(groups)} group(s), valid={validation.is_valid}")

        return LogoOverlay(
            positions=placed,
            prompt_instructions=generate_logo_prompt_instructions(placed, self.canvas),
            valid=validation.is_valid,
            warnings=warnings,
            validation=validation,
        )
