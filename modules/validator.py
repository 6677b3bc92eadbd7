"""
Placement Validator - Acceptance gate for positioned logos and text

A failed validation is a normal result, not an exception: callers decide
whether to re-prompt, auto-correct or accept with a caveat.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from loguru import logger

from modules.collision import START, get_bounding_box, rectangles_overlap, AnchoredPoint
from modules.safe_zones import Canvas, Rect, SafeZoneRegistry, DESKTOP

LOGO = "logo"
TEXT = "text"

SUBJECT_PADDING = 30
TEXT_PADDING = 20
DANGER_ZONE_PADDING = 10
ELEMENT_PADDING = 10


@dataclass
class PlacementElement:
    """
    Element to validate

    x is resolved through the anchor; y is the top edge.
    """
    name: Optional[str]
    x: float
    y: float
    width: float
    height: float
    anchor: str = START
    kind: str = LOGO

    @property
    def bounds(self) -> Rect:
        return get_bounding_box(AnchoredPoint(self.x, self.y, self.anchor), self.width, self.height)

    @classmethod
    def from_logo(cls, logo) -> "PlacementElement":
        return cls(logo.name, logo.x, logo.y, logo.width, logo.height, logo.anchor, LOGO)


@dataclass
class ValidationResult:
    """Outcome of validate_placement"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    element_count: int = 0

    def to_dict(self) -> Dict:
        return {
            "isValid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "elementCount": self.element_count,
        }


def _fmt(value: float) -> str:
    return f"{value:g}"


def validate_placement(
    elements: Sequence[PlacementElement],
    subject_bounds: Optional[Rect] = None,
    text_bounds: Optional[Rect] = None,
    canvas: Canvas = None
) -> ValidationResult:
    """
    Check every element against the canvas, margins, subject, text, platform
    UI and every later element of the same kind

    Errors: outside the canvas, over the subject (30px padding), over a hard
    danger zone (10px padding), overlapping a same-kind element (10px
    padding). Warnings: inside the margins, near text (20px padding), over a
    soft danger zone.

    Args:
        elements: Elements to validate
        subject_bounds: Subject bounding box, if known
        text_bounds: Text bounding box, checked against non-text elements
        canvas: Canvas dimensions

    Returns:
        ValidationResult (is_valid when there are no errors)
    """
    if not elements:
        return ValidationResult(is_valid=True, warnings=["No elements provided for validation"])

    canvas = canvas or Canvas()
    registry = SafeZoneRegistry(canvas)
    zones = registry.danger_zones()

    errors: List[str] = []
    warnings: List[str] = []
    suggestions: List[str] = []

    resolved = [(element, element.bounds) for element in elements]

    for i, (element, bounds) in enumerate(resolved):
        label = element.name or f"{element.kind.capitalize()} {i + 1}"

        if bounds.x < 0:
            errors.append(f"{label}: Extends beyond left edge by {_fmt(abs(bounds.x))}px")
            suggestions.append(f"Move {label} right or reduce size")
        if bounds.y < 0:
            errors.append(f"{label}: Extends beyond top edge by {_fmt(abs(bounds.y))}px")
            suggestions.append(f"Move {label} down or reduce size")
        if bounds.right > canvas.width:
            errors.append(f"{label}: Extends beyond right edge by {_fmt(bounds.right - canvas.width)}px")
            suggestions.append(f"Move {label} left or reduce size")
        if bounds.bottom > canvas.height:
            errors.append(f"{label}: Extends beyond bottom edge by {_fmt(bounds.bottom - canvas.height)}px")
            suggestions.append(f"Move {label} up or reduce size")

        margin = registry.logo_margin() if element.kind == LOGO else registry.text_safe_zone(DESKTOP)
        if bounds.x < margin.margin_x:
            warnings.append(f"{label}: Close to left edge (may be clipped on some displays)")
        if bounds.y < margin.margin_y:
            warnings.append(f"{label}: Close to top edge (may be clipped on some displays)")

        if subject_bounds is not None and rectangles_overlap(bounds, subject_bounds, SUBJECT_PADDING):
            errors.append(f"{label}: Overlaps with subject")
            suggestions.append(f"Move {label} away from subject or reduce size")

        if element.kind != TEXT and text_bounds is not None and rectangles_overlap(bounds, text_bounds, TEXT_PADDING):
            warnings.append(f"{label}: May overlap with text")
            suggestions.append(f"Consider repositioning {label} to avoid text")

        for zone in zones:
            if not rectangles_overlap(bounds, zone.rect, DANGER_ZONE_PADDING):
                continue
            if zone.hard:
                errors.append(f"{label}: Conflicts with YouTube {zone.overlay} zone")
                suggestions.append(f"Move {label} away from the {zone.label.lower()}")
            else:
                warnings.append(f"{label}: Near YouTube {zone.overlay} (visible on hover)")

        for j in range(i + 1, len(resolved)):
            other, other_bounds = resolved[j]
            if other.kind != element.kind:
                continue
            if rectangles_overlap(bounds, other_bounds, ELEMENT_PADDING):
                other_label = other.name or f"{other.kind.capitalize()} {j + 1}"
                errors.append(f"{label} overlaps with {other_label}")
                suggestions.append(f"Increase spacing between {label} and {other_label}")

    if errors:
        logger.debug(f"Placement validation failed: {len(errors)} error(s)")

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        suggestions=suggestions,
        element_count=len(elements),
    )
