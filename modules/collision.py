"""
Collision Resolver - Rectangle geometry, anchor resolution and one-shot corrections
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from modules.safe_zones import Canvas, Rect, SafeZone, DangerZone, SafeZoneRegistry, DESKTOP
from utils.exceptions import LayoutInputError
from utils.math_utils import round_half_up

START = "start"
MIDDLE = "middle"
END = "end"
ANCHORS = (START, MIDDLE, END)

# Clearance kept above the duration badge when text is moved out of it
DURATION_CLEARANCE = 20


@dataclass
class AnchoredPoint:
    """A single coordinate plus the anchor that resolves it to a box"""
    x: float
    y: float
    anchor: str = MIDDLE


@dataclass
class AdjustedPosition:
    """Result of adjust_position_for_text"""
    x: int
    y: int
    anchor: str
    adjusted: bool = False
    adjustments: List[str] = field(default_factory=list)


@dataclass
class SafeZoneCheck:
    """Result of validate_safe_zone"""
    valid: bool
    overflow: dict
    in_duration_zone: bool
    text_bounds: dict
    safe_bounds: dict


def rectangles_overlap(rect1: Rect, rect2: Rect, padding: float = 20) -> bool:
    """
    Axis-aligned overlap test with a padding buffer

    Symmetric in its rectangle arguments. Rectangles whose padded edges
    exactly touch count as overlapping.
    """
    return not (
        rect1.x + rect1.width + padding < rect2.x
        or rect2.x + rect2.width + padding < rect1.x
        or rect1.y + rect1.height + padding < rect2.y
        or rect2.y + rect2.height + padding < rect1.y
    )


def rects_intersect(rect1: Rect, rect2: Rect) -> bool:
    """Overlap test without padding"""
    return rectangles_overlap(rect1, rect2, padding=0)


def resolve_left(x: float, width: float, anchor: str) -> float:
    """Left edge of a box of the given width anchored at x"""
    if anchor == START:
        return x
    if anchor == MIDDLE:
        return x - width / 2
    if anchor == END:
        return x - width
    raise LayoutInputError("anchor", anchor, f"Unknown anchor {anchor!r}, expected one of {ANCHORS}")


def get_bounding_box(position: AnchoredPoint, width: float, height: float) -> Rect:
    """
    Resolve an anchored point to an absolute box

    The y coordinate is the top of the box; only x depends on the anchor.
    """
    return Rect(resolve_left(position.x, width, position.anchor), position.y, width, height)


def get_text_bounds(position: AnchoredPoint, width: float, height: float) -> Rect:
    """Text box whose y coordinate is the vertical center"""
    left = resolve_left(position.x, width, position.anchor)
    return Rect(left, position.y - height / 2, width, height)


def find_danger_zone(rect: Rect, zones) -> Optional[DangerZone]:
    """First danger zone the rectangle touches, or None"""
    for zone in zones:
        if rects_intersect(rect, zone.rect):
            return zone
    return None


def adjust_position_for_text(
    block,
    position: AnchoredPoint,
    canvas: Canvas,
    safe_zone: SafeZone = None
) -> AdjustedPosition:
    """
    Shift a text block back inside the safe margins

    One corrective shift per edge (left, right, top, bottom), then a move
    upward if the block's right and bottom both reach into the duration
    badge. This is a single pass: a block larger than the safe area stays
    out of bounds and validate_safe_zone reports it.

    Args:
        block: Anything with width and height (FitResult, BlockMeasurement)
        position: Desired anchored position (y is the vertical center)
        canvas: Canvas dimensions
        safe_zone: Margins (defaults to desktop text margins for the canvas)

    Returns:
        AdjustedPosition with rounded coordinates
    """
    registry = SafeZoneRegistry(canvas)
    safe_zone = safe_zone or registry.text_safe_zone(DESKTOP)
    width, height = block.width, block.height
    x, y, anchor = position.x, position.y, position.anchor

    adjustments: List[str] = []

    left = resolve_left(x, width, anchor)
    right = left + width
    top = y - height / 2
    bottom = y + height / 2

    if left < safe_zone.margin_x:
        shift = safe_zone.margin_x - left
        x += shift
        adjustments.append(f"Shifted right {shift:g}px to avoid left edge")

    right_bound = canvas.width - safe_zone.margin_x
    if right > right_bound:
        shift = right - right_bound
        x -= shift
        adjustments.append(f"Shifted left {shift:g}px to avoid right edge")

    if top < safe_zone.margin_y:
        shift = safe_zone.margin_y - top
        y += shift
        adjustments.append(f"Shifted down {shift:g}px to avoid top edge")

    bottom_bound = canvas.height - safe_zone.margin_y
    if bottom > bottom_bound:
        shift = bottom - bottom_bound
        y -= shift
        adjustments.append(f"Shifted up {shift:g}px to avoid bottom edge")

    duration = registry.duration_zone().rect
    new_right = resolve_left(x, width, anchor) + width
    new_bottom = y + height / 2
    if new_right > duration.x and new_bottom > duration.y:
        y = duration.y - height / 2 - DURATION_CLEARANCE
        adjustments.append("Moved up to avoid YouTube duration overlay")

    if adjustments:
        logger.debug(f"Text position adjusted: {'; '.join(adjustments)}")

    return AdjustedPosition(
        x=round_half_up(x),
        y=round_half_up(y),
        anchor=anchor,
        adjusted=bool(adjustments),
        adjustments=adjustments,
    )


def validate_safe_zone(
    block,
    position: AnchoredPoint,
    canvas: Canvas,
    safe_zone: SafeZone = None
) -> SafeZoneCheck:
    """
    Report how far a text block sits outside the safe margins

    Returns:
        SafeZoneCheck with per-side overflow (0 when inside) and the
        duration-badge conflict flag
    """
    registry = SafeZoneRegistry(canvas)
    safe_zone = safe_zone or registry.text_safe_zone(DESKTOP)
    width, height = block.width, block.height

    left = resolve_left(position.x, width, position.anchor)
    right = left + width
    top = position.y - height / 2
    bottom = position.y + height / 2

    overflow = {
        "left": max(0, safe_zone.margin_x - left),
        "right": max(0, right - (canvas.width - safe_zone.margin_x)),
        "top": max(0, safe_zone.margin_y - top),
        "bottom": max(0, bottom - (canvas.height - safe_zone.margin_y)),
    }

    duration = registry.duration_zone().rect
    in_duration_zone = right > duration.x and bottom > duration.y

    valid = all(v == 0 for v in overflow.values()) and not in_duration_zone

    return SafeZoneCheck(
        valid=valid,
        overflow=overflow,
        in_duration_zone=in_duration_zone,
        text_bounds={"left": left, "right": right, "top": top, "bottom": bottom},
        safe_bounds={
            "left": safe_zone.margin_x,
            "right": canvas.width - safe_zone.margin_x,
            "top": safe_zone.margin_y,
            "bottom": canvas.height - safe_zone.margin_y,
        },
    )
