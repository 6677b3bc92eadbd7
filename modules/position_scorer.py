"""
Position Scorer - Automatic, manual and free text placement

Auto mode scores a small fixed set of rule-of-thirds candidates against the
subject, logos, platform UI and the background contrast. Manual mode maps a
3x3 grid key to a position. Free mode clamps user coordinates into the safe
area.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Optional, Sequence

from loguru import logger

from modules.collision import START, MIDDLE, END, resolve_left, rects_intersect, find_danger_zone
from modules.contrast import best_black_or_white_contrast
from modules.safe_zones import Canvas, Rect, SafeZoneRegistry, DESKTOP, MOBILE
from utils.image_utils import BackgroundSampler
from utils.math_utils import round_half_up, clamp

# Fraction of the subject box (from its top) treated as the face
FACE_REGION_FRACTION = 0.4

RULE_OF_THIRDS_LINES = (0.333, 0.667)
THIRDS_TOLERANCE = 0.05

THIRDS_BONUS = 15
LOGO_OVERLAP_PENALTY = 20
HIGH_CONTRAST_BONUS = 20
MEDIUM_CONTRAST_BONUS = 10

# Clearance kept from the duration badge when free text is pushed out of it
FREE_MODE_CLEARANCE = 20


@dataclass(frozen=True)
class CandidateSpec:
    """Candidate anchor point as canvas fractions (y is the text center)"""
    x: float
    y: float
    anchor: str
    priority: int


# Upper 70% of the canvas only, to keep clear of bottom cutoff
CANDIDATES = (
    CandidateSpec(0.65, 0.32, END, 1),
    CandidateSpec(0.65, 0.48, END, 2),
    CandidateSpec(0.35, 0.32, START, 3),
    CandidateSpec(0.35, 0.48, START, 4),
    CandidateSpec(0.50, 0.18, MIDDLE, 5),
    CandidateSpec(0.40, 0.65, MIDDLE, 6),
)


@dataclass(frozen=True)
class ManualPreset:
    """Grid slot with an optional nudge away from platform UI"""
    x: float
    y: float
    anchor: str
    adjust_x: float = 0.0
    adjust_y: float = 0.0


MANUAL_POSITIONS = MappingProxyType({
    "top-left": ManualPreset(0.12, 0.15, START),
    "top-center": ManualPreset(0.50, 0.15, MIDDLE),
    "top-right": ManualPreset(0.88, 0.15, END),
    "middle-left": ManualPreset(0.12, 0.50, START),
    "middle-center": ManualPreset(0.50, 0.50, MIDDLE),
    "middle-right": ManualPreset(0.88, 0.50, END),
    # Nudged up, clear of the watch-later icons
    "bottom-left": ManualPreset(0.12, 0.72, START, adjust_y=-0.05),
    "bottom-center": ManualPreset(0.50, 0.72, MIDDLE),
    # Nudged left and up, clear of the duration badge
    "bottom-right": ManualPreset(0.68, 0.68, END, adjust_x=-0.08, adjust_y=-0.05),
})

DEFAULT_MANUAL_POSITION = "middle-center"

SUBJECT_CENTERS = MappingProxyType({
    "top-left": (0.28, 0.28),
    "top-center": (0.50, 0.28),
    "top-right": (0.72, 0.28),
    "middle-left": (0.28, 0.50),
    "middle-center": (0.50, 0.50),
    "middle-right": (0.72, 0.50),
    "bottom-left": (0.28, 0.72),
    "bottom-center": (0.50, 0.72),
    "bottom-right": (0.72, 0.72),
})

DEFAULT_SUBJECT_POSITION = "middle-left"


@dataclass
class PositionCandidate:
    """Scored candidate (x, y is the anchor point, y the vertical center)"""
    x: int
    y: int
    anchor: str
    priority: int
    score: int
    bounds: Rect


@dataclass
class TextPosition:
    """Resolved text anchor point"""
    x: int
    y: int
    anchor: str
    mode: str
    score: Optional[int] = None
    position_key: Optional[str] = None
    clamped: bool = False

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "anchor": self.anchor,
            "mode": self.mode,
            "score": self.score,
            "positionKey": self.position_key,
            "clamped": self.clamped,
        }


def face_region(subject: Rect) -> Rect:
    """Upper part of a subject box where the face usually is"""
    return Rect(subject.x, subject.y, subject.width, subject.height * FACE_REGION_FRACTION)


def anchor_point(bounds: Rect, anchor: str) -> float:
    """Inverse of resolve_left: x coordinate of the anchor for a box"""
    if anchor == START:
        return bounds.x
    if anchor == END:
        return bounds.right
    return bounds.center_x


class PositionScorer:
    """
    Chooses where a fitted text block goes on the canvas
    """

    def __init__(self, canvas: Canvas = None):
        self.canvas = canvas or Canvas()
        self.registry = SafeZoneRegistry(self.canvas)

    def _filter_by_subject(self, subject: Optional[Rect]) -> Sequence[CandidateSpec]:
        if subject is None:
            return CANDIDATES

        subject_center = subject.center_x / self.canvas.width
        if subject_center < 0.5:
            filtered = [c for c in CANDIDATES if c.x > 0.5]
        else:
            filtered = [c for c in CANDIDATES if c.x < 0.5]

        return filtered or CANDIDATES

    def score_candidates(
        self,
        width: float,
        height: float,
        subject: Optional[Rect] = None,
        logo_bounds: Sequence[Rect] = (),
        sampler: Optional[BackgroundSampler] = None
    ) -> List[PositionCandidate]:
        """
        Score every surviving candidate for a text block

        Args:
            width: Text block width in pixels
            height: Text block height in pixels
            subject: Subject bounding box, if known
            logo_bounds: Boxes of logos already placed
            sampler: Background sampler for the contrast bonus

        Returns:
            Candidates sorted by score, highest first (ties keep priority order)
        """
        margin = self.registry.placement_margin(MOBILE)
        zones = self.registry.danger_zones()
        canvas_w, canvas_h = self.canvas.width, self.canvas.height

        scored: List[PositionCandidate] = []

        for candidate in self._filter_by_subject(subject):
            pixel_x = candidate.x * canvas_w
            pixel_y = candidate.y * canvas_h

            left = clamp(
                resolve_left(pixel_x, width, candidate.anchor),
                margin.margin_x,
                canvas_w - margin.margin_x - width,
            )
            top = clamp(pixel_y - height / 2, margin.margin_y, canvas_h - margin.margin_y - height)
            bounds = Rect(left, top, width, height)

            zone = find_danger_zone(bounds, zones)
            if zone is not None:
                logger.debug(f"Candidate {candidate.priority} rejected: overlaps {zone.label}")
                continue
            if subject is not None and rects_intersect(bounds, face_region(subject)):
                logger.debug(f"Candidate {candidate.priority} rejected: overlaps subject face")
                continue

            score = 100 - candidate.priority * 10

            if any(abs(candidate.x - line) < THIRDS_TOLERANCE for line in RULE_OF_THIRDS_LINES):
                score += THIRDS_BONUS

            if any(rects_intersect(bounds, logo) for logo in logo_bounds):
                score -= LOGO_OVERLAP_PENALTY

            if sampler is not None:
                sample = sampler.sample_background_colors((bounds.x, bounds.y, bounds.width, bounds.height))
                best_contrast = best_black_or_white_contrast(sample.color)
                if best_contrast >= 4.5:
                    score += HIGH_CONTRAST_BONUS
                elif best_contrast >= 3.0:
                    score += MEDIUM_CONTRAST_BONUS

            logger.debug(f"Candidate {candidate.priority} at ({left:.0f}, {top:.0f}) scored {score}")

            scored.append(PositionCandidate(
                x=round_half_up(anchor_point(bounds, candidate.anchor)),
                y=round_half_up(top + height / 2),
                anchor=candidate.anchor,
                priority=candidate.priority,
                score=score,
                bounds=bounds,
            ))

        scored.sort(key=lambda c: c.score, reverse=True)
        return scored

    def find_best_position(
        self,
        width: float,
        height: float,
        subject: Optional[Rect] = None,
        logo_bounds: Sequence[Rect] = (),
        sampler: Optional[BackgroundSampler] = None
    ) -> TextPosition:
        """
        Auto mode: highest scoring candidate, or the canvas center with score 0

        Args:
            width: Text block width in pixels
            height: Text block height in pixels
            subject: Subject bounding box, if known
            logo_bounds: Boxes of logos already placed
            sampler: Background sampler for the contrast bonus

        Returns:
            TextPosition in auto mode
        """
        scored = self.score_candidates(width, height, subject, logo_bounds, sampler)

        if not scored:
            logger.warning("No text position candidate survived, using canvas center")
            return TextPosition(
                x=round_half_up(self.canvas.width * 0.5),
                y=round_half_up(self.canvas.height * 0.5),
                anchor=MIDDLE,
                mode="auto",
                score=0,
            )

        best = scored[0]
        logger.info(f"Auto text position: ({best.x}, {best.y}) anchor={best.anchor} score={best.score}")
        return TextPosition(x=best.x, y=best.y, anchor=best.anchor, mode="auto", score=best.score)

    def manual_position(self, position_key: str) -> TextPosition:
        """
        Manual mode: 3x3 grid slot with its safe-zone nudge applied

        Unknown keys fall back to middle-center.
        """
        if position_key not in MANUAL_POSITIONS:
            logger.warning(f"Unknown manual position '{position_key}', using {DEFAULT_MANUAL_POSITION}")
            position_key = DEFAULT_MANUAL_POSITION
        preset = MANUAL_POSITIONS[position_key]

        x = preset.x + preset.adjust_x
        y = preset.y + preset.adjust_y

        return TextPosition(
            x=round_half_up(x * self.canvas.width),
            y=round_half_up(y * self.canvas.height),
            anchor=preset.anchor,
            mode="manual",
            position_key=position_key,
        )

    def free_position(self, x: float, y: float, width: float, height: float) -> TextPosition:
        """
        Free mode: clamp a start-anchored block into the desktop margins

        A block that still reaches into the duration badge is pushed left and
        up out of it.

        Args:
            x: Left edge requested by the user
            y: Vertical center requested by the user
            width: Text block width
            height: Text block height

        Returns:
            TextPosition in free mode (clamped=True when it was pushed out of a zone)
        """
        margin = self.registry.placement_margin(DESKTOP)
        canvas_w, canvas_h = self.canvas.width, self.canvas.height

        x = max(margin.margin_x, min(x, canvas_w - margin.margin_x - width))
        y = max(margin.margin_y + height / 2, min(y, canvas_h - margin.margin_y - height / 2))

        zone = find_danger_zone(Rect(x, y - height / 2, width, height), self.registry.danger_zones())
        if zone is not None and zone.name == "duration":
            x = min(x, zone.rect.x - width - FREE_MODE_CLEARANCE)
            y = min(y, zone.rect.y - FREE_MODE_CLEARANCE - height / 2)
            logger.debug(f"Free text pushed out of {zone.label}")

        return TextPosition(
            x=round_half_up(x),
            y=round_half_up(y),
            anchor=START,
            mode="free",
            clamped=zone is not None,
        )

    def estimate_subject_bounds(self, position_key: str = DEFAULT_SUBJECT_POSITION, scale: float = 100) -> Rect:
        """
        Rough subject box for callers without a detector

        Args:
            position_key: Grid slot of the subject (unknown keys use middle-left)
            scale: Subject scale in percent (clamped to 60-140)

        Returns:
            Subject Rect kept inside the mobile placement margins
        """
        canvas_w, canvas_h = self.canvas.width, self.canvas.height
        margin = self.registry.placement_margin(MOBILE)

        normalized = clamp(scale / 100, 0.6, 1.4)
        width = clamp(canvas_w * 0.32 * normalized, canvas_w * 0.22, canvas_w * 0.55)
        height = clamp(canvas_h * 0.62 * normalized, canvas_h * 0.4, canvas_h * 0.85)

        cx, cy = SUBJECT_CENTERS.get(position_key, SUBJECT_CENTERS[DEFAULT_SUBJECT_POSITION])
        x = clamp(cx * canvas_w - width / 2, margin.margin_x, canvas_w - margin.margin_x - width)
        y = clamp(cy * canvas_h - height / 2, margin.margin_y, canvas_h - margin.margin_y - height)

        return Rect(x, y, width, height)
