"""
Safe Zone Registry - Margins and platform UI danger zones

All tables are defined on the 1920x1080 reference canvas and scaled
linearly to the actual canvas on lookup.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Tuple

from config import settings


@dataclass(frozen=True)
class Canvas:
    """Output canvas in pixels"""
    width: int = settings.OUTPUT_WIDTH
    height: int = settings.OUTPUT_HEIGHT

    @property
    def scale_x(self) -> float:
        return self.width / settings.REFERENCE_WIDTH

    @property
    def scale_y(self) -> float:
        return self.height / settings.REFERENCE_HEIGHT

    @property
    def uniform_scale(self) -> float:
        """Scale that keeps aspect ratio (smaller of the two axes)"""
        return min(self.scale_x, self.scale_y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (x, y is the top-left corner)"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def as_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class SafeZone:
    """Margin pair from each canvas edge"""
    margin_x: float
    margin_y: float

    def scaled(self, canvas: Canvas) -> "SafeZone":
        return SafeZone(self.margin_x * canvas.scale_x, self.margin_y * canvas.scale_y)


@dataclass(frozen=True)
class DangerZone:
    """
    Rectangle covered by platform UI

    Hard zones are always drawn over the thumbnail (duration badge). Soft
    zones only appear on hover or in some surfaces.
    """
    name: str
    label: str
    rect: Rect
    hard: bool = True
    overlay: str = ""

    def scaled(self, canvas: Canvas) -> "DangerZone":
        r = self.rect
        return DangerZone(
            name=self.name,
            label=self.label,
            rect=Rect(
                r.x * canvas.scale_x,
                r.y * canvas.scale_y,
                r.width * canvas.scale_x,
                r.height * canvas.scale_y,
            ),
            hard=self.hard,
            overlay=self.overlay,
        )


DESKTOP = "desktop"
MOBILE = "mobile"
DEVICES = (DESKTOP, MOBILE)

# Margins that keep fitted text uncropped
TEXT_SAFE_ZONES = MappingProxyType({
    DESKTOP: SafeZone(margin_x=90, margin_y=50),
    MOBILE: SafeZone(margin_x=160, margin_y=90),
})

# Margins used when searching / clamping text positions
PLACEMENT_MARGINS = MappingProxyType({
    DESKTOP: SafeZone(margin_x=100, margin_y=80),
    MOBILE: SafeZone(margin_x=180, margin_y=140),
})

LOGO_MARGIN = SafeZone(margin_x=80, margin_y=60)

DURATION_ZONE = DangerZone(
    name="duration",
    label="Duration badge",
    rect=Rect(1750, 1000, 170, 80),
    hard=True,
    overlay="duration overlay",
)

DANGER_ZONES: Tuple[DangerZone, ...] = (
    DURATION_ZONE,
    DangerZone(
        name="watch_later",
        label="Watch later icons",
        rect=Rect(0, 950, 150, 130),
        hard=False,
        overlay="watch later and playlist icons",
    ),
    DangerZone(
        name="channel_badge",
        label="Channel badge",
        rect=Rect(1750, 0, 170, 120),
        hard=False,
        overlay="channel badge",
    ),
)


class SafeZoneRegistry:
    """
    Read-only access to margins and danger zones scaled to a canvas
    """

    def __init__(self, canvas: Canvas = None):
        self.canvas = canvas or Canvas()

    def text_safe_zone(self, device: str = DESKTOP) -> SafeZone:
        """Text margins for a device class (unknown devices get desktop)"""
        return TEXT_SAFE_ZONES.get(device, TEXT_SAFE_ZONES[DESKTOP]).scaled(self.canvas)

    def placement_margin(self, device: str = MOBILE) -> SafeZone:
        return PLACEMENT_MARGINS.get(device, PLACEMENT_MARGINS[DESKTOP]).scaled(self.canvas)

    def logo_margin(self) -> SafeZone:
        return LOGO_MARGIN.scaled(self.canvas)

    def duration_zone(self) -> DangerZone:
        return DURATION_ZONE.scaled(self.canvas)

    def danger_zones(self, hard_only: bool = False) -> Tuple[DangerZone, ...]:
        zones = (zone.scaled(self.canvas) for zone in DANGER_ZONES)
        if hard_only:
            return tuple(z for z in zones if z.hard)
        return tuple(zones)

    def safe_zone_bounds(self, device: str = DESKTOP) -> Dict:
        """
        Safe rectangle inside the text margins

        Returns:
            Dict with left, right, top, bottom, width, height, device
        """
        zone = self.text_safe_zone(device)
        return {
            "left": zone.margin_x,
            "right": self.canvas.width - zone.margin_x,
            "top": zone.margin_y,
            "bottom": self.canvas.height - zone.margin_y,
            "width": self.canvas.width - zone.margin_x * 2,
            "height": self.canvas.height - zone.margin_y * 2,
            "device": device,
        }
