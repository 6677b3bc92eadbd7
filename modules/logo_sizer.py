"""
Logo Sizer - Logo position presets and size calculation

Presets are defined on the 1920x1080 reference canvas. Each one is either
Recommended or Discouraged; a discouraged preset can only be selected by
acknowledging it.
"""

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence, Tuple, Union

from loguru import logger

from config import settings
from modules.collision import START, MIDDLE, END
from modules.safe_zones import Canvas, LOGO_MARGIN
from utils.exceptions import DiscouragedPositionError
from utils.math_utils import round_half_up

SINGLE_LOGO_HEIGHT = 140
PAIR_LOGO_HEIGHT = 100
CLUSTER_PAIR_LOGO_HEIGHT = 80
MULTIPLE_LOGO_HEIGHT = 60

SINGLE_MAX_WIDTH_FRACTION = 0.4
MULTIPLE_MAX_WIDTH_FRACTION = 0.25

CLUSTER_SLOT_OFFSET = 160
STACK_SLOT_OFFSET = 100

DEFAULT_POSITION = "topRight"

DEFAULT_LOGO_ASPECTS = MappingProxyType({
    "netflix": 3.5,
    "hbo": 2.8,
    "warner": 1.2,
    "disney": 3.2,
    "hulu": 2.5,
    "amazon": 4.0,
    "apple": 1.0,
    "paramount": 1.1,
    "peacock": 2.0,
    "default": 2.5,
})


@dataclass(frozen=True)
class LogoSlot:
    """
    Anchor point for one logo

    x is resolved through the anchor. y is the top edge, or the bottom edge
    when vertical_align is "bottom" (bottom-row presets).
    """
    x: float
    y: float
    anchor: str
    slot: int = 0
    vertical_align: str = "top"
    description: str = ""

    def scaled(self, canvas: Canvas) -> "LogoSlot":
        return replace(self, x=self.x * canvas.scale_x, y=self.y * canvas.scale_y)


@dataclass(frozen=True)
class Recommended:
    """Preset that is safe to use"""
    slots: Tuple[LogoSlot, ...]


@dataclass(frozen=True)
class Discouraged:
    """Preset that conflicts with platform UI; needs acknowledgement"""
    slots: Tuple[LogoSlot, ...]
    reason: str


PositionPreset = Union[Recommended, Discouraged]


@dataclass
class LogoSize:
    """Result of calculate_logo_size"""
    width: int
    height: int
    max_width: int
    max_height: float
    scale_factor: float
    aspect_ratio: float

    def to_dict(self) -> Dict:
        return {
            "width": self.width,
            "height": self.height,
            "maxWidth": self.max_width,
            "maxHeight": self.max_height,
            "scaleFactor": self.scale_factor,
            "aspectRatio": self.aspect_ratio,
        }


@dataclass
class LogoElement:
    """A sized (and, once aligned, positioned) logo"""
    name: str
    width: int
    height: int
    aspect_ratio: float = DEFAULT_LOGO_ASPECTS["default"]
    x: float = 0
    y: float = 0
    anchor: str = START
    slot: int = 0
    position: str = DEFAULT_POSITION

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "anchor": self.anchor,
            "slot": self.slot,
        }


def _row(x: float, y: float, anchor: str, step: float, description: str) -> Tuple[LogoSlot, ...]:
    return tuple(
        LogoSlot(x=x + step * i, y=y, anchor=anchor, slot=i, description=f"{description} slot {i + 1}")
        for i in range(3)
    )


def _column(x: float, y: float, anchor: str, description: str) -> Tuple[LogoSlot, ...]:
    return tuple(
        LogoSlot(x=x, y=y + STACK_SLOT_OFFSET * i, anchor=anchor, slot=i, description=f"{description} slot {i + 1}")
        for i in range(3)
    )


_LEFT = LOGO_MARGIN.margin_x
_RIGHT = settings.REFERENCE_WIDTH - LOGO_MARGIN.margin_x
_CENTER = settings.REFERENCE_WIDTH / 2
_TOP = LOGO_MARGIN.margin_y
_BOTTOM = settings.REFERENCE_HEIGHT - LOGO_MARGIN.margin_y

LOGO_POSITIONS = MappingProxyType({
    "topLeft": Recommended((LogoSlot(_LEFT, _TOP, START, description="Top-left corner, safe from YouTube UI"),)),
    "topCenter": Recommended((LogoSlot(_CENTER, _TOP, MIDDLE, description="Top-center, good for a single prominent logo"),)),
    "topRight": Recommended((LogoSlot(_RIGHT, _TOP, END, description="Top-right corner, classic streaming placement"),)),
    "topRightCluster": Recommended(_row(_RIGHT, _TOP, END, -CLUSTER_SLOT_OFFSET, "Top-right cluster")),
    "topLeftCluster": Recommended(_row(_LEFT, _TOP, START, CLUSTER_SLOT_OFFSET, "Top-left cluster")),
    "bottomLeft": Recommended((
        LogoSlot(_LEFT, _BOTTOM, START, vertical_align="bottom", description="Bottom-left corner"),
    )),
    "bottomCenter": Recommended((
        LogoSlot(_CENTER, _BOTTOM, MIDDLE, vertical_align="bottom", description="Bottom-center"),
    )),
    "bottomRight": Discouraged(
        (LogoSlot(_RIGHT, _BOTTOM, END, vertical_align="bottom", description="Bottom-right corner"),),
        reason="YouTube duration overlay covers this area",
    ),
    "leftStack": Recommended(_column(_LEFT, _TOP, START, "Left stack")),
    "rightStack": Recommended(_column(_RIGHT, _TOP, END, "Right stack")),
})

SCENARIO_POSITIONS = MappingProxyType({
    "streaming": ("topRight", "topRightCluster"),
    "network": ("topLeft", "topLeftCluster"),
    "production": ("bottomLeft", "leftStack"),
    "sponsor": ("topLeft", "topLeftCluster"),
})


def is_grouped_position(position_key: str) -> bool:
    """Cluster and stack presets hold one slot per logo"""
    return "Cluster" in position_key or "Stack" in position_key


def is_stack_position(position_key: str) -> bool:
    return "Stack" in position_key


def get_position_preset(position_key: str, canvas: Canvas = None) -> Optional[PositionPreset]:
    """
    Look up a preset scaled to the canvas

    Returns:
        Recommended or Discouraged with scaled slots, or None if unknown
    """
    preset = LOGO_POSITIONS.get(position_key)
    if preset is None:
        return None

    canvas = canvas or Canvas()
    slots = tuple(slot.scaled(canvas) for slot in preset.slots)
    if isinstance(preset, Discouraged):
        return Discouraged(slots, preset.reason)
    return Recommended(slots)


def resolve_position_key(position_key: Optional[str]) -> str:
    """Known preset name, or topRight (with a warning) for anything else"""
    if position_key in LOGO_POSITIONS:
        return position_key
    logger.warning(f"Unknown logo position '{position_key}', using {DEFAULT_POSITION}")
    return DEFAULT_POSITION


def select_position_slots(
    position_key: str,
    canvas: Canvas = None,
    allow_discouraged: bool = False
) -> Tuple[LogoSlot, ...]:
    """
    Slots of a preset, refusing discouraged presets unless acknowledged

    Unknown keys fall back to topRight with a warning.

    Raises:
        DiscouragedPositionError: If the preset is discouraged and not allowed
    """
    position_key = resolve_position_key(position_key)
    preset = get_position_preset(position_key, canvas)

    if isinstance(preset, Discouraged):
        if not allow_discouraged:
            raise DiscouragedPositionError(position_key, preset.reason)
        logger.warning(f"Using discouraged logo position '{position_key}': {preset.reason}")

    return preset.slots


def available_positions() -> List[str]:
    """Names of all recommended presets"""
    return [key for key, preset in LOGO_POSITIONS.items() if isinstance(preset, Recommended)]


def recommended_position(scenario: str, logo_count: int = 1) -> str:
    """Preset name for a scenario (streaming, network, production, sponsor)"""
    single, multiple = SCENARIO_POSITIONS.get(scenario, SCENARIO_POSITIONS["streaming"])
    return multiple if logo_count > 1 else single


def aspect_ratio_for(name: Optional[str], aspect_ratio: Optional[float] = None) -> float:
    """Explicit aspect ratio, else the brand table, else the default"""
    if aspect_ratio:
        return aspect_ratio
    return DEFAULT_LOGO_ASPECTS.get((name or "").lower(), DEFAULT_LOGO_ASPECTS["default"])


def calculate_logo_size(
    logo_count: int,
    canvas: Canvas = None,
    position_key: str = DEFAULT_POSITION,
    aspect_ratio: float = DEFAULT_LOGO_ASPECTS["default"],
    min_height: int = None,
    max_height: int = None
) -> LogoSize:
    """
    Size a logo for its count, canvas and preset

    Order of operations: scale and clamp the target height, derive the
    width, clamp the width to the canvas share; if the width was clamped,
    derive the height from it; if that height is below the minimum, raise it
    to the minimum and derive the width once more within the width limit.

    Args:
        logo_count: Number of logos sharing the preset
        canvas: Canvas dimensions
        position_key: Preset name (clusters and stacks shrink pairs)
        aspect_ratio: Width / height
        min_height: Minimum height (default from settings)
        max_height: Maximum height (default from settings)

    Returns:
        LogoSize
    """
    canvas = canvas or Canvas()
    min_height = settings.LOGO_MIN_HEIGHT if min_height is None else min_height
    max_height = settings.LOGO_MAX_HEIGHT if max_height is None else max_height

    if logo_count == 1:
        target_height = SINGLE_LOGO_HEIGHT
    elif logo_count == 2:
        target_height = CLUSTER_PAIR_LOGO_HEIGHT if is_grouped_position(position_key) else PAIR_LOGO_HEIGHT
    else:
        target_height = MULTIPLE_LOGO_HEIGHT

    scale_factor = canvas.uniform_scale

    target_height = round_half_up(target_height * scale_factor)
    target_height = max(min_height, min(max_height, target_height))

    target_width = round_half_up(target_height * aspect_ratio)

    max_width_fraction = SINGLE_MAX_WIDTH_FRACTION if logo_count == 1 else MULTIPLE_MAX_WIDTH_FRACTION
    max_width_allowed = round_half_up(canvas.width * max_width_fraction)
    final_width = min(target_width, max_width_allowed)

    if final_width < target_width:
        final_height = round_half_up(final_width / aspect_ratio)
    else:
        final_height = target_height

    if final_height < min_height:
        final_height = min_height
        final_width = min(round_half_up(final_height * aspect_ratio), max_width_allowed)

    return LogoSize(
        width=final_width,
        height=final_height,
        max_width=max_width_allowed,
        max_height=max_height * scale_factor,
        scale_factor=scale_factor,
        aspect_ratio=aspect_ratio,
    )


def calculate_multiple_logo_sizes(
    logos: Sequence[Dict],
    canvas: Canvas = None,
    position_key: str = "topRightCluster"
) -> List[LogoElement]:
    """
    Size a group of logos that share one preset

    Args:
        logos: Dicts with "name" and optional "aspect_ratio"
        canvas: Canvas dimensions
        position_key: Preset name

    Returns:
        Unpositioned LogoElements, in input order
    """
    if not logos:
        return []

    elements = []
    for logo in logos:
        aspect = aspect_ratio_for(logo.get("name"), logo.get("aspect_ratio"))
        size = calculate_logo_size(len(logos), canvas, position_key, aspect_ratio=aspect)
        elements.append(LogoElement(
            name=logo.get("name") or f"Logo {len(elements) + 1}",
            width=size.width,
            height=size.height,
            aspect_ratio=aspect,
            position=position_key,
        ))

    return elements
