"""
Logo Grid Aligner - Lay out sized logos from a preset's anchor
"""

from dataclasses import dataclass, field, replace
from typing import List, Sequence, Tuple

from loguru import logger

from config import settings
from modules.collision import MIDDLE, END
from modules.logo_sizer import (
    LogoElement,
    is_grouped_position,
    is_stack_position,
    resolve_position_key,
    select_position_slots,
)
from modules.safe_zones import Canvas, Rect
from utils.math_utils import round_half_up

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


@dataclass
class EqualSpacing:
    """Result of calculate_equal_spacing"""
    spacing: int
    positions: List[Tuple[int, int]] = field(default_factory=list)


def _offsets(sizes: Sequence[float], spacing: float) -> List[float]:
    """Cumulative offset of each element: sum of previous sizes plus spacing"""
    offsets = []
    total = 0.0
    for size in sizes:
        offsets.append(total)
        total += size + spacing
    return offsets


def align_logos_to_grid(
    logos: Sequence[LogoElement],
    position_key: str = "topRightCluster",
    spacing: float = None,
    direction: str = HORIZONTAL,
    canvas: Canvas = None,
    allow_discouraged: bool = False
) -> List[LogoElement]:
    """
    Position logos outward from a preset's first slot

    Every layout uses cumulative offsets, so neighbours are always exactly
    `spacing` apart regardless of their sizes:
    - stacks grow downward
    - right-anchored rows grow leftward, left-anchored rows rightward
    - middle-anchored rows are centered on the slot as a group
    - bottom-aligned presets laid out vertically grow upward

    Args:
        logos: Sized logos
        position_key: Preset name
        spacing: Gap between logos in pixels (default from settings)
        direction: horizontal or vertical (single presets only; stacks are vertical)
        canvas: Canvas the preset is scaled to
        allow_discouraged: Acknowledge a discouraged preset

    Returns:
        New LogoElements with x, y (top edge), anchor and slot set

    Raises:
        DiscouragedPositionError: If the preset is discouraged and not allowed
    """
    if not logos:
        return []

    spacing = settings.LOGO_SPACING if spacing is None else spacing
    if spacing < settings.LOGO_MIN_SPACING:
        logger.warning(
            f"Logo spacing {spacing}px is below the minimum {settings.LOGO_MIN_SPACING}px, logos may overlap"
        )

    position_key = resolve_position_key(position_key)
    base = select_position_slots(position_key, canvas, allow_discouraged)[0]

    if is_stack_position(position_key):
        direction = VERTICAL
    elif is_grouped_position(position_key):
        direction = HORIZONTAL

    bottom_aligned = base.vertical_align == "bottom"

    aligned = []
    if direction == VERTICAL:
        offsets = _offsets([logo.height for logo in logos], spacing)
        for index, (logo, offset) in enumerate(zip(logos, offsets)):
            if bottom_aligned:
                y = base.y - offset - logo.height
            else:
                y = base.y + offset
            aligned.append(replace(
                logo,
                x=round_half_up(base.x),
                y=round_half_up(y),
                anchor=base.anchor,
                slot=index,
                position=position_key,
            ))
        return aligned

    widths = [logo.width for logo in logos]
    offsets = _offsets(widths, spacing)
    group_width = sum(widths) + spacing * (len(logos) - 1)

    for index, (logo, offset) in enumerate(zip(logos, offsets)):
        if base.anchor == END:
            x = base.x - offset
        elif base.anchor == MIDDLE:
            x = base.x - group_width / 2 + offset + logo.width / 2
        else:
            x = base.x + offset

        y = base.y - logo.height if bottom_aligned else base.y

        aligned.append(replace(
            logo,
            x=round_half_up(x),
            y=round_half_up(y),
            anchor=base.anchor,
            slot=index,
            position=position_key,
        ))

    return aligned


def calculate_equal_spacing(
    sizes: Sequence[Tuple[float, float]],
    box: Rect,
    direction: str = HORIZONTAL
) -> EqualSpacing:
    """
    Distribute logos with equal gaps that exactly fill a box

    Args:
        sizes: (width, height) per logo
        box: Area to fill
        direction: horizontal or vertical

    Returns:
        EqualSpacing with the rounded gap and top-left positions; a single
        logo is centered, no logos gives spacing 0
    """
    if not sizes:
        return EqualSpacing(spacing=0, positions=[])

    if len(sizes) == 1:
        width, height = sizes[0]
        return EqualSpacing(
            spacing=0,
            positions=[(
                round_half_up(box.x + (box.width - width) / 2),
                round_half_up(box.y + (box.height - height) / 2),
            )],
        )

    horizontal = direction == HORIZONTAL
    total = sum(w if horizontal else h for w, h in sizes)
    available = (box.width if horizontal else box.height) - total
    spacing = available / (len(sizes) - 1)

    positions = []
    offset = 0.0
    for width, height in sizes:
        if horizontal:
            positions.append((box.x + offset, box.y + (box.height - height) / 2))
            offset += width + spacing
        else:
            positions.append((box.x + (box.width - width) / 2, box.y + offset))
            offset += height + spacing

    return EqualSpacing(
        spacing=round_half_up(spacing),
        positions=[(round_half_up(x), round_half_up(y)) for x, y in positions],
    )
