"""
Auto-Fit Solver - Find the largest font size whose wrapped block fits a box
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from config import settings
from modules.line_breaker import smart_word_wrap, estimate_chars_per_line
from modules.text_measurer import measure_text_block, BlockMeasurement


@dataclass
class AutoFitOptions:
    """
    Every option recognized by auto_fit_text

    max_width / max_height: box the block must fit (px)
    min_font_size / max_font_size: search range (px)
    stroke_width: outline width, subtracted twice from each axis
    shadow_offset: (dx, dy), magnitudes subtracted from each axis
    """
    max_width: float = settings.TEXT_MAX_WIDTH
    max_height: float = settings.TEXT_MAX_HEIGHT
    min_font_size: int = settings.TEXT_MIN_FONT_SIZE
    max_font_size: int = settings.TEXT_MAX_FONT_SIZE
    font_family: str = settings.TEXT_FONT_FAMILY
    font_weight: int = settings.TEXT_FONT_WEIGHT
    line_height_multiplier: float = settings.TEXT_LINE_HEIGHT
    max_lines: int = settings.TEXT_MAX_LINES
    stroke_width: float = 0
    shadow_offset: Tuple[float, float] = (0, 0)
    font_size_step: int = settings.FONT_SIZE_STEP


@dataclass
class FitResult:
    """Best-effort fitted text block"""
    font_size: int
    lines: List[str]
    line_height: float
    width: int
    height: int
    fits: bool
    block: Optional[BlockMeasurement] = None
    warnings: List[str] = field(default_factory=list)
    effective_width: float = 0
    effective_height: float = 0


def effective_box(options: AutoFitOptions) -> Tuple[float, float]:
    """Box left after stroke and shadow allowances (at least 1px per axis)"""
    shadow_x, shadow_y = options.shadow_offset or (0, 0)
    width = max(1, options.max_width - options.stroke_width * 2 - abs(shadow_x or 0))
    height = max(1, options.max_height - options.stroke_width * 2 - abs(shadow_y or 0))
    return width, height


def auto_fit_text(text: str, options: Optional[AutoFitOptions] = None) -> FitResult:
    """
    Fit text into a box by descending font size search

    Font size steps down from max_font_size to min_font_size. At each size
    the text is wrapped to the estimated characters per line and measured;
    the first (largest) size whose block fits both axes wins. When nothing
    fits, the block is computed at min_font_size and returned with warnings.
    Never raises.

    Args:
        text: Text to fit
        options: AutoFitOptions (defaults from settings)

    Returns:
        FitResult with font_size in [min_font_size, max_font_size]
    """
    options = options or AutoFitOptions()
    warnings: List[str] = []

    if options.max_width <= 0:
        warnings.append(f"Invalid maxWidth ({options.max_width}px) - must be greater than 0")
    if options.max_height <= 0:
        warnings.append(f"Invalid maxHeight ({options.max_height}px) - must be greater than 0")

    min_size = options.min_font_size
    max_size = options.max_font_size
    if min_size > max_size:
        logger.warning(f"Font size range inverted ({min_size} > {max_size}), using {min_size}px only")
        max_size = min_size

    eff_width, eff_height = effective_box(options)
    step = max(1, options.font_size_step)

    for font_size in range(max_size, min_size - 1, -step):
        max_chars = estimate_chars_per_line(eff_width, font_size, options.font_family)
        lines = smart_word_wrap(text, max_chars, options.max_lines)
        if not lines:
            continue

        block = measure_text_block(
            lines,
            font_size,
            options.font_family,
            options.font_weight,
            options.line_height_multiplier,
        )

        if block.width <= eff_width and block.height <= eff_height:
            logger.debug(
                f"Auto-fit: '{text[:30]}' -> {font_size}px, {len(lines)} line(s), "
                f"{block.width}x{block.height} in {eff_width:.0f}x{eff_height:.0f}"
            )
            return FitResult(
                font_size=font_size,
                lines=lines,
                line_height=options.line_height_multiplier,
                width=block.width,
                height=block.height,
                fits=True,
                block=block,
                warnings=warnings,
                effective_width=eff_width,
                effective_height=eff_height,
            )

    # Nothing fits: compute at the minimum size and report the shortfall
    max_chars = estimate_chars_per_line(eff_width, min_size, options.font_family)
    lines = smart_word_wrap(text, max_chars, options.max_lines)
    block = measure_text_block(
        lines,
        min_size,
        options.font_family,
        options.font_weight,
        options.line_height_multiplier,
    )

    warnings.append(f"Text at minimum size ({min_size}px) - may still overflow")
    if block.width > eff_width:
        warnings.append(f"Text width ({block.width}px) exceeds available width ({eff_width:g}px)")
    if block.height > eff_height:
        warnings.append(f"Text height ({block.height}px) exceeds available height ({eff_height:g}px)")

    logger.warning(f"Auto-fit fell back to {min_size}px for '{text[:30]}'")

    return FitResult(
        font_size=min_size,
        lines=lines,
        line_height=options.line_height_multiplier,
        width=block.width,
        height=block.height,
        fits=block.width <= eff_width and block.height <= eff_height,
        block=block,
        warnings=warnings,
        effective_width=eff_width,
        effective_height=eff_height,
    )
