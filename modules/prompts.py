"""
Placement instructions for the image generator
"""

from typing import Optional, Sequence

from config import settings
from modules.collision import START, MIDDLE, END
from modules.logo_sizer import LogoElement
from modules.safe_zones import Canvas, LOGO_MARGIN

ANCHOR_DESCRIPTIONS = {
    START: "Left-aligned (position is left edge)",
    MIDDLE: "Center-aligned (position is center point)",
    END: "Right-aligned (position is right edge)",
}


def describe_position(x: float, y: float, canvas: Canvas = None) -> str:
    """Canvas third the point falls in, e.g. "top-right area (1840px, 60px)" """
    canvas = canvas or Canvas()
    if x < canvas.width / 3:
        horizontal = "left"
    elif x > canvas.width * 2 / 3:
        horizontal = "right"
    else:
        horizontal = "center"

    if y < canvas.height / 3:
        vertical = "top"
    elif y > canvas.height * 2 / 3:
        vertical = "bottom"
    else:
        vertical = "middle"

    return f"{vertical}-{horizontal} area ({x:g}px, {y:g}px)"


def describe_anchor(anchor: str) -> str:
    return ANCHOR_DESCRIPTIONS.get(anchor, ANCHOR_DESCRIPTIONS[START])


def generate_logo_prompt_instructions(logos: Sequence[LogoElement], canvas: Canvas = None) -> str:
    """
    Placement and quality requirements for each positioned logo

    Args:
        logos: Aligned logos
        canvas: Canvas the positions refer to

    Returns:
        Multi-line instructions, or "" when there are no logos
    """
    if not logos:
        return ""

    lines = ["BRAND LOGO PLACEMENT REQUIREMENTS:", ""]

    for i, logo in enumerate(logos, start=1):
        lines.extend([
            f"{i}. {logo.name or 'Brand Logo'}:",
            f"   - Position: {describe_position(logo.x, logo.y, canvas)}",
            f"   - Size: {logo.width}px wide x {logo.height}px tall",
            f"   - Alignment: {describe_anchor(logo.anchor)}",
            "   - CRITICAL: Do NOT crop, warp, or distort the logo",
            "   - Maintain original logo proportions exactly",
            "",
        ])

    lines.extend([
        "LOGO QUALITY REQUIREMENTS:",
        "- All logos must be crisp and clearly visible",
        "- Maintain high contrast against background",
        "- No blur, pixelation, or compression artifacts",
        "- Logo colors must be accurate to brand guidelines",
        "",
        "LOGO PLACEMENT CONSTRAINTS:",
        "- Logos must NOT overlap with the main subject",
        "- Logos must NOT be placed in bottom-right corner (YouTube duration overlay zone)",
        f"- Maintain at least {settings.LOGO_SPACING}px spacing between multiple logos",
        f"- Keep logos within safe zone margins ({LOGO_MARGIN.margin_x:g}px from edges)",
    ])

    return "\n".join(lines)


def generate_composite_instructions(
    logos: Sequence[LogoElement],
    subject_description: Optional[str] = None,
    text_content: Optional[str] = None,
    canvas: Canvas = None
) -> str:
    """Subject and text context followed by the logo instructions"""
    parts = []
    if subject_description:
        parts.append(f"Subject: {subject_description}")
    if text_content:
        parts.append(f'Text overlay: "{text_content}"')

    parts.append("")
    parts.append(generate_logo_prompt_instructions(logos, canvas))

    return "\n".join(parts)
