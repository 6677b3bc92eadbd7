"""Tests for logo placement instructions."""

from modules.logo_sizer import LogoElement
from modules.prompts import describe_position, generate_logo_prompt_instructions, generate_composite_instructions


def test_describe_position(canvas):
    assert describe_position(1840, 60, canvas) == "top-right area (1840px, 60px)"
    assert describe_position(960, 540, canvas) == "middle-center area (960px, 540px)"
    assert describe_position(80, 1000, canvas) == "bottom-left area (80px, 1000px)"


def test_no_logos_gives_no_instructions(canvas):
    assert generate_logo_prompt_instructions([], canvas) == ""


def test_instructions_list_every_logo(canvas):
    logos = [
        LogoElement("Netflix", 350, 100, 3.5, x=1840, y=60, anchor="end"),
        LogoElement("HBO", 280, 100, 2.8, x=1450, y=60, anchor="end", slot=1),
    ]
    text = generate_logo_prompt_instructions(logos, canvas)
    assert text.startswith("BRAND LOGO PLACEMENT REQUIREMENTS:")
    assert "1. Netflix:" in text
    assert "2. HBO:" in text
    assert "Size: 350px wide x 100px tall" in text
    assert "Alignment: Right-aligned (position is right edge)" in text
    assert "CRITICAL: Do NOT crop" in text
    assert "LOGO QUALITY REQUIREMENTS:" in text
    assert "at least 40px spacing" in text


def test_composite_instructions(canvas):
    logos = [LogoElement("Netflix", 490, 140, 3.5, x=1840, y=60, anchor="end")]
    text = generate_composite_instructions(logos, "Host pointing left", "TOP 10 SHOWS", canvas)
    assert text.startswith("Subject: Host pointing left")
    assert 'Text overlay: "TOP 10 SHOWS"' in text
    assert "BRAND LOGO PLACEMENT REQUIREMENTS:" in text
