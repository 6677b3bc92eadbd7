"""Tests for font metrics and text measurement."""

import pytest

from modules.font_metrics import FONT_METRICS, get_font_metrics, primary_font_name, char_width
from modules.text_measurer import (
    measure_text_width,
    measure_text_block,
    will_text_fit,
    find_optimal_font_size,
)


def test_primary_font_name_strips_quotes_and_fallbacks():
    assert primary_font_name("'Arial Black', Impact, sans-serif") == "Arial Black"
    assert primary_font_name(' "Georgia" ') == "Georgia"


def test_unknown_font_uses_default_metrics():
    assert get_font_metrics("Comic Sans MS") is FONT_METRICS["default"]
    assert get_font_metrics("") is FONT_METRICS["default"]


def test_char_classes():
    metrics = get_font_metrics("Impact")
    assert char_width(" ", 100, metrics) == pytest.approx(25)
    assert char_width("W", 100, metrics) == pytest.approx(80.5)
    assert char_width("i", 100, metrics) == pytest.approx(25)
    assert char_width("A", 100, metrics) == pytest.approx(70)
    assert char_width("a", 100, metrics) == pytest.approx(50)
    assert char_width("7", 100, metrics) == pytest.approx(60)
    assert char_width("?", 100, metrics) == pytest.approx(55)


def test_hello_width_at_impact_100():
    # H, E, L, L are plain capitals; O is in the wide set
    result = measure_text_width("HELLO", 100, "Impact", 900)
    assert result.width == 379
    assert result.width == pytest.approx(5 * 100 * 0.70 * 1.05, rel=0.05)
    assert result.height == 115


def test_bold_multiplier_only_from_700():
    regular = measure_text_width("HELLO", 100, "Impact", 400)
    bold = measure_text_width("HELLO", 100, "Impact", 700)
    assert regular.width == 361
    assert bold.width > regular.width


def test_empty_text_measures_zero():
    result = measure_text_width("", 100)
    assert result.width == 0
    assert result.height == 0
    assert measure_text_block([], 100).height == 0


def test_line_bounding_box():
    result = measure_text_width("HI", 100, "Impact")
    box = result.bounding_box
    assert box["right"] == result.width
    assert box["top"] == pytest.approx(-85)
    assert box["bottom"] == pytest.approx(15)


def test_block_height_uses_font_size_for_last_line():
    block = measure_text_block(["HELLO", "WORLD"], 100, "Impact", 900, 1.1)
    # line height 100 * 1.15 * 1.1 = 126.5
    assert block.height == 227
    assert block.width == max(line.width for line in block.lines)
    assert len(block.lines) == 2


def test_will_text_fit_and_binary_search():
    assert will_text_fit("HELLO", 100, 400)
    assert not will_text_fit("HELLO", 100, 300)

    size = find_optimal_font_size("HELLO", 1000, 60, 280)
    assert measure_text_width("HELLO", size).width <= 1000
    assert measure_text_width("HELLO", size + 1).width > 1000


def test_binary_search_returns_min_when_nothing_fits():
    assert find_optimal_font_size("HELLO WORLD", 10, 60, 280) == 60
