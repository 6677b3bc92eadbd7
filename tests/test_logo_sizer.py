"""Tests for logo presets and sizing."""

import pytest

from modules.logo_sizer import (
    Discouraged,
    Recommended,
    available_positions,
    calculate_logo_size,
    calculate_multiple_logo_sizes,
    get_position_preset,
    recommended_position,
    select_position_slots,
)
from modules.safe_zones import Canvas
from utils.exceptions import DiscouragedPositionError


def test_single_logo_size(canvas):
    size = calculate_logo_size(1, canvas, "topRight", aspect_ratio=3.5)
    assert (size.width, size.height) == (490, 140)
    assert size.max_width == 768
    assert size.scale_factor == 1


def test_target_height_by_count(canvas):
    assert calculate_logo_size(2, canvas, "topRightCluster").height == 80
    assert calculate_logo_size(2, canvas, "topRight").height == 100
    assert calculate_logo_size(3, canvas, "topRightCluster").height == 60


def test_wide_logo_is_clamped_to_width_share(canvas):
    size = calculate_logo_size(1, canvas, aspect_ratio=10)
    assert (size.width, size.height) == (768, 77)


def test_minimum_height_wins_over_aspect(canvas):
    size = calculate_logo_size(3, canvas, aspect_ratio=30)
    assert (size.width, size.height) == (480, 40)


def test_size_scales_with_canvas_and_rounds_half_up():
    size = calculate_logo_size(1, Canvas(1280, 720), aspect_ratio=2.5)
    assert size.height == 93
    assert size.width == 233
    assert size.max_height == pytest.approx(120)


def test_multiple_sizes_use_brand_aspects(canvas):
    elements = calculate_multiple_logo_sizes([{"name": "Netflix"}, {"name": "Unknown"}], canvas)
    assert [(e.name, e.width, e.height) for e in elements] == [("Netflix", 280, 80), ("Unknown", 200, 80)]


def test_explicit_aspect_overrides_table(canvas):
    elements = calculate_multiple_logo_sizes([{"name": "Netflix", "aspect_ratio": 1.0}], canvas, "topRight")
    assert elements[0].width == elements[0].height == 140


def test_bottom_right_is_discouraged(canvas):
    preset = get_position_preset("bottomRight", canvas)
    assert isinstance(preset, Discouraged)
    assert "duration" in preset.reason

    with pytest.raises(DiscouragedPositionError):
        select_position_slots("bottomRight", canvas)

    slots = select_position_slots("bottomRight", canvas, allow_discouraged=True)
    assert slots[0].vertical_align == "bottom"


def test_unknown_preset(canvas):
    assert get_position_preset("middleOfNowhere", canvas) is None
    slots = select_position_slots("middleOfNowhere", canvas)
    assert (slots[0].x, slots[0].y, slots[0].anchor) == (1840, 60, "end")


def test_presets_scale_to_canvas():
    preset = get_position_preset("topRight", Canvas(1280, 720))
    assert isinstance(preset, Recommended)
    assert preset.slots[0].x == pytest.approx(1840 * 2 / 3)
    assert preset.slots[0].y == pytest.approx(40)


def test_available_positions_exclude_discouraged():
    positions = available_positions()
    assert "topRight" in positions
    assert "leftStack" in positions
    assert "bottomRight" not in positions


def test_recommended_position_by_scenario():
    assert recommended_position("streaming", 1) == "topRight"
    assert recommended_position("streaming", 2) == "topRightCluster"
    assert recommended_position("production", 1) == "bottomLeft"
    assert recommended_position("unknown", 3) == "topRightCluster"
