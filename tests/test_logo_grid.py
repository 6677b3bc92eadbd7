"""Tests for logo grid alignment."""

import pytest

from modules.logo_grid import HORIZONTAL, VERTICAL, align_logos_to_grid, calculate_equal_spacing
from modules.logo_sizer import LogoElement, calculate_multiple_logo_sizes
from modules.safe_zones import Rect
from modules.validator import PlacementElement, validate_placement
from utils.exceptions import DiscouragedPositionError


def logos(*sizes):
    return [LogoElement(name=f"Logo {i}", width=w, height=h) for i, (w, h) in enumerate(sizes, start=1)]


def test_right_cluster_grows_leftward(canvas):
    aligned = align_logos_to_grid(logos((210, 60), (150, 60), (100, 60)), "topRightCluster", 40, canvas=canvas)
    assert [logo.x for logo in aligned] == [1840, 1590, 1400]
    assert all(logo.y == 60 and logo.anchor == "end" for logo in aligned)
    assert [logo.slot for logo in aligned] == [0, 1, 2]


def test_left_cluster_grows_rightward(canvas):
    aligned = align_logos_to_grid(logos((210, 60), (150, 60), (100, 60)), "topLeftCluster", 40, canvas=canvas)
    assert [logo.x for logo in aligned] == [80, 330, 520]


def test_stack_grows_downward(canvas):
    aligned = align_logos_to_grid(logos((150, 60), (150, 60), (150, 60)), "leftStack", 40, HORIZONTAL, canvas)
    assert [logo.y for logo in aligned] == [60, 160, 260]
    assert all(logo.x == 80 for logo in aligned)


def test_middle_anchor_centers_the_group(canvas):
    aligned = align_logos_to_grid(logos((200, 60), (100, 60)), "topCenter", 40, canvas=canvas)
    assert [logo.x for logo in aligned] == [890, 1080]
    assert all(logo.anchor == "middle" for logo in aligned)


def test_bottom_presets_hang_from_bottom_margin(canvas):
    aligned = align_logos_to_grid(logos((350, 140)), "bottomLeft", canvas=canvas)
    assert aligned[0].y == 880
    assert aligned[0].y + aligned[0].height == 1020


def test_bottom_vertical_grows_upward(canvas):
    aligned = align_logos_to_grid(logos((250, 100), (250, 100)), "bottomLeft", 40, VERTICAL, canvas)
    assert [logo.y for logo in aligned] == [920, 780]


def test_unknown_preset_lays_out_as_top_right(canvas):
    aligned = align_logos_to_grid(logos((200, 60), (150, 60)), "fooStack", 40, canvas=canvas)
    assert [logo.x for logo in aligned] == [1840, 1600]
    assert all(logo.y == 60 and logo.position == "topRight" for logo in aligned)


def test_discouraged_preset_needs_acknowledgement(canvas):
    with pytest.raises(DiscouragedPositionError):
        align_logos_to_grid(logos((100, 40)), "bottomRight", canvas=canvas)
    aligned = align_logos_to_grid(logos((100, 40)), "bottomRight", canvas=canvas, allow_discouraged=True)
    assert aligned[0].position == "bottomRight"


def test_aligned_cluster_passes_validation(canvas):
    sized = calculate_multiple_logo_sizes(
        [{"name": "Netflix"}, {"name": "HBO"}, {"name": "Disney"}], canvas, "topRightCluster"
    )
    aligned = align_logos_to_grid(sized, "topRightCluster", 20, canvas=canvas)
    result = validate_placement([PlacementElement.from_logo(logo) for logo in aligned], canvas=canvas)

    assert not any("overlaps with" in error for error in result.errors)
    assert result.is_valid
    assert result.element_count == 3


def test_empty_input(canvas):
    assert align_logos_to_grid([], canvas=canvas) == []


def test_equal_spacing_single_logo_is_centered():
    result = calculate_equal_spacing([(100, 50)], Rect(0, 0, 500, 100))
    assert result.spacing == 0
    assert result.positions == [(200, 25)]


def test_equal_spacing_fills_box():
    result = calculate_equal_spacing([(100, 40)] * 3, Rect(0, 0, 400, 100))
    assert result.spacing == 50
    assert result.positions == [(0, 30), (150, 30), (300, 30)]


def test_equal_spacing_vertical():
    result = calculate_equal_spacing([(80, 100), (80, 100)], Rect(10, 0, 100, 300), VERTICAL)
    assert result.spacing == 100
    assert result.positions == [(20, 0), (20, 200)]


def test_equal_spacing_empty():
    assert calculate_equal_spacing([], Rect(0, 0, 100, 100)).spacing == 0
