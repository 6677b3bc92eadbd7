"""Tests for automatic, manual and free text placement."""

import pytest

from modules.position_scorer import PositionScorer, face_region
from modules.safe_zones import Canvas, Rect
from utils.image_utils import BackgroundSampler


@pytest.fixture
def scorer(canvas):
    return PositionScorer(canvas)


def test_best_candidate_without_constraints(scorer):
    position = scorer.find_best_position(600, 150)
    assert (position.x, position.y) == (1248, 346)
    assert position.anchor == "end"
    assert position.score == 105
    assert position.mode == "auto"


def test_candidates_are_sorted_by_score(scorer):
    scored = scorer.score_candidates(600, 150)
    scores = [c.score for c in scored]
    assert scores == sorted(scores, reverse=True)
    assert [c.priority for c in scored] == [1, 2, 3, 4, 5, 6]


def test_subject_on_left_puts_text_right(scorer):
    position = scorer.find_best_position(600, 150, subject=Rect(100, 200, 500, 800))
    assert position.anchor == "end"
    assert position.x > 960


def test_subject_on_right_puts_text_left(scorer):
    position = scorer.find_best_position(600, 150, subject=Rect(1300, 100, 500, 900))
    assert position.anchor == "start"
    assert position.x == 672
    assert position.score == 85


def test_no_surviving_candidate_falls_back_to_center(scorer):
    position = scorer.find_best_position(600, 150, subject=Rect(0, 0, 1920, 2000))
    assert (position.x, position.y) == (960, 540)
    assert position.anchor == "middle"
    assert position.score == 0


def test_logo_overlap_is_penalized(scorer):
    position = scorer.find_best_position(600, 150, logo_bounds=[Rect(700, 300, 100, 100)])
    assert (position.x, position.y) == (1248, 518)
    assert position.score == 95


def test_high_contrast_background_adds_bonus(scorer, solid_png):
    sampler = BackgroundSampler.from_bytes(solid_png("black"))
    position = scorer.find_best_position(600, 150, sampler=sampler)
    assert position.score == 125


def test_face_region_is_upper_part_of_subject():
    assert face_region(Rect(100, 200, 500, 1000)) == Rect(100, 200, 500, 400)


def test_manual_positions(scorer):
    top_left = scorer.manual_position("top-left")
    assert (top_left.x, top_left.y, top_left.anchor) == (230, 162, "start")
    assert top_left.mode == "manual"

    bottom_right = scorer.manual_position("bottom-right")
    assert (bottom_right.x, bottom_right.y, bottom_right.anchor) == (1152, 680, "end")

    bottom_left = scorer.manual_position("bottom-left")
    assert (bottom_left.x, bottom_left.y) == (230, 724)


def test_unknown_manual_position_uses_center(scorer):
    position = scorer.manual_position("somewhere")
    assert (position.x, position.y, position.anchor) == (960, 540, "middle")
    assert position.position_key == "middle-center"


def test_free_position_inside_is_kept(scorer):
    position = scorer.free_position(400, 500, 300, 100)
    assert (position.x, position.y) == (400, 500)
    assert position.anchor == "start"
    assert not position.clamped


def test_free_position_is_pushed_out_of_duration_badge(scorer):
    position = scorer.free_position(1900, 1070, 300, 100)
    assert (position.x, position.y) == (1430, 930)
    assert position.clamped


def test_estimate_subject_bounds(scorer):
    bounds = scorer.estimate_subject_bounds("middle-left", 100)
    assert bounds.x == pytest.approx(230.4)
    assert bounds.y == pytest.approx(205.2)
    assert bounds.width == pytest.approx(614.4)
    assert bounds.height == pytest.approx(669.6)


def test_estimated_subject_stays_inside_margins():
    scorer = PositionScorer(Canvas(1280, 720))
    for key in ("top-left", "bottom-right", "unknown"):
        bounds = scorer.estimate_subject_bounds(key, 140)
        assert bounds.x >= 120 - 1e-9
        assert bounds.right <= 1280 - 120 + 1e-9
