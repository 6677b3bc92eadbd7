"""Tests for the auto-fit solver."""

from modules.auto_fit import AutoFitOptions, auto_fit_text, effective_box


def test_single_word_fits_at_largest_step():
    result = auto_fit_text("HELLO")
    assert result.fits
    assert result.font_size == 264
    assert result.lines == ["HELLO"]
    assert result.width <= 1000
    assert result.height <= 400


def test_font_size_stays_in_range():
    options = AutoFitOptions(max_width=800, max_height=300, min_font_size=60, max_font_size=200)
    for text in ["GO", "YOU WON'T BELIEVE THIS", "THE BEST BUDGET PHONE OF THE YEAR"]:
        result = auto_fit_text(text, options)
        assert 60 <= result.font_size <= 200
        assert len(result.lines) <= options.max_lines
        if result.fits:
            assert result.width <= 800
            assert result.height <= 300


def test_nothing_fits_returns_minimum_with_warnings():
    options = AutoFitOptions(max_width=100, max_height=50)
    result = auto_fit_text("THE QUICK BROWN FOX JUMPS OVER", options)
    assert result.font_size == 60
    assert not result.fits
    assert "Text at minimum size (60px) - may still overflow" in result.warnings
    assert any("exceeds available width" in w for w in result.warnings)


def test_invalid_box_is_reported_not_raised():
    options = AutoFitOptions(max_width=0, max_height=400)
    result = auto_fit_text("HELLO", options)
    assert result.font_size == options.min_font_size
    assert any("Invalid maxWidth" in w for w in result.warnings)


def test_inverted_range_uses_min_size():
    options = AutoFitOptions(min_font_size=100, max_font_size=80)
    result = auto_fit_text("HI", options)
    assert result.font_size == 100
    assert result.fits


def test_stroke_and_shadow_shrink_the_box():
    options = AutoFitOptions(max_width=1000, max_height=400, stroke_width=10, shadow_offset=(4, -6))
    assert effective_box(options) == (976, 374)


def test_effective_box_never_below_one_pixel():
    options = AutoFitOptions(max_width=10, max_height=10, stroke_width=20)
    assert effective_box(options) == (1, 1)


def test_stroke_lowers_fitted_size():
    plain = auto_fit_text("HELLO")
    stroked = auto_fit_text("HELLO", AutoFitOptions(stroke_width=20))
    assert stroked.font_size < plain.font_size
    assert stroked.width <= stroked.effective_width
