"""Tests for word wrapping."""

from modules.line_breaker import (
    smart_word_wrap,
    break_long_word,
    greedy_wrap,
    estimate_chars_per_line,
)


def test_short_text_is_single_line():
    assert smart_word_wrap("HELLO WORLD", 20) == ["HELLO WORLD"]


def test_whitespace_is_normalized():
    assert smart_word_wrap("  HELLO \n\t WORLD  ", 20) == ["HELLO WORLD"]


def test_blank_text_gives_no_lines():
    assert smart_word_wrap("", 10) == []
    assert smart_word_wrap("   ", 10) == []


def test_long_headline_wraps_into_three_lines():
    lines = smart_word_wrap("THIS IS A VERY LONG HEADLINE FOR A THUMBNAIL", 15, 3)
    assert lines == ["THIS IS A VERY", "LONG HEADLINE", "FOR A THUMBNAIL"]
    assert all(len(line) <= 15 for line in lines)


def test_overflow_is_appended_with_ellipsis():
    lines = smart_word_wrap("ONE TWO THREE FOUR FIVE SIX SEVEN", 7, 2)
    assert len(lines) == 2
    assert lines[0] == "ONE TWO"
    assert lines[-1] == "THREE ..."


def test_short_overflow_is_appended_whole():
    lines = smart_word_wrap("AAAA BBBB CC", 4, 2)
    assert lines == ["AAAA", "BBBB CC"]


def test_single_long_word_is_hard_cut():
    assert smart_word_wrap("SUPERCALIFRAGILISTIC", 8, 3) == ["SUPERCAL", "IFRAGILI", "STIC"]


def test_long_word_breaks_after_late_hyphen():
    assert break_long_word("SUPER-MEGAHIT", 8, 3) == ["SUPER-", "MEGAHIT"]


def test_early_hyphen_is_ignored():
    assert break_long_word("MEGA-ULTRACOOL", 8, 3) == ["MEGA-ULT", "RACOOL"]


def test_long_word_respects_max_lines():
    assert break_long_word("ABCDEFGHIJ", 3, 2) == ["ABC", "DEF"]


def test_greedy_wrap_drops_words_past_max_lines():
    assert greedy_wrap(["AA", "BB", "CC", "DD"], 5, 2) == ["AA BB", "CC DD"]
    assert greedy_wrap(["AAAA", "BBBB", "CCCC"], 4, 2) == ["AAAA", "BBBB"]


def test_chars_per_line_estimate():
    # 1000 / (100 * 0.55)
    assert estimate_chars_per_line(1000, 100, "Impact") == 18
    assert estimate_chars_per_line(1000, 100, "Unknown Font") == 17
