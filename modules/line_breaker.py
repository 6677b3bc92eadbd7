"""
Line Breaker - Word-wrap headline text into a bounded number of lines
"""

import math
import re
from typing import List

from modules.font_metrics import get_font_metrics

ELLIPSIS = "..."


def smart_word_wrap(text: str, max_chars_per_line: int, max_lines: int = 3) -> List[str]:
    """
    Wrap text into at most max_lines lines

    Whitespace is normalized first. Text that already fits is returned as a
    single line; a single long word is split with break_long_word; anything
    else goes through balanced_wrap, with greedy_wrap as the fallback.

    Args:
        text: Text to wrap
        max_chars_per_line: Character budget per line
        max_lines: Maximum number of lines

    Returns:
        List of lines (empty for blank text)
    """
    if not text:
        return []

    clean_text = re.sub(r"\s+", " ", text.strip())
    if not clean_text:
        return []

    if len(clean_text) <= max_chars_per_line:
        return [clean_text]

    words = clean_text.split(" ")

    if len(words) == 1:
        return break_long_word(clean_text, max_chars_per_line, max_lines)

    lines = balanced_wrap(words, max_chars_per_line, max_lines)

    if not lines:
        return greedy_wrap(words, max_chars_per_line, max_lines)

    return lines


def break_long_word(word: str, max_chars: int, max_lines: int) -> List[str]:
    """
    Split a word longer than max_chars

    Breaks after the last hyphen at or before the limit when that hyphen lies
    past the midpoint, otherwise hard-cuts at the limit. Stops after
    max_lines parts; anything left over is dropped.
    """
    parts = []
    remaining = word

    # A non-positive budget would never consume characters
    limit = max(1, max_chars)

    while remaining and len(parts) < max_lines:
        if len(remaining) <= limit:
            parts.append(remaining)
            break

        break_point = limit
        hyphen_index = remaining.rfind("-", 0, limit + 1)
        if hyphen_index > limit / 2:
            break_point = hyphen_index + 1

        parts.append(remaining[:break_point])
        remaining = remaining[break_point:]

    return parts


def balanced_wrap(words: List[str], max_chars: int, max_lines: int) -> List[str]:
    """
    Accumulate words into lines, flushing once the next word would exceed max_chars

    When max_lines is reached with words left over, the remainder is appended
    to the final line. A remainder longer than max_chars is cut to
    ``max_chars - len(final_line) - 4`` characters (never below zero) and
    marked with an ellipsis, so the final line can land a few characters over
    or under the budget.
    """
    lines: List[str] = []
    current_line: List[str] = []
    current_length = 0

    for index, word in enumerate(words):
        space_needed = 1 if current_line else 0
        new_length = current_length + space_needed + len(word)

        if new_length > max_chars and current_line:
            lines.append(" ".join(current_line))

            if len(lines) >= max_lines:
                remaining = " ".join(words[index:])
                if len(remaining) > max_chars:
                    keep = max(0, max_chars - len(lines[-1]) - 4)
                    lines[-1] += " " + remaining[:keep] + ELLIPSIS
                else:
                    lines[-1] += " " + remaining
                return lines

            current_line = [word]
            current_length = len(word)
        else:
            current_line.append(word)
            current_length = new_length

    if current_line:
        lines.append(" ".join(current_line))

    return lines


def greedy_wrap(words: List[str], max_chars: int, max_lines: int) -> List[str]:
    """Fill each line as far as possible; words past max_lines are dropped"""
    lines: List[str] = []
    current_line: List[str] = []
    current_length = 0

    for word in words:
        space_needed = 1 if current_line else 0
        new_length = current_length + space_needed + len(word)

        if new_length > max_chars and current_line:
            lines.append(" ".join(current_line))
            if len(lines) >= max_lines:
                return lines
            current_line = [word]
            current_length = len(word)
        else:
            current_line.append(word)
            current_length = new_length

    if current_line and len(lines) < max_lines:
        lines.append(" ".join(current_line))

    return lines


def estimate_chars_per_line(max_width: float, font_size: float, font_family: str = "Impact") -> int:
    """
    Estimate how many average characters fit in max_width

    Args:
        max_width: Available width in pixels
        font_size: Font size in pixels
        font_family: Font family name

    Returns:
        floor(max_width / (font_size * avg_char_width))
    """
    metrics = get_font_metrics(font_family)
    return math.floor(max_width / (font_size * metrics.avg_char_width))
