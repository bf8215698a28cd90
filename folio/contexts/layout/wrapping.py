"""
Greedy word-wrap with caller-supplied text measurement.

The layout engine never computes font metrics itself. A rendering backend
supplies measure(text, font_size, font_weight) -> width; without one, widths
are estimated from character count.
"""

from typing import Callable, List, Optional

from folio.contexts.layout.logger import _log_debug

MeasureFn = Callable[[str, float, str], float]

# Average glyph width as a fraction of font size
ESTIMATE_FACTOR = 0.5
BOLD_ESTIMATE_FACTOR = 0.55


def estimate_width(text: str, font_size: float, font_weight: str = "normal") -> float:
    """
    Fixed character-width estimate of rendered text width.

    Example:
        >>> estimate_width("abcd", 10)
        20.0
    """
    factor = BOLD_ESTIMATE_FACTOR if font_weight == "bold" else ESTIMATE_FACTOR
    return len(text) * font_size * factor


def safe_measure(measure: Optional[MeasureFn]) -> MeasureFn:
    """
    Wrap a measure function so it can never abort a layout run.

    Returns estimate_width when measure is None. Otherwise every call that
    raises, or returns something that is not a finite non-negative number,
    is answered by the estimate for that string.
    """
    if measure is None:
        return estimate_width

    def _measure(text: str, font_size: float, font_weight: str = "normal") -> float:
        try:
            width = float(measure(text, font_size, font_weight))
        except Exception as e:
            _log_debug(f"measure failed for {text[:30]!r} ({type(e).__name__}), using estimate")
            return estimate_width(text, font_size, font_weight)
        if width != width or width < 0 or width == float("inf"):
            return estimate_width(text, font_size, font_weight)
        return width

    return _measure


def split_word(
    word: str, max_width: float, font_size: float, font_weight: str, measure: MeasureFn
) -> List[str]:
    """
    Break a word wider than max_width into character runs that fit.

    Every piece holds at least one character, so the loop always advances.

    Example:
        >>> split_word("abcdefgh", 20.0, 10.0, "normal", estimate_width)
        ['abcd', 'efgh']
    """
    pieces = []
    current = ""
    for char in word:
        candidate = current + char
        if current and measure(candidate, font_size, font_weight) > max_width:
            pieces.append(current)
            current = char
        else:
            current = candidate
    if current:
        pieces.append(current)
    return pieces


def wrap_text(
    text: str,
    max_width: float,
    font_size: float,
    font_weight: str = "normal",
    measure: Optional[MeasureFn] = None,
) -> List[str]:
    """
    Greedily wrap text into lines no wider than max_width.

    Whitespace runs collapse to single spaces. Words that cannot fit on a line
    by themselves are split by character, so no content is ever dropped.

    Args:
        text: Text to wrap
        max_width: Available width in points
        font_size: Font size in points
        font_weight: "normal" or "bold"
        measure: Width function (default: estimate_width)

    Returns:
        Wrapped lines (empty list for empty or whitespace-only text)

    Example:
        >>> wrap_text("the quick brown fox", 50.0, 10.0)
        ['the quick', 'brown fox']
    """
    measure = measure or estimate_width
    lines: List[str] = []
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate, font_size, font_weight) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if measure(word, font_size, font_weight) <= max_width:
            current = word
        else:
            pieces = split_word(word, max_width, font_size, font_weight, measure)
            lines.extend(pieces[:-1])
            current = pieces[-1]

    if current:
        lines.append(current)

    return lines
