"""Unit tests for word wrapping and text measurement."""

import pytest

from folio.contexts.layout.wrapping import (
    estimate_width,
    safe_measure,
    split_word,
    wrap_text,
)


@pytest.mark.unit
def test_estimate_width():
    """Test the fixed character-width estimate."""
    assert estimate_width("abcd", 10) == 20.0
    assert estimate_width("abcd", 10, "bold") == pytest.approx(22.0)
    assert estimate_width("", 10) == 0.0


@pytest.mark.unit
def test_wrap_text_greedy():
    """Test words are packed greedily under the width."""
    assert wrap_text("the quick brown fox", 50.0, 10.0) == ["the quick", "brown fox"]


@pytest.mark.unit
def test_wrap_text_fits_on_one_line():
    assert wrap_text("short line", 500.0, 10.0) == ["short line"]


@pytest.mark.unit
def test_wrap_text_collapses_whitespace():
    """Test runs of whitespace collapse to single spaces."""
    assert wrap_text("a   b\t\tc", 500.0, 10.0) == ["a b c"]


@pytest.mark.unit
def test_wrap_text_empty():
    """Test empty and whitespace-only text wrap to no lines."""
    assert wrap_text("", 100.0, 10.0) == []
    assert wrap_text("   ", 100.0, 10.0) == []


@pytest.mark.unit
def test_overlong_word_is_split():
    """Test a word wider than the line is broken by character."""
    lines = wrap_text("x" * 25, 50.0, 10.0)
    assert lines == ["x" * 10, "x" * 10, "x" * 5]


@pytest.mark.unit
def test_overlong_word_after_text():
    """Test the pending line is flushed before a split word."""
    lines = wrap_text("ab " + "x" * 12, 50.0, 10.0)
    assert lines == ["ab", "x" * 10, "xx"]


@pytest.mark.unit
def test_wrap_preserves_every_character():
    """Test wrapping never drops content."""
    text = "Designed and shipped a multi-region event pipeline " + "y" * 70
    lines = wrap_text(text, 120.0, 10.0)
    assert "".join(lines).replace(" ", "") == text.replace(" ", "")
    assert all(estimate_width(line, 10.0) <= 120.0 for line in lines)


@pytest.mark.unit
def test_split_word_minimum_one_char():
    """Test a width narrower than one character still advances one char per piece."""
    assert split_word("abc", 1.0, 10.0, "normal", estimate_width) == ["a", "b", "c"]


@pytest.mark.unit
def test_custom_measure_is_used():
    """Test a caller-supplied measure decides the breaks."""

    def one_point_per_char(text, font_size, font_weight):
        return float(len(text))

    assert wrap_text("aa bb cc", 5.0, 10.0, measure=one_point_per_char) == ["aa bb", "cc"]


class TestSafeMeasure:
    """Tests for the measure guard."""

    def test_none_gives_estimate(self):
        assert safe_measure(None) is estimate_width

    def test_raising_measure_falls_back(self):
        def broken(text, font_size, font_weight):
            raise KeyError("font not registered")

        measure = safe_measure(broken)
        assert measure("abcd", 10.0, "normal") == 20.0

    @pytest.mark.parametrize("bad", [float("nan"), -5.0, float("inf")])
    def test_invalid_widths_fall_back(self, bad):
        measure = safe_measure(lambda text, size, weight: bad)
        assert measure("abcd", 10.0, "normal") == 20.0

    def test_valid_width_passes_through(self):
        measure = safe_measure(lambda text, size, weight: 7.5)
        assert measure("abcd", 10.0, "normal") == 7.5
