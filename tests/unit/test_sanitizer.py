"""
Unit tests for the résumé text sanitizer.

Tests folio.contexts.intake.sanitizer.
"""

import pytest

from folio.contexts.intake.sanitizer import CANONICAL_BULLET, sanitize, sanitize_lines

SAMPLES = [
    "",
    "Jane Doe",
    "“Led” teams — 2019–2021 ✔",
    "▸ Built pipelines…",
    "José Müller · Zürich",
    "Python 🐍, Go, Rust",
    "½ time role​ here",
    "é and ﬁnance",
    "line one\r\nline two\rline three",
    "\t• already canonical",
    "☐ todo ✗ no ☑ done",
]


class TestSanitizeMappings:
    """Tests for individual character mappings."""

    def test_quotes_dashes_and_checkmarks(self):
        """Test typographic quotes, dashes and checkmarks map to ASCII."""
        assert sanitize("“Led” teams — 2019–2021 ✔") == '"Led" teams - 2019-2021 [x]'

    def test_single_quotes(self):
        """Test curly apostrophes become straight ones."""
        assert sanitize("Jane’s ‘team’") == "Jane's 'team'"

    def test_ellipsis(self):
        """Test ellipsis glyph becomes three periods."""
        assert sanitize("and more…") == "and more..."

    def test_decorative_bullets_fold_to_canonical(self):
        """Test decorative bullet glyphs become the canonical bullet."""
        for glyph in ("▸", "►", "◆", "■", "●", "◦", "‣", "·"):
            assert sanitize(f"{glyph} Built systems") == f"{CANONICAL_BULLET} Built systems"

    def test_crosses_and_boxes(self):
        """Test crosses and empty boxes become [ ]."""
        assert sanitize("☐ todo ✗ no ☑ done") == "[ ] todo [ ] no [x] done"

    def test_spaces_and_zero_width(self):
        """Test exotic spaces become plain spaces and zero-width characters vanish."""
        assert sanitize("a\u00a0b\u2009c") == "a b c"
        assert sanitize("ab\u200bc\ufeff") == "abc"

    def test_latin1_preserved(self):
        """Test accented Latin-1 letters survive."""
        assert sanitize("José Müller, Zürich") == "José Müller, Zürich"

    def test_out_of_range_stripped(self):
        """Test emoji and non-Latin scripts are dropped."""
        assert sanitize("Python 🐍") == "Python "
        assert sanitize("Jane 李") == "Jane "

    def test_ligatures_expanded(self):
        """Test NFKC expands ligatures."""
        assert sanitize("ﬁnance") == "finance"

    def test_line_breaks_normalized(self):
        """Test CRLF and CR become LF and line structure is preserved."""
        assert sanitize("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_empty(self):
        """Test empty input returns empty string."""
        assert sanitize("") == ""


@pytest.mark.unit
@pytest.mark.parametrize("text", SAMPLES)
def test_sanitize_is_idempotent(text):
    """Test sanitize(sanitize(x)) == sanitize(x)."""
    once = sanitize(text)
    assert sanitize(once) == once


@pytest.mark.unit
def test_sanitize_lines():
    """Test each line is sanitized independently."""
    assert sanitize_lines(["“a”", "b—c"]) == ['"a"', "b-c"]
