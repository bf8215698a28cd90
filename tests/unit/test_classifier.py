"""
Unit tests for the résumé line classifier.

Tests folio.contexts.intake.classifier: rule order, section-aware rules,
title/detail folding, blank handling and the empty-document degradation.
"""

import pytest

from folio.contexts.intake.classifier import (
    classify,
    classify_document,
    classify_text,
    split_lines,
)
from folio.contexts.intake.line_data_structure import LineRole


def roles(lines):
    return [line.role for line in lines]


def non_blank(lines):
    return [line for line in lines if not line.is_blank]


JANE_DOE = "\n".join(
    [
        "Jane Doe",
        "jane@x.com",
        "EXPERIENCE",
        "Senior Engineer - Acme 2020 - Present",
        "- Built systems",
        "EDUCATION",
        "BSc Computer Science, MIT, 2016",
    ]
)


# =============================================================================
# split_lines
# =============================================================================


@pytest.mark.unit
def test_split_lines_handles_every_break_convention():
    """Test CRLF, CR and LF all split and indices are positional."""
    raw = split_lines("a\r\nb\rc\nd")
    assert [line.text for line in raw] == ["a", "b", "c", "d"]
    assert [line.index for line in raw] == [0, 1, 2, 3]


@pytest.mark.unit
def test_split_lines_marks_blank_lines():
    """Test whitespace-only lines are blank."""
    raw = split_lines("a\n   \nb")
    assert [line.is_blank for line in raw] == [False, True, False]


@pytest.mark.unit
def test_split_lines_empty_text():
    """Test empty text yields no raw lines."""
    assert split_lines("") == []


# =============================================================================
# End-to-end classification
# =============================================================================


@pytest.mark.unit
def test_classify_typical_resume():
    """Test the canonical short résumé classifies line by line."""
    lines = classify(split_lines(JANE_DOE))

    assert roles(lines) == [
        LineRole.NAME,
        LineRole.CONTACT,
        LineRole.SECTION_HEADER,
        LineRole.JOB_TITLE,
        LineRole.BULLET,
        LineRole.SECTION_HEADER,
        LineRole.PLAIN_TEXT,
    ]
    assert lines[2].primary_text == "EXPERIENCE"
    assert lines[3].primary_text == "Senior Engineer - Acme 2020 - Present"
    assert lines[3].secondary_text is None
    assert lines[4].primary_text == "Built systems"


@pytest.mark.unit
def test_every_non_blank_line_consumed_exactly_once():
    """Test consumed indices partition the raw lines."""
    text = "\n".join(
        [
            "Jane Doe",
            "jane@x.com",
            "",
            "EXPERIENCE",
            "Senior Engineer 2020 - Present",
            "Acme Corp, Berlin",
            "- Built systems",
            "",
            "SKILLS",
            "Python, Go, SQL",
        ]
    )
    raw = split_lines(text)
    lines = classify(raw)

    consumed = [index for line in lines for index in line.consumed_indices]
    assert sorted(consumed) == [line.index for line in raw]
    assert len(consumed) == len(set(consumed))


class TestNameAndContact:
    """Tests for masthead rules."""

    def test_first_short_line_is_name(self):
        """Test the first non-blank line becomes the name."""
        lines = classify(split_lines("\n\nJane Doe\nBerlin, Germany"))
        named = non_blank(lines)
        assert named[0].role == LineRole.NAME
        assert named[0].primary_text == "Jane Doe"

    def test_line_after_name_is_contact(self):
        """Test the line after the name is contact even without an email."""
        lines = non_blank(classify(split_lines("Jane Doe\nBerlin, Germany")))
        assert lines[1].role == LineRole.CONTACT

    def test_contact_survives_blank_between(self):
        """Test a blank line between name and contact does not break the pairing."""
        lines = non_blank(classify(split_lines("Jane Doe\n\nBerlin, Germany")))
        assert lines[1].role == LineRole.CONTACT

    def test_long_first_line_is_not_name(self):
        """Test a first line over the name length limit is plain text."""
        first = "A" * 60
        lines = classify(split_lines(f"{first}\nsecond line"))
        assert lines[0].role == LineRole.PLAIN_TEXT

    def test_heading_first_is_not_name(self):
        """Test a heading on the first line stays a heading."""
        lines = classify(split_lines("EXPERIENCE\nAcme"))
        assert lines[0].role == LineRole.SECTION_HEADER
        assert LineRole.NAME not in roles(lines)

    def test_contact_pattern_anywhere(self):
        """Test email and phone lines are contact anywhere in the document."""
        text = "Jane Doe\nBerlin\nSUMMARY\nReach me at (555) 123-4567"
        lines = classify(split_lines(text))
        assert lines[3].role == LineRole.CONTACT

    def test_bulleted_email_is_bullet(self):
        """Test a bullet mentioning an email address stays a bullet."""
        text = "Jane Doe\nBerlin\nSUMMARY\n- Wrote docs for support@acme.com"
        lines = classify(split_lines(text))
        assert lines[3].role == LineRole.BULLET

    def test_heading_after_name_stays_heading(self):
        """Test a heading directly after the name is still a heading."""
        lines = classify(split_lines("Jane Doe\nSKILLS\nPython, Go, SQL"))
        assert roles(lines) == [LineRole.NAME, LineRole.SECTION_HEADER, LineRole.SKILL_GROUP]


class TestSectionHeaders:
    """Tests for heading recognition and display text."""

    def test_heading_display_is_uppercase(self):
        """Test heading primary text is upper-cased without markdown or colon."""
        lines = classify(split_lines("Jane Doe\nBerlin\n## Work History:"))
        assert lines[2].role == LineRole.SECTION_HEADER
        assert lines[2].primary_text == "WORK HISTORY"

    def test_sentence_starting_with_heading_word(self):
        """Test a sentence that begins with a heading word is not a heading."""
        lines = classify(split_lines("Jane Doe\nBerlin\nExperience building pipelines"))
        assert lines[2].role == LineRole.PLAIN_TEXT


class TestJobTitles:
    """Tests for job title and job detail rules."""

    def test_title_absorbs_company_line(self):
        """Test a bare detail line folds into the title above it."""
        text = "\n".join(
            [
                "Jane Doe",
                "jane@x.com",
                "EXPERIENCE",
                "Senior Engineer 2020 - Present",
                "Acme Corp, Berlin",
                "- Built systems",
            ]
        )
        lines = classify(split_lines(text))

        title = lines[3]
        assert title.role == LineRole.JOB_TITLE
        assert title.primary_text == "Senior Engineer 2020 - Present"
        assert title.secondary_text == "Acme Corp, Berlin"
        assert title.consumed_indices == (3, 4)
        assert lines[4].role == LineRole.BULLET
        assert lines[4].source_index == 5

    def test_title_does_not_absorb_sentence(self):
        """Test a line ending with a period is not folded into the title."""
        text = "\n".join(
            [
                "Jane Doe",
                "jane@x.com",
                "EXPERIENCE",
                "Senior Engineer 2020 - Present",
                "Built the billing platform.",
            ]
        )
        lines = classify(split_lines(text))
        assert lines[3].secondary_text is None
        assert lines[4].role == LineRole.PLAIN_TEXT

    def test_company_line_before_dated_title(self):
        """Test an undated company line above a dated line is job_detail."""
        text = "\n".join(
            [
                "Jane Doe",
                "jane@x.com",
                "EXPERIENCE",
                "Acme Corp",
                "Senior Engineer 2020 - Present",
                "- Built systems",
            ]
        )
        lines = classify(split_lines(text))
        assert lines[3].role == LineRole.JOB_DETAIL
        assert lines[3].primary_text == "Acme Corp"
        assert lines[4].role == LineRole.JOB_TITLE
        assert lines[4].secondary_text is None

    def test_dated_line_in_experience_without_separator(self):
        """Test the Experience section makes a separator unnecessary."""
        text = "Jane Doe\njane@x.com\nEXPERIENCE\nSenior Engineer at Acme 2019"
        lines = classify(split_lines(text))
        assert lines[3].role == LineRole.JOB_TITLE

    def test_dated_line_outside_experience_without_separator(self):
        """Test a dated line with no separator outside Experience is plain text."""
        text = "Jane Doe\njane@x.com\nEDUCATION\nBSc Computer Science at MIT 2016"
        lines = classify(split_lines(text))
        assert lines[3].role == LineRole.PLAIN_TEXT

    def test_bulleted_dated_line_is_bullet(self):
        """Test a bullet carrying a date range stays a bullet."""
        text = "Jane Doe\njane@x.com\nEXPERIENCE\n- Led migration 2019 - 2020"
        lines = classify(split_lines(text))
        assert lines[3].role == LineRole.BULLET
        assert lines[3].primary_text == "Led migration 2019 - 2020"


class TestSkillGroups:
    """Tests for the skill group rule."""

    def test_comma_list_in_skills(self):
        """Test three or more comma tokens under SKILLS form a skill group."""
        lines = classify(split_lines("Jane Doe\nBerlin\nSKILLS\nPython, Go, SQL"))
        assert lines[3].role == LineRole.SKILL_GROUP

    def test_short_list_in_skills(self):
        """Test two tokens are not enough."""
        lines = classify(split_lines("Jane Doe\nBerlin\nSKILLS\nPython, Go"))
        assert lines[3].role == LineRole.PLAIN_TEXT

    def test_comma_list_outside_skills(self):
        """Test a comma list outside SKILLS is plain text."""
        lines = classify(split_lines("Jane Doe\nBerlin\nSUMMARY\nPython, Go, SQL"))
        assert lines[3].role == LineRole.PLAIN_TEXT


class TestBlankAndEmpty:
    """Tests for blank lines and degenerate input."""

    def test_blank_lines_preserved(self):
        """Test blank raw lines become blank classified lines."""
        lines = classify(split_lines("Jane Doe\n\njane@x.com"))
        assert lines[1].role == LineRole.BLANK
        assert lines[1].consumed_indices == (1,)

    def test_all_blank_input(self):
        """Test blank-only input degrades to a single empty plain_text line."""
        lines = classify(split_lines("\n\n"))
        assert len(lines) == 1
        assert lines[0].role == LineRole.PLAIN_TEXT
        assert lines[0].primary_text == ""
        assert lines[0].consumed_indices == (0, 1, 2)

    def test_empty_input(self):
        """Test empty input degrades without raising."""
        lines = classify(split_lines(""))
        assert len(lines) == 1
        assert lines[0].role == LineRole.PLAIN_TEXT


# =============================================================================
# Hint handling
# =============================================================================


@pytest.mark.unit
def test_valid_hint_replaces_heuristics():
    """Test a valid hint decides the roles."""
    hint = [
        {"role": "name", "content": "Jane Doe"},
        {"role": "plain_text", "content": "jane@x.com"},
    ]
    result = classify_document(split_lines("Jane Doe\njane@x.com"), hint)

    assert result.used_hint
    assert result.hint_error is None
    assert roles(result.lines) == [LineRole.NAME, LineRole.PLAIN_TEXT]


@pytest.mark.unit
def test_invalid_hint_falls_back_to_heuristics():
    """Test a hint that invents text is ignored."""
    hint = [{"role": "name", "content": "John Smith"}]
    result = classify_document(split_lines("Jane Doe\njane@x.com"), hint)

    assert not result.used_hint
    assert "not found in source" in result.hint_error
    assert roles(result.lines) == [LineRole.NAME, LineRole.CONTACT]


@pytest.mark.unit
def test_classify_with_invalid_hint_never_raises():
    """Test classify() swallows a malformed hint string."""
    lines = classify(split_lines("Jane Doe"), "{not json")
    assert roles(lines) == [LineRole.NAME]


@pytest.mark.unit
def test_classify_text_sanitizes_first():
    """Test classify_text folds decorative bullets before classifying."""
    lines = classify_text("Jane Doe\nBerlin\n▸ Built systems")
    assert lines[2].role == LineRole.BULLET
    assert lines[2].primary_text == "Built systems"


@pytest.mark.unit
def test_hint_without_role_matches_no_hint():
    """Test a hint record missing its role leaves the heuristic result untouched."""
    raw = split_lines(JANE_DOE)
    assert classify(raw, [{"content": "Jane Doe"}]) == classify(raw)


@pytest.mark.unit
def test_empty_name_hint_never_raises():
    """Test a name record with no text is rejected, not propagated as a crash."""
    raw = split_lines(JANE_DOE)
    result = classify_document(raw, [{"role": "name", "content": ""}])

    assert not result.used_hint
    assert "no content" in result.hint_error
    assert result.lines == classify(raw)
