"""Unit tests for section heading matching and SectionState."""

import pytest

from folio.contexts.intake.line_patterns import (
    count_comma_tokens,
    has_date_range,
    has_year,
    is_contact_text,
    strip_bullet_marker,
)
from folio.contexts.intake.section_tracker import (
    SectionState,
    match_section_heading,
    normalize_heading,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "heading, canonical",
    [
        ("EXPERIENCE", "EXPERIENCE"),
        ("Work History", "EXPERIENCE"),
        ("Professional Experience:", "EXPERIENCE"),
        ("employment history", "EXPERIENCE"),
        ("Profile", "SUMMARY"),
        ("About Me", "SUMMARY"),
        ("Objective", "SUMMARY"),
        ("Technical Skills", "TECHNICAL SKILLS"),
        ("Core Competencies", "SKILLS"),
        ("Expertise", "SKILLS"),
        ("Academic Background", "EDUCATION"),
        ("Certificates", "CERTIFICATIONS"),
        ("Languages", "LANGUAGES"),
        ("Key Projects", "PROJECTS"),
        ("Portfolio", "PROJECTS"),
        ("## Honors & Awards", "AWARDS"),
    ],
)
def test_heading_synonyms_fold_to_canonical(heading, canonical):
    """Test heading synonyms map to their canonical section."""
    assert match_section_heading(heading) == canonical


@pytest.mark.unit
@pytest.mark.parametrize(
    "line",
    [
        "Experience building data pipelines",
        "Skills: Python, SQL",
        "Senior Engineer - Acme Corp 2020 - Present",
        "",
    ],
)
def test_non_headings_rejected(line):
    """Test only whole-line vocabulary matches count as headings."""
    assert match_section_heading(line) is None


@pytest.mark.unit
def test_normalize_heading():
    """Test normalization of decoration, ampersands and colons."""
    assert normalize_heading("  ## Honors & Awards: ") == "honors and awards"
    assert normalize_heading("**Skills:**") == "skills"


@pytest.mark.unit
def test_section_state_families():
    """Test SectionState reports the Experience and Skills families."""
    state = SectionState()
    assert state.current_section == ""
    assert not state.in_experience

    state.enter("EXPERIENCE")
    assert state.in_experience
    assert not state.in_skills

    state.enter("TECHNICAL SKILLS")
    assert state.in_skills
    assert not state.in_experience


class TestLinePatterns:
    """Tests for pattern helper functions."""

    def test_contact_text(self):
        """Test email, phone and profile detection."""
        assert is_contact_text("jane@x.com")
        assert is_contact_text("(555) 123-4567")
        assert is_contact_text("+441234567890")
        assert is_contact_text("linkedin.com/in/jane")
        assert is_contact_text("GitHub: janedoe")
        assert not is_contact_text("Senior Engineer 2020 - 2023")

    def test_years_and_ranges(self):
        """Test year and date-range detection."""
        assert has_year("BSc, MIT, 2016")
        assert not has_year("Version 3100")
        assert has_date_range("2020 - Present")
        assert has_date_range("Jan 2019 – Mar 2021")
        assert has_date_range("2018 to 2020")
        assert not has_date_range("Toronto 2020")

    def test_strip_bullet_marker(self):
        """Test leading markers and their whitespace are removed."""
        assert strip_bullet_marker("- Built systems") == "Built systems"
        assert strip_bullet_marker("•  Led a team") == "Led a team"
        assert strip_bullet_marker("* Shipped") == "Shipped"

    def test_count_comma_tokens(self):
        """Test empty tokens are ignored."""
        assert count_comma_tokens("Python, Go, SQL") == 3
        assert count_comma_tokens("Python,, Go,") == 2
