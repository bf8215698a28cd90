"""
Reusable patterns and constants for résumé line classification.

Pattern classes follow the convention of frozen dataclasses:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass

# =============================================================================
# LENGTH THRESHOLDS
# =============================================================================

# Longest line that can still be a name masthead
NAME_MAX_LENGTH = 50

# Longest line that can still be a job title row
JOB_TITLE_MAX_LENGTH = 120

# Longest line that can be folded into a job title as company/location,
# or recognised as a company line above a dated title
DETAIL_MAX_LENGTH = 80

# Minimum comma-separated tokens for a skill list
SKILL_GROUP_MIN_TOKENS = 3


# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Regex patterns for recognising contact lines.

    Supports:
    - Email addresses
    - North American phone numbers with common separators, optional country code
    - Long digit runs (international numbers without separators)
    - LinkedIn / GitHub profile references
    """

    EMAIL: re.Pattern = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")

    # (555) 123-4567, 555.123.4567, +1 555 123 4567
    PHONE: re.Pattern = re.compile(
        r"(?<!\d)(?:\+\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)"
    )

    # +441234567890, 5551234567
    DIGIT_RUN: re.Pattern = re.compile(r"\+?\d{10,}")

    PROFILE: re.Pattern = re.compile(r"\b(?:linkedin|github)\b", re.IGNORECASE)


CONTACT_PATTERNS = [
    ContactPatterns.EMAIL,
    ContactPatterns.PHONE,
    ContactPatterns.DIGIT_RUN,
    ContactPatterns.PROFILE,
]


# =============================================================================
# DATE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class DatePatterns:
    """
    Regex patterns for years and employment date ranges.

    A date range is "YYYY - YYYY" or "YYYY - Present/Current/Now"; month names
    in front of either year are tolerated because only the year anchors the match.
    """

    YEAR: re.Pattern = re.compile(r"\b(?:19|20)\d{2}\b")

    DATE_RANGE: re.Pattern = re.compile(
        r"\b(?:19|20)\d{2}\s*(?:-|–|—|\bto\b)\s*"
        r"(?:[A-Za-z]{3,9}\.?\s+)?(?:(?:19|20)\d{2}|present|current|now)\b",
        re.IGNORECASE,
    )


# =============================================================================
# STRUCTURE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class StructurePatterns:
    """
    Regex patterns for list markers and title separators.
    """

    # Leading bullet glyph or dash/asterisk marker, with the whitespace after it
    BULLET_MARKER: re.Pattern = re.compile(r"^\s*[•\-*▸►‣◦▪]+\s*")

    # Separator characters that split a title from employer or dates
    TITLE_SEPARATOR: re.Pattern = re.compile(r"[-–|]")


# =============================================================================
# SECTION HEADING VOCABULARY
# =============================================================================


@dataclass(frozen=True)
class SectionHeadingPatterns:
    """
    Closed vocabulary of résumé section headings.

    Each canonical section lists the whole-line patterns folded into it.
    Patterns are matched against the normalized heading (lowercase, trailing
    colon removed, "&" spelled "and", whitespace collapsed).
    """

    SUMMARY: tuple = (
        r"summary",
        r"professional summary",
        r"career summary",
        r"(?:professional )?profile",
        r"about(?: me)?",
        r"(?:career )?objective",
    )

    EXPERIENCE: tuple = (
        r"experience",
        r"(?:work|professional|relevant) experience",
        r"work history",
        r"employment(?: history)?",
        r"career history",
    )

    EDUCATION: tuple = (
        r"education",
        r"academic background",
        r"education and training",
    )

    SKILLS: tuple = (
        r"skills",
        r"(?:core|key) skills",
        r"(?:core )?competencies",
        r"expertise",
        r"areas of expertise",
    )

    TECHNICAL_SKILLS: tuple = (
        r"technical skills",
        r"technical expertise",
        r"technologies",
    )

    PROJECTS: tuple = (
        r"projects",
        r"(?:key|personal|selected) projects",
        r"portfolio",
    )

    CERTIFICATIONS: tuple = (
        r"certifications?",
        r"certificates",
        r"credentials",
        r"licenses and certifications",
    )

    LANGUAGES: tuple = (r"languages?",)

    AWARDS: tuple = (
        r"awards",
        r"honors",
        r"honors and awards",
        r"awards and honors",
    )

    PUBLICATIONS: tuple = (r"publications",)

    VOLUNTEER: tuple = (
        r"volunteer(?:ing)?",
        r"volunteer experience",
    )

    INTERESTS: tuple = (
        r"interests",
        r"hobbies(?: and interests)?",
    )


# Canonical section name -> patterns, in matching order
SECTION_HEADINGS = {
    "SUMMARY": SectionHeadingPatterns.SUMMARY,
    "EXPERIENCE": SectionHeadingPatterns.EXPERIENCE,
    "EDUCATION": SectionHeadingPatterns.EDUCATION,
    "SKILLS": SectionHeadingPatterns.SKILLS,
    "TECHNICAL SKILLS": SectionHeadingPatterns.TECHNICAL_SKILLS,
    "PROJECTS": SectionHeadingPatterns.PROJECTS,
    "CERTIFICATIONS": SectionHeadingPatterns.CERTIFICATIONS,
    "LANGUAGES": SectionHeadingPatterns.LANGUAGES,
    "AWARDS": SectionHeadingPatterns.AWARDS,
    "PUBLICATIONS": SectionHeadingPatterns.PUBLICATIONS,
    "VOLUNTEER": SectionHeadingPatterns.VOLUNTEER,
    "INTERESTS": SectionHeadingPatterns.INTERESTS,
}

# Sections whose dated lines are job titles even without a separator
EXPERIENCE_FAMILY = frozenset({"EXPERIENCE"})

# Sections whose comma lists are skill groups
SKILLS_FAMILY = frozenset({"SKILLS", "TECHNICAL SKILLS"})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def is_contact_text(text: str) -> bool:
    """True if text carries an email, phone number, or profile reference."""
    return any(pattern.search(text) for pattern in CONTACT_PATTERNS)


def has_year(text: str) -> bool:
    return DatePatterns.YEAR.search(text) is not None


def has_date_range(text: str) -> bool:
    return DatePatterns.DATE_RANGE.search(text) is not None


def has_bullet_marker(text: str) -> bool:
    return StructurePatterns.BULLET_MARKER.match(text) is not None


def strip_bullet_marker(text: str) -> str:
    """
    Remove a leading bullet glyph or dash/asterisk marker.

    Example:
        >>> strip_bullet_marker("- Built systems")
        'Built systems'
        >>> strip_bullet_marker("•  Led a team")
        'Led a team'
    """
    return StructurePatterns.BULLET_MARKER.sub("", text, count=1).strip()


def count_comma_tokens(text: str) -> int:
    """Count non-empty comma-separated tokens."""
    return sum(1 for token in text.split(",") if token.strip())
