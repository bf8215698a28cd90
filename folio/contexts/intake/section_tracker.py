"""
Section tracking for the single classification pass.

A résumé line is often ambiguous out of context: a dated line is a job title
inside EXPERIENCE but ordinary text inside EDUCATION, and a comma list is a
skill group only under SKILLS. SectionState remembers which canonical section
is currently being scanned. It is owned by the caller of the pass and
allocated fresh for every document.
"""

import re
from dataclasses import dataclass
from typing import Optional

from folio.contexts.intake.line_patterns import (
    EXPERIENCE_FAMILY,
    SECTION_HEADINGS,
    SKILLS_FAMILY,
)

# Compiled once: canonical name -> whole-line patterns
_COMPILED_HEADINGS = {
    canonical: tuple(re.compile(rf"^(?:{pattern})$") for pattern in patterns)
    for canonical, patterns in SECTION_HEADINGS.items()
}


def normalize_heading(text: str) -> str:
    """
    Normalize a candidate heading for vocabulary matching.

    Lowercases, strips surrounding whitespace, markdown emphasis / hash marks
    and a trailing colon, spells "&" as "and", and collapses internal whitespace.

    Example:
        >>> normalize_heading("  ## Honors & Awards: ")
        'honors and awards'
    """
    normalized = text.strip().lower()
    normalized = normalized.strip("#*_ ").rstrip(":").strip()
    normalized = normalized.replace("&", " and ")
    return re.sub(r"\s+", " ", normalized)


def match_section_heading(text: str) -> Optional[str]:
    """
    Match a whole line against the closed heading vocabulary.

    Args:
        text: Candidate heading line

    Returns:
        Canonical section name (e.g., "EXPERIENCE"), or None if not a heading

    Example:
        >>> match_section_heading("Work History")
        'EXPERIENCE'
        >>> match_section_heading("Experience building pipelines") is None
        True
    """
    normalized = normalize_heading(text)
    if not normalized:
        return None

    for canonical, patterns in _COMPILED_HEADINGS.items():
        if any(pattern.match(normalized) for pattern in patterns):
            return canonical

    return None


@dataclass
class SectionState:
    """
    Current-section memory for one classification pass.

    Attributes:
        current_section: Canonical name of the section being scanned ("" before the first heading)
    """

    current_section: str = ""

    def enter(self, canonical: str) -> None:
        """Record that a heading for `canonical` was just classified."""
        self.current_section = canonical

    @property
    def in_experience(self) -> bool:
        return self.current_section in EXPERIENCE_FAMILY

    @property
    def in_skills(self) -> bool:
        return self.current_section in SKILLS_FAMILY
