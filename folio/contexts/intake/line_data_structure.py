"""
Line Data Structures

Defines the records produced while reading a résumé: raw positioned lines,
the closed vocabulary of line roles, and classified lines.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class LineRole(str, Enum):
    """Closed set of semantic roles a résumé line can be classified into."""

    NAME = "name"
    CONTACT = "contact"
    SECTION_HEADER = "section_header"
    JOB_TITLE = "job_title"
    JOB_DETAIL = "job_detail"
    BULLET = "bullet"
    SKILL_GROUP = "skill_group"
    PLAIN_TEXT = "plain_text"
    BLANK = "blank"

    @classmethod
    def from_label(cls, label: str) -> Optional["LineRole"]:
        """
        Resolve a role from a loosely formatted label, or None if unknown.

        Accepts the canonical value ("section_header"), the member name
        ("SECTION_HEADER"), and camel/Pascal spellings ("SectionHeader",
        "sectionHeader") as produced by external structuring hints.

        Example:
            >>> LineRole.from_label("JobTitle")
            <LineRole.JOB_TITLE: 'job_title'>
            >>> LineRole.from_label("heading") is None
            True
        """
        if not isinstance(label, str):
            return None
        key = label.strip()
        if not key:
            return None
        # camelCase / PascalCase -> snake_case
        snake = "".join(
            f"_{char}" if char.isupper() and i > 0 and not key[i - 1].isupper() else char
            for i, char in enumerate(key)
        )
        snake = snake.replace("-", "_").replace(" ", "_").lower()
        snake = "_".join(part for part in snake.split("_") if part)
        for role in cls:
            if role.value == snake:
                return role
        return None


@dataclass(frozen=True)
class RawLine:
    """
    One line of input text paired with its original position.

    Attributes:
        index: 0-based position in the original document
        text: Line content with trailing whitespace removed
        is_blank: True if the line has no visible characters
    """

    index: int
    text: str
    is_blank: bool


@dataclass(frozen=True)
class ClassifiedLine:
    """
    A résumé line with its semantic role.

    Attributes:
        role: Semantic role from the closed LineRole vocabulary
        primary_text: Main display text (bullet markers stripped)
        secondary_text: Right-aligned companion text (company, location, dates)
        source_index: Index of the first raw line this was built from (-1 if unknown)
        consumed_indices: Every raw line index folded into this line
    """

    role: LineRole
    primary_text: str
    secondary_text: Optional[str] = None
    source_index: int = -1
    consumed_indices: Tuple[int, ...] = ()

    @property
    def is_blank(self) -> bool:
        return self.role == LineRole.BLANK
