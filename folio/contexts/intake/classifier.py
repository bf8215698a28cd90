"""
Line classifier for plain-text résumés.

One forward pass over the raw lines with a single line of lookahead. Each
non-blank line is tested against the rules below in fixed order and the
first rule that matches decides its role; there is no backtracking:

    1. name            first non-blank line, short, not a heading
    2. contact         line right after the name, or any email/phone/profile line
    3. section_header  whole-line match against the heading vocabulary
    4. job_title       dated line with a separator or inside EXPERIENCE
       job_detail      company line inside EXPERIENCE whose next line is dated
    5. bullet          leading bullet glyph or dash/asterisk marker
    6. skill_group     comma list of 3+ tokens inside SKILLS
    7. plain_text      everything else

A valid structuring hint replaces the heuristic pass for the whole document.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from folio.contexts.intake.hints import (
    InvalidHintError,
    hint_to_classified_lines,
    validate_hint,
)
from folio.contexts.intake.line_data_structure import ClassifiedLine, LineRole, RawLine
from folio.contexts.intake.line_patterns import (
    DETAIL_MAX_LENGTH,
    JOB_TITLE_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SKILL_GROUP_MIN_TOKENS,
    StructurePatterns,
    count_comma_tokens,
    has_bullet_marker,
    has_date_range,
    has_year,
    is_contact_text,
    strip_bullet_marker,
)
from folio.contexts.intake.logger import (
    _log_warning,
    log_classification_summary,
    log_hint_rejected,
    log_line_decision,
)
from folio.contexts.intake.sanitizer import sanitize
from folio.contexts.intake.section_tracker import SectionState, match_section_heading

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Classification:
    """
    Outcome of classifying one document.

    Attributes:
        lines: Classified lines in document order
        used_hint: True if a structuring hint replaced the heuristic pass
        hint_error: Why a supplied hint was rejected (None if none was rejected)
    """

    lines: List[ClassifiedLine]
    used_hint: bool = False
    hint_error: Optional[str] = None


def split_lines(text: str) -> List[RawLine]:
    """
    Split text on any line break convention into indexed raw lines.

    Example:
        >>> [line.text for line in split_lines("a\\r\\nb\\rc")]
        ['a', 'b', 'c']
    """
    if not text:
        return []
    return [
        RawLine(index=i, text=part, is_blank=not part.strip())
        for i, part in enumerate(_LINE_BREAK.split(text))
    ]


def _heading_display(text: str) -> str:
    """Upper-cased heading text without markdown marks or trailing colon."""
    return text.strip("#*_ ").rstrip(":").strip().upper()


def _is_bare_detail(raw: Optional[RawLine]) -> bool:
    """True if a raw line can be folded into the job title above it."""
    if raw is None or raw.is_blank:
        return False
    text = raw.text.strip()
    return (
        len(text) < DETAIL_MAX_LENGTH
        and not text.endswith(".")
        and not has_year(text)
        and not has_bullet_marker(text)
        and match_section_heading(text) is None
        and not is_contact_text(text)
    )


def _is_company_line(text: str, next_raw: Optional[RawLine]) -> bool:
    """Short undated line inside EXPERIENCE that introduces a dated title line."""
    if next_raw is None or next_raw.is_blank:
        return False
    return (
        len(text) < DETAIL_MAX_LENGTH
        and "." not in text
        and not has_bullet_marker(text)
        and has_date_range(next_raw.text)
    )


def _classify_heuristic(raw_lines: Sequence[RawLine]) -> List[ClassifiedLine]:
    state = SectionState()
    classified: List[ClassifiedLine] = []

    seen_non_blank = False
    expect_contact = False
    i = 0

    while i < len(raw_lines):
        raw = raw_lines[i]
        next_raw = raw_lines[i + 1] if i + 1 < len(raw_lines) else None

        if raw.is_blank:
            classified.append(
                ClassifiedLine(
                    role=LineRole.BLANK,
                    primary_text="",
                    source_index=raw.index,
                    consumed_indices=(raw.index,),
                )
            )
            i += 1
            continue

        text = raw.text.strip()
        heading = match_section_heading(text)
        first_non_blank = not seen_non_blank
        after_name = expect_contact
        seen_non_blank = True
        expect_contact = False

        role = LineRole.PLAIN_TEXT
        primary = text
        secondary = None
        consumed = (raw.index,)

        if first_non_blank and len(text) < NAME_MAX_LENGTH and heading is None:
            role = LineRole.NAME
            expect_contact = True

        elif (after_name and heading is None) or (
            not has_bullet_marker(text) and is_contact_text(text)
        ):
            role = LineRole.CONTACT

        elif heading is not None:
            role = LineRole.SECTION_HEADER
            primary = _heading_display(text)
            state.enter(heading)

        elif (
            (has_year(text) or has_date_range(text))
            and len(text) < JOB_TITLE_MAX_LENGTH
            and not has_bullet_marker(text)
            and (StructurePatterns.TITLE_SEPARATOR.search(text) or state.in_experience)
        ):
            role = LineRole.JOB_TITLE
            if _is_bare_detail(next_raw):
                secondary = next_raw.text.strip()
                consumed = (raw.index, next_raw.index)

        elif state.in_experience and _is_company_line(text, next_raw):
            role = LineRole.JOB_DETAIL

        elif has_bullet_marker(text):
            role = LineRole.BULLET
            primary = strip_bullet_marker(text)

        elif state.in_skills and count_comma_tokens(text) >= SKILL_GROUP_MIN_TOKENS:
            role = LineRole.SKILL_GROUP

        log_line_decision(raw.index, role.value, text)
        classified.append(
            ClassifiedLine(
                role=role,
                primary_text=primary,
                secondary_text=secondary,
                source_index=raw.index,
                consumed_indices=consumed,
            )
        )
        i += len(consumed)

    return classified


def _empty_document(raw_lines: Sequence[RawLine]) -> List[ClassifiedLine]:
    _log_warning("Input has no non-blank lines, degrading to a single empty text line")
    return [
        ClassifiedLine(
            role=LineRole.PLAIN_TEXT,
            primary_text="",
            source_index=raw_lines[0].index if raw_lines else -1,
            consumed_indices=tuple(raw.index for raw in raw_lines),
        )
    ]


def classify_document(raw_lines: Sequence[RawLine], hint: Any = None) -> Classification:
    """
    Classify raw lines, preferring a structuring hint when one is valid.

    Args:
        raw_lines: Lines from split_lines(), ideally of sanitized text
        hint: Optional structuring hint (list of records or JSON string)

    Returns:
        Classification with the lines and whether the hint was used
    """
    if all(raw.is_blank for raw in raw_lines):
        return Classification(lines=_empty_document(raw_lines))

    hint_error = None
    if hint is not None:
        source_text = "\n".join(raw.text for raw in raw_lines)
        try:
            records = validate_hint(hint, source_text)
        except InvalidHintError as e:
            hint_error = e.message
            log_hint_rejected(hint_error)
        else:
            lines = hint_to_classified_lines(records, raw_lines)
            log_classification_summary(Counter(line.role.value for line in lines), "hint")
            return Classification(lines=lines, used_hint=True)

    lines = _classify_heuristic(raw_lines)
    log_classification_summary(Counter(line.role.value for line in lines), "heuristic")
    return Classification(lines=lines, hint_error=hint_error)


def classify(raw_lines: Sequence[RawLine], hint: Any = None) -> List[ClassifiedLine]:
    """
    Assign a semantic role to every line of a résumé.

    Never raises for malformed text or hints: an invalid hint is logged and
    ignored, and a document with no content becomes one empty plain_text line.

    Args:
        raw_lines: Lines from split_lines()
        hint: Optional structuring hint

    Returns:
        Classified lines in document order

    Example:
        >>> lines = classify(split_lines("Jane Doe\\njane@x.com\\nEXPERIENCE"))
        >>> [line.role.value for line in lines]
        ['name', 'contact', 'section_header']
    """
    return classify_document(raw_lines, hint).lines


def classify_text(text: str, hint: Any = None) -> List[ClassifiedLine]:
    """Sanitize, split and classify a résumé in one call."""
    return classify(split_lines(sanitize(text)), hint)
