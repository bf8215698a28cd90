"""
Structuring hint validation.

A structuring hint is an externally produced pre-classification of the résumé
(typically from a language model): an ordered list of records shaped like

    {"role": "job_title", "content": "Senior Engineer 2020 - Present", "secondary": "Acme"}

Hints are untrusted. Before one replaces heuristic classification it must
pass validate_hint(): every role must belong to the closed LineRole
vocabulary, every piece of text must be present in the input (so a hint can
reorganize lines but never invent or rewrite content), every non-blank
source line must be carried by some record (so a hint never drops content),
and the name masthead rules must hold. Any violation raises
InvalidHintError and the caller falls back to heuristics.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from folio.contexts.intake.line_data_structure import ClassifiedLine, LineRole, RawLine
from folio.contexts.intake.line_patterns import strip_bullet_marker
from folio.contexts.intake.sanitizer import sanitize
from folio.utils.text_processing import collapse_whitespace, truncate_display


class InvalidHintError(ValueError):
    """
    Exception raised when a structuring hint fails validation.

    Attributes:
        message: Error description
        record_index: Position of the offending record (None for whole-hint problems)
        record: The offending record, if any
    """

    def __init__(
        self,
        message: str,
        record_index: Optional[int] = None,
        record: Any = None,
    ):
        self.message = message
        self.record_index = record_index
        self.record = record

        parts = [message]
        if record_index is not None:
            parts.append(f"Record #{record_index}")
        if record is not None:
            parts.append(f"Actual record: {truncate_display(repr(record), 200)}")

        super().__init__("\n".join(parts))


@dataclass(frozen=True)
class HintRecord:
    """One validated hint record."""

    role: LineRole
    content: str
    secondary: Optional[str] = None


def _comparable(text: str) -> str:
    """Sanitized, whitespace-collapsed, lowercased form used for containment checks."""
    return collapse_whitespace(sanitize(text)).lower()


def _decode(hint: Any) -> Any:
    if isinstance(hint, (str, bytes)):
        try:
            return json.loads(hint)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidHintError(f"Hint is not valid JSON: {exc}")
    return hint


def _parse_record(index: int, record: Any) -> HintRecord:
    if not isinstance(record, dict):
        raise InvalidHintError("Hint record is not an object", index, record)

    if "role" not in record:
        raise InvalidHintError("Hint record is missing 'role'", index, record)
    role = LineRole.from_label(record["role"])
    if role is None:
        raise InvalidHintError(f"Unknown role {record['role']!r}", index, record)

    content = record.get("content")
    if not isinstance(content, str):
        raise InvalidHintError("Hint record 'content' must be a string", index, record)
    if role == LineRole.NAME and not content.strip():
        raise InvalidHintError("Name record has no content", index, record)

    secondary = record.get("secondary")
    if secondary is not None and not isinstance(secondary, str):
        raise InvalidHintError("Hint record 'secondary' must be a string or null", index, record)

    return HintRecord(role=role, content=content, secondary=secondary or None)


def validate_hint(hint: Any, source_text: str) -> List[HintRecord]:
    """
    Validate a structuring hint against the text it claims to describe.

    Args:
        hint: List of record dicts, or a JSON string encoding one
        source_text: The résumé text the hint was produced from

    Returns:
        Validated records, in order

    Raises:
        InvalidHintError: If the hint is malformed, uses an unknown role,
            introduces text absent from the source, omits a source line,
            or breaks the name rules
    """
    records = _decode(hint)
    if not isinstance(records, list):
        raise InvalidHintError(f"Hint must be a list of records, got {type(records).__name__}")
    if not records:
        raise InvalidHintError("Hint is empty")

    parsed = [_parse_record(i, record) for i, record in enumerate(records)]

    haystack = _comparable(source_text)
    for i, record in enumerate(parsed):
        for piece in (record.content, record.secondary):
            if not piece:
                continue
            needle = _comparable(piece)
            if record.role == LineRole.BULLET:
                needle = _comparable(strip_bullet_marker(sanitize(piece)))
            if needle and needle not in haystack:
                raise InvalidHintError(
                    f"Hint text not found in source: {truncate_display(piece, 80)!r}",
                    i,
                    records[i],
                )

    name_positions = [i for i, record in enumerate(parsed) if record.role == LineRole.NAME]
    if len(name_positions) > 1:
        raise InvalidHintError(f"Hint has {len(name_positions)} name records (at most one allowed)")
    if name_positions:
        first_non_blank = next(
            (
                i for i, record in enumerate(parsed)
                if record.role != LineRole.BLANK and record.content.strip()
            ),
            None,
        )
        if name_positions[0] != first_non_blank:
            raise InvalidHintError(
                "Name record must be the first non-blank record", name_positions[0]
            )

    _check_coverage(parsed, source_text)

    return parsed


def _check_coverage(records: Sequence[HintRecord], source_text: str) -> None:
    """Every non-blank source line must be carried by some record's text."""
    pieces = [
        _comparable(strip_bullet_marker(sanitize(piece)))
        for record in records
        for piece in (record.content, record.secondary)
        if piece
    ]
    for line_number, line in enumerate(source_text.splitlines()):
        needle = _comparable(strip_bullet_marker(sanitize(line)))
        if needle and not any(needle in piece for piece in pieces):
            raise InvalidHintError(
                f"Hint omits source line {line_number}: {truncate_display(line.strip(), 80)!r}"
            )


def hint_to_classified_lines(
    records: Sequence[HintRecord], raw_lines: Sequence[RawLine]
) -> List[ClassifiedLine]:
    """
    Convert validated hint records into classified lines.

    source_index points at the first raw line containing the record's content,
    or -1 when the content spans several lines.
    """
    comparable_lines = [(raw.index, _comparable(raw.text)) for raw in raw_lines if not raw.is_blank]

    classified = []
    for record in records:
        primary = collapse_whitespace(sanitize(record.content))
        secondary = collapse_whitespace(sanitize(record.secondary)) if record.secondary else None
        if record.role == LineRole.BULLET:
            primary = strip_bullet_marker(primary)

        if record.role == LineRole.BLANK or not primary:
            classified.append(ClassifiedLine(role=LineRole.BLANK, primary_text=""))
            continue

        needle = primary.lower()
        source_index = next((index for index, text in comparable_lines if needle in text), -1)
        consumed = (source_index,) if source_index >= 0 else ()

        classified.append(
            ClassifiedLine(
                role=record.role,
                primary_text=primary,
                secondary_text=secondary,
                source_index=source_index,
                consumed_indices=consumed,
            )
        )

    return classified
