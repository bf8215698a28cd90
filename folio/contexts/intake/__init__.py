"""
Intake Context

Responsibilities:
- Normalizes raw résumé text into safe, renderable characters
- Splits text into positioned raw lines
- Classifies each line into a semantic role (name, contact, heading, job, bullet, ...)
- Tracks the current résumé section during the classification pass
- Validates externally produced structuring hints before trusting them

Owns: Line-level pattern matching, section vocabulary, hint validation
Never: Computes positions, font metrics, or page breaks
"""

from folio.contexts.intake.classifier import (
    Classification,
    classify,
    classify_document,
    classify_text,
    split_lines,
)
from folio.contexts.intake.hints import InvalidHintError, validate_hint
from folio.contexts.intake.line_data_structure import (
    ClassifiedLine,
    LineRole,
    RawLine,
)
from folio.contexts.intake.sanitizer import sanitize
from folio.contexts.intake.section_tracker import SectionState

__all__ = [
    # Orchestrators
    "classify",
    "classify_text",
    "classify_document",
    "Classification",
    "split_lines",
    "sanitize",
    # Hint validation
    "validate_hint",
    "InvalidHintError",
    # Data structures
    "RawLine",
    "ClassifiedLine",
    "LineRole",
    "SectionState",
]
