"""
Word (.docx) output for classified résumé lines using python-docx.

Unlike the PDF backend this does not draw a RenderPlan: Word paginates and
wraps on its own, so each classified line becomes one styled paragraph and
the page geometry is left to the word processor. Styling is a fixed Calibri
look with half-inch margins, a navy name and underlined section headers.
"""

import io
import time
from pathlib import Path
from typing import BinaryIO, Optional, Sequence, Union

from docx import Document
from docx.enum.text import WD_TAB_ALIGNMENT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from folio.contexts.intake.line_data_structure import ClassifiedLine, LineRole
from folio.contexts.rendering.exceptions import RenderBackendError
from folio.contexts.rendering.logger import _log_debug, _log_error, log_docx_result

FONT_NAME = "Calibri"
BODY_SIZE = 11

PRIMARY_COLOR = "2E4F72"
SECONDARY_COLOR = "666666"
TEXT_COLOR = "262626"
CONTACT_COLOR = "3366CC"
RULE_COLOR = "CCCCCC"

MARGIN = Inches(0.5)

# US Letter width less both margins; right tab stop for job companion text
CONTENT_WIDTH = Inches(7.5)


def _paragraph(doc, space_before: float = 0, space_after: float = 3):
    paragraph = doc.add_paragraph()
    paragraph.paragraph_format.space_before = Pt(space_before)
    paragraph.paragraph_format.space_after = Pt(space_after)
    return paragraph


def _run(paragraph, text: str, size: float = BODY_SIZE, bold: bool = False, color: str = TEXT_COLOR):
    run = paragraph.add_run(text)
    run.font.name = FONT_NAME
    run.font.size = Pt(size)
    run.font.bold = bold
    run.font.color.rgb = RGBColor.from_string(color)
    return run


def _rule_below(paragraph) -> None:
    pPr = paragraph._p.get_or_add_pPr()
    pBdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), "6")
    bottom.set(qn("w:space"), "1")
    bottom.set(qn("w:color"), RULE_COLOR)
    pBdr.append(bottom)
    pPr.append(pBdr)


def _add_line(doc, line: ClassifiedLine, after_header: bool) -> None:
    role = line.role
    text = line.primary_text

    if role == LineRole.NAME:
        _run(_paragraph(doc, space_after=4), text, size=18, bold=True, color=PRIMARY_COLOR)
    elif role == LineRole.CONTACT:
        _run(_paragraph(doc), text, size=10, color=CONTACT_COLOR)
    elif role == LineRole.SECTION_HEADER:
        _paragraph(doc, space_before=10, space_after=5)
        header = _paragraph(doc, space_after=6)
        _run(header, text.upper(), size=12, bold=True, color=PRIMARY_COLOR)
        _rule_below(header)
    elif role == LineRole.JOB_TITLE:
        title = _paragraph(doc, space_before=0 if after_header else 6)
        _run(title, text, bold=True)
        if line.secondary_text:
            title.paragraph_format.tab_stops.add_tab_stop(CONTENT_WIDTH, WD_TAB_ALIGNMENT.RIGHT)
            _run(title, f"\t{line.secondary_text}", color=SECONDARY_COLOR)
    elif role == LineRole.JOB_DETAIL:
        _run(_paragraph(doc), text, color=SECONDARY_COLOR)
    elif role == LineRole.BULLET:
        bullet = doc.add_paragraph(style="List Bullet")
        bullet.paragraph_format.space_after = Pt(3)
        _run(bullet, text)
    elif role == LineRole.BLANK:
        _paragraph(doc, space_after=5)
    elif text:
        _run(_paragraph(doc), text)


def build_document(lines: Sequence[ClassifiedLine], title: Optional[str] = None):
    """
    Build a python-docx Document with one paragraph per classified line.

    Section headers are upper-cased and preceded by a spacer paragraph;
    job titles carry their companion text on a right tab stop.
    """
    doc = Document()

    normal = doc.styles["Normal"]
    normal.font.name = FONT_NAME
    normal.font.size = Pt(BODY_SIZE)

    for section in doc.sections:
        section.top_margin = MARGIN
        section.bottom_margin = MARGIN
        section.left_margin = MARGIN
        section.right_margin = MARGIN

    if title:
        doc.core_properties.title = title
    doc.core_properties.author = "folio"

    previous = None
    for line in lines:
        _add_line(doc, line, after_header=previous == LineRole.SECTION_HEADER)
        if not line.is_blank:
            previous = line.role

    return doc


def _render(
    lines: Sequence[ClassifiedLine],
    target: Union[str, BinaryIO],
    title: Optional[str],
    output_path: Optional[Path],
) -> int:
    try:
        doc = build_document(lines, title)
        doc.save(target)
    except Exception as e:
        _log_error(f"python-docx failed: {type(e).__name__}: {e}")
        raise RenderBackendError(
            "python-docx failed to render lines", output_path=output_path, original_error=e
        ) from e
    return len(doc.paragraphs)


def write_docx(lines: Sequence[ClassifiedLine], output_path: Path, title: Optional[str] = None) -> Path:
    """
    Write classified lines into a Word document.

    Args:
        lines: Classified lines, e.g. PipelineResult.lines
        output_path: Destination .docx path (parent directories are created)
        title: Optional document title metadata

    Returns:
        Path to the written document

    Raises:
        RenderBackendError: If python-docx fails (unwritable path, ...)
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    start_time = time.time()
    _log_debug(f"Writing {len(lines)} line(s) to {output_path}")
    paragraph_count = _render(lines, str(output_path), title, output_path)
    log_docx_result(str(output_path), paragraph_count, time.time() - start_time)

    return output_path


def render_docx_bytes(lines: Sequence[ClassifiedLine], title: Optional[str] = None) -> bytes:
    """Write classified lines into an in-memory .docx and return its bytes."""
    buffer = io.BytesIO()
    _render(lines, buffer, title, None)
    return buffer.getvalue()
