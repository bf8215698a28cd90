"""
PDF output for render plans using reportlab.

Every DrawBlock becomes one canvas.drawString call at its resolved position;
section headers with rule_below get a thin separator line under them. Each
plan page is closed with showPage(), so the PDF has exactly plan.page_count
pages, including the single blank page of an empty plan.
"""

import io
import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

from reportlab.lib.colors import HexColor
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from folio.contexts.layout.render_plan import RenderPlan
from folio.contexts.rendering.exceptions import RenderBackendError
from folio.contexts.rendering.logger import _log_debug, _log_error, log_render_result

# Standard PDF fonts: always available, no embedding needed
FONT_NAMES = {
    "normal": "Helvetica",
    "bold": "Helvetica-Bold",
}

RULE_COLOR = "#cccccc"
RULE_WIDTH = 0.5

# Distance of the header rule below the header baseline
RULE_OFFSET = 3.0


def font_name(font_weight: str) -> str:
    return FONT_NAMES.get(font_weight, FONT_NAMES["normal"])


def reportlab_measure(text: str, font_size: float, font_weight: str = "normal") -> float:
    """
    Width of text in points using reportlab's Helvetica metrics.

    Pass as the measure argument of layout() so wrapping matches what
    write_pdf() draws.
    """
    return stringWidth(text, font_name(font_weight), font_size)


def _draw(pdf: canvas.Canvas, plan: RenderPlan) -> None:
    geometry = plan.geometry

    for page_blocks in plan.pages():
        for block in page_blocks:
            pdf.setFont(font_name(block.style.font_weight), block.style.font_size)
            pdf.setFillColor(HexColor(block.style.color))
            pdf.drawString(block.x, block.y, block.text)

            if block.rule_below:
                rule_y = block.y - RULE_OFFSET
                pdf.setStrokeColor(HexColor(RULE_COLOR))
                pdf.setLineWidth(RULE_WIDTH)
                pdf.line(geometry.margin_left, rule_y, geometry.right_x, rule_y)

        pdf.showPage()


def _render(
    plan: RenderPlan,
    target: Union[str, BinaryIO],
    title: Optional[str],
    output_path: Optional[Path],
) -> None:
    geometry = plan.geometry
    try:
        pdf = canvas.Canvas(target, pagesize=(geometry.width, geometry.height))
        if title:
            pdf.setTitle(title)
        pdf.setCreator("folio")
        _draw(pdf, plan)
        pdf.save()
    except Exception as e:
        _log_error(f"reportlab failed: {type(e).__name__}: {e}")
        raise RenderBackendError(
            "reportlab failed to render plan", output_path=output_path, original_error=e
        ) from e


def write_pdf(plan: RenderPlan, output_path: Path, title: Optional[str] = None) -> Path:
    """
    Draw a render plan into a PDF file.

    Args:
        plan: Render plan from layout()
        output_path: Destination .pdf path (parent directories are created)
        title: Optional document title metadata

    Returns:
        Path to the written PDF

    Raises:
        RenderBackendError: If reportlab fails (bad color, unwritable path, ...)
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    start_time = time.time()
    _log_debug(f"Writing {plan.page_count} page(s) to {output_path}")
    _render(plan, str(output_path), title, output_path)
    log_render_result(str(output_path), plan.page_count, len(plan.blocks), time.time() - start_time)

    return output_path


def render_pdf_bytes(plan: RenderPlan, title: Optional[str] = None) -> bytes:
    """Draw a render plan into an in-memory PDF and return its bytes."""
    buffer = io.BytesIO()
    _render(plan, buffer, title, None)
    return buffer.getvalue()
