"""
End-to-end résumé pipeline: text -> classified lines -> render plan.

    result = render_resume(text, measure=reportlab_measure)
    write_pdf(result.plan, Path("outs/resume.pdf"))

Classification and layout never raise for malformed text or hints; the only
hard error is GeometryTooSmallError for a page that cannot hold one line.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from folio.contexts.intake.classifier import classify_document, split_lines
from folio.contexts.intake.hint_llm import request_structuring_hint
from folio.contexts.intake.line_data_structure import ClassifiedLine
from folio.contexts.intake.sanitizer import sanitize
from folio.contexts.layout.engine import layout
from folio.contexts.layout.geometry import PageGeometry, StyleTable
from folio.contexts.layout.render_plan import RenderPlan
from folio.contexts.layout.wrapping import MeasureFn
from folio.utils.llm import DEFAULT_TIMEOUT

BEST_EFFORT_NOTE = "could not structure document, showing best-effort plain layout"
EMPTY_INPUT_NOTE = "input has no content, rendered an empty page"


@dataclass
class PipelineResult:
    """
    Output of render_resume().

    Attributes:
        plan: The render plan
        lines: Classified lines the plan was laid out from
        used_hint: True if a structuring hint drove classification
        notes: User-facing messages about degraded output
    """

    plan: RenderPlan
    lines: List[ClassifiedLine]
    used_hint: bool = False
    notes: List[str] = field(default_factory=list)


def render_resume(
    text: str,
    geometry: Optional[PageGeometry] = None,
    styles: Optional[StyleTable] = None,
    hint: Any = None,
    measure: Optional[MeasureFn] = None,
    use_llm_hint: bool = False,
    llm_provider: Optional[str] = None,
    llm_model: Optional[str] = None,
    llm_timeout: float = DEFAULT_TIMEOUT,
) -> PipelineResult:
    """
    Sanitize, classify and lay out a plain-text résumé.

    Args:
        text: Résumé text (any line-break convention)
        geometry: Page geometry (default: US Letter, 50pt margins)
        styles: Style table (default: DEFAULT_STYLES)
        hint: Structuring hint (list of records or JSON string)
        measure: Text width function from the rendering backend
        use_llm_hint: Ask an LLM for a hint when none is supplied
        llm_provider, llm_model, llm_timeout: LLM request settings

    Returns:
        PipelineResult with the plan, lines and any degradation notes

    Raises:
        GeometryTooSmallError: If the page cannot hold a single line
    """
    clean_text = sanitize(text)
    raw_lines = split_lines(clean_text)
    notes: List[str] = []

    if hint is None and use_llm_hint:
        hint = request_structuring_hint(
            clean_text, provider=llm_provider, model=llm_model, timeout=llm_timeout
        )

    classification = classify_document(raw_lines, hint)
    if classification.hint_error is not None:
        notes.append(BEST_EFFORT_NOTE)
    if all(raw.is_blank for raw in raw_lines):
        notes.append(EMPTY_INPUT_NOTE)

    plan = layout(classification.lines, geometry, styles, measure)

    return PipelineResult(
        plan=plan,
        lines=classification.lines,
        used_hint=classification.used_hint,
        notes=notes,
    )
