"""
Render plan diagnostics.

Checks a finished render plan before (or instead of) drawing it, to detect
blocks outside the content area, text that would overflow the right margin
under a given measure, content from the classified lines that never made it
into the plan, and documents longer than a page budget.

Detection capabilities:
- Vertical bounds: baseline below the bottom margin or above the top margin
- Horizontal bounds: block starting left of the margin or ending past the right margin
- Lost content: classified line text absent from the plan's text stream
- Page budget: plan longer than the requested number of pages

Horizontal checks are only as accurate as the measure function; with the
default character estimate they flag likely, not certain, overflow.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from folio.contexts.intake.line_data_structure import ClassifiedLine, LineRole
from folio.contexts.layout.render_plan import DrawBlock, RenderPlan
from folio.contexts.layout.wrapping import MeasureFn, safe_measure
from folio.utils.text_processing import truncate_display

# Rounding slack for float comparisons, in points
TOLERANCE = 0.01


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_BUDGET_EXCEEDED = "Page count {actual} exceeds budget of {budget}"

    # Page-level
    BELOW_MARGIN = "Page {page}: '{text}' sits below the bottom margin (y={y:.1f})"
    ABOVE_TOP = "Page {page}: '{text}' sits above the top margin (y={y:.1f})"
    LEFT_OF_MARGIN = "Page {page}: '{text}' starts left of the margin (x={x:.1f})"
    PAST_RIGHT_MARGIN = "Page {page}: '{text}' runs {amount:.1f}pt past the right margin"

    # Content-level
    CONTENT_MISSING = "Line {index} ({role}) not found in render plan: '{text}'"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class PageDiagnostics(Diagnostics):
    """Out-of-bounds blocks on a single page."""

    page: int = 0
    below_margin: List[DrawBlock] = field(default_factory=list)
    above_top: List[DrawBlock] = field(default_factory=list)
    left_of_margin: List[DrawBlock] = field(default_factory=list)
    # (block, overflow in points)
    past_right_margin: List[tuple] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        page = self.page + 1
        issues = [
            IssueTemplates.BELOW_MARGIN.format(page=page, text=_short(b.text), y=b.y)
            for b in self.below_margin
        ]
        issues += [
            IssueTemplates.ABOVE_TOP.format(page=page, text=_short(b.text), y=b.y)
            for b in self.above_top
        ]
        issues += [
            IssueTemplates.LEFT_OF_MARGIN.format(page=page, text=_short(b.text), x=b.x)
            for b in self.left_of_margin
        ]
        issues += [
            IssueTemplates.PAST_RIGHT_MARGIN.format(page=page, text=_short(b.text), amount=amount)
            for b, amount in self.past_right_margin
        ]
        return issues


@dataclass
class ContentDiagnostics(Diagnostics):
    """Classified lines whose text is absent from the plan."""

    missing_lines: List[ClassifiedLine] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        return [
            IssueTemplates.CONTENT_MISSING.format(
                index=line.source_index, role=line.role.value, text=_short(line.primary_text)
            )
            for line in self.missing_lines
        ]


@dataclass
class PlanDiagnostics(Diagnostics):
    """Top-level diagnostics for a render plan."""

    page_count: int = 0
    page_budget: Optional[int] = None

    def get_issues(self) -> List[str]:
        if self.page_budget is not None and self.page_count > self.page_budget:
            return [
                IssueTemplates.PAGE_BUDGET_EXCEEDED.format(
                    actual=self.page_count, budget=self.page_budget
                )
            ]
        return []


# =============================================================================
# Helper Functions
# =============================================================================


def _short(text: str) -> str:
    return truncate_display(text, 40)


def _squash(text: str) -> str:
    """Drop all whitespace so wrapped text compares equal to its source."""
    return "".join(text.split()).lower()


def _check_page(page: int, blocks: Sequence[DrawBlock], plan: RenderPlan, measure: MeasureFn) -> PageDiagnostics:
    geometry = plan.geometry
    diagnostics = PageDiagnostics(page=page)

    for block in blocks:
        if block.y < geometry.margin_bottom - TOLERANCE:
            diagnostics.below_margin.append(block)
        if block.y > geometry.top_y + TOLERANCE:
            diagnostics.above_top.append(block)
        if block.x < geometry.margin_left - TOLERANCE:
            diagnostics.left_of_margin.append(block)

        right_edge = block.x + measure(block.text, block.style.font_size, block.style.font_weight)
        overflow = right_edge - geometry.right_x
        if overflow > TOLERANCE:
            diagnostics.past_right_margin.append((block, overflow))

    return diagnostics


def _check_content(plan: RenderPlan, lines: Sequence[ClassifiedLine]) -> ContentDiagnostics:
    stream = _squash("".join(block.text for block in plan.text_blocks()))
    diagnostics = ContentDiagnostics()

    for line in lines:
        if line.role == LineRole.BLANK:
            continue
        for text in (line.primary_text, line.secondary_text):
            if text and _squash(text) not in stream:
                diagnostics.missing_lines.append(line)
                break

    return diagnostics


def diagnose_plan(
    plan: RenderPlan,
    lines: Optional[Sequence[ClassifiedLine]] = None,
    measure: Optional[MeasureFn] = None,
    page_budget: Optional[int] = None,
) -> PlanDiagnostics:
    """
    Check a render plan for out-of-bounds blocks, lost content and length.

    Args:
        plan: Render plan from layout()
        lines: Classified lines the plan was built from (enables lost-content check)
        measure: Width function used for the right-margin check (default: estimate)
        page_budget: Maximum acceptable page count (None to skip)

    Returns:
        PlanDiagnostics; use is_valid and get_inherited_issues()
    """
    measure_fn = safe_measure(measure)
    diagnostics = PlanDiagnostics(page_count=plan.page_count, page_budget=page_budget)

    for page, blocks in enumerate(plan.pages()):
        diagnostics.components.append(_check_page(page, blocks, plan, measure_fn))

    if lines is not None:
        diagnostics.components.append(_check_content(plan, lines))

    return diagnostics
