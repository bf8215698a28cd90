"""
Layout engine: classified lines -> paginated render plan.

A cursor walks down the page from the top margin. Each classified line
becomes one or more DrawBlocks; before every block the cursor checks that
the line still fits above the bottom margin and starts a new page when it
does not. The check is per wrapped sub-line, so long paragraphs split
across pages mid-wrap.

Positions are PDF points with the origin at the bottom-left corner. A
DrawBlock's y is its baseline: cursor y minus the font size.
"""

from typing import List, Optional, Sequence

from folio.contexts.intake.line_data_structure import ClassifiedLine, LineRole
from folio.contexts.layout.defaults import (
    BULLET_GLYPH,
    DEFAULT_GEOMETRY,
    DEFAULT_STYLES,
    SECONDARY_GUTTER,
)
from folio.contexts.layout.exceptions import GeometryTooSmallError, LayoutConfigurationError
from folio.contexts.layout.geometry import PageGeometry, RoleStyle, StyleTable
from folio.contexts.layout.logger import log_layout_result, log_page_break
from folio.contexts.layout.render_plan import DrawBlock, RenderPlan
from folio.contexts.layout.wrapping import MeasureFn, estimate_width, safe_measure, wrap_text

# Roles that are always word-wrapped; other roles wrap only when too wide
WRAPPED_ROLES = frozenset({LineRole.BULLET, LineRole.PLAIN_TEXT, LineRole.SKILL_GROUP})

# Below this share of the content width, a job line's companion text moves to its own line
MIN_PRIMARY_SHARE = 0.3


def check_geometry(geometry: PageGeometry, styles: StyleTable) -> None:
    """
    Reject geometry and styles that could never place a line.

    Raises:
        LayoutConfigurationError: Negative margins, line gap, spacing or
            indent, or a non-positive page size or font size
        GeometryTooSmallError: Content area too short for the tallest style,
            or too narrow for one character at the widest indent
    """
    if geometry.width <= 0 or geometry.height <= 0:
        raise LayoutConfigurationError(
            f"Page size must be positive, got {geometry.width} x {geometry.height}"
        )
    margins = (
        geometry.margin_top,
        geometry.margin_right,
        geometry.margin_bottom,
        geometry.margin_left,
    )
    if min(margins) < 0:
        raise LayoutConfigurationError(f"Margins must be non-negative, got {margins}")
    if geometry.line_gap < 0:
        raise LayoutConfigurationError(f"line_gap must be non-negative, got {geometry.line_gap}")

    all_styles = styles.all_styles()
    for style in all_styles:
        if style.font_size <= 0:
            raise LayoutConfigurationError(f"Font sizes must be positive, got {style.font_size}")
        spacing = (style.spacing_before, style.spacing_after, style.indent)
        if min(spacing) < 0:
            raise LayoutConfigurationError(
                f"spacing_before, spacing_after and indent must be non-negative, got {spacing}"
            )

    if geometry.content_width <= 0:
        raise GeometryTooSmallError("Page has no horizontal content area", geometry=geometry)

    tallest = max(style.line_height(geometry.line_gap) for style in all_styles)
    if tallest > geometry.content_height:
        raise GeometryTooSmallError(
            "Page content area cannot fit a single line",
            geometry=geometry,
            required_height=tallest,
        )

    for style in all_styles:
        one_char = estimate_width("M", style.font_size, style.font_weight)
        if geometry.content_width - style.indent < one_char:
            raise GeometryTooSmallError(
                "Page content area is narrower than one character",
                geometry=geometry,
                required_width=style.indent + one_char,
            )


class _Cursor:
    """Current page and the y of the top of the next line."""

    def __init__(self, geometry: PageGeometry):
        self.geometry = geometry
        self.page = 0
        self.y = geometry.top_y
        self.at_top = True
        self.after_blank = False

    def gap(self, amount: float) -> None:
        """Vertical spacing; swallowed at the top of a page."""
        if amount > 0 and not self.at_top:
            self.y -= amount

    def reserve(self, height: float, role: LineRole) -> None:
        """Start a new page unless a line of this height fits above the bottom margin."""
        if not self.at_top and self.y - height < self.geometry.margin_bottom:
            self.page += 1
            self.y = self.geometry.top_y
            self.at_top = True
            log_page_break(self.page, role.value)

    def place(self, font_size: float, height: float) -> float:
        """Consume one line and return its baseline."""
        baseline = self.y - font_size
        self.y -= height
        self.at_top = False
        self.after_blank = False
        return baseline


class _PlanBuilder:
    def __init__(self, geometry: PageGeometry, styles: StyleTable, measure: MeasureFn):
        self.geometry = geometry
        self.styles = styles
        self.measure = measure
        self.cursor = _Cursor(geometry)
        self.blocks: List[DrawBlock] = []

    def add(self, line: ClassifiedLine) -> None:
        if line.role == LineRole.BLANK or not line.primary_text.strip():
            self._blank()
            return

        style = self.styles.resolve(line.role)
        self.cursor.gap(style.spacing_before)

        if line.role == LineRole.BULLET:
            self._bullet(line, style)
        elif line.role in (LineRole.JOB_TITLE, LineRole.JOB_DETAIL) and line.secondary_text:
            self._pair(line, style)
        else:
            self._text(line.primary_text, line.role, style)

        self.cursor.gap(style.spacing_after)

    # --- helpers ---

    def _width(self, text: str, style: RoleStyle) -> float:
        return self.measure(text, style.font_size, style.font_weight)

    def _sub_lines(self, text: str, role: LineRole, style: RoleStyle, width: float) -> List[str]:
        if role in WRAPPED_ROLES or self._width(text, style) > width:
            return wrap_text(text, width, style.font_size, style.font_weight, self.measure) or [text]
        return [text]

    def _emit_line(self, style: RoleStyle, role: LineRole) -> float:
        height = style.line_height(self.geometry.line_gap)
        self.cursor.reserve(height, role)
        return self.cursor.place(style.font_size, height)

    # --- per-role placement ---

    def _blank(self) -> None:
        if self.cursor.at_top or self.cursor.after_blank:
            return
        plain = self.styles.resolve(LineRole.PLAIN_TEXT)
        self.cursor.y -= plain.line_height(self.geometry.line_gap) / 2
        self.cursor.after_blank = True

    def _text(self, text: str, role: LineRole, style: RoleStyle) -> None:
        x = self.geometry.margin_left + style.indent
        width = self.geometry.content_width - style.indent
        sub_lines = self._sub_lines(text, role, style, width)

        for i, sub_line in enumerate(sub_lines):
            baseline = self._emit_line(style, role)
            self.blocks.append(
                DrawBlock(
                    page=self.cursor.page,
                    x=x,
                    y=baseline,
                    text=sub_line,
                    style=style,
                    role=role,
                    rule_below=role == LineRole.SECTION_HEADER and i == len(sub_lines) - 1,
                )
            )

    def _bullet(self, line: ClassifiedLine, style: RoleStyle) -> None:
        x = self.geometry.margin_left + style.indent
        width = self.geometry.content_width - style.indent
        sub_lines = self._sub_lines(line.primary_text, LineRole.BULLET, style, width)

        for i, sub_line in enumerate(sub_lines):
            baseline = self._emit_line(style, LineRole.BULLET)
            if i == 0:
                self.blocks.append(
                    DrawBlock(
                        page=self.cursor.page,
                        x=self.geometry.margin_left,
                        y=baseline,
                        text=BULLET_GLYPH,
                        style=style,
                        role=LineRole.BULLET,
                        marker=True,
                    )
                )
            self.blocks.append(
                DrawBlock(
                    page=self.cursor.page,
                    x=x,
                    y=baseline,
                    text=sub_line,
                    style=style,
                    role=LineRole.BULLET,
                )
            )

    def _pair(self, line: ClassifiedLine, style: RoleStyle) -> None:
        """Primary text at the left margin, companion text flush right on the same baseline."""
        secondary_style = self.styles.resolve(LineRole.JOB_DETAIL)
        secondary = " ".join(line.secondary_text.split())
        secondary_width = self._width(secondary, secondary_style)

        content_width = self.geometry.content_width - style.indent
        primary_width = content_width - secondary_width - SECONDARY_GUTTER
        one_char = estimate_width("M", style.font_size, style.font_weight)

        if primary_width < max(content_width * MIN_PRIMARY_SHARE, one_char):
            # Too wide to share a line: primary first, companion lines flush right below it
            self._text(line.primary_text, line.role, style)
            for piece in self._sub_lines(
                secondary, line.role, secondary_style, self.geometry.content_width
            ):
                baseline = self._emit_line(secondary_style, line.role)
                self.blocks.append(
                    DrawBlock(
                        page=self.cursor.page,
                        x=self.geometry.right_x - self._width(piece, secondary_style),
                        y=baseline,
                        text=piece,
                        style=secondary_style,
                        role=line.role,
                        align="right",
                    )
                )
            return

        sub_lines = self._sub_lines(line.primary_text, line.role, style, primary_width)
        x = self.geometry.margin_left + style.indent

        # First row carries both texts; its height covers the larger of the two styles
        font_size = max(style.font_size, secondary_style.font_size)
        height = font_size + self.geometry.line_gap
        self.cursor.reserve(height, line.role)
        baseline = self.cursor.place(font_size, height)
        self.blocks.append(
            DrawBlock(
                page=self.cursor.page,
                x=x,
                y=baseline,
                text=sub_lines[0],
                style=style,
                role=line.role,
            )
        )
        self.blocks.append(
            DrawBlock(
                page=self.cursor.page,
                x=self.geometry.right_x - secondary_width,
                y=baseline,
                text=secondary,
                style=secondary_style,
                role=line.role,
                align="right",
            )
        )

        for sub_line in sub_lines[1:]:
            baseline = self._emit_line(style, line.role)
            self.blocks.append(
                DrawBlock(
                    page=self.cursor.page,
                    x=x,
                    y=baseline,
                    text=sub_line,
                    style=style,
                    role=line.role,
                )
            )


def layout(
    lines: Sequence[ClassifiedLine],
    geometry: Optional[PageGeometry] = None,
    styles: Optional[StyleTable] = None,
    measure: Optional[MeasureFn] = None,
) -> RenderPlan:
    """
    Place classified lines onto pages.

    Args:
        lines: Output of the classifier, in document order
        geometry: Page size and margins (default: US Letter, 50pt margins)
        styles: Role styles (default: DEFAULT_STYLES)
        measure: measure(text, font_size, font_weight) -> width in points
            (default: fixed character-width estimate)

    Returns:
        RenderPlan with at least one page

    Raises:
        GeometryTooSmallError: If the page cannot hold a single line
        LayoutConfigurationError: If geometry or styles are otherwise invalid
    """
    if geometry is None:
        geometry = DEFAULT_GEOMETRY
    if styles is None:
        styles = DEFAULT_STYLES

    check_geometry(geometry, styles)

    builder = _PlanBuilder(geometry, styles, safe_measure(measure))
    for line in lines:
        builder.add(line)

    plan = RenderPlan(blocks=tuple(builder.blocks), geometry=geometry)
    log_layout_result(len(lines), len(plan.blocks), plan.page_count)
    return plan
