"""
Unit tests for the layout engine.

Uses the default character-width estimate (0.5 x font size per character)
so every position below can be computed by hand. Default geometry is US
Letter with 50pt margins and a 2pt line gap, so the content area runs from
y=742 down to y=50 and from x=50 to x=562.
"""

import json

import pytest

from folio.contexts.intake.line_data_structure import ClassifiedLine, LineRole
from folio.contexts.layout.defaults import BULLET_GLYPH, DEFAULT_GEOMETRY, DEFAULT_STYLES
from folio.contexts.layout.engine import check_geometry, layout
from folio.contexts.layout.exceptions import GeometryTooSmallError, LayoutConfigurationError
from folio.contexts.layout.geometry import PageGeometry, RoleStyle, StyleTable


def line(role, text, secondary=None):
    return ClassifiedLine(role=role, primary_text=text, secondary_text=secondary)


def blank():
    return ClassifiedLine(role=LineRole.BLANK, primary_text="")


def plain_lines(count):
    return [line(LineRole.PLAIN_TEXT, f"Line {i}") for i in range(count)]


NARROW = PageGeometry(
    width=315.0,
    height=792.0,
    margin_top=50.0,
    margin_right=50.0,
    margin_bottom=50.0,
    margin_left=50.0,
)


# =============================================================================
# Basic placement
# =============================================================================


@pytest.mark.unit
def test_name_baseline_at_top():
    """Test the first block sits one font size below the top margin."""
    plan = layout([line(LineRole.NAME, "Jane Doe")])

    block = plan.blocks[0]
    assert block.page == 0
    assert block.x == 50.0
    assert block.y == 722.0
    assert block.style.font_weight == "bold"


@pytest.mark.unit
def test_spacing_before_swallowed_at_page_top():
    """Test a header's spacing_before is not applied on a fresh page."""
    plan = layout([line(LineRole.SECTION_HEADER, "EXPERIENCE")])
    assert plan.blocks[0].y == 731.0


@pytest.mark.unit
def test_blocks_are_ordered_top_to_bottom():
    """Test baselines strictly decrease within a page."""
    lines = [
        line(LineRole.NAME, "Jane Doe"),
        line(LineRole.CONTACT, "jane@x.com"),
        line(LineRole.SECTION_HEADER, "EXPERIENCE"),
        line(LineRole.JOB_TITLE, "Senior Engineer 2020 - Present"),
        line(LineRole.BULLET, "Built systems"),
    ]
    plan = layout(lines)
    baselines = [block.y for block in plan.text_blocks()]
    assert baselines == sorted(baselines, reverse=True)
    assert len(set(baselines)) == len(baselines)


@pytest.mark.unit
def test_header_has_rule_below():
    """Test section headers carry the separator rule."""
    plan = layout([line(LineRole.SECTION_HEADER, "SKILLS"), line(LineRole.PLAIN_TEXT, "x")])
    assert plan.blocks[0].rule_below
    assert not plan.blocks[1].rule_below


@pytest.mark.unit
def test_empty_input_gives_one_empty_page():
    """Test no lines still yields a one-page plan."""
    plan = layout([])
    assert plan.blocks == ()
    assert plan.page_count == 1
    assert plan.pages() == [()]


@pytest.mark.unit
def test_empty_plain_line_places_nothing():
    """Test the degraded empty document lays out without blocks."""
    plan = layout([line(LineRole.PLAIN_TEXT, "")])
    assert plan.blocks == ()
    assert plan.page_count == 1


# =============================================================================
# Blank lines
# =============================================================================


class TestBlankLines:
    """Tests for vertical space from blank lines."""

    def test_blank_adds_half_line(self):
        """Test one blank line adds half a plain line height."""
        plan = layout([line(LineRole.NAME, "Jane"), blank(), line(LineRole.PLAIN_TEXT, "x")])
        assert plan.blocks[1].y == 698.0

    def test_no_blank(self):
        plan = layout([line(LineRole.NAME, "Jane"), line(LineRole.PLAIN_TEXT, "x")])
        assert plan.blocks[1].y == 704.0

    def test_consecutive_blanks_collapse(self):
        """Test two blank lines add the same space as one."""
        plan = layout(
            [line(LineRole.NAME, "Jane"), blank(), blank(), line(LineRole.PLAIN_TEXT, "x")]
        )
        assert plan.blocks[1].y == 698.0

    def test_blank_at_page_top_ignored(self):
        """Test leading blank lines do not push content down."""
        plan = layout([blank(), line(LineRole.PLAIN_TEXT, "x")])
        assert plan.blocks[0].y == 732.0


# =============================================================================
# Bullets and wrapping
# =============================================================================


class TestBullets:
    """Tests for bullet marker and hanging indent."""

    def test_marker_and_text(self):
        """Test a bullet yields a marker block at the margin and indented text."""
        plan = layout([line(LineRole.BULLET, "Built systems")])

        marker, text = plan.blocks
        assert marker.marker
        assert marker.text == BULLET_GLYPH
        assert marker.x == 50.0
        assert text.x == 65.0
        assert text.text == "Built systems"
        assert marker.y == text.y

    def test_long_bullet_wraps_with_hanging_indent(self):
        """Test continuation lines align with the first line's text, not the marker."""
        text = " ".join(["word"] * 60)
        plan = layout([line(LineRole.BULLET, text)])

        markers = [block for block in plan.blocks if block.marker]
        text_blocks = plan.text_blocks()
        assert len(markers) == 1
        assert len(text_blocks) > 1
        assert all(block.x == 65.0 for block in text_blocks)
        assert " ".join(block.text for block in text_blocks) == text

    def test_overlong_bullet_splits_across_pages(self):
        """Test a bullet that starts near the bottom continues on the next page."""
        lines = plain_lines(50) + [line(LineRole.BULLET, "x" * 500)]
        plan = layout(lines, geometry=NARROW)

        bullet_blocks = [block for block in plan.text_blocks() if block.role == LineRole.BULLET]
        assert len(bullet_blocks) == 13
        # Plus the marker block drawn beside the first sub-line
        assert sum(1 for block in plan.blocks if block.role == LineRole.BULLET) == 14
        assert plan.page_count == 2
        assert sum(1 for block in bullet_blocks if block.page == 0) == 7
        assert sum(1 for block in bullet_blocks if block.page == 1) == 6
        assert "".join(block.text for block in bullet_blocks) == "x" * 500

    def test_no_block_below_bottom_margin(self):
        """Test every baseline stays inside the content area."""
        plan = layout(plain_lines(50) + [line(LineRole.BULLET, "x" * 500)], geometry=NARROW)
        for block in plan.blocks:
            assert block.y >= NARROW.margin_bottom
            assert block.y + block.style.font_size <= NARROW.top_y


# =============================================================================
# Job title / detail pairs
# =============================================================================


class TestJobPairs:
    """Tests for right-aligned companion text."""

    def test_secondary_flush_right(self):
        """Test companion text ends at the right margin on the same baseline."""
        plan = layout([line(LineRole.JOB_TITLE, "Senior Engineer 2020 - Present", "Acme Corp")])

        primary, secondary = plan.blocks
        assert primary.x == 50.0
        assert secondary.x == 517.0
        assert secondary.align == "right"
        assert secondary.y == primary.y
        assert secondary.style == DEFAULT_STYLES.resolve(LineRole.JOB_DETAIL)

    def test_wide_secondary_stacks(self):
        """Test companion text too wide to share the line moves below the title."""
        plan = layout([line(LineRole.JOB_TITLE, "Engineer 2020 - 2021", "x" * 80)])

        primary, secondary = plan.blocks
        assert primary.x == 50.0
        assert secondary.align == "right"
        assert secondary.x == 162.0
        assert secondary.y < primary.y

    def test_title_without_secondary(self):
        """Test a title with no companion text is a single left-aligned block."""
        plan = layout([line(LineRole.JOB_TITLE, "Senior Engineer 2020 - Present")])
        assert len(plan.blocks) == 1
        assert plan.blocks[0].align == "left"


# =============================================================================
# Pagination
# =============================================================================


@pytest.mark.unit
def test_page_break_before_header():
    """Test a header that does not fit starts the next page at the top."""
    plan = layout(plain_lines(57) + [line(LineRole.SECTION_HEADER, "EDUCATION")])

    header = plan.blocks[-1]
    assert plan.blocks[56].page == 0
    assert header.page == 1
    assert header.y == 731.0
    assert plan.page_count == 2
    assert [len(page) for page in plan.pages()] == [57, 1]
    assert plan.blocks_on(1) == (header,)


@pytest.mark.unit
def test_layout_is_deterministic():
    """Test identical inputs give identical plans."""
    lines = plain_lines(80) + [line(LineRole.BULLET, "x" * 300)]
    first = json.dumps(layout(lines).to_dict(), sort_keys=True)
    second = json.dumps(layout(lines).to_dict(), sort_keys=True)
    assert first == second


@pytest.mark.unit
def test_broken_measure_does_not_abort():
    """Test a measure that raises falls back to the estimate."""

    def broken(text, font_size, font_weight):
        raise RuntimeError("backend unavailable")

    plan = layout([line(LineRole.JOB_TITLE, "Senior Engineer 2020 - Present", "Acme Corp")], measure=broken)
    assert plan.blocks[1].x == 517.0


# =============================================================================
# Geometry validation
# =============================================================================


class TestGeometryValidation:
    """Tests for unusable geometry and styles."""

    def test_default_geometry_is_valid(self):
        check_geometry(DEFAULT_GEOMETRY, DEFAULT_STYLES)

    def test_no_vertical_room(self):
        geometry = PageGeometry(612.0, 60.0, 30.0, 50.0, 30.0, 50.0)
        with pytest.raises(GeometryTooSmallError) as exc_info:
            layout([line(LineRole.PLAIN_TEXT, "x")], geometry=geometry)
        assert exc_info.value.required_height == 22.0

    def test_no_horizontal_room(self):
        geometry = PageGeometry(100.0, 792.0, 50.0, 50.0, 50.0, 50.0)
        with pytest.raises(GeometryTooSmallError):
            layout([], geometry=geometry)

    def test_narrower_than_one_character(self):
        geometry = PageGeometry(110.0, 792.0, 50.0, 50.0, 50.0, 50.0)
        with pytest.raises(GeometryTooSmallError):
            layout([line(LineRole.PLAIN_TEXT, "x")], geometry=geometry)

    def test_negative_margin(self):
        geometry = PageGeometry(612.0, 792.0, -1.0, 50.0, 50.0, 50.0)
        with pytest.raises(LayoutConfigurationError, match="non-negative"):
            layout([], geometry=geometry)

    def test_non_positive_font(self):
        styles = DEFAULT_STYLES.with_overrides(LineRole.BULLET, font_size=0.0)
        with pytest.raises(LayoutConfigurationError, match="Font sizes"):
            layout([], styles=styles)

    @pytest.mark.parametrize("field", ["spacing_before", "spacing_after", "indent"])
    def test_negative_style_spacing(self, field):
        """Test negative spacing or indent is rejected before any block is placed."""
        styles = DEFAULT_STYLES.with_overrides(LineRole.SECTION_HEADER, **{field: -20.0})
        with pytest.raises(LayoutConfigurationError, match="non-negative"):
            layout([line(LineRole.SECTION_HEADER, "EXPERIENCE")], styles=styles)


class TestStyleTable:
    """Tests for style resolution."""

    def test_missing_role_falls_back_to_plain_text(self):
        table = StyleTable({LineRole.PLAIN_TEXT: RoleStyle(font_size=9.0)})
        assert table.resolve(LineRole.SKILL_GROUP).font_size == 9.0

    def test_empty_table_uses_builtin_fallback(self):
        assert StyleTable().resolve(LineRole.NAME).font_size == 10.0

    def test_with_overrides_leaves_original(self):
        updated = DEFAULT_STYLES.with_overrides(LineRole.NAME, font_size=24.0)
        assert updated.resolve(LineRole.NAME).font_size == 24.0
        assert DEFAULT_STYLES.resolve(LineRole.NAME).font_size == 20.0
        assert updated.resolve(LineRole.NAME).font_weight == "bold"
