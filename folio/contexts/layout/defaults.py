"""
Default page geometry and style table.

Provides the shared defaults used by:
- engine.py (when the caller supplies no geometry or styles)
- config_resolver.py (base values that presets override)
- scripts/render_resume.py
"""

from folio.contexts.intake.line_data_structure import LineRole
from folio.contexts.layout.geometry import PageGeometry, RoleStyle, StyleTable

# Default color scheme (navy headings, charcoal body)
DEFAULT_COLORS = {
    "primary": "#2e4f73",
    "text": "#262626",
    "secondary": "#666666",
    "accent": "#3373a6",
    "rule": "#cccccc",
}

# US Letter, 50pt margins
DEFAULT_GEOMETRY = PageGeometry(
    width=612.0,
    height=792.0,
    margin_top=50.0,
    margin_right=50.0,
    margin_bottom=50.0,
    margin_left=50.0,
    line_gap=2.0,
)

# Left indent of bullet text; the marker sits at the content margin
BULLET_INDENT = 15.0

# Minimum horizontal gap between a job line and its right-aligned companion text
SECONDARY_GUTTER = 12.0

BULLET_GLYPH = "•"

DEFAULT_STYLES = StyleTable(
    {
        LineRole.NAME: RoleStyle(
            font_size=20.0, font_weight="bold", color=DEFAULT_COLORS["primary"], spacing_after=6.0
        ),
        LineRole.CONTACT: RoleStyle(
            font_size=9.0, color=DEFAULT_COLORS["accent"], spacing_after=2.0
        ),
        LineRole.SECTION_HEADER: RoleStyle(
            font_size=11.0,
            font_weight="bold",
            color=DEFAULT_COLORS["primary"],
            spacing_before=10.0,
            spacing_after=4.0,
        ),
        LineRole.JOB_TITLE: RoleStyle(
            font_size=10.0,
            font_weight="bold",
            color=DEFAULT_COLORS["text"],
            spacing_before=4.0,
            spacing_after=1.0,
        ),
        LineRole.JOB_DETAIL: RoleStyle(
            font_size=10.0, color=DEFAULT_COLORS["secondary"], spacing_after=1.0
        ),
        LineRole.BULLET: RoleStyle(
            font_size=10.0, color=DEFAULT_COLORS["text"], indent=BULLET_INDENT
        ),
        LineRole.SKILL_GROUP: RoleStyle(
            font_size=10.0, color=DEFAULT_COLORS["text"], spacing_after=1.0
        ),
        LineRole.PLAIN_TEXT: RoleStyle(font_size=10.0, color=DEFAULT_COLORS["text"]),
    }
)
