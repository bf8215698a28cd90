"""
Layout Context

Responsibilities:
- Holds page geometry and per-role style tables (defaults and YAML presets)
- Greedily word-wraps classified lines into the available width
- Places text blocks top-to-bottom and inserts page breaks
- Produces the render plan handed to rendering backends

Owns: Word-wrap, vertical rhythm, pagination, render plan structure
Never: Draws anything or computes font metrics itself (measurement is supplied)
"""

from folio.contexts.layout.config_resolver import load_layout_presets, resolve_layout
from folio.contexts.layout.defaults import DEFAULT_GEOMETRY, DEFAULT_STYLES
from folio.contexts.layout.engine import check_geometry, layout
from folio.contexts.layout.exceptions import GeometryTooSmallError, LayoutConfigurationError
from folio.contexts.layout.geometry import PageGeometry, RoleStyle, StyleTable
from folio.contexts.layout.render_plan import DrawBlock, RenderPlan
from folio.contexts.layout.wrapping import estimate_width, wrap_text

__all__ = [
    "layout",
    "check_geometry",
    "wrap_text",
    "estimate_width",
    # Presets and defaults
    "resolve_layout",
    "load_layout_presets",
    "DEFAULT_GEOMETRY",
    "DEFAULT_STYLES",
    # Configuration errors
    "LayoutConfigurationError",
    "GeometryTooSmallError",
    # Data structures
    "PageGeometry",
    "RoleStyle",
    "StyleTable",
    "DrawBlock",
    "RenderPlan",
]
