"""
Page geometry and role styles.

Coordinates are PDF points with the origin at the bottom-left corner of the
page, so "down the page" means decreasing y.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Tuple

from folio.contexts.intake.line_data_structure import LineRole


@dataclass(frozen=True)
class PageGeometry:
    """
    Page size and margins, in points.

    Attributes:
        width, height: Page size
        margin_top, margin_right, margin_bottom, margin_left: Margins
        line_gap: Extra vertical space between wrapped sub-lines
    """

    width: float
    height: float
    margin_top: float
    margin_right: float
    margin_bottom: float
    margin_left: float
    line_gap: float = 2.0

    @property
    def content_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        return self.height - self.margin_top - self.margin_bottom

    @property
    def top_y(self) -> float:
        """y of the top edge of the content area."""
        return self.height - self.margin_top

    @property
    def right_x(self) -> float:
        """x of the right edge of the content area."""
        return self.width - self.margin_right


@dataclass(frozen=True)
class RoleStyle:
    """
    Visual style of one line role.

    Attributes:
        font_size: Size in points
        font_weight: "normal" or "bold"
        color: Hex color string (e.g., "#2e4f73")
        spacing_before: Gap above the line's first block
        spacing_after: Gap below the line's last block
        indent: Left indent of the text from the content margin
    """

    font_size: float
    font_weight: str = "normal"
    color: str = "#262626"
    spacing_before: float = 0.0
    spacing_after: float = 0.0
    indent: float = 0.0

    def line_height(self, line_gap: float) -> float:
        return self.font_size + line_gap

    def to_dict(self) -> dict:
        return {
            "font_size": self.font_size,
            "font_weight": self.font_weight,
            "color": self.color,
            "spacing_before": self.spacing_before,
            "spacing_after": self.spacing_after,
            "indent": self.indent,
        }


# Used when a table has neither the requested role nor plain_text
FALLBACK_STYLE = RoleStyle(font_size=10.0)


@dataclass(frozen=True)
class StyleTable:
    """
    Mapping from line role to style, immutable for a layout run.

    Roles without an entry resolve to the plain_text style.
    """

    styles: Mapping[LineRole, RoleStyle] = field(default_factory=dict)

    def __post_init__(self):
        # Private copy so callers cannot mutate the table mid-run
        object.__setattr__(self, "styles", dict(self.styles))

    def resolve(self, role: LineRole) -> RoleStyle:
        """Style for role, falling back to plain_text, then to a built-in default."""
        if role in self.styles:
            return self.styles[role]
        return self.styles.get(LineRole.PLAIN_TEXT, FALLBACK_STYLE)

    def with_overrides(self, role: LineRole, **changes) -> "StyleTable":
        """
        Return a new table with some fields of one role's style replaced.

        Example:
            >>> table.with_overrides(LineRole.NAME, font_size=24.0)
        """
        updated: Dict[LineRole, RoleStyle] = dict(self.styles)
        updated[role] = replace(self.resolve(role), **changes)
        return StyleTable(updated)

    def all_styles(self) -> Tuple[RoleStyle, ...]:
        """Every style a layout run could resolve to."""
        return tuple(self.styles.values()) + (self.resolve(LineRole.PLAIN_TEXT),)
