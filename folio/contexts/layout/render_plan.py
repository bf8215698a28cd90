"""
Render plan data structures.

A RenderPlan is the sole output of layout: positioned text draw instructions
grouped by page, consumed by whichever rendering backend draws them.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple

from folio.contexts.intake.line_data_structure import LineRole
from folio.contexts.layout.geometry import PageGeometry, RoleStyle


@dataclass(frozen=True)
class DrawBlock:
    """
    One positioned piece of text.

    Attributes:
        page: 0-based page number
        x: Left edge of the text (for align="right", still the left edge)
        y: Baseline, in points from the bottom of the page
        text: Text to draw
        style: Style to draw it with
        role: Role of the line this block came from
        rule_below: Draw a separator rule under this block
        align: "left" or "right" (informational; x is already resolved)
        marker: True for the glyph block drawn in front of a bullet
    """

    page: int
    x: float
    y: float
    text: str
    style: RoleStyle
    role: LineRole
    rule_below: bool = False
    align: str = "left"
    marker: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "x": self.x,
            "y": self.y,
            "text": self.text,
            "role": self.role.value,
            "rule_below": self.rule_below,
            "align": self.align,
            "marker": self.marker,
            "style": self.style.to_dict(),
        }


@dataclass(frozen=True)
class RenderPlan:
    """
    Ordered draw instructions for a whole document.

    Blocks are sorted by page ascending and, within a page, in top-to-bottom
    draw order. A plan always has at least one page, even with no blocks.
    """

    blocks: Tuple[DrawBlock, ...]
    geometry: PageGeometry

    @property
    def page_count(self) -> int:
        if not self.blocks:
            return 1
        return self.blocks[-1].page + 1

    def blocks_on(self, page: int) -> Tuple[DrawBlock, ...]:
        return tuple(block for block in self.blocks if block.page == page)

    def pages(self) -> List[Tuple[DrawBlock, ...]]:
        """Blocks grouped by page, one entry per page (possibly empty)."""
        grouped: List[List[DrawBlock]] = [[] for _ in range(self.page_count)]
        for block in self.blocks:
            grouped[block.page].append(block)
        return [tuple(page_blocks) for page_blocks in grouped]

    def text_blocks(self) -> Tuple[DrawBlock, ...]:
        """Blocks that carry content (bullet marker glyph blocks excluded)."""
        return tuple(block for block in self.blocks if not block.marker)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable form; identical for identical plans."""
        return {
            "geometry": asdict(self.geometry),
            "page_count": self.page_count,
            "blocks": [block.to_dict() for block in self.blocks],
        }

