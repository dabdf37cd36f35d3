"""
Table layout that flows across pages.

The header row is drawn again at the top of every continuation page, and
row striping follows the row index of the whole table, not of the page.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.units import mm

from .document import LayoutContext
from .policy import block_fits, ensure_space, estimate_table_height
from .text import fit_font, truncate

logger = logging.getLogger(__name__)

LEFT, CENTER, RIGHT = "left", "center", "right"
ALIGNMENTS = (LEFT, CENTER, RIGHT)

CELL_PADDING = 2.5 * mm
TABLE_GAP = 12 * mm


@dataclass
class TableSpec:
    headers: Sequence[str]
    rows: Sequence[Sequence[Any]]
    # Relative column widths, e.g. [0.5, 3, 1, 1.5]. Equal when omitted.
    weights: Optional[Sequence[float]] = None
    # Column index -> "left" | "center" | "right"; unlisted columns are left.
    aligns: Dict[int, str] = field(default_factory=dict)
    # Explicit size wins over the style preset entry named by size_key.
    font_size: Optional[float] = None
    size_key: str = "table_size"
    row_height: float = 7 * mm
    header_height: float = 8 * mm
    header_color_key: str = "table_header_color"
    indent: float = 0.0
    gap: float = TABLE_GAP

    def validate(self) -> None:
        cols = len(self.headers)
        if cols == 0:
            raise ValueError("Table needs at least one column")
        for i, row in enumerate(self.rows):
            if len(row) != cols:
                raise ValueError(f"Row {i} has {len(row)} cells, expected {cols}")
        if self.weights is not None and len(self.weights) != cols:
            raise ValueError(f"Got {len(self.weights)} column weights for {cols} columns")
        for col, align in self.aligns.items():
            if align not in ALIGNMENTS:
                raise ValueError(f"Unknown alignment {align!r} for column {col}")

    def align(self, col: int) -> str:
        return self.aligns.get(col, LEFT)


def column_widths(width: float, count: int, weights: Optional[Sequence[float]] = None) -> List[float]:
    weights = list(weights) if weights else [1.0] * count
    total = max(1e-6, sum(weights))
    return [width * (w / total) for w in weights]


def row_fill(index: int, stripe: colors.Color) -> Optional[colors.Color]:
    """Every second row of the logical table is striped."""
    return stripe if index % 2 == 1 else None


def _font_size(ctx: LayoutContext, spec: TableSpec) -> float:
    if spec.font_size:
        return spec.font_size
    return ctx.document.size(spec.size_key, 9.0)


def _draw_cells(
    ctx: LayoutContext,
    spec: TableSpec,
    x: float,
    widths: List[float],
    top: float,
    height: float,
    values: Sequence[Any],
    font: str,
    color: colors.Color,
    role: str,
) -> None:
    cx = x
    for col, (value, cell_w) in enumerate(zip(values, widths)):
        inner = max(4.0, cell_w - 2 * CELL_PADDING)
        text = "" if value is None else str(value)
        size = fit_font(text, font, _font_size(ctx, spec), inner)
        text = truncate(text, font, size, inner)
        baseline = top + height / 2 + size * 0.35

        align = spec.align(col)
        if align == RIGHT:
            tx = cx + cell_w - CELL_PADDING
        elif align == CENTER:
            tx = cx + cell_w / 2
        else:
            tx = cx + CELL_PADDING
        ctx.text(tx, baseline, text, font, size, color, align=align, role=role)
        cx += cell_w


def _draw_header_row(ctx: LayoutContext, spec: TableSpec, x: float, widths: List[float]) -> None:
    doc = ctx.document
    top = ctx.y
    ctx.rect(x, top, sum(widths), spec.header_height, doc.color(spec.header_color_key), role="table-header")
    _draw_cells(ctx, spec, x, widths, top, spec.header_height, spec.headers, doc.font_bold, colors.white, "table-header-cell")
    ctx.advance(spec.header_height)


def _draw_body_row(ctx: LayoutContext, spec: TableSpec, x: float, widths: List[float], index: int, row: Sequence[Any]) -> None:
    doc = ctx.document
    top = ctx.y
    width = sum(widths)
    fill = row_fill(index, doc.color("stripe_color", "#F8FAFC"))
    if fill is not None:
        ctx.rect(x, top, width, spec.row_height, fill, role="table-stripe")
    _draw_cells(ctx, spec, x, widths, top, spec.row_height, row, doc.font, doc.color("text_color"), "table-cell")
    ctx.line(x, top + spec.row_height, x + width, top + spec.row_height, doc.color("grid_color", "#E2E8F0"), width=0.25)
    ctx.advance(spec.row_height)


def draw_table(ctx: LayoutContext, spec: TableSpec) -> float:
    spec.validate()
    doc = ctx.document
    x = doc.margin + spec.indent
    widths = column_widths(doc.printable_width - spec.indent, len(spec.headers), spec.weights)

    ensure_space(ctx, estimate_table_height(ctx, len(spec.rows), spec.header_height, spec.row_height))
    start_page = ctx.page.number
    _draw_header_row(ctx, spec, x, widths)

    for index, row in enumerate(spec.rows):
        if not block_fits(ctx, spec.row_height):
            ctx.new_page()
            _draw_header_row(ctx, spec, x, widths)
        _draw_body_row(ctx, spec, x, widths, index, row)

    if ctx.page.number != start_page:
        logger.debug("Table %r ran over pages %d-%d", spec.headers[0], start_page, ctx.page.number)
    return ctx.advance(spec.gap)
