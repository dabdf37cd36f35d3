"""
Page-break decisions, consulted before a block is emitted.

Heights are estimates in points. Sections share one ``safe_margin`` (style key
``safe_margin_mm``): a section only starts on the current page when at least
that much room is left.
"""
from __future__ import annotations

import logging

from reportlab.lib.units import mm

from .document import LayoutContext

logger = logging.getLogger(__name__)

HEADER_HEIGHT = 52 * mm
CARD_ROW_HEIGHT = 36 * mm
SECTION_TITLE_HEIGHT = 16 * mm
CUSTOMER_HEADING_HEIGHT = 14 * mm

_TOLERANCE = 1e-6


def block_fits(ctx: LayoutContext, height: float) -> bool:
    return height <= ctx.remaining_space() + _TOLERANCE


def ensure_space(ctx: LayoutContext, height: float) -> bool:
    """Start a new page when ``height`` does not fit. Returns True on a break."""
    if block_fits(ctx, height):
        return False
    logger.debug(
        "Page break on page %d: need %.1f, %.1f left",
        ctx.page.number,
        height,
        ctx.remaining_space(),
    )
    ctx.new_page()
    return True


def ensure_section_space(ctx: LayoutContext) -> bool:
    return ensure_space(ctx, ctx.document.safe_margin)


def force_page_break(ctx: LayoutContext) -> None:
    ctx.new_page()


def rows_that_fit(ctx: LayoutContext, header_height: float, row_height: float) -> int:
    return max(0, int((ctx.remaining_space() - header_height + _TOLERANCE) // row_height))


def estimate_table_height(ctx: LayoutContext, rows: int, header_height: float, row_height: float) -> float:
    """
    Header plus the rows that would land on this page, but never less than
    header plus one row: a table that cannot show one row here moves on.
    """
    on_page = min(max(0, rows), max(1, rows_that_fit(ctx, header_height, row_height)))
    return header_height + row_height * on_page
