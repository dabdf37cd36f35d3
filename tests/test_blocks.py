from __future__ import annotations

from datetime import date

import pytest

from shopreports.config import BUSINESS_NAME
from shopreports.engine.blocks import (
    CARD_GUTTER,
    LINE_HEIGHT,
    Card,
    card_color,
    card_regions,
    contact_line,
    draw_customer_heading,
    draw_free_text,
    draw_header,
    draw_section_title,
    draw_summary_cards,
)
from shopreports.engine.document import LayoutContext, ReportDocument
from shopreports.engine.policy import CARD_ROW_HEIGHT, HEADER_HEIGHT, SECTION_TITLE_HEIGHT
from shopreports.models import CustomerPurchases


def _context() -> LayoutContext:
    return LayoutContext(ReportDocument("sales", "Blocks"))


@pytest.mark.parametrize("count", [1, 2, 3, 4])
def test_card_regions_fill_printable_width(count: int) -> None:
    regions = card_regions(count, 40.0, 500.0)
    widths = [w for _, w in regions]
    assert len(regions) == count
    assert max(widths) - min(widths) < 1e-9
    assert sum(widths) + (count - 1) * CARD_GUTTER == pytest.approx(500.0)
    assert regions[0][0] == 40.0
    assert regions[-1][0] + regions[-1][1] == pytest.approx(540.0)


def test_card_color_cycles_through_palette() -> None:
    palette = ["#111111", "#222222", "#333333"]
    assert [card_color(i, palette) for i in range(5)] == ["#111111", "#222222", "#333333", "#111111", "#222222"]


@pytest.mark.parametrize("count", [1, 2, 3, 4])
def test_summary_card_row_layout(count: int) -> None:
    ctx = _context()
    doc = ctx.document
    ctx.y = 100.0
    y = draw_summary_cards(ctx, [Card(f"Label {i}", str(i)) for i in range(count)])
    assert y == 100.0 + CARD_ROW_HEIGHT

    rects = ctx.page.with_role("summary-card")
    assert len(rects) == count
    total = sum(r.width for r in rects) + (count - 1) * CARD_GUTTER
    assert total == pytest.approx(doc.printable_width)
    assert rects[0].x == pytest.approx(doc.margin)


def test_header_sits_on_top_of_page() -> None:
    ctx = _context()
    y = draw_header(ctx, "Sales Report", "Last 30 Days Overview", date(2026, 10, 19))
    assert y == HEADER_HEIGHT
    texts = ctx.page.texts()
    assert BUSINESS_NAME in texts
    assert "Sales Report" in texts
    assert "Generated: 19 Oct 2026" in texts
    assert "Last 30 Days Overview" in texts
    assert ctx.page.with_role("header-banner")[0].y == 0


def test_header_without_subtitle() -> None:
    ctx = _context()
    draw_header(ctx, "Sales Report", generated_on=date(2026, 10, 19))
    assert len(ctx.page.texts()) == 3


def test_section_title_advances_fixed_height() -> None:
    ctx = _context()
    ctx.y = 200.0
    assert draw_section_title(ctx, "Top Selling Products") == 200.0 + SECTION_TITLE_HEIGHT
    assert ctx.page.with_role("section-title")[0].text == "Top Selling Products"


def test_free_text_advances_by_line_count() -> None:
    ctx = _context()
    ctx.y = 200.0
    y = draw_free_text(ctx, ["first line", "second line"])
    assert y == pytest.approx(200.0 + 2 * LINE_HEIGHT)
    assert [op.text for op in ctx.page.with_role("free-text")] == ["first line", "second line"]


def test_free_text_wraps_long_paragraphs() -> None:
    ctx = _context()
    ctx.y = 200.0
    draw_free_text(ctx, "outstanding " * 60)
    lines = ctx.page.with_role("free-text")
    assert len(lines) > 1
    assert ctx.y == pytest.approx(200.0 + len(lines) * LINE_HEIGHT)


def test_contact_line_skips_missing_parts() -> None:
    customer = CustomerPurchases(name="Ravi", phone="98400", gstin="33ABC")
    assert contact_line(customer) == "Phone: 98400  |  GSTIN: 33ABC"
    assert contact_line(CustomerPurchases(name="Walk-in")) == ""


def test_customer_heading_without_contact_is_shorter() -> None:
    with_contact = _context()
    with_contact.y = 100.0
    without = _context()
    without.y = 100.0
    a = draw_customer_heading(with_contact, CustomerPurchases(name="Ravi", phone="98400"))
    b = draw_customer_heading(without, CustomerPurchases(name=None))
    assert b < a
    assert without.page.with_role("customer-name")[0].text == "Unknown Customer"
    assert not without.page.with_role("customer-contact")
