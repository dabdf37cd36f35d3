"""
The two report compositions: sales report and full analytics report.

Builders lay out a fresh ReportDocument from a ReportInput and return it
unfinalized; the ``generate_*`` helpers also finalize and save it.
"""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from reportlab.lib.units import mm

from ..models import (
    CategoryCount,
    CustomerPurchases,
    DailySales,
    ProductSales,
    ReportInput,
    RoleCount,
    SalesSummary,
    StockMovement,
)
from .blocks import Card, draw_customer_heading, draw_free_text, draw_header, draw_section_title, draw_summary_cards
from .document import LayoutContext, ReportDocument
from .export import export_pdf
from .finalize import finalize
from .formatting import (
    PLACEHOLDER,
    capitalize_label,
    format_currency,
    format_date,
    format_quantity,
    or_placeholder,
    title_case_label,
)
from .policy import ensure_section_space, force_page_break
from .table import CENTER, RIGHT, TableSpec, draw_table

logger = logging.getLogger(__name__)

SALES_KIND = "sales"
FULL_KIND = "full"

OUTSTANDING_GAP = 5 * mm
CUSTOMER_TABLE_INDENT = 6 * mm


def _compact(headers: Sequence[str], rows: List[list], **kwargs) -> TableSpec:
    """Smaller type for the customer tables."""
    kwargs.setdefault("size_key", "subtable_size")
    kwargs.setdefault("row_height", 6 * mm)
    kwargs.setdefault("header_height", 7 * mm)
    return TableSpec(headers=headers, rows=rows, **kwargs)


def summary_cards(summary: SalesSummary) -> List[Card]:
    return [
        Card("Total Revenue", format_currency(summary.total_revenue)),
        Card("Amount Collected", format_currency(summary.total_paid)),
        Card("Total Orders", str(summary.total_orders or 0)),
    ]


def outstanding_text(summary: SalesSummary) -> str:
    return f"Outstanding Amount: {format_currency(summary.outstanding)}"


def _begin_section(ctx: LayoutContext, title: str) -> None:
    ensure_section_space(ctx)
    draw_section_title(ctx, title)


def _daily_sales_section(ctx: LayoutContext, series: Sequence[DailySales], collected_label: str) -> None:
    _begin_section(ctx, "Daily Sales Breakdown")
    draw_table(
        ctx,
        TableSpec(
            headers=["Date", "Orders", "Revenue", collected_label],
            rows=[
                [day.date or PLACEHOLDER, day.order_count, format_currency(day.revenue), format_currency(day.amount_collected)]
                for day in series
            ],
            aligns={1: CENTER, 2: RIGHT, 3: RIGHT},
        ),
    )


def _top_products_section(ctx: LayoutContext, products: Sequence[ProductSales], name_label: str) -> None:
    _begin_section(ctx, "Top Selling Products")
    draw_table(
        ctx,
        TableSpec(
            headers=["#", name_label, "Qty Sold", "Revenue"],
            rows=[
                [rank, or_placeholder(product.name), product.quantity_sold, format_currency(product.revenue)]
                for rank, product in enumerate(products, start=1)
            ],
            weights=[0.5, 4.0, 1.2, 1.6],
            aligns={0: CENTER, 2: CENTER, 3: RIGHT},
        ),
    )


def _category_section(ctx: LayoutContext, categories: Sequence[CategoryCount]) -> None:
    _begin_section(ctx, "Products by Category")
    draw_table(
        ctx,
        TableSpec(
            headers=["Category", "Number of Products"],
            rows=[[capitalize_label(c.category), c.count] for c in categories],
            aligns={1: CENTER},
        ),
    )


def _stock_movement_section(ctx: LayoutContext, movements: Sequence[StockMovement]) -> None:
    _begin_section(ctx, "Stock Movement Summary (Last 30 Days)")
    draw_table(
        ctx,
        TableSpec(
            headers=["Movement Type", "Count", "Total Quantity"],
            rows=[
                [title_case_label(m.movement_type, PLACEHOLDER), m.count, f"{format_quantity(m.total_quantity)} units"]
                for m in movements
            ],
            aligns={1: CENTER, 2: CENTER},
        ),
    )


def _staff_section(ctx: LayoutContext, roles: Sequence[RoleCount]) -> None:
    _begin_section(ctx, "Staff Distribution")
    draw_table(
        ctx,
        TableSpec(
            headers=["Role", "Count"],
            rows=[[title_case_label(r.role, PLACEHOLDER), r.count] for r in roles],
            aligns={1: CENTER},
        ),
    )


def _customer_section(ctx: LayoutContext, customers: Sequence[CustomerPurchases]) -> None:
    # One logical group per customer: the breakdown never shares a page with sales tables.
    force_page_break(ctx)
    draw_section_title(ctx, "Customer Purchase Details")
    draw_table(
        ctx,
        _compact(
            ["#", "Customer Name", "Phone", "Email", "Orders", "Total Spent", "Last Order"],
            [
                [
                    i,
                    c.name or "Unknown",
                    or_placeholder(c.phone),
                    or_placeholder(c.email),
                    c.total_orders or 0,
                    format_currency(c.total_spent),
                    format_date(c.last_order_date, placeholder=PLACEHOLDER),
                ]
                for i, c in enumerate(customers, start=1)
            ],
            weights=[0.5, 2.2, 1.5, 2.6, 0.9, 1.5, 1.4],
            aligns={0: CENTER, 4: CENTER, 5: RIGHT, 6: RIGHT},
        ),
    )

    for customer in customers:
        if not customer.products:
            continue
        ensure_section_space(ctx)
        draw_customer_heading(ctx, customer)
        draw_table(
            ctx,
            _compact(
                ["Product", "Qty", "Unit Price", "Total"],
                [
                    [
                        or_placeholder(p.product_name),
                        format_quantity(p.quantity),
                        format_currency(p.unit_price),
                        format_currency(p.total_amount),
                    ]
                    for p in customer.products
                ],
                weights=[3.6, 0.9, 1.5, 1.5],
                aligns={1: CENTER, 2: RIGHT, 3: RIGHT},
                header_color_key="subtable_header_color",
                indent=CUSTOMER_TABLE_INDENT,
                gap=10 * mm,
            ),
        )


def build_sales_report(
    data: ReportInput,
    generated_on: Optional[date] = None,
    style: Optional[dict] = None,
) -> ReportDocument:
    document = ReportDocument(SALES_KIND, "Sales Report", style=style)
    ctx = LayoutContext(document)

    draw_header(ctx, "Sales Report", "Last 30 Days Overview", generated_on)
    draw_summary_cards(ctx, summary_cards(data.summary))
    draw_free_text(ctx, outstanding_text(data.summary))
    ctx.advance(OUTSTANDING_GAP)

    if data.series:
        _daily_sales_section(ctx, data.series, "Amount Collected")
    if data.top_products:
        _top_products_section(ctx, data.top_products, "Product Name")
    if data.customers:
        _customer_section(ctx, data.customers)

    logger.info("Built sales report: %d pages", document.page_count)
    return document


def build_full_report(
    data: ReportInput,
    generated_on: Optional[date] = None,
    style: Optional[dict] = None,
) -> ReportDocument:
    document = ReportDocument(FULL_KIND, "Complete Business Report", style=style)
    ctx = LayoutContext(document)

    draw_header(ctx, "Complete Business Report", "Analytics & Performance Overview", generated_on)
    draw_summary_cards(ctx, summary_cards(data.summary))

    if data.series:
        _daily_sales_section(ctx, data.series, "Collected")
    if data.top_products:
        _top_products_section(ctx, data.top_products, "Product")
    if data.category_stats:
        _category_section(ctx, data.category_stats)
    if data.stock_movements:
        _stock_movement_section(ctx, data.stock_movements)
    if data.user_stats:
        _staff_section(ctx, data.user_stats)

    logger.info("Built full report: %d pages", document.page_count)
    return document


def generate_sales_report(
    data: ReportInput,
    out_dir: Optional[Path] = None,
    today: Optional[date] = None,
    style: Optional[dict] = None,
) -> Path:
    document = build_sales_report(data, generated_on=today, style=style)
    return export_pdf(finalize(document), out_dir=out_dir, today=today)


def generate_full_report(
    data: ReportInput,
    out_dir: Optional[Path] = None,
    today: Optional[date] = None,
    style: Optional[dict] = None,
) -> Path:
    document = build_full_report(data, generated_on=today, style=style)
    return export_pdf(finalize(document), out_dir=out_dir, today=today)
