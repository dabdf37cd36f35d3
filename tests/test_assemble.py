from __future__ import annotations

from datetime import date

from reportlab.lib.units import mm

from shopreports.engine.assemble import build_full_report, build_sales_report, outstanding_text
from shopreports.models import ReportInput, SalesSummary

from conftest import make_customer, make_payload, to_input


def _texts(document) -> list[str]:
    return [text for page in document.pages for text in page.texts()]


def _role_texts(document, role: str) -> list[str]:
    return [op.text for page in document.pages for op in page.with_role(role)]


def test_sales_report_sections_in_order(report_input) -> None:
    document = build_sales_report(report_input, generated_on=date(2026, 10, 19))
    assert _role_texts(document, "section-title") == ["Daily Sales Breakdown", "Top Selling Products"]
    assert _role_texts(document, "card-label") == ["Total Revenue", "Amount Collected", "Total Orders"]
    assert _role_texts(document, "card-value") == ["Rs. 2,50,000", "Rs. 1,00,000", "42"]
    assert "Generated: 19 Oct 2026" in _texts(document)
    assert document.page_count == 1


def test_outstanding_amount_is_revenue_minus_paid(report_input) -> None:
    document = build_sales_report(report_input)
    assert _role_texts(document, "free-text") == ["Outstanding Amount: Rs. 1,50,000"]


def test_overpaid_outstanding_renders_negative() -> None:
    data = ReportInput(summary=SalesSummary(total_revenue=1000, total_paid=1500, total_orders=2))
    document = build_sales_report(data)
    assert _role_texts(document, "free-text") == ["Outstanding Amount: Rs. -500"]
    assert outstanding_text(SalesSummary(total_revenue=700, total_paid=700)) == "Outstanding Amount: Rs. 0"


def test_empty_input_still_builds_header_and_cards() -> None:
    document = build_sales_report(ReportInput())
    assert document.page_count == 1
    assert _role_texts(document, "section-title") == []
    assert _role_texts(document, "card-value") == ["Rs. 0", "Rs. 0", "0"]


def test_no_customers_means_no_customer_section(report_input) -> None:
    document = build_sales_report(report_input)
    assert "Customer Purchase Details" not in _texts(document)
    assert document.page_count == 1


def test_customer_section_starts_on_new_page() -> None:
    data = to_input(make_payload(customers=[make_customer("Ravi Traders")]))
    document = build_sales_report(data)
    assert document.page_count == 2
    assert "Customer Purchase Details" not in document.pages[0].texts()
    assert document.pages[1].with_role("section-title")[0].text == "Customer Purchase Details"


def test_customer_without_products_gets_row_but_no_product_table() -> None:
    customers = [
        make_customer("Ravi Traders", products=2, email="ravi@example.com"),
        make_customer("Walk-in Buyer", products=0, phone=None),
    ]
    document = build_sales_report(to_input(make_payload(customers=customers)))

    cells = _role_texts(document, "table-cell")
    assert "Ravi Traders" in cells
    assert "Walk-in Buyer" in cells
    assert _role_texts(document, "customer-name") == ["Ravi Traders"]
    assert _role_texts(document, "table-header-cell").count("Unit Price") == 1
    assert "Phone: 9840000001  |  Email: ravi@example.com" in _role_texts(document, "customer-contact")


def test_customer_summary_placeholders() -> None:
    customer = make_customer("Walk-in Buyer", products=0, phone=None, lastOrderDate=None)
    document = build_sales_report(to_input(make_payload(customers=[customer])))
    cells = _role_texts(document, "table-cell")
    row = cells[cells.index("Walk-in Buyer") - 1 : cells.index("Walk-in Buyer") + 6]
    assert row == ["1", "Walk-in Buyer", "—", "—", "3", "Rs. 0", "—"]


def test_nested_product_table_is_indented() -> None:
    document = build_sales_report(to_input(make_payload(customers=[make_customer("Ravi Traders")])))
    headers = document.pages[-1].with_role("table-header")
    summary_header, product_header = headers[0], headers[1]
    assert product_header.x > summary_header.x == document.margin


def test_many_customers_flow_over_pages() -> None:
    customers = [make_customer(f"Customer {i}", products=6) for i in range(25)]
    document = build_sales_report(to_input(make_payload(days=30, customers=customers)))
    assert document.page_count > 3
    assert len(_role_texts(document, "customer-name")) == 25
    bottom = document.content_bottom
    for page in document.pages:
        assert all(op.bottom <= bottom + 1e-6 for op in page.ops)


def test_full_report_sections(report_input) -> None:
    document = build_full_report(report_input)
    assert _role_texts(document, "section-title") == [
        "Daily Sales Breakdown",
        "Top Selling Products",
        "Products by Category",
        "Stock Movement Summary (Last 30 Days)",
        "Staff Distribution",
    ]
    cells = _role_texts(document, "table-cell")
    assert "Steel" in cells
    assert "Uncategorized" in cells
    assert "Stock In" in cells
    assert "120 units" in cells
    assert "Super Admin" in cells
    assert "Outstanding Amount: Rs. 1,50,000" not in _texts(document)


def test_full_report_skips_missing_sections() -> None:
    payload = make_payload()
    payload["analytics"] = {}
    payload["products"] = {"topProducts": []}
    document = build_full_report(to_input(payload))
    assert _role_texts(document, "section-title") == ["Daily Sales Breakdown"]


def test_full_report_never_writes_below_bottom_margin() -> None:
    document = build_full_report(to_input(make_payload(days=90)))
    bottom = document.content_bottom
    for page in document.pages:
        assert all(op.bottom <= bottom + 1e-6 for op in page.ops)


def test_sections_after_a_long_table_respect_safe_margin() -> None:
    document = build_full_report(to_input(make_payload(days=90)))
    for page in document.pages:
        for title in page.with_role("section-title"):
            room_before = document.content_bottom - (title.y - 6 * mm)
            assert room_before >= document.safe_margin - 1e-6
