from __future__ import annotations

from datetime import date, timedelta

import pytest

from shopreports import config
from shopreports.models import ReportInput


def make_chart(days: int) -> list[dict]:
    start = date(2026, 9, 1)
    return [
        {
            "_id": (start + timedelta(days=i)).isoformat(),
            "orders": i % 7 + 1,
            "revenue": 5000 + i * 250,
            "paid": 4000 + i * 250,
        }
        for i in range(days)
    ]


def make_payload(days: int = 5, customers: list[dict] | None = None) -> dict:
    return {
        "sales": {
            "summary": {"totalRevenue": 250000, "totalPaid": 100000, "totalOrders": 42},
            "chart": make_chart(days),
        },
        "products": {
            "topProducts": [
                {"_id": "TMT Bar 12mm", "totalSold": 30, "revenue": 21600},
                {"_id": "GI Pipe 1 inch", "totalSold": 9, "revenue": 7740},
            ],
            "categoryStats": [{"_id": "steel", "count": 12}, {"_id": None, "count": 2}],
        },
        "analytics": {
            "stockMovements": [{"_id": "stock_in", "count": 5, "totalQty": 120}],
            "userStats": [{"_id": "super_admin", "count": 1}, {"_id": "staff", "count": 4}],
        },
        "customers": {"customers": customers or []},
    }


def make_customer(name: str, products: int = 2, **extra) -> dict:
    items = [
        {"productName": f"Item {j + 1}", "quantity": j + 1, "unitPrice": 100, "totalAmount": (j + 1) * 100}
        for j in range(products)
    ]
    customer = {
        "_id": name,
        "phone": "9840000001",
        "totalOrders": 3,
        "totalSpent": sum(item["totalAmount"] for item in items),
        "lastOrderDate": "2026-10-02T09:30:00.000Z",
        "products": items,
    }
    customer.update(extra)
    return customer


def to_input(payload: dict) -> ReportInput:
    return ReportInput.from_payload(
        payload["sales"],
        products=payload["products"],
        analytics=payload["analytics"],
        customers=payload["customers"],
    )


@pytest.fixture(autouse=True)
def isolated_out_dir(tmp_path, monkeypatch):
    out_dir = tmp_path / "out"
    monkeypatch.setattr(config, "OUT_DIR", out_dir)
    return out_dir


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def report_input(payload) -> ReportInput:
    return to_input(payload)
