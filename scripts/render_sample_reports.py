from __future__ import annotations

import argparse
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List

from shopreports.engine.assemble import generate_full_report, generate_sales_report
from shopreports.models import ReportInput


PRODUCTS = [
    ("MS Angle 40x40x5", 12, 1480.0),
    ("GI Pipe 1 inch", 9, 860.0),
    ("TMT Bar 12mm", 30, 720.0),
    ("Hinges 4 inch (pair)", 25, 95.0),
    ("Binding Wire 18g", 14, 110.0),
    ("Welding Rod 3.15mm", 8, 640.0),
]


def _chart(days: int) -> List[Dict]:
    start = date.today() - timedelta(days=days - 1)
    rows = []
    for i in range(days):
        orders = 3 + (i * 7) % 11
        revenue = orders * 4150 + (i % 5) * 900
        rows.append(
            {
                "_id": (start + timedelta(days=i)).isoformat(),
                "orders": orders,
                "revenue": revenue,
                "paid": revenue - (i % 4) * 1200,
            }
        )
    return rows


def sample_payload(days: int = 30, customers: int = 6) -> Dict[str, Dict]:
    """
    Payloads shaped like the dashboard's /reports responses.
    Every third customer has no purchased items.
    """
    chart = _chart(days)
    total_revenue = sum(r["revenue"] for r in chart)
    total_paid = sum(r["paid"] for r in chart)
    customer_rows = []
    for i in range(customers):
        items = [] if i % 3 == 2 else [
            {
                "productName": name,
                "quantity": (i + j) % 4 + 1,
                "unitPrice": price,
                "totalAmount": ((i + j) % 4 + 1) * price,
            }
            for j, (name, _, price) in enumerate(PRODUCTS[: 2 + i % 4])
        ]
        customer_rows.append(
            {
                "_id": f"Customer {i + 1}",
                "phone": f"98400{i:05d}",
                "email": f"customer{i + 1}@example.com" if i % 2 == 0 else None,
                "gstin": "33ABCDE1234F1Z5" if i % 2 else None,
                "totalOrders": len(items) or 1,
                "totalSpent": sum(item["totalAmount"] for item in items),
                "lastOrderDate": chart[-1 - i % days]["_id"],
                "products": items,
            }
        )
    return {
        "sales": {
            "summary": {"totalRevenue": total_revenue, "totalPaid": total_paid, "totalOrders": sum(r["orders"] for r in chart)},
            "chart": chart,
        },
        "products": {
            "topProducts": [{"_id": name, "totalSold": qty, "revenue": qty * price} for name, qty, price in PRODUCTS],
            "categoryStats": [{"_id": "steel", "count": 42}, {"_id": "hardware", "count": 118}, {"_id": None, "count": 3}],
        },
        "analytics": {
            "stockMovements": [
                {"_id": "stock_in", "count": 31, "totalQty": 940},
                {"_id": "stock_out", "count": 57, "totalQty": 812},
                {"_id": "adjustment", "count": 4, "totalQty": 12},
            ],
            "userStats": [{"_id": "super_admin", "count": 1}, {"_id": "admin", "count": 2}, {"_id": "staff", "count": 6}],
        },
        "customers": {"customers": customer_rows},
    }


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--out", dest="out_dir", type=str, default="out", help="Output directory")
    parser.add_argument("--days", type=int, default=30, help="Days of sales history")
    parser.add_argument("--customers", type=int, default=6, help="Number of customers")
    args = parser.parse_args()

    payload = sample_payload(args.days, args.customers)
    data = ReportInput.from_payload(
        payload["sales"],
        products=payload["products"],
        analytics=payload["analytics"],
        customers=payload["customers"],
    )
    out_dir = Path(args.out_dir)
    print(generate_sales_report(data, out_dir=out_dir))
    print(generate_full_report(data, out_dir=out_dir))


if __name__ == "__main__":
    main()
