from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


def _items(value: Any) -> list:
    return value if isinstance(value, list) else []


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def _count(value: Any) -> int:
    return int(round(_number(value)))


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class SalesSummary:
    total_revenue: float = 0.0
    total_paid: float = 0.0
    total_orders: int = 0

    @property
    def outstanding(self) -> float:
        return self.total_revenue - self.total_paid


@dataclass(frozen=True)
class DailySales:
    date: str
    order_count: int = 0
    revenue: float = 0.0
    amount_collected: float = 0.0


@dataclass(frozen=True)
class ProductSales:
    name: Optional[str]
    quantity_sold: int = 0
    revenue: float = 0.0


@dataclass(frozen=True)
class CategoryCount:
    category: Optional[str]
    count: int = 0


@dataclass(frozen=True)
class StockMovement:
    movement_type: Optional[str]
    count: int = 0
    total_quantity: float = 0.0


@dataclass(frozen=True)
class RoleCount:
    role: Optional[str]
    count: int = 0


@dataclass(frozen=True)
class PurchasedProduct:
    product_name: Optional[str]
    quantity: float = 0.0
    unit_price: float = 0.0
    total_amount: float = 0.0


@dataclass(frozen=True)
class CustomerPurchases:
    name: Optional[str]
    phone: Optional[str] = None
    email: Optional[str] = None
    gstin: Optional[str] = None
    address: Optional[str] = None
    total_orders: int = 0
    total_spent: float = 0.0
    last_order_date: Optional[str] = None
    products: Tuple[PurchasedProduct, ...] = ()


@dataclass(frozen=True)
class ReportInput:
    """Already-fetched business data handed to the report builders.

    Never mutated by the engine. Optional collections default to empty and
    their sections are skipped.
    """

    summary: SalesSummary = field(default_factory=SalesSummary)
    series: Tuple[DailySales, ...] = ()
    top_products: Tuple[ProductSales, ...] = ()
    category_stats: Tuple[CategoryCount, ...] = ()
    stock_movements: Tuple[StockMovement, ...] = ()
    user_stats: Tuple[RoleCount, ...] = ()
    customers: Tuple[CustomerPurchases, ...] = ()

    @classmethod
    def from_payload(
        cls,
        sales: Optional[dict],
        products: Optional[dict] = None,
        analytics: Optional[dict] = None,
        customers: Optional[dict] = None,
    ) -> "ReportInput":
        """Map the dashboard's REST payloads (``/reports/*``) to a ReportInput."""
        sales = _mapping(sales)
        products = _mapping(products)
        analytics = _mapping(analytics)
        customers = _mapping(customers)

        raw_summary = _mapping(sales.get("summary"))
        summary = SalesSummary(
            total_revenue=_number(raw_summary.get("totalRevenue")),
            total_paid=_number(raw_summary.get("totalPaid")),
            total_orders=_count(raw_summary.get("totalOrders")),
        )

        series = tuple(
            DailySales(
                date=_text(day.get("_id")) or "",
                order_count=_count(day.get("orders")),
                revenue=_number(day.get("revenue")),
                amount_collected=_number(day.get("paid")),
            )
            for day in map(_mapping, _items(sales.get("chart")))
        )
        top_products = tuple(
            ProductSales(
                name=_text(item.get("_id")),
                quantity_sold=_count(item.get("totalSold")),
                revenue=_number(item.get("revenue")),
            )
            for item in map(_mapping, _items(products.get("topProducts")))
        )
        category_stats = tuple(
            CategoryCount(category=_text(item.get("_id")), count=_count(item.get("count")))
            for item in map(_mapping, _items(products.get("categoryStats")))
        )
        stock_movements = tuple(
            StockMovement(
                movement_type=_text(item.get("_id")),
                count=_count(item.get("count")),
                total_quantity=_number(item.get("totalQty")),
            )
            for item in map(_mapping, _items(analytics.get("stockMovements")))
        )
        user_stats = tuple(
            RoleCount(role=_text(item.get("_id")), count=_count(item.get("count")))
            for item in map(_mapping, _items(analytics.get("userStats")))
        )
        customer_rows = tuple(
            _customer_from_payload(item) for item in map(_mapping, _items(customers.get("customers")))
        )

        return cls(
            summary=summary,
            series=series,
            top_products=top_products,
            category_stats=category_stats,
            stock_movements=stock_movements,
            user_stats=user_stats,
            customers=customer_rows,
        )


def _customer_from_payload(item: dict) -> CustomerPurchases:
    purchased = tuple(
        PurchasedProduct(
            product_name=_text(p.get("productName")),
            quantity=_number(p.get("quantity")),
            unit_price=_number(p.get("unitPrice")),
            total_amount=_number(p.get("totalAmount")),
        )
        for p in map(_mapping, _items(item.get("products")))
    )
    return CustomerPurchases(
        name=_text(item.get("_id")),
        phone=_text(item.get("phone")),
        email=_text(item.get("email")),
        gstin=_text(item.get("gstin")),
        address=_text(item.get("address")),
        total_orders=_count(item.get("totalOrders")),
        total_spent=_number(item.get("totalSpent")),
        last_order_date=_text(item.get("lastOrderDate")),
        products=purchased,
    )
