"""Currency, date and label formatting for the en-IN report locale.

Nothing here raises on missing input: numbers coerce to zero, dates fall back
to today (or a placeholder), labels fall back to a default.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

PLACEHOLDER = "—"
CURRENCY_PREFIX = "Rs."

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _to_decimal(value: Any) -> Decimal:
    if not value or isinstance(value, bool):
        return Decimal(0)
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal(0)


def group_indian(digits: str) -> str:
    """Group a run of digits the Indian way: 12345678 -> 1,23,45,678."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number(value: Any) -> str:
    amount = _to_decimal(value)
    if not amount.is_finite():
        amount = Decimal(0)
    whole = int(amount.to_integral_value(rounding=ROUND_HALF_UP))
    sign = "-" if whole < 0 else ""
    return sign + group_indian(str(abs(whole)))


def format_currency(amount: Any) -> str:
    return f"{CURRENCY_PREFIX} {format_number(amount)}"


def format_quantity(value: Any) -> str:
    amount = _to_decimal(value)
    if not amount.is_finite():
        return "0"
    if amount == amount.to_integral_value():
        return str(int(amount))
    return f"{amount.normalize():f}"


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: Any = None, placeholder: Optional[str] = None) -> str:
    """Render ``19 Oct 2026``.

    A missing value becomes ``placeholder`` when one is given, otherwise
    today's date. Strings that are not ISO dates are shown as given.
    """
    if not value:
        if placeholder is not None:
            return placeholder
        value = date.today()
    parsed = _parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.day} {_MONTHS[parsed.month - 1]} {parsed.year}"


def title_case_label(value: Optional[str], default: str = "Unknown") -> str:
    """``stock_in`` -> ``Stock In``."""
    text = (value or "").replace("_", " ").strip()
    if not text:
        return default
    return " ".join(word[:1].upper() + word[1:] for word in text.split())


def capitalize_label(value: Optional[str], default: str = "Uncategorized") -> str:
    text = (value or "").strip()
    if not text:
        return default
    return text[:1].upper() + text[1:]


def or_placeholder(value: Any) -> str:
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)
