"""
Block renderers.

Every renderer appends drawing instructions to the current page of the
layout context and returns the new cursor Y.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.units import mm

from ..config import BUSINESS_NAME
from ..models import CustomerPurchases
from .document import LayoutContext, hex_color
from .formatting import format_date
from .policy import CARD_ROW_HEIGHT, CUSTOMER_HEADING_HEIGHT, HEADER_HEIGHT, SECTION_TITLE_HEIGHT, ensure_space
from .text import fit_font, truncate, wrap_words

BANNER_HEIGHT = 42 * mm
ACCENT_HEIGHT = 2 * mm
CARD_HEIGHT = 28 * mm
CARD_GUTTER = 6 * mm
CARD_RADIUS = 3 * mm
CARD_PADDING = 8 * mm
UNDERLINE_LENGTH = 46 * mm
LINE_HEIGHT = 5 * mm

DEFAULT_PALETTE = ("#22C55E", "#3B82F6", "#F59E0B", "#A855F7")


@dataclass(frozen=True)
class Card:
    label: str
    value: str


def card_regions(count: int, left: float, width: float, gutter: float = CARD_GUTTER) -> List[Tuple[float, float]]:
    """(x, width) of ``count`` equal cards sharing ``width`` with fixed gutters."""
    if count <= 0:
        return []
    card_w = (width - (count - 1) * gutter) / count
    return [(left + i * (card_w + gutter), card_w) for i in range(count)]


def card_color(index: int, palette: Sequence[str]) -> str:
    palette = palette or DEFAULT_PALETTE
    return palette[index % len(palette)]


def draw_header(
    ctx: LayoutContext,
    title: str,
    subtitle: str = "",
    generated_on: Optional[date] = None,
) -> float:
    doc = ctx.document
    ctx.y = 0.0
    margin = doc.margin
    white = colors.white

    ctx.rect(0, 0, doc.width, BANNER_HEIGHT, doc.color("banner_color"), role="header-banner")
    ctx.rect(0, BANNER_HEIGHT, doc.width, ACCENT_HEIGHT, doc.color("accent_color", "#3B82F6"))

    ctx.text(margin, 18 * mm, BUSINESS_NAME, doc.font_bold, doc.size("business_name_size", 18), white, role="business-name")
    ctx.text(margin, 28 * mm, title, doc.font, doc.size("title_size", 11), white, role="report-title")

    meta_size = doc.size("meta_size", 9)
    right = doc.width - margin
    ctx.text(right, 18 * mm, f"Generated: {format_date(generated_on)}", doc.font, meta_size, white, align="right")
    if subtitle:
        ctx.text(right, 28 * mm, subtitle, doc.font, meta_size, white, align="right")

    ctx.y = HEADER_HEIGHT
    return ctx.y


def draw_summary_cards(ctx: LayoutContext, cards: Sequence[Card]) -> float:
    if not cards:
        return ctx.y
    doc = ctx.document
    ensure_space(ctx, CARD_ROW_HEIGHT)

    palette = doc.style.get("card_palette") or DEFAULT_PALETTE
    label_size = doc.size("card_label_size", 8)
    value_size = doc.size("card_value_size", 14)
    top = ctx.y

    for i, (x, w) in enumerate(card_regions(len(cards), doc.margin, doc.printable_width)):
        card = cards[i]
        inner = max(10.0, w - 2 * CARD_PADDING)
        ctx.rect(x, top, w, CARD_HEIGHT, hex_color(card_color(i, palette)), radius=CARD_RADIUS, role="summary-card")

        label = truncate(card.label, doc.font, label_size, inner)
        ctx.text(x + CARD_PADDING, top + 10 * mm, label, doc.font, label_size, colors.white, role="card-label")

        value = str(card.value)
        size = fit_font(value, doc.font_bold, value_size, inner)
        value = truncate(value, doc.font_bold, size, inner)
        ctx.text(x + CARD_PADDING, top + 22 * mm, value, doc.font_bold, size, colors.white, role="card-value")

    return ctx.advance(CARD_ROW_HEIGHT)


def draw_section_title(ctx: LayoutContext, title: str) -> float:
    doc = ctx.document
    ensure_space(ctx, SECTION_TITLE_HEIGHT)
    top = ctx.y
    ctx.text(doc.margin, top + 6 * mm, title, doc.font_bold, doc.size("section_size", 13), doc.color("text_color"), role="section-title")
    ctx.line(doc.margin, top + 9 * mm, doc.margin + UNDERLINE_LENGTH, top + 9 * mm, doc.color("accent_color", "#3B82F6"), width=1.0)
    return ctx.advance(SECTION_TITLE_HEIGHT)


def draw_free_text(ctx: LayoutContext, content: Union[str, Sequence[str]], indent: float = 0.0) -> float:
    """Wrapped muted text; each line is page-break checked on its own."""
    doc = ctx.document
    size = doc.size("body_size", 10)
    x = doc.margin + indent
    width = doc.printable_width - indent
    paragraphs = [content] if isinstance(content, str) else list(content)

    lines: List[str] = []
    for paragraph in paragraphs:
        lines.extend(wrap_words(str(paragraph), doc.font, size, width))

    for line in lines:
        ensure_space(ctx, LINE_HEIGHT)
        ctx.text(x, ctx.y + size, line, doc.font, size, doc.color("muted_color", "#64748B"), role="free-text")
        ctx.advance(LINE_HEIGHT)
    return ctx.y


def contact_line(customer: CustomerPurchases) -> str:
    parts = []
    if customer.phone:
        parts.append(f"Phone: {customer.phone}")
    if customer.email:
        parts.append(f"Email: {customer.email}")
    if customer.gstin:
        parts.append(f"GSTIN: {customer.gstin}")
    if customer.address:
        parts.append(f"Address: {customer.address}")
    return "  |  ".join(parts)


def draw_customer_heading(ctx: LayoutContext, customer: CustomerPurchases) -> float:
    doc = ctx.document
    ensure_space(ctx, CUSTOMER_HEADING_HEIGHT)
    top = ctx.y
    name = customer.name or "Unknown Customer"
    ctx.text(doc.margin, top + 4 * mm, name, doc.font_bold, doc.size("body_size", 10), doc.color("text_color"), role="customer-name")

    contact = contact_line(customer)
    if not contact:
        return ctx.advance(8 * mm)

    size = doc.size("subtable_size", 8)
    size = fit_font(contact, doc.font, size, doc.printable_width)
    contact = truncate(contact, doc.font, size, doc.printable_width)
    ctx.text(doc.margin, top + 10 * mm, contact, doc.font, size, doc.color("muted_color", "#64748B"), role="customer-contact")
    return ctx.advance(CUSTOMER_HEADING_HEIGHT)
