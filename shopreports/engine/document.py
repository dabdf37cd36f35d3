"""
In-memory page model for report layout.

Coordinates are PDF points measured from the top-left corner of the page,
y growing downward. The exporter flips them when replaying onto a canvas.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

from ..config import SAFE_MARGIN_MM, load_style_preset

logger = logging.getLogger(__name__)


def hex_color(value, default=colors.black) -> colors.Color:
    if not value:
        return default
    try:
        return colors.HexColor("#" + str(value).lstrip("#"))
    except (ValueError, TypeError):
        return default


def style_value(style: dict, key: str, default):
    return style.get(key, default)


@dataclass
class TextOp:
    x: float
    y: float
    text: str
    font: str
    size: float
    color: colors.Color
    align: str = "left"
    role: Optional[str] = None

    @property
    def bottom(self) -> float:
        return self.y


@dataclass
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: colors.Color
    radius: float = 0.0
    stroke: Optional[colors.Color] = None
    role: Optional[str] = None

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: colors.Color
    width: float = 0.5
    role: Optional[str] = None

    @property
    def bottom(self) -> float:
        return max(self.y1, self.y2)


DrawOp = Union[TextOp, RectOp, LineOp]


class Page:
    def __init__(self, number: int, width: float, height: float) -> None:
        self.number = number
        self.width = width
        self.height = height
        self.ops: List[DrawOp] = []
        # Written only by the finalization pass.
        self.footer: List[DrawOp] = []
        self.high_water = 0.0

    def add(self, op: DrawOp) -> DrawOp:
        self.ops.append(op)
        self.high_water = max(self.high_water, op.bottom)
        return op

    def with_role(self, role: str, include_footer: bool = True) -> List[DrawOp]:
        ops = self.ops + self.footer if include_footer else self.ops
        return [op for op in ops if op.role == role]

    def texts(self) -> List[str]:
        return [op.text for op in self.ops + self.footer if isinstance(op, TextOp)]


class ReportDocument:
    """All pages of one report plus the style they are drawn with."""

    def __init__(
        self,
        kind: str,
        title: str,
        style: Optional[dict] = None,
        page_size: Tuple[float, float] = A4,
    ) -> None:
        self.kind = kind
        self.title = title
        self.style = load_style_preset()
        self.style.update(style or {})
        self.width, self.height = page_size
        self.margin = float(style_value(self.style, "margin_mm", 14)) * mm
        self.top_margin = float(style_value(self.style, "top_margin_mm", 20)) * mm
        self.bottom_margin = float(style_value(self.style, "bottom_margin_mm", 20)) * mm
        self.safe_margin = float(style_value(self.style, "safe_margin_mm", SAFE_MARGIN_MM)) * mm
        self.pages: List[Page] = []

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def printable_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def content_bottom(self) -> float:
        return self.height - self.bottom_margin

    def color(self, key: str, default: str = "#1E293B") -> colors.Color:
        return hex_color(style_value(self.style, key, default))

    def size(self, key: str, default: float) -> float:
        return float(style_value(self.style, key, default))

    @property
    def font(self) -> str:
        return str(style_value(self.style, "font_name", "Helvetica"))

    @property
    def font_bold(self) -> str:
        return str(style_value(self.style, "font_bold", "Helvetica-Bold"))

    def add_page(self) -> Page:
        page = Page(len(self.pages) + 1, self.width, self.height)
        self.pages.append(page)
        return page


class LayoutContext:
    """The cursor: current page and vertical write position during layout."""

    def __init__(self, document: ReportDocument) -> None:
        self.document = document
        self.y = 0.0
        if not document.pages:
            document.add_page()

    @property
    def page(self) -> Page:
        return self.document.pages[-1]

    def advance(self, amount: float) -> float:
        self.y += amount
        return self.y

    def remaining_space(self) -> float:
        return self.document.content_bottom - self.y

    def new_page(self) -> Page:
        page = self.document.add_page()
        self.y = self.document.top_margin
        logger.debug("Started page %d of %s report", page.number, self.document.kind)
        return page

    def text(
        self,
        x: float,
        y: float,
        text: str,
        font: str,
        size: float,
        color: colors.Color,
        align: str = "left",
        role: Optional[str] = None,
    ) -> TextOp:
        return self.page.add(TextOp(x, y, text, font, size, color, align, role))

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: colors.Color,
        radius: float = 0.0,
        stroke: Optional[colors.Color] = None,
        role: Optional[str] = None,
    ) -> RectOp:
        return self.page.add(RectOp(x, y, width, height, fill, radius, stroke, role))

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: colors.Color,
        width: float = 0.5,
        role: Optional[str] = None,
    ) -> LineOp:
        return self.page.add(LineOp(x1, y1, x2, y2, color, width, role))
