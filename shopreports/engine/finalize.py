"""
Footer pass.

Runs once layout is complete, when the total page count is known. Each
page's footer slot is replaced, so finalizing twice gives the same result.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from reportlab.lib.units import mm

from ..config import CONFIDENTIAL_NOTICE
from .document import DrawOp, LineOp, Page, ReportDocument, TextOp

FOOTER_LINE_OFFSET = 15 * mm
FOOTER_TEXT_OFFSET = 8 * mm


@dataclass(frozen=True)
class FinalizedDocument:
    document: ReportDocument
    pages: Tuple[Page, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def kind(self) -> str:
        return self.document.kind

    @property
    def title(self) -> str:
        return self.document.title


def page_label(number: int, total: int) -> str:
    return f"Page {number} of {total}"


def footer_ops(document: ReportDocument, page: Page, total: int) -> List[DrawOp]:
    size = document.size("footer_size", 8)
    muted = document.color("muted_color", "#64748B")
    left = document.margin
    right = page.width - document.margin
    line_y = page.height - FOOTER_LINE_OFFSET
    text_y = page.height - FOOTER_TEXT_OFFSET
    return [
        LineOp(left, line_y, right, line_y, document.color("footer_line_color", "#CBD5E1"), 0.5, role="footer-line"),
        TextOp(left, text_y, CONFIDENTIAL_NOTICE, document.font, size, muted, role="footer-notice"),
        TextOp(right, text_y, page_label(page.number, total), document.font, size, muted, align="right", role="footer-page-number"),
    ]


def finalize(document: ReportDocument) -> FinalizedDocument:
    pages = tuple(document.pages)
    total = len(pages)
    for page in pages:
        page.footer = footer_ops(document, page, total)
    return FinalizedDocument(document=document, pages=pages)
