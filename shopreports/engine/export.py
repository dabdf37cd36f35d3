from __future__ import annotations

import logging
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Optional

from reportlab.pdfgen import canvas

from ..config import REPORT_AUTHOR
from ..storage import report_path
from .document import LineOp, Page, RectOp, TextOp
from .finalize import FinalizedDocument

logger = logging.getLogger(__name__)


def _draw_op(canv: canvas.Canvas, op, page_h: float) -> None:
    if isinstance(op, RectOp):
        canv.setFillColor(op.fill)
        stroke = 0
        if op.stroke is not None:
            canv.setStrokeColor(op.stroke)
            stroke = 1
        y = page_h - op.y - op.height
        if op.radius:
            canv.roundRect(op.x, y, op.width, op.height, radius=op.radius, stroke=stroke, fill=1)
        else:
            canv.rect(op.x, y, op.width, op.height, stroke=stroke, fill=1)
        return

    if isinstance(op, LineOp):
        canv.setStrokeColor(op.color)
        canv.setLineWidth(op.width)
        canv.line(op.x1, page_h - op.y1, op.x2, page_h - op.y2)
        return

    if isinstance(op, TextOp):
        canv.setFillColor(op.color)
        canv.setFont(op.font, op.size)
        y = page_h - op.y
        if op.align == "right":
            canv.drawRightString(op.x, y, op.text)
        elif op.align == "center":
            canv.drawCentredString(op.x, y, op.text)
        else:
            canv.drawString(op.x, y, op.text)
        return

    raise TypeError(f"Unsupported drawing instruction: {type(op).__name__}")


def _draw_page(canv: canvas.Canvas, page: Page) -> None:
    for op in page.ops:
        _draw_op(canv, op, page.height)
    for op in page.footer:
        _draw_op(canv, op, page.height)


def _require_finalized(finalized) -> None:
    if not isinstance(finalized, FinalizedDocument):
        raise TypeError("Only finalized documents can be exported; call finalize() first")


def render_pdf_bytes(finalized: FinalizedDocument) -> bytes:
    _require_finalized(finalized)

    document = finalized.document
    buffer = BytesIO()
    canv = canvas.Canvas(buffer, pagesize=(document.width, document.height))
    canv.setTitle(document.title)
    canv.setAuthor(REPORT_AUTHOR)

    for page in finalized.pages:
        _draw_page(canv, page)
        canv.showPage()

    canv.save()
    return buffer.getvalue()


def export_pdf(
    finalized: FinalizedDocument,
    out_dir: Optional[Path] = None,
    today: Optional[date] = None,
) -> Path:
    """Serialize and save as ``<ReportKind>_Report_<ISO-date>.pdf``."""
    _require_finalized(finalized)
    output_path = report_path(finalized.kind, today, base_dir=out_dir)
    try:
        data = render_pdf_bytes(finalized)
        output_path.write_bytes(data)
    except Exception:
        logger.exception("Export failed for %s report", finalized.kind)
        raise
    logger.info("Saved %s report (%d pages) to %s", finalized.kind, finalized.page_count, output_path)
    return output_path
