from __future__ import annotations

from typing import List

from reportlab.pdfbase.pdfmetrics import stringWidth

ELLIPSIS = "…"
MIN_FONT_SIZE = 6.0


def text_width(text: str, font_name: str, font_size: float) -> float:
    return stringWidth(text, font_name, font_size)


def fit_font(text: str, font_name: str, base_size: float, max_width: float, min_size: float = MIN_FONT_SIZE) -> float:
    """
    Shrink the font in half-point steps until ``text`` fits ``max_width``.
    Stops at ``min_size``; callers truncate whatever still overflows.
    """
    size = float(base_size)
    while size > min_size:
        if text_width(text, font_name, size) <= max_width:
            return size
        size -= 0.5
    return min_size


def truncate(text: str, font_name: str, font_size: float, max_width: float) -> str:
    if text_width(text, font_name, font_size) <= max_width:
        return text
    cut = text
    while cut and text_width(cut + ELLIPSIS, font_name, font_size) > max_width:
        cut = cut[:-1]
    return cut + ELLIPSIS if cut else ELLIPSIS


def wrap_words(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
    """
    Word-wrap ``text`` to ``max_width``. Explicit newlines start a new line;
    a single word wider than the line is truncated with an ellipsis.
    """
    lines: List[str] = []
    for paragraph in (text or "").replace("\r", "").split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        cur: List[str] = []
        for w in words:
            test = " ".join(cur + [w])
            if text_width(test, font_name, font_size) <= max_width:
                cur.append(w)
                continue

            if cur:
                lines.append(" ".join(cur))
            if text_width(w, font_name, font_size) > max_width:
                lines.append(truncate(w, font_name, font_size, max_width))
                cur = []
            else:
                cur = [w]

        if cur:
            lines.append(" ".join(cur))

    return lines
