from __future__ import annotations

from datetime import date
from pathlib import Path

from slugify import slugify

from . import config


PDF_EXTENSION = "pdf"


def reports_dir(base_dir: Path | None = None) -> Path:
    path = base_dir or config.OUT_DIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def report_filename(kind: str, today: date | None = None, extension: str = PDF_EXTENSION) -> str:
    """``<ReportKind>_Report_<ISO-date>.<ext>``, e.g. ``Full_Business_Report_2026-10-19.pdf``."""
    label = config.REPORT_KINDS.get(kind, kind)
    stem = slugify(label, separator="_", lowercase=False)
    if not stem:
        raise ValueError(f"Invalid report kind: {kind!r}")
    day = today or date.today()
    return f"{stem}_Report_{day.isoformat()}.{extension}"


def report_path(kind: str, today: date | None = None, base_dir: Path | None = None) -> Path:
    return reports_dir(base_dir) / report_filename(kind, today)
