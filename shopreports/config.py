from __future__ import annotations

from pathlib import Path
import json


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"
STYLE_PRESET_PATH = Path(__file__).resolve().parent / "assets" / "report_styles.json"

BUSINESS_NAME = "SRI AMMAN STEELS & HARDWARE"
CONFIDENTIAL_NOTICE = "Sri Amman Steels & Hardware - Confidential Report"
REPORT_AUTHOR = "Sri Amman Steels & Hardware"

# Minimum room (mm) left on a page before a new section may start there.
SAFE_MARGIN_MM = 75.0

REPORT_KINDS = {
    "sales": "Sales",
    "full": "Full Business",
}


def load_style_preset() -> dict:
    with STYLE_PRESET_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
