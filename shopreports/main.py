from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from . import config
from .engine.assemble import generate_full_report, generate_sales_report
from .models import ReportInput

app = typer.Typer(help="Printable business reports from dashboard payloads")


def _load_payload(path: Path) -> ReportInput:
    if not path.exists():
        raise FileNotFoundError(f"Payload not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError("Payload must be a JSON object")
    return ReportInput.from_payload(
        payload.get("sales"),
        products=payload.get("products"),
        analytics=payload.get("analytics"),
        customers=payload.get("customers"),
    )


def _run(kind: str, payload: Path, out: Optional[Path]) -> None:
    if out:
        config.set_out_dir(out)
    try:
        data = _load_payload(payload)
        if kind == "sales":
            path = generate_sales_report(data)
        else:
            path = generate_full_report(data)
    except (OSError, ValueError) as exc:
        typer.echo(f"FAILED: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved: {path}")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log page breaks")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def sales(
    payload: Path = typer.Argument(..., help="JSON file with sales/products/customers payloads"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
) -> None:
    """Sales report: summary, daily sales, top products, customer purchases."""
    _run("sales", payload, out)


@app.command()
def full(
    payload: Path = typer.Argument(..., help="JSON file with sales/products/analytics payloads"),
    out: Optional[Path] = typer.Option(None, "--out", help="Output directory"),
) -> None:
    """Full business report with category, stock movement and staff tables."""
    _run("full", payload, out)


if __name__ == "__main__":
    app()
