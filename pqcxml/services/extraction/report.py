"""Reporting utilities for sheet validation."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from .models import ErrorReport


def errors_frame(report: ErrorReport) -> pd.DataFrame:
    """Flatten *report* into a ``kind, address, text`` DataFrame."""

    rows = [
        {"kind": error.kind, "address": error.address or "", "text": error.text}
        for error in report.errors()
    ]
    return pd.DataFrame(rows, columns=["kind", "address", "text"])


def generate_report(
    output_dir: Path,
    report: ErrorReport,
    *,
    source: str,
    records: int,
) -> tuple[Path, Path | None]:
    """Generate a Markdown summary and, when there are errors, a CSV listing them."""

    output_dir.mkdir(parents=True, exist_ok=True)

    errors_path: Path | None = None
    if not report.empty:
        errors_path = output_dir / "validation_errors.csv"
        errors_frame(report).to_csv(errors_path, index=False)

    report_path = output_dir / "validation_report.md"

    lines = ["# Spreadsheet Validation Report", ""]
    lines.append(f"- Source: `{source}`")
    lines.append(f"- Records extracted: {records}")
    lines.append(f"- Errors: {report.count()}")
    lines.append("")

    if not report.empty:
        lines.append("## Errors by kind")
        for kind in report:
            items = report[kind]
            lines.append(f"- **{kind}** ({len(items)})")
            for error in items:
                where = f"{error.address}: " if error.address else ""
                lines.append(f"  - {where}{error.text}")
        lines.append("")
        lines.append(f"All errors exported to `{errors_path.name}`.")

    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path, errors_path
