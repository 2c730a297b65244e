"""Typer based command line entry points for pqcxml."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from pqcxml.config import load_sheet_config
from pqcxml.core.errors import PqcError
from pqcxml.core.logger import get_logger
from pqcxml.services.descriptive import DescriptiveMetadata
from pqcxml.services.extraction import SheetExtractor, compile_schema
from pqcxml.services.extraction.report import generate_report
from pqcxml.services.structural import StructuralMetadata
from pqcxml_io.excel_reader import SpreadsheetReadError
from pqcxml_io.files import DEFAULT_MEDIA_PATTERN

app = typer.Typer(help="Validate PQC spreadsheets and generate PQC XML.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logging.getLogger().setLevel(level_value)
    logger.setLevel(level_value)


def _fail(message: str) -> None:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {output}")


@app.command("validate")
def validate_command(
    xlsx: Path = typer.Argument(..., help="Spreadsheet to validate."),
    config: Path = typer.Option(..., "--config", "-c", help="Sheet configuration (YAML or JSON)."),
    report_dir: Optional[Path] = typer.Option(
        None, "--report-dir", help="Write a Markdown report and CSV of errors here."
    ),
    data_only: bool = typer.Option(False, "--data-only", help="Skip validation and only extract values."),
) -> None:
    """Validate a spreadsheet against its sheet configuration."""

    logger = get_logger()
    try:
        schema = compile_schema(load_sheet_config(config))
        extractor = SheetExtractor.from_workbook(xlsx, schema)
        records = extractor.process(data_only=data_only)
    except (PqcError, SpreadsheetReadError, FileNotFoundError) as exc:
        logger.error("Validation aborted: %s", exc)
        _fail(str(exc))
        return

    errors = extractor.errors
    if report_dir is not None:
        report_path, errors_path = generate_report(
            report_dir, errors, source=str(xlsx), records=len(records)
        )
        typer.echo(f"Report: {report_path}")
        if errors_path is not None:
            typer.echo(f"Errors: {errors_path}")

    if errors.empty:
        typer.secho(f"OK: {len(records)} records", fg=typer.colors.GREEN)
        return

    for kind in errors:
        for error in errors[kind]:
            where = f"{error.address}: " if error.address else ""
            typer.echo(f"{kind}: {where}{error.text}")
    _fail(f"INVALID: {errors.count()} errors")


@app.command("structural")
def structural_command(
    package_dir: Path = typer.Argument(..., help="Package directory with pqc_structural.xlsx and images."),
    config: Path = typer.Option(..., "--config", "-c", help="Sheet configuration (YAML or JSON)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
    pattern: str = typer.Option(DEFAULT_MEDIA_PATTERN, "--pattern", help="Regex selecting image files."),
) -> None:
    """Generate PQC structural XML for a package directory."""

    logger = get_logger()
    try:
        metadata = StructuralMetadata(package_dir, load_sheet_config(config), media_pattern=pattern)
        if not metadata.extractor.valid:
            _fail(f"Spreadsheet {metadata.xlsx_path} failed validation: {', '.join(metadata.extractor.errors)}")
        text = metadata.xml()
    except (PqcError, SpreadsheetReadError, FileNotFoundError) as exc:
        logger.error("Structural XML generation failed: %s", exc)
        _fail(str(exc))
        return
    _write_output(text, output)


@app.command("descriptive")
def descriptive_command(
    package_dir: Path = typer.Argument(..., help="Package directory with pqc_descriptive.xlsx."),
    config: Path = typer.Option(..., "--config", "-c", help="Sheet configuration (YAML or JSON)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
) -> None:
    """Generate PQC descriptive XML for a package directory."""

    logger = get_logger()
    try:
        metadata = DescriptiveMetadata(package_dir, load_sheet_config(config))
        if not metadata.extractor.valid:
            _fail(f"Spreadsheet {metadata.xlsx_path} failed validation: {', '.join(metadata.extractor.errors)}")
        text = metadata.xml()
    except (PqcError, SpreadsheetReadError, FileNotFoundError) as exc:
        logger.error("Descriptive XML generation failed: %s", exc)
        _fail(str(exc))
        return
    _write_output(text, output)


if __name__ == "__main__":  # pragma: no cover
    app()
