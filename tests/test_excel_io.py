"""Unit tests for workbook reading and the cell grid."""

# Module responsibilities:
# - Validate value normalization and sheet selection when decoding workbooks.
# - Assert defensive behaviour for missing files and sheets.

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import pytest
from openpyxl import Workbook

from pqcxml_io.excel_reader import SpreadsheetReadError, read_grid
from pqcxml_io.grid import CellGrid, normalize_cell


def test_normalize_cell_trims_and_blanks() -> None:
    assert normalize_cell(None) is None
    assert normalize_cell("   ") is None
    assert normalize_cell("  0001.tif ") == "0001.tif"
    assert normalize_cell(3.0) == "3"
    assert normalize_cell(2.5) == "2.5"
    assert normalize_cell(7) == "7"
    assert normalize_cell(date(2024, 5, 10)) == "2024-05-10"


def test_grid_drops_trailing_blank_rows_and_columns() -> None:
    grid = CellGrid.from_rows(
        [
            ["A", "B", None, None],
            ["1", None, None, " "],
            [None, None, None],
            [],
        ]
    )

    assert grid.row_count == 2
    assert grid.column_count == 2
    assert grid.cell(0, 1) == "B"
    assert grid.cell(1, 1) is None
    assert grid.cell(5, 0) is None
    assert grid.cell(0, 9) is None


def test_read_grid_prefers_named_sheet(tmp_path: Path, make_workbook) -> None:
    path = tmp_path / "book.xlsx"
    wb = Workbook()
    first = wb.active
    first.title = "Cover"
    first.append(["not", "this"])
    target = wb.create_sheet("Structural")
    target.append(["PAGE SEQUENCE", "FILENAME"])
    target.append([1, " 0001.tif "])
    wb.save(path)

    grid = read_grid(path, sheet_name="Structural")

    assert grid.rows == (("PAGE SEQUENCE", "FILENAME"), ("1", "0001.tif"))


def test_read_grid_falls_back_to_position(tmp_path: Path, make_workbook) -> None:
    path = make_workbook(tmp_path / "book.xlsx", [["TITLE"], ["Hours"]], title="Whatever")

    grid = read_grid(path, sheet_name="Descriptive", sheet_position=0)

    assert grid.cell(1, 0) == "Hours"


def test_read_grid_rejects_bad_position(tmp_path: Path, make_workbook) -> None:
    path = make_workbook(tmp_path / "book.xlsx", [["TITLE"]])

    with pytest.raises(SpreadsheetReadError):
        read_grid(path, sheet_position=3)


def test_read_grid_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_grid(tmp_path / "missing.xlsx")


def test_read_grid_rejects_non_workbook(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.xlsx"
    bogus.write_text("plain text", encoding="utf-8")

    with pytest.raises(SpreadsheetReadError):
        read_grid(bogus)


def test_reconfigured_io_logging_replaces_handlers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import pqcxml_io.utils.log as io_log

    monkeypatch.setattr(io_log, "_LOG_CONFIGURED", False)
    io_log.get_logger("excel_reader", log_dir=tmp_path / "first")
    monkeypatch.setattr(io_log, "_LOG_CONFIGURED", False)
    logger = io_log.get_logger("excel_reader", log_dir=tmp_path / "second")

    root = logging.getLogger("pqcxml_io")
    assert logger.name == "pqcxml_io.excel_reader"
    assert len(root.handlers) == 2
    assert (tmp_path / "second" / "pqcxml_io.log").exists()
