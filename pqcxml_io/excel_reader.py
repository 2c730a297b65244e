"""Excel input helpers."""

# Module responsibilities:
# - Decode an XLSX worksheet into a CellGrid via openpyxl.
# - Emit structured logs for traceability and future auditing.

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Optional, Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .grid import CellGrid
from .utils.log import get_logger

logger = get_logger("excel_reader")

SheetType = Union[str, int, None]


class SpreadsheetReadError(RuntimeError):
    """Raised when a workbook cannot be decoded into a cell grid."""


def read_grid(
    path: Path,
    sheet_name: Optional[str] = None,
    sheet_position: int = 0,
) -> CellGrid:
    """Load one worksheet of an Excel workbook as a CellGrid.

    The sheet called *sheet_name* is used when the workbook has one; otherwise
    the sheet at zero-based *sheet_position* is read.

    Args:
        path: Path to the workbook.
        sheet_name: Preferred sheet name.
        sheet_position: Fallback sheet index; defaults to the first sheet.

    Returns:
        CellGrid with trimmed string values.

    Raises:
        FileNotFoundError: When the Excel file does not exist.
        SpreadsheetReadError: When the workbook cannot be parsed or the sheet is absent.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Source workbook not found: {path}")

    logger.info(
        "Reading Excel workbook",
        extra={"path": str(path), "sheet": sheet_name, "position": sheet_position},
    )

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        logger.error("Failed to read Excel workbook", extra={"error": str(exc)})
        raise SpreadsheetReadError(f"Failed to open workbook {path}: {exc}") from exc

    try:
        if sheet_name and sheet_name in workbook.sheetnames:
            worksheet = workbook[sheet_name]
        else:
            if sheet_name:
                logger.warning(
                    "Sheet not found; falling back to position",
                    extra={"sheet": sheet_name, "position": sheet_position},
                )
            if sheet_position < 0 or sheet_position >= len(workbook.sheetnames):
                raise SpreadsheetReadError(
                    f"Sheet position {sheet_position} out of range "
                    f"(workbook has {len(workbook.sheetnames)} sheets)"
                )
            worksheet = workbook.worksheets[sheet_position]
        grid = CellGrid.from_rows(worksheet.iter_rows(values_only=True))
    finally:
        workbook.close()

    logger.info(
        "Excel workbook loaded",
        extra={"rows": grid.row_count, "columns": grid.column_count},
    )
    return grid
