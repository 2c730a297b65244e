"""Header resolution and header validation for PQC sheets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pqcxml_io.grid import CellGrid

from .models import NON_UNIQUE_HEADER, REQUIRED_HEADER_MISSING, ErrorReport
from .schema import Orientation, SheetSchema, normalize_label

# (header position, line) -> (row, column); line 0 is the header line itself.
CoordinateFn = Callable[[int, int], Tuple[int, int]]


def column_letter(index: int) -> str:
    """Return the spreadsheet column letters for zero-based *index* (0 -> A, 26 -> AA)."""

    if index < 0:
        raise ValueError(f"column index must be non-negative: {index}")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def cell_address(column: int, row: int) -> str:
    """Excel style address for zero-based *column* and *row*, e.g. ``(1, 0) -> B1``."""

    return f"{column_letter(column)}{row + 1}"


def _row_coordinates(position: int, line: int) -> Tuple[int, int]:
    return line, position


def _column_coordinates(position: int, line: int) -> Tuple[int, int]:
    return position, line


def coordinates_for(orientation: Orientation) -> CoordinateFn:
    if orientation is Orientation.COLUMN:
        return _column_coordinates
    return _row_coordinates


def line_counts(grid: CellGrid, orientation: Orientation) -> Tuple[int, int]:
    """Return ``(header positions, lines including the header line)``."""

    if orientation is Orientation.COLUMN:
        return grid.row_count, grid.column_count
    return grid.column_count, grid.row_count


@dataclass(frozen=True, slots=True)
class HeaderEntry:
    """A header cell; ``label`` is ``None`` when the cell is blank."""

    label: Optional[str]
    address: str
    position: int

    @property
    def blank(self) -> bool:
        return self.label is None


def resolve_headers(grid: CellGrid, orientation: Orientation) -> List[HeaderEntry]:
    """Read the header line of *grid*, one entry per header position."""

    to_cell = coordinates_for(orientation)
    positions, _ = line_counts(grid, orientation)
    headers: List[HeaderEntry] = []
    for position in range(positions):
        row, column = to_cell(position, 0)
        headers.append(
            HeaderEntry(
                label=normalize_label(grid.cell(row, column)),
                address=cell_address(column, row),
                position=position,
            )
        )
    return headers


def header_addresses(headers: Sequence[HeaderEntry]) -> Dict[str, List[str]]:
    """Map each non-blank label to the addresses where it occurs."""

    addresses: Dict[str, List[str]] = {}
    for header in headers:
        if header.blank:
            continue
        addresses.setdefault(header.label, []).append(header.address)
    return addresses


def check_unique_headers(headers: Sequence[HeaderEntry], report: ErrorReport) -> bool:
    ok = True
    for label, addresses in header_addresses(headers).items():
        if len(addresses) > 1:
            report.add(
                NON_UNIQUE_HEADER,
                ", ".join(addresses),
                f"'{label}' appears {len(addresses)} times",
            )
            ok = False
    return ok


def check_required_headers(
    headers: Sequence[HeaderEntry],
    schema: SheetSchema,
    report: ErrorReport,
) -> bool:
    labels = {header.label for header in headers if not header.blank}
    ok = True
    for attr in schema.required_attributes:
        if not any(heading in labels for heading in attr.headings):
            report.add(REQUIRED_HEADER_MISSING, None, str(attr))
            ok = False
    return ok


def validate_headers(
    headers: Sequence[HeaderEntry],
    schema: SheetSchema,
    report: ErrorReport,
) -> bool:
    """Run both header checks, recording every problem; True when both pass."""

    unique = check_unique_headers(headers, report)
    present = check_required_headers(headers, schema, report)
    return unique and present
