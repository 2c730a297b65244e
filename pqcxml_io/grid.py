"""In-memory cell grid shared by the readers and the extraction engine."""

# Module responsibilities:
# - Normalize raw workbook values into trimmed strings or ``None``.
# - Offer zero-based (row, column) addressing that tolerates ragged rows.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence, Tuple

Cell = Optional[str]


def normalize_cell(value: object) -> Cell:
    """Return the trimmed text of *value*, or ``None`` when it is blank."""

    if value is None:
        return None
    if isinstance(value, bool):
        text = "TRUE" if value else "FALSE"
    elif isinstance(value, float) and value.is_integer():
        # Excel stores every number as a float; 3.0 in a sequence column means "3".
        text = str(int(value))
    elif isinstance(value, (datetime, date, time)):
        text = value.isoformat()
    else:
        text = str(value)
    text = text.strip()
    return text or None


def _is_blank(row: Sequence[Cell]) -> bool:
    return all(cell is None for cell in row)


@dataclass(frozen=True)
class CellGrid:
    """Rectangular view over a worksheet's values."""

    rows: Tuple[Tuple[Cell, ...], ...]

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[object]]) -> "CellGrid":
        """Build a grid from raw values, dropping trailing blank rows and columns."""

        normalized = [tuple(normalize_cell(value) for value in row or ()) for row in rows]
        while normalized and _is_blank(normalized[-1]):
            normalized.pop()

        width = 0
        for row in normalized:
            for idx in range(len(row) - 1, -1, -1):
                if row[idx] is not None:
                    width = max(width, idx + 1)
                    break
        return cls(rows=tuple(row[:width] for row in normalized))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def cell(self, row: int, column: int) -> Cell:
        """Return the value at (*row*, *column*); out-of-range positions are blank."""

        if row < 0 or column < 0 or row >= len(self.rows):
            return None
        values = self.rows[row]
        if column >= len(values):
            return None
        return values[column]
