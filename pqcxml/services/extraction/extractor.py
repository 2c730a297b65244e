"""Schema-driven record extraction and cell validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

from pqcxml_io.excel_reader import read_grid
from pqcxml_io.grid import CellGrid

from .headers import (
    HeaderEntry,
    cell_address,
    coordinates_for,
    line_counts,
    resolve_headers,
    validate_headers,
)
from .models import (
    NON_UNIQUE_VALUE,
    REQUIRED_VALUE_MISSING,
    ErrorReport,
    Record,
)
from .schema import AttributeDefinition, SheetSchema, Value
from .validators import TypeValidatorRegistry, error_kind

LOGGER = logging.getLogger(__name__)


class UniquenessTable:
    """Values already seen per attribute during one extraction pass."""

    def __init__(self) -> None:
        self._seen: Dict[str, Set[str]] = {}

    def claim(self, name: str, value: str) -> bool:
        """Record *value* for *name*; False when it was seen before."""

        seen = self._seen.setdefault(name, set())
        if value in seen:
            return False
        seen.add(value)
        return True

    def clear(self) -> None:
        self._seen.clear()


def check_requirement(
    value: Optional[str],
    attr: AttributeDefinition,
    address: str,
    report: ErrorReport,
) -> bool:
    if not attr.required or value is not None:
        return True
    report.add(REQUIRED_VALUE_MISSING, address, str(attr))
    return False


def check_uniqueness(
    value: Optional[str],
    attr: AttributeDefinition,
    address: str,
    report: ErrorReport,
    table: UniquenessTable,
) -> bool:
    if not attr.unique or value is None:
        return True
    if table.claim(attr.name, value):
        return True
    report.add(NON_UNIQUE_VALUE, address, f"'{value}'; heading: {attr}")
    return False


def check_data_type(
    value: Optional[str],
    attr: AttributeDefinition,
    address: str,
    report: ErrorReport,
    validators: TypeValidatorRegistry,
) -> bool:
    if attr.data_type is None or value is None:
        return True
    if validators.validate(attr.data_type, value):
        return True
    report.add(error_kind(attr.data_type), address, f"'{value}'; heading: {attr}")
    return False


def validate_cell(
    value: Optional[str],
    attr: Optional[AttributeDefinition],
    address: str,
    report: ErrorReport,
    table: UniquenessTable,
    validators: TypeValidatorRegistry,
) -> bool:
    """Requiredness, then uniqueness, then type; stops at the first failure.

    Cells under headings no attribute claims are always valid.
    """

    if attr is None:
        return True
    return (
        check_requirement(value, attr, address, report)
        and check_uniqueness(value, attr, address, report, table)
        and check_data_type(value, attr, address, report, validators)
    )


class SheetExtractor:
    """Extract records from a cell grid according to a SheetSchema.

    Results are cached: calling :meth:`process` again returns the records and
    error report of the first pass until :meth:`reset` is called.

    Raises:
        UnknownDataTypeError: On construction, when the schema names a data type
            the schema's validator registry does not know.
    """

    def __init__(self, grid: CellGrid, schema: SheetSchema, *, source: Optional[str] = None) -> None:
        schema.check_data_types()
        self.grid = grid
        self.schema = schema
        self.source = source
        self._errors = ErrorReport()
        self._uniques = UniquenessTable()
        self._headers: Optional[List[HeaderEntry]] = None
        self._records: Optional[List[Record]] = None
        self._extracted = False

    @classmethod
    def from_workbook(cls, path: Path, schema: SheetSchema) -> "SheetExtractor":
        """Read the schema's sheet from the workbook at *path*."""

        grid = read_grid(Path(path), schema.sheet_name, schema.sheet_position)
        return cls(grid, schema, source=str(path))

    @property
    def headers(self) -> List[HeaderEntry]:
        if self._headers is None:
            self._headers = resolve_headers(self.grid, self.schema.orientation)
        return self._headers

    @property
    def errors(self) -> ErrorReport:
        return self._errors

    @property
    def data(self) -> List[Record]:
        """Records from the current pass, running a default pass if none ran yet."""

        if self._records is None:
            return self.process()
        return self._records

    @property
    def processed(self) -> bool:
        return self._records is not None

    @property
    def extracted(self) -> bool:
        return self._extracted

    @property
    def valid(self) -> bool:
        if self._records is None:
            self.process()
        return self._errors.empty

    def reset(self) -> None:
        """Forget records, errors, headers and seen unique values."""

        self._errors = ErrorReport()
        self._uniques.clear()
        self._headers = None
        self._records = None
        self._extracted = False

    def process(self, *, data_only: bool = False, validation_only: bool = False) -> List[Record]:
        """Run one extraction pass.

        Args:
            data_only: Skip header and cell validation; split multivalued cells only.
            validation_only: Validate everything but keep no records.

        Returns:
            The extracted records (empty when header validation fails or in
            validation-only mode).
        """

        if self._records is not None:
            return self._records

        self._errors = ErrorReport()
        self._uniques.clear()
        headers = self.headers

        if not data_only and not validate_headers(headers, self.schema, self._errors):
            LOGGER.warning(
                "Header validation failed for %s: %s",
                self.source or "sheet",
                ", ".join(self._errors.kinds),
            )
            self._records = []
            return self._records

        records = self._walk(headers, data_only=data_only, validation_only=validation_only)
        self._records = [] if validation_only else records
        self._extracted = not validation_only

        LOGGER.info(
            "Extracted %s records from %s (%s errors)",
            len(self._records),
            self.source or "sheet",
            self._errors.count(),
        )
        return self._records

    def _walk(
        self,
        headers: List[HeaderEntry],
        *,
        data_only: bool,
        validation_only: bool,
    ) -> List[Record]:
        to_cell = coordinates_for(self.schema.orientation)
        header_map = self.schema.header_map()
        _, line_total = line_counts(self.grid, self.schema.orientation)
        validators = self.schema.validators

        records: List[Record] = []
        for line in range(1, line_total):
            values: Dict[str, Value] = {}
            extra: Dict[str, Value] = {}
            for header in headers:
                if header.blank:
                    continue
                row, column = to_cell(header.position, line)
                text = self.grid.cell(row, column)
                attr = header_map.get(header.label)
                address = cell_address(column, row)

                if not data_only and not validate_cell(
                    text, attr, address, self._errors, self._uniques, validators
                ):
                    continue
                if text is None or validation_only:
                    continue
                if attr is None:
                    extra[header.label] = text
                else:
                    values[attr.name] = attr.extract(text)

            first_row, first_column = to_cell(0, line)
            records.append(
                Record(
                    values=values,
                    extra=extra,
                    line=line,
                    address=cell_address(first_column, first_row),
                )
            )
        return records
