"""Build the page sequence from structural records and the files on disk."""

from __future__ import annotations

import logging
import re
from pathlib import PurePath
from typing import Iterable, List, Optional, Sequence

from pqcxml.core.errors import ContractViolation, PackagingError
from pqcxml.services.extraction.models import Record
from pqcxml.services.extraction.schema import Value

from .models import Page, StructuralFields, side_for

LOGGER = logging.getLogger(__name__)

_SEQUENCE_PATTERN = re.compile(r"\A[-+]?\d+\Z")


def _as_text(value: Optional[Value]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = " ".join(value)
    text = value.strip()
    return text or None


def _as_list(value: Optional[Value]) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def image_id(filename: str) -> str:
    """Strip the extension from *filename*: ``0001.tif -> 0001``."""

    return PurePath(filename).stem


def spreadsheet_files(records: Iterable[Record], fields: StructuralFields = StructuralFields()) -> List[str]:
    """Filenames named by the records, skipping blanks."""

    names: List[str] = []
    for record in records:
        name = _as_text(record.get(fields.filename))
        if name:
            names.append(name)
    return names


def validate_file_list(
    records: Sequence[Record],
    files_on_disk: Sequence[str],
    fields: StructuralFields = StructuralFields(),
) -> None:
    """Make sure every file named in the spreadsheet is present on disk.

    Raises:
        PackagingError: Listing every missing file.
    """

    on_disk = set(files_on_disk)
    missing = [name for name in spreadsheet_files(records, fields) if name not in on_disk]
    if missing:
        listing = ", ".join(f"'{name}'" for name in missing)
        raise PackagingError(f"Spreadsheet files not found in folder: {listing}")


def parse_sequence(record: Record, fields: StructuralFields = StructuralFields()) -> int:
    text = _as_text(record.get(fields.sequence))
    if text is None or not _SEQUENCE_PATTERN.match(text):
        raise ContractViolation(
            f"Record at {record.address or record.line} has no integer {fields.sequence}: {text!r}"
        )
    return int(text)


def package_identifier(records: Iterable[Record], fields: StructuralFields = StructuralFields()) -> Optional[str]:
    """First non-blank identifier among the records."""

    for record in records:
        identifier = _as_text(record.get(fields.identifier))
        if identifier:
            return identifier
    return None


def build_pages(
    records: Sequence[Record],
    files_on_disk: Sequence[str],
    fields: StructuralFields = StructuralFields(),
) -> List[Page]:
    """Return spreadsheet pages in record order followed by unlisted files.

    Spreadsheet pages keep their declared sequence. Files on disk that no record
    names are appended in listing order, numbered from the highest spreadsheet
    sequence plus one, with ``display=False``.

    Raises:
        PackagingError: When a record names a file that is not on disk.
        ContractViolation: When a record's sequence is not an integer.
    """

    validate_file_list(records, files_on_disk, fields)

    pages: List[Page] = []
    referenced = set()
    for record in records:
        sequence = parse_sequence(record, fields)
        filename = _as_text(record.get(fields.filename))
        if filename:
            referenced.add(filename)
        pages.append(
            Page(
                sequence=sequence,
                image_id=image_id(filename) if filename else "",
                side=side_for(sequence),
                display=True,
                visible_page=_as_text(record.get(fields.visible_page)),
                toc=_as_list(record.get(fields.toc)),
                ill=_as_list(record.get(fields.ill)),
            )
        )

    next_sequence = max((page.sequence for page in pages), default=0) + 1
    extras = [name for name in files_on_disk if name not in referenced]
    for name in extras:
        pages.append(
            Page(
                sequence=next_sequence,
                image_id=image_id(name),
                side=side_for(next_sequence),
                display=False,
            )
        )
        next_sequence += 1

    LOGGER.info("Built %s pages (%s not in spreadsheet)", len(pages), len(extras))
    return pages
