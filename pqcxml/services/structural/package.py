"""Structural metadata for one package directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Pattern, Union

from pqcxml.config import SheetConfig
from pqcxml.services.extraction import SheetExtractor, TypeValidatorRegistry, compile_schema
from pqcxml.services.extraction.models import Record
from pqcxml_io.files import DEFAULT_MEDIA_PATTERN, list_media_files
from pqcxml_io.xml_writer import render_structural_xml

from .mapper import build_pages, package_identifier
from .models import Page, StructuralFields

LOGGER = logging.getLogger(__name__)

DEFAULT_STRUCTURAL_XLSX = "pqc_structural.xlsx"


class StructuralMetadata:
    """Generate PQC structural XML for a directory of images and its spreadsheet.

    The package directory holds ``pqc_structural.xlsx`` plus the page images.
    Every file named in the spreadsheet must be present; images on disk that
    the spreadsheet does not list are appended after the listed pages with
    ``display="false"``::

        <page number="8" seq="8" image.defaultscale="3" side="verso" id="0002a"
              image.id="0002a" visiblepage="" display="false"/>
    """

    def __init__(
        self,
        package_directory: Union[str, Path],
        sheet_config: Union[Mapping[str, Any], SheetConfig],
        *,
        media_pattern: Union[str, Pattern[str]] = DEFAULT_MEDIA_PATTERN,
        xlsx_name: str = DEFAULT_STRUCTURAL_XLSX,
        fields: StructuralFields = StructuralFields(),
        validators: Optional[TypeValidatorRegistry] = None,
    ) -> None:
        self.package_directory = Path(package_directory)
        self.schema = compile_schema(sheet_config, validators=validators)
        self.media_pattern = media_pattern
        self.xlsx_name = xlsx_name
        self.fields = fields
        self._extractor: Optional[SheetExtractor] = None
        self._files_on_disk: Optional[List[str]] = None
        self._pages: Optional[List[Page]] = None

    @property
    def xlsx_path(self) -> Path:
        return self.package_directory / self.xlsx_name

    @property
    def extractor(self) -> SheetExtractor:
        if self._extractor is None:
            self._extractor = SheetExtractor.from_workbook(self.xlsx_path, self.schema)
        return self._extractor

    @property
    def spreadsheet_data(self) -> List[Record]:
        return self.extractor.data

    @property
    def files_on_disk(self) -> List[str]:
        if self._files_on_disk is None:
            self._files_on_disk = list_media_files(self.package_directory, self.media_pattern)
        return self._files_on_disk

    @property
    def pages(self) -> List[Page]:
        if self._pages is None:
            records = self.spreadsheet_data
            errors = self.extractor.errors
            if not errors.empty:
                LOGGER.warning(
                    "Building pages from %s despite %s validation errors",
                    self.xlsx_path,
                    errors.count(),
                )
            self._pages = build_pages(records, self.files_on_disk, self.fields)
        return self._pages

    @property
    def identifier(self) -> Optional[str]:
        return package_identifier(self.spreadsheet_data, self.fields)

    def xml(self) -> str:
        return render_structural_xml(self.identifier, self.pages)

    def reset(self) -> None:
        """Drop cached spreadsheet data, file listing and pages."""

        self._extractor = None
        self._files_on_disk = None
        self._pages = None
