"""Descriptive metadata for one package directory."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from pqcxml.config import SheetConfig
from pqcxml.services.extraction import SheetExtractor, TypeValidatorRegistry, compile_schema
from pqcxml.services.extraction.models import Record
from pqcxml_io.xml_writer import DEFAULT_IDENTIFIER_ELEMENT, render_descriptive_xml

from .mapper import ElementMap, map_records

DEFAULT_DESCRIPTIVE_XLSX = "pqc_descriptive.xlsx"


class DescriptiveMetadata:
    """Generate PQC descriptive XML from ``pqc_descriptive.xlsx``.

    Each attribute configured with an ``xml_element`` contributes its values to
    that element; several attributes may share one element. The element named
    by *identifier_element* (``ark`` by default) becomes each record's
    ``<ark>``.
    """

    def __init__(
        self,
        package_directory: Union[str, Path],
        sheet_config: Union[Mapping[str, Any], SheetConfig],
        *,
        xlsx_name: str = DEFAULT_DESCRIPTIVE_XLSX,
        identifier_element: str = DEFAULT_IDENTIFIER_ELEMENT,
        validators: Optional[TypeValidatorRegistry] = None,
    ) -> None:
        self.package_directory = Path(package_directory)
        self.schema = compile_schema(sheet_config, validators=validators)
        self.xlsx_name = xlsx_name
        self.identifier_element = identifier_element
        self._extractor: Optional[SheetExtractor] = None
        self._data_for_xml: Optional[List[ElementMap]] = None

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
    def attribute_map(self) -> dict[str, str]:
        return self.schema.element_mapping()

    @property
    def data_for_xml(self) -> List[ElementMap]:
        if self._data_for_xml is None:
            self._data_for_xml = map_records(self.spreadsheet_data, self.schema)
        return self._data_for_xml

    def xml(self) -> str:
        return render_descriptive_xml(self.data_for_xml, self.identifier_element)

    def reset(self) -> None:
        self._extractor = None
        self._data_for_xml = None
