"""Aggregate record values into named PQC elements."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from pqcxml.services.extraction.models import Record
from pqcxml.services.extraction.schema import SheetSchema

ElementMap = Dict[str, List[str]]


def map_record(record: Record, element_mapping: Mapping[str, str]) -> ElementMap:
    """Collect the record's values under their target elements.

    *element_mapping* is ``attribute name -> element name``; its order decides
    the order in which attributes sharing an element contribute values.
    Attributes with no value in the record and ad hoc headings are skipped.
    """

    elements: ElementMap = {}
    for attr_name, element in element_mapping.items():
        value = record.values.get(attr_name)
        if value is None:
            continue
        values = value if isinstance(value, list) else [value]
        elements.setdefault(element, []).extend(values)
    return elements


def map_records(records: Iterable[Record], schema: SheetSchema) -> List[ElementMap]:
    """One ElementMap per record, in record order."""

    element_mapping = schema.element_mapping()
    return [map_record(record, element_mapping) for record in records]
