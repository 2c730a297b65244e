"""Compiled attribute schema for a PQC spreadsheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pqcxml.config import DEFAULT_VALUE_SEP, SheetConfig, parse_sheet_config
from pqcxml.core.errors import ConfigError

from .validators import TypeValidatorRegistry, new_registry

Value = str | List[str]


class Orientation(str, Enum):
    """Where the header labels of a sheet run."""

    ROW = "row"
    COLUMN = "column"


def normalize_label(value: Optional[str]) -> Optional[str]:
    """Case-fold a header label for comparison; blank labels become ``None``."""

    if value is None:
        return None
    text = str(value).strip()
    return text.upper() if text else None


@dataclass(frozen=True)
class AttributeDefinition:
    """Configuration of one attribute, with headings stored normalized."""

    name: str
    headings: Tuple[str, ...]
    required: bool = False
    heading_required: bool = False
    multivalued: bool = False
    value_sep: str = DEFAULT_VALUE_SEP
    unique: bool = False
    data_type: Optional[str] = None
    xml_element: Optional[str] = None

    def matches(self, label: Optional[str]) -> bool:
        return normalize_label(label) in self.headings

    def extract(self, text: str) -> Value:
        """Split multivalued text on the separator, trimming each piece.

        Interior empty pieces are kept; trailing empty pieces are dropped, so
        ``"A||B|"`` gives ``["A", "", "B"]``.
        """

        if not self.multivalued:
            return text
        pieces = text.split(self.value_sep)
        while pieces and not pieces[-1]:
            pieces.pop()
        return [piece.strip() for piece in pieces]

    def __str__(self) -> str:
        return f"{self.name} ({', '.join(self.headings)})"


def is_required(requirement: Optional[str]) -> bool:
    return bool(requirement) and requirement.strip().lower() == "required"


def is_heading_required(requirement: Optional[str]) -> bool:
    return bool(requirement) and requirement.strip().lower() == "heading_required"


@dataclass(frozen=True)
class SheetSchema:
    """Ordered attribute definitions plus sheet-level settings."""

    attributes: Tuple[AttributeDefinition, ...]
    orientation: Orientation = Orientation.ROW
    sheet_name: Optional[str] = None
    sheet_position: int = 0
    validators: TypeValidatorRegistry = field(default_factory=new_registry, compare=False, repr=False)

    def header_map(self) -> Dict[str, AttributeDefinition]:
        """Return each acceptable heading mapped to its attribute."""

        mapping: Dict[str, AttributeDefinition] = {}
        for attr in self.attributes:
            for heading in attr.headings:
                mapping.setdefault(heading, attr)
        return mapping

    @property
    def required_attributes(self) -> List[AttributeDefinition]:
        """Attributes whose heading must be present in the sheet."""

        return [attr for attr in self.attributes if attr.required or attr.heading_required]

    def attribute(self, name: str) -> Optional[AttributeDefinition]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def element_mapping(self) -> Dict[str, str]:
        """Return ``attribute name -> xml element`` for attributes that have one."""

        return {attr.name: attr.xml_element for attr in self.attributes if attr.xml_element}

    def check_data_types(self) -> None:
        """Raise UnknownDataTypeError for the first data type with no validator."""

        for attr in self.attributes:
            if attr.data_type is not None:
                self.validators.get(attr.data_type)


def compile_schema(
    config: Mapping[str, Any] | SheetConfig,
    *,
    validators: Optional[TypeValidatorRegistry] = None,
) -> SheetSchema:
    """Compile a raw or validated sheet configuration into a SheetSchema.

    Raises:
        ConfigError: When the configuration is malformed or two attributes share a name.
    """

    sheet = parse_sheet_config(config)
    seen: set[str] = set()
    attributes: List[AttributeDefinition] = []
    for entry in sheet.attributes:
        if entry.attr in seen:
            raise ConfigError(f"Attribute defined more than once: {entry.attr}", kind="duplicate_attr")
        seen.add(entry.attr)
        headings = tuple(
            label for label in (normalize_label(h) for h in entry.headings) if label is not None
        )
        attributes.append(
            AttributeDefinition(
                name=entry.attr,
                headings=headings,
                required=is_required(entry.requirement),
                heading_required=entry.heading_required or is_heading_required(entry.requirement),
                multivalued=entry.multivalued,
                value_sep=entry.value_sep,
                unique=entry.unique,
                data_type=entry.data_type,
                xml_element=entry.xml_element,
            )
        )

    return SheetSchema(
        attributes=tuple(attributes),
        orientation=Orientation(sheet.heading_type),
        sheet_name=sheet.sheet_name,
        sheet_position=sheet.sheet_position,
        validators=validators if validators is not None else new_registry(),
    )
