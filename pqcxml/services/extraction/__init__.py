"""Spreadsheet extraction service package."""

from .extractor import SheetExtractor, UniquenessTable, validate_cell
from .headers import HeaderEntry, cell_address, column_letter, resolve_headers, validate_headers
from .models import ErrorReport, Record, ValidationError
from .schema import AttributeDefinition, Orientation, SheetSchema, compile_schema
from .validators import TypeValidatorRegistry, default_registry, new_registry

__all__ = [
    "AttributeDefinition",
    "ErrorReport",
    "HeaderEntry",
    "Orientation",
    "Record",
    "SheetExtractor",
    "SheetSchema",
    "TypeValidatorRegistry",
    "UniquenessTable",
    "ValidationError",
    "cell_address",
    "column_letter",
    "compile_schema",
    "default_registry",
    "new_registry",
    "resolve_headers",
    "validate_cell",
    "validate_headers",
]
