"""Descriptive metadata service package."""

from .mapper import ElementMap, map_record, map_records
from .package import DEFAULT_DESCRIPTIVE_XLSX, DescriptiveMetadata

__all__ = [
    "DEFAULT_DESCRIPTIVE_XLSX",
    "DescriptiveMetadata",
    "ElementMap",
    "map_record",
    "map_records",
]
