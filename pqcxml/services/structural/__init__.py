"""Structural metadata service package."""

from .mapper import build_pages, package_identifier, validate_file_list
from .models import Page, StructuralFields, side_for
from .package import DEFAULT_STRUCTURAL_XLSX, StructuralMetadata

__all__ = [
    "DEFAULT_STRUCTURAL_XLSX",
    "Page",
    "StructuralFields",
    "StructuralMetadata",
    "build_pages",
    "package_identifier",
    "side_for",
    "validate_file_list",
]
