"""`pqcxml_io` top-level package exports the boundary helpers for workbooks, package folders and XML."""

# Module responsibilities:
# - Re-export the grid reader, directory lister and XML renderers so consumers have a stable API surface.
# - Provide package version placeholder for future packaging.

from __future__ import annotations

from .excel_reader import SpreadsheetReadError, read_grid
from .files import DEFAULT_MEDIA_PATTERN, list_media_files
from .grid import CellGrid, normalize_cell
from .xml_writer import render_descriptive_xml, render_structural_xml

__all__ = [
    "CellGrid",
    "normalize_cell",
    "read_grid",
    "SpreadsheetReadError",
    "DEFAULT_MEDIA_PATTERN",
    "list_media_files",
    "render_structural_xml",
    "render_descriptive_xml",
]

__version__ = "0.1.0"
