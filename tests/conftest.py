from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

STRUCTURAL_HEADERS = ["ARK ID", "PAGE SEQUENCE", "VISIBLE PAGE", "TOC ENTRY", "ILL ENTRY", "FILENAME", "NOTES"]
STRUCTURAL_ROWS = [
    ["ark:/99999/fk42244n9f", 1, "1r", "Pio, Alberto (1512-1518)", None, "0001.tif", None],
    ["ark:/99999/fk42244n9f", 2, "1v", None, None, "0002.tif", None],
    ["ark:/99999/fk42244n9f", 3, "2r", None, None, "0003.tif", None],
    ["ark:/99999/fk42244n9f", 4, "2v", "Table, f. 2v [=3v]", None, "0004.tif", None],
    ["ark:/99999/fk42244n9f", 5, "3r", None, None, "0005.tif", None],
    [
        "ark:/99999/fk42244n9f",
        6,
        "3v-4r",
        None,
        "Decorated initial, Initial P, p. 3|Foliate design, p. 3",
        "0006.tif",
        None,
    ],
    ["ark:/99999/fk42244n9f", 7, "4v", None, None, "0007.tif", None],
]
TIFF_FILES = [
    "0001.tif",
    "0002.tif",
    "0002a.tif",
    "0002b.tif",
    "0003.tif",
    "0004.tif",
    "0005.tif",
    "0006.tif",
    "0007.tif",
    "reference.tif",
]

WorkbookFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep log files out of the user's home directory."""

    monkeypatch.setenv("PQCXML_WORK_DIR", str(tmp_path / "work"))
    monkeypatch.setenv("PQCXML_LOG_DIR", str(tmp_path / "logs"))


def _save_workbook(path: Path, rows: Iterable[Sequence[object]], title: str = "Sheet1") -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture()
def make_workbook() -> WorkbookFactory:
    return _save_workbook


@pytest.fixture()
def structural_config() -> dict:
    return {
        "sheet_name": "Structural",
        "sheet_position": 0,
        "heading_type": "row",
        "attributes": [
            {"attr": "ark_id", "headings": ["ARK ID"], "requirement": "required", "data_type": "ark"},
            {
                "attr": "page_sequence",
                "headings": ["PAGE SEQUENCE"],
                "requirement": "required",
                "unique": True,
                "data_type": "integer",
            },
            {"attr": "filename", "headings": ["FILENAME"], "requirement": "required"},
            {"attr": "visible_page", "headings": ["VISIBLE PAGE"], "requirement": "required"},
            {"attr": "toc_entry", "headings": ["TOC ENTRY"], "multivalued": True, "value_sep": "|"},
            {"attr": "ill_entry", "headings": ["ILL ENTRY"], "multivalued": True, "value_sep": "|"},
            {"attr": "notes", "headings": ["NOTES"]},
        ],
    }


@pytest.fixture()
def structural_package(tmp_path: Path) -> Path:
    """Package directory with a valid structural sheet and ten TIFFs."""

    package_dir = tmp_path / "ark+=99999=fk42244n9f"
    _save_workbook(package_dir / "pqc_structural.xlsx", [STRUCTURAL_HEADERS, *STRUCTURAL_ROWS], title="Structural")
    for name in TIFF_FILES:
        (package_dir / name).touch()
    (package_dir / "notes.txt").write_text("not an image", encoding="utf-8")
    return package_dir
