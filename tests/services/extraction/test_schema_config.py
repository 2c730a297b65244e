from __future__ import annotations

import json
from pathlib import Path

import pytest

from pqcxml.config import load_sheet_config, parse_sheet_config
from pqcxml.core.errors import ConfigError
from pqcxml.services.extraction.schema import Orientation, compile_schema

FIXTURE_DIR = Path(__file__).resolve().parents[2] / "fixtures"


def test_compile_schema_from_ruby_style_yaml() -> None:
    schema = compile_schema(load_sheet_config(FIXTURE_DIR / "structural_config.yml"))

    assert schema.orientation is Orientation.ROW
    assert schema.sheet_name == "Structural"
    names = [attr.name for attr in schema.attributes]
    assert names == ["ark_id", "page_sequence", "filename", "visible_page", "toc_entry", "ill_entry", "notes"]
    sequence = schema.attribute("page_sequence")
    assert sequence.required and sequence.unique
    assert sequence.data_type == "integer"
    assert schema.attribute("ark_id").data_type == "ark"
    assert schema.attribute("toc_entry").multivalued
    assert not schema.attribute("notes").required


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"heading_type": "column", "attributes": [{"attr": "title", "headings": ["Title"]}]}),
        encoding="utf-8",
    )

    schema = compile_schema(load_sheet_config(path))

    assert schema.orientation is Orientation.COLUMN
    assert schema.attribute("title").headings == ("TITLE",)


@pytest.mark.parametrize(
    ("requirement", "expected"),
    [("required", True), ("  Required ", True), ("REQUIRED", True), ("optional", False), (None, False)],
)
def test_requirement_tag_is_case_insensitive(requirement, expected) -> None:
    schema = compile_schema({"attributes": [{"attr": "a", "headings": ["A"], "requirement": requirement}]})

    assert schema.attributes[0].required is expected


def test_heading_required_is_separate_from_required() -> None:
    schema = compile_schema(
        {
            "attributes": [
                {"attr": "a", "headings": ["A"], "heading_required": True},
                {"attr": "b", "headings": ["B"], "requirement": "heading_required"},
            ]
        }
    )

    assert [attr.heading_required for attr in schema.attributes] == [True, True]
    assert [attr.required for attr in schema.attributes] == [False, False]
    assert [attr.name for attr in schema.required_attributes] == ["a", "b"]


def test_value_sep_defaults_to_pipe() -> None:
    schema = compile_schema({"attributes": [{"attr": "a", "headings": ["A"], "multivalued": True, "value_sep": None}]})

    assert schema.attributes[0].value_sep == "|"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Intro|", ["Intro"]),
        ("|", []),
        ("A||B", ["A", "", "B"]),
        ("A| |", ["A", ""]),
        (" A | B ", ["A", "B"]),
    ],
)
def test_split_drops_trailing_empty_pieces(text, expected) -> None:
    schema = compile_schema({"attributes": [{"attr": "a", "headings": ["A"], "multivalued": True}]})

    assert schema.attributes[0].extract(text) == expected


def test_missing_attr_name_is_config_error() -> None:
    with pytest.raises(ConfigError) as excinfo:
        compile_schema({"attributes": [{"headings": ["A"]}]})

    assert excinfo.value.kind == "attr_not_defined"


def test_missing_headings_is_config_error() -> None:
    with pytest.raises(ConfigError) as excinfo:
        parse_sheet_config({"attributes": [{"attr": "a", "headings": "A"}]})

    assert excinfo.value.kind == "no_headings_array"


def test_duplicate_attribute_names_rejected() -> None:
    with pytest.raises(ConfigError) as excinfo:
        compile_schema(
            {"attributes": [{"attr": "a", "headings": ["A"]}, {"attr": "a", "headings": ["OTHER A"]}]}
        )

    assert excinfo.value.kind == "duplicate_attr"


def test_bad_heading_type_rejected() -> None:
    with pytest.raises(ConfigError):
        compile_schema({"heading_type": "diagonal", "attributes": []})


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_sheet_config(tmp_path / "nope.yml")
