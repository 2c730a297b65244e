"""Configuration helpers for PQC sheet definitions.

Loads YAML or JSON sheet configurations, accepts keys written Ruby-style
(``:attr:``) as produced by the original packaging tooling, and validates the
structure with pydantic before the schema is compiled.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pqcxml.core.errors import ConfigError

DEFAULT_VALUE_SEP = "|"


def _strip_symbol(value: Any) -> Any:
    if isinstance(value, str) and value.startswith(":"):
        return value[1:]
    return value


class AttributeConfig(BaseModel):
    """One attribute descriptor from the ``attributes`` list."""

    model_config = ConfigDict(extra="allow")

    attr: str
    headings: List[str]
    requirement: str | None = None
    heading_required: bool = False
    multivalued: bool = False
    value_sep: str = DEFAULT_VALUE_SEP
    unique: bool = False
    data_type: str | None = None
    xml_element: str | None = None

    @field_validator("attr", "data_type", "xml_element", "requirement", mode="before")
    @classmethod
    def _symbol_to_text(cls, value: Any) -> Any:
        value = _strip_symbol(value)
        if value is None:
            return None
        return str(value)

    @field_validator("headings", mode="before")
    @classmethod
    def _headings_to_text(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [str(item) for item in value if item is not None]
        return value

    @field_validator("value_sep", mode="before")
    @classmethod
    def _default_sep(cls, value: Any) -> Any:
        if value is None or value == "":
            return DEFAULT_VALUE_SEP
        return str(value)

    @field_validator("heading_required", "multivalued", "unique", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return False if value is None else value


class SheetConfig(BaseModel):
    """Complete sheet configuration model."""

    model_config = ConfigDict(extra="allow")

    sheet_name: str | None = None
    sheet_position: int = 0
    heading_type: Literal["row", "column"] = "row"
    attributes: List[AttributeConfig] = Field(default_factory=list)

    @field_validator("heading_type", mode="before")
    @classmethod
    def _normalize_heading_type(cls, value: Any) -> Any:
        if value is None:
            return "row"
        return str(_strip_symbol(value)).strip().lower()

    @field_validator("sheet_position", mode="before")
    @classmethod
    def _default_position(cls, value: Any) -> Any:
        return 0 if value is None else value


def normalize_keys(data: Any) -> Any:
    """Recursively strip a leading ``:`` from mapping keys."""

    if isinstance(data, Mapping):
        return {str(_strip_symbol(key)): normalize_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [normalize_keys(item) for item in data]
    return data


def _check_attributes(attributes: Any) -> None:
    if not isinstance(attributes, list):
        raise ConfigError("attributes must be a list of attribute descriptors")
    for idx, entry in enumerate(attributes):
        if not isinstance(entry, Mapping):
            raise ConfigError(f"attributes[{idx}] must be a mapping")
        if not entry.get("attr"):
            raise ConfigError(f"attributes[{idx}] has no attr name", kind="attr_not_defined")
        if not isinstance(entry.get("headings"), list):
            raise ConfigError(
                f"attributes[{idx}] ({entry['attr']}) has no headings array",
                kind="no_headings_array",
            )


def parse_sheet_config(data: Mapping[str, Any] | SheetConfig) -> SheetConfig:
    """Validate a raw configuration mapping into a SheetConfig."""

    if isinstance(data, SheetConfig):
        return data
    if not isinstance(data, Mapping):
        raise ConfigError("Sheet configuration must be a mapping")
    normalized: Dict[str, Any] = normalize_keys(data)
    _check_attributes(normalized.get("attributes", []))
    try:
        return SheetConfig.model_validate(normalized)
    except ValidationError as exc:
        raise ConfigError(f"Invalid sheet configuration: {exc}") from exc


def _load_payload(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() == ".json":
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
        try:
            return yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def load_sheet_config(path: str | Path) -> SheetConfig:
    """Load a sheet configuration from a YAML or JSON file."""

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Sheet configuration not found: {config_path}")
    payload = _load_payload(config_path)
    if not isinstance(payload, Mapping):
        raise ConfigError("Sheet configuration must be a mapping")
    return parse_sheet_config(payload)


__all__ = [
    "AttributeConfig",
    "SheetConfig",
    "DEFAULT_VALUE_SEP",
    "load_sheet_config",
    "normalize_keys",
    "parse_sheet_config",
]
