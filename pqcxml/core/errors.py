"""Custom exceptions used across pqcxml."""

from __future__ import annotations


class PqcError(Exception):
    """Base error for the application."""


class ConfigError(PqcError):
    """Configuration related error.

    ``kind`` names the configuration error category reported to callers,
    e.g. ``unknown_data_type``, ``attr_not_defined`` or ``no_headings_array``.
    """

    def __init__(self, message: str, *, kind: str = "invalid_config") -> None:
        super().__init__(message)
        self.kind = kind


class UnknownDataTypeError(ConfigError):
    """Raised when a schema references a data type with no registered validator."""

    def __init__(self, data_type: str) -> None:
        super().__init__(f"No validator registered for data type: {data_type!r}", kind="unknown_data_type")
        self.data_type = data_type


class PackagingError(PqcError):
    """Raised when a package directory does not match its spreadsheet."""


class ContractViolation(PqcError):
    """Raised when upstream validation should have guaranteed a value but did not."""
