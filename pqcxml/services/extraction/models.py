"""Data models produced by the extraction service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .schema import Value

REQUIRED_HEADER_MISSING = "required_header_missing"
NON_UNIQUE_HEADER = "non_unique_header"
REQUIRED_VALUE_MISSING = "required_value_missing"
NON_UNIQUE_VALUE = "non_unique_value"

HEADER_ERROR_KINDS = frozenset({REQUIRED_HEADER_MISSING, NON_UNIQUE_HEADER})


@dataclass(frozen=True, slots=True)
class ValidationError:
    """One validation failure; ``address`` is an Excel style cell reference."""

    kind: str
    address: Optional[str]
    text: str

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"address": self.address, "text": self.text}


class ErrorReport:
    """Append-only collection of validation errors grouped by kind."""

    def __init__(self) -> None:
        self._errors: Dict[str, List[ValidationError]] = {}

    def add(self, kind: str, address: Optional[str], text: str) -> ValidationError:
        error = ValidationError(kind=kind, address=address, text=text)
        self._errors.setdefault(kind, []).append(error)
        return error

    def get(self, kind: str) -> List[ValidationError]:
        return list(self._errors.get(kind, []))

    def __getitem__(self, kind: str) -> List[ValidationError]:
        return list(self._errors[kind])

    def __contains__(self, kind: object) -> bool:
        return kind in self._errors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._errors))

    def __len__(self) -> int:
        return len(self._errors)

    @property
    def empty(self) -> bool:
        return not self._errors

    @property
    def kinds(self) -> List[str]:
        return list(self._errors)

    def errors(self) -> Iterator[ValidationError]:
        """Iterate every error, kind by kind in first-seen order."""

        for items in self._errors.values():
            yield from items

    def count(self) -> int:
        return sum(len(items) for items in self._errors.values())

    def has_header_errors(self) -> bool:
        return any(kind in HEADER_ERROR_KINDS for kind in self._errors)

    def clear(self) -> None:
        self._errors.clear()

    def to_dict(self) -> Dict[str, List[Dict[str, Optional[str]]]]:
        return {kind: [error.to_dict() for error in items] for kind, items in self._errors.items()}


@dataclass(slots=True)
class Record:
    """One extracted record.

    ``values`` holds configured attributes keyed by attribute name; ``extra``
    holds values found under headings no attribute claims, keyed by the
    normalized heading. Both keep the sheet's positional order.
    """

    values: Dict[str, Value] = field(default_factory=dict)
    extra: Dict[str, Value] = field(default_factory=dict)
    line: int = 0
    address: Optional[str] = field(default=None, compare=False)

    def get(self, name: str, default: Optional[Value] = None) -> Optional[Value]:
        if name in self.values:
            return self.values[name]
        return self.extra.get(name, default)

    def __getitem__(self, name: str) -> Value:
        if name in self.values:
            return self.values[name]
        return self.extra[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values or name in self.extra

    def as_dict(self) -> Dict[str, Value]:
        merged: Dict[str, Value] = dict(self.values)
        merged.update(self.extra)
        return merged

