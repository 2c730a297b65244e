"""Data-type validators keyed by the ``data_type`` tag of an attribute."""

from __future__ import annotations

import re
import threading
from typing import Callable, Dict, Iterator, Mapping, Optional

from pqcxml.core.errors import UnknownDataTypeError

Predicate = Callable[[str], bool]

INTEGER_PATTERN = re.compile(r"\A[-+]?\d+\Z")
ARK_PATTERN = re.compile(r"\Aark:/[a-z0-9]+/[a-z0-9]+\Z", re.IGNORECASE)


def is_integer(value: str) -> bool:
    return bool(INTEGER_PATTERN.match(value.strip()))


def is_ark(value: str) -> bool:
    return bool(ARK_PATTERN.match(value.strip()))


DEFAULT_VALIDATORS: Mapping[str, Predicate] = {
    "integer": is_integer,
    "ark-identifier": is_ark,
    # Tag used by configurations written for the earlier Ruby tooling.
    "ark": is_ark,
}


def error_kind(data_type: str) -> str:
    """Error report key for values failing *data_type*."""

    return f"non_valid_{data_type}"


class TypeValidatorRegistry:
    """Mutable table of data-type predicates.

    Every schema gets its own registry unless one is passed in explicitly, so
    registering a custom type only affects the extractions sharing that
    registry. Mutations are serialized with a lock; a registration made while
    another thread is extracting takes effect for the cells validated after it.
    """

    def __init__(self, validators: Optional[Mapping[str, Predicate]] = None) -> None:
        self._lock = threading.RLock()
        self._validators: Dict[str, Predicate] = dict(
            DEFAULT_VALIDATORS if validators is None else validators
        )

    def register(self, data_type: str, predicate: Predicate) -> None:
        """Add or replace the predicate for *data_type*."""

        if not callable(predicate):
            raise TypeError(f"Validator for {data_type!r} must be callable")
        with self._lock:
            self._validators[data_type] = predicate

    def unregister(self, data_type: str) -> Optional[Predicate]:
        """Remove the predicate for *data_type*; returns the removed predicate if any."""

        with self._lock:
            return self._validators.pop(data_type, None)

    def get(self, data_type: str) -> Predicate:
        with self._lock:
            try:
                return self._validators[data_type]
            except KeyError:
                raise UnknownDataTypeError(data_type) from None

    def validate(self, data_type: str, value: str) -> bool:
        """Run the predicate registered for *data_type* against *value*."""

        return bool(self.get(data_type)(value))

    def copy(self) -> "TypeValidatorRegistry":
        with self._lock:
            return TypeValidatorRegistry(self._validators)

    def __contains__(self, data_type: object) -> bool:
        with self._lock:
            return data_type in self._validators

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._validators))


_DEFAULT_REGISTRY = TypeValidatorRegistry()


def default_registry() -> TypeValidatorRegistry:
    """Return the process-wide registry.

    Only extractions that are handed this registry explicitly see changes made
    to it. Registrations apply to validation performed after the call returns,
    so register custom types before starting any extraction that relies on them.
    """

    return _DEFAULT_REGISTRY


def new_registry() -> TypeValidatorRegistry:
    """Return a fresh registry seeded with the default validators."""

    return TypeValidatorRegistry()
