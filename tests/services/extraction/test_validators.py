from __future__ import annotations

import pytest

from pqcxml.core.errors import UnknownDataTypeError
from pqcxml.services.extraction.validators import (
    TypeValidatorRegistry,
    default_registry,
    error_kind,
    is_ark,
    is_integer,
    new_registry,
)


@pytest.mark.parametrize("value", ["1", " 42 ", "-3", "+7"])
def test_integer_accepts(value: str) -> None:
    assert is_integer(value)


@pytest.mark.parametrize("value", ["1.5", "one", "", "1 2", "3r"])
def test_integer_rejects(value: str) -> None:
    assert not is_integer(value)


def test_ark_pattern_is_case_insensitive() -> None:
    assert is_ark("ark:/99999/fk42244n9f")
    assert is_ark("ARK:/99999/FK42244N9F")
    assert not is_ark("ark:/99999")
    assert not is_ark("ark:/99999/fk4-2244")
    assert not is_ark("http://n2t.net/ark:/99999/fk42244n9f")


def test_defaults_registered() -> None:
    registry = new_registry()

    assert {"integer", "ark-identifier", "ark"} <= set(registry)
    assert registry.validate("ark-identifier", "ark:/1/a")
    assert error_kind("ark-identifier") == "non_valid_ark-identifier"


def test_register_replace_and_remove() -> None:
    registry = TypeValidatorRegistry()
    registry.register("even", lambda v: int(v) % 2 == 0)

    assert registry.validate("even", "4")
    assert not registry.validate("even", "5")

    registry.register("integer", lambda v: v == "1")
    assert not registry.validate("integer", "2")

    assert registry.unregister("even") is not None
    with pytest.raises(UnknownDataTypeError):
        registry.validate("even", "4")


def test_registries_are_independent() -> None:
    first = new_registry()
    second = first.copy()
    first.register("color", lambda v: v in {"red", "blue"})

    assert "color" in first
    assert "color" not in second
    assert "color" not in default_registry()


def test_register_requires_callable() -> None:
    with pytest.raises(TypeError):
        TypeValidatorRegistry().register("bad", "not callable")  # type: ignore[arg-type]
