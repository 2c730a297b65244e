"""Data models used by the structural metadata service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

RECTO = "recto"
VERSO = "verso"
DEFAULT_SCALE = 3


def side_for(sequence: int) -> str:
    """Odd sequences are rectos, even sequences versos."""

    return RECTO if sequence % 2 == 1 else VERSO


@dataclass(slots=True)
class Page:
    """One image in the package's page sequence."""

    sequence: int
    image_id: str
    side: str
    display: bool = True
    visible_page: Optional[str] = None
    toc: List[str] = field(default_factory=list)
    ill: List[str] = field(default_factory=list)
    default_scale: int = DEFAULT_SCALE

    @property
    def number(self) -> int:
        return self.sequence


@dataclass(frozen=True, slots=True)
class StructuralFields:
    """Attribute names the structural mapper reads from each record."""

    sequence: str = "page_sequence"
    filename: str = "filename"
    visible_page: str = "visible_page"
    toc: str = "toc_entry"
    ill: str = "ill_entry"
    identifier: str = "ark_id"


__all__ = ["DEFAULT_SCALE", "Page", "RECTO", "StructuralFields", "VERSO", "side_for"]
