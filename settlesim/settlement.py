"""Settlements: the places that plans build facilities in."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class SettlementType(IntEnum):
    """Kind of settlement; the numeric value is the one used in commands."""

    VILLAGE = 0
    CITY = 1
    METROPOLIS = 2

    @property
    def label(self) -> str:
        """Human-readable name of the type."""
        return self.name.capitalize()


@dataclass(frozen=True)
class Settlement:
    """A named settlement of a given type."""

    name: str
    type: SettlementType

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", SettlementType(self.type))

    def __str__(self) -> str:
        return f"Name: {self.name}, Type: {self.type.label}"