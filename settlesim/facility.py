"""Facility types and the facilities built from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class FacilityStatus(Enum):
    """Construction state of a facility."""

    UNDER_CONSTRUCTIONS = "under_constructions"
    OPERATIONAL = "operational"


class FacilityCategory(IntEnum):
    """Category of a facility; the numeric value is the one used in commands."""

    LIFE_QUALITY = 0
    ECONOMY = 1
    ENVIRONMENT = 2


@dataclass(frozen=True)
class FacilityType:
    """A kind of facility that can be built, with its cost and scores."""

    name: str
    category: FacilityCategory
    price: int
    life_quality_score: int
    economy_score: int
    environment_score: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", FacilityCategory(self.category))


class Facility:
    """A facility of some type being built in, or operating in, a settlement."""

    def __init__(self, facility_type: FacilityType, settlement_name: str) -> None:
        self.type = facility_type
        self.settlement_name = settlement_name
        self.status = FacilityStatus.UNDER_CONSTRUCTIONS
        self.time_left = facility_type.price

    @property
    def name(self) -> str:
        return self.type.name

    @property
    def category(self) -> FacilityCategory:
        return self.type.category

    @property
    def price(self) -> int:
        return self.type.price

    @property
    def life_quality_score(self) -> int:
        return self.type.life_quality_score

    @property
    def economy_score(self) -> int:
        return self.type.economy_score

    @property
    def environment_score(self) -> int:
        return self.type.environment_score

    def step(self) -> FacilityStatus:
        """Advance construction by one time unit and return the new status."""
        if self.status is FacilityStatus.UNDER_CONSTRUCTIONS and self.time_left > 0:
            self.time_left -= 1
            if self.time_left == 0:
                self.status = FacilityStatus.OPERATIONAL
        return self.status

    def __str__(self) -> str:
        state = (
            "Operational"
            if self.status is FacilityStatus.OPERATIONAL
            else "Under Construction"
        )
        return (
            f"Facility: {self.name}, Settlement: {self.settlement_name}, "
            f"Status: {state}, Time Left: {self.time_left}"
        )

    def __repr__(self) -> str:
        return (
            f"Facility({self.type!r}, {self.settlement_name!r}, "
            f"status={self.status.name}, time_left={self.time_left})"
        )