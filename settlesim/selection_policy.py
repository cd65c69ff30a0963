"""Policies that choose which facility a plan builds next."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Sequence

from .facility import FacilityCategory, FacilityType


class SelectionError(RuntimeError):
    """Raised when a policy cannot pick any facility."""


class SelectionPolicy(ABC):
    """Chooses the next facility type from the available options."""

    code: str = ""

    @abstractmethod
    def select_facility(self, options: Sequence[FacilityType]) -> FacilityType:
        """Return the facility type to build next."""

    def clone(self) -> SelectionPolicy:
        """Return an independent copy of this policy and its state."""
        return copy.copy(self)

    def __str__(self) -> str:
        return self.code


class NaiveSelection(SelectionPolicy):
    """Cycles through the options in order."""

    code = "nve"

    def __init__(self) -> None:
        self._last_index = -1

    def select_facility(self, options: Sequence[FacilityType]) -> FacilityType:
        if not options:
            raise SelectionError("No facilities available to select")
        self._last_index = (self._last_index + 1) % len(options)
        return options[self._last_index]


class BalancedSelection(SelectionPolicy):
    """Picks the option that keeps the three running scores closest together."""

    code = "bal"

    def __init__(
        self, life_quality_score: int, economy_score: int, environment_score: int
    ) -> None:
        self.life_quality_score = life_quality_score
        self.economy_score = economy_score
        self.environment_score = environment_score

    def _spread(self, option: FacilityType) -> int:
        scores = (
            option.life_quality_score + self.life_quality_score,
            option.economy_score + self.economy_score,
            option.environment_score + self.environment_score,
        )
        return max(scores) - min(scores)

    def select_facility(self, options: Sequence[FacilityType]) -> FacilityType:
        if not options:
            raise SelectionError("No facilities available to select")
        best = min(options, key=self._spread)
        self.life_quality_score += best.life_quality_score
        self.economy_score += best.economy_score
        self.environment_score += best.environment_score
        return best


class _CategoryRotation(SelectionPolicy):
    """Cycles through the options, taking only those of one category."""

    category: FacilityCategory

    def __init__(self) -> None:
        self._last_index = -1

    def select_facility(self, options: Sequence[FacilityType]) -> FacilityType:
        count = len(options)
        candidates = ((self._last_index + step) % count for step in range(1, count + 1))
        for index in candidates:
            if options[index].category is self.category:
                self._last_index = index
                return options[index]
        raise SelectionError(
            f"No suitable facility found for {type(self).__name__}"
        )


class EconomySelection(_CategoryRotation):
    """Cycles through the economy facilities."""

    code = "eco"
    category = FacilityCategory.ECONOMY

    def select_facility(self, options: Sequence[FacilityType]) -> FacilityType:
        return super().select_facility(options)


class SustainabilitySelection(_CategoryRotation):
    """Cycles through the environment facilities."""

    code = "sus"
    category = FacilityCategory.ENVIRONMENT

    def select_facility(self, options: Sequence[FacilityType]) -> FacilityType:
        return super().select_facility(options)