"""Development plans: a settlement, a selection policy and its facilities."""

from __future__ import annotations

import copy
from enum import Enum
from typing import Sequence

from .facility import Facility, FacilityStatus, FacilityType
from .selection_policy import SelectionPolicy
from .settlement import Settlement, SettlementType

_CAPACITY = {
    SettlementType.VILLAGE: 1,
    SettlementType.CITY: 2,
    SettlementType.METROPOLIS: 3,
}


class PlanStatus(Enum):
    """Whether a plan can take on more construction."""

    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"


class Plan:
    """Builds facilities in one settlement, chosen by a selection policy."""

    def __init__(
        self,
        plan_id: int,
        settlement: Settlement,
        selection_policy: SelectionPolicy,
        facility_options: Sequence[FacilityType],
    ) -> None:
        self.plan_id = plan_id
        self.settlement = settlement
        self.selection_policy = selection_policy
        self.status = PlanStatus.AVAILABLE
        self.facility_options = facility_options
        self._facilities: list[Facility] = []
        self._under_construction: list[Facility] = []
        self.life_quality_score = 0
        self.economy_score = 0
        self.environment_score = 0

    @property
    def facilities(self) -> tuple[Facility, ...]:
        """Operational facilities, in the order they were completed."""
        return tuple(self._facilities)

    @property
    def under_construction(self) -> tuple[Facility, ...]:
        """Facilities still being built, in the order they were started."""
        return tuple(self._under_construction)

    @property
    def capacity(self) -> int:
        """How many facilities the settlement can build at once."""
        return _CAPACITY[self.settlement.type]

    def step(self) -> None:
        """Start new construction where there is room, then advance it."""
        capacity = self.capacity
        while len(self._under_construction) < capacity and self.facility_options:
            chosen = self.selection_policy.select_facility(self.facility_options)
            self.add_facility(Facility(chosen, self.settlement.name))

        still_building: list[Facility] = []
        for facility in self._under_construction:
            if facility.step() is FacilityStatus.OPERATIONAL:
                self._facilities.append(facility)
                self.life_quality_score += facility.life_quality_score
                self.economy_score += facility.economy_score
                self.environment_score += facility.environment_score
            else:
                still_building.append(facility)
        self._under_construction = still_building

        self.status = (
            PlanStatus.BUSY
            if len(self._under_construction) == capacity
            else PlanStatus.AVAILABLE
        )

    def add_facility(self, facility: Facility) -> None:
        """File a facility under construction or operational, by its status."""
        if facility.status is FacilityStatus.UNDER_CONSTRUCTIONS:
            self._under_construction.append(facility)
        else:
            self._facilities.append(facility)

    def status_line(self) -> str:
        """One line describing whether the plan is busy or available."""
        return f"PlanStatus: {self.status.value}"

    def copy(self, facility_options: Sequence[FacilityType]) -> Plan:
        """Return an independent copy that draws from the given options."""
        twin = Plan(
            self.plan_id,
            self.settlement,
            self.selection_policy.clone(),
            facility_options,
        )
        twin.status = self.status
        twin._facilities = [copy.copy(f) for f in self._facilities]
        twin._under_construction = [copy.copy(f) for f in self._under_construction]
        twin.life_quality_score = self.life_quality_score
        twin.economy_score = self.economy_score
        twin.environment_score = self.environment_score
        return twin

    def __str__(self) -> str:
        lines = [
            f"PlanID: {self.plan_id}",
            f"SettlementName: {self.settlement.name}",
            self.status_line(),
            f"SelectionPolicy: {self.selection_policy}",
            f"LifeQualityScore: {self.life_quality_score}",
            f"EconomyScore: {self.economy_score}",
            f"EnvironmentScore: {self.environment_score}",
        ]
        for facility in self._under_construction:
            lines.append(f"FacilityName: {facility.name}")
            lines.append("FacilityStatus: UNDER_CONSTRUCTION")
        for facility in self._facilities:
            lines.append(f"FacilityName: {facility.name}")
            lines.append("FacilityStatus: OPERATIONAL")
        return "".join(line + "\n" for line in lines)