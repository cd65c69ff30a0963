"""User actions that drive a simulation, and their log entries.

An action works on any simulation object that offers:

* ``out``: the text stream that messages are written to;
* ``has_settlement``, ``get_settlement``, ``add_settlement``;
* ``has_facility``, ``add_facility``;
* ``has_plan``, ``get_plan``, ``add_plan``;
* ``step``, ``close``, ``actions_log``;
* ``copy()`` returning an independent snapshot, ``restore(snapshot)``
  taking over a snapshot's state by copying it, and a ``backup``
  attribute holding the last snapshot or ``None``.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from .facility import FacilityCategory, FacilityType
from .selection_policy import (
    BalancedSelection,
    EconomySelection,
    NaiveSelection,
    SelectionPolicy,
    SustainabilitySelection,
)
from .settlement import Settlement, SettlementType


class ActionStatus(Enum):
    """Outcome of an action."""

    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class _ActionFailed(Exception):
    """Raised inside an action to report a failure to the user."""


def _simple_policy(code: str) -> SelectionPolicy | None:
    """Build a fresh policy from its command code, or None if unknown."""
    if code == "eco":
        return EconomySelection()
    if code == "bal":
        return BalancedSelection(0, 0, 0)
    if code == "sus":
        return SustainabilitySelection()
    if code == "nve":
        return NaiveSelection()
    return None


class BaseAction(ABC):
    """An action the user asked for; it starts out in the ERROR state."""

    def __init__(self) -> None:
        self.status = ActionStatus.ERROR
        self.error_msg = ""

    @abstractmethod
    def act(self, simulation: Any) -> None:
        """Carry out the action on the simulation."""

    def clone(self) -> BaseAction:
        """Return an independent copy of this action."""
        return copy.copy(self)

    @abstractmethod
    def _describe(self) -> str:
        """The command part of the log entry."""

    def __str__(self) -> str:
        return f"{self._describe()} {self.status.value}"

    def _complete(self) -> None:
        self.status = ActionStatus.COMPLETED

    def _error(self, simulation: Any, message: str) -> None:
        self.error_msg = message
        print(f"Error: {message}", file=simulation.out)

    def _guarded(self, simulation: Any, body) -> None:
        try:
            body()
        except _ActionFailed as failure:
            self._error(simulation, str(failure))
        else:
            self._complete()


class SimulateStep(BaseAction):
    """Advance the simulation a number of steps."""

    def __init__(self, num_of_steps: int) -> None:
        super().__init__()
        self.num_of_steps = num_of_steps

    def act(self, simulation: Any) -> None:
        for _ in range(self.num_of_steps):
            simulation.step()
        self._complete()

    def _describe(self) -> str:
        return f"step {self.num_of_steps}"


class AddPlan(BaseAction):
    """Create a plan for an existing settlement with a named policy."""

    def __init__(self, settlement_name: str, selection_policy: str) -> None:
        super().__init__()
        self.settlement_name = settlement_name
        self.selection_policy = selection_policy

    def act(self, simulation: Any) -> None:
        def body() -> None:
            if not simulation.has_settlement(self.settlement_name):
                raise _ActionFailed("Cannot create this plan")
            policy = _simple_policy(self.selection_policy)
            if policy is None:
                raise _ActionFailed("Cannot create this plan")
            simulation.add_plan(simulation.get_settlement(self.settlement_name), policy)

        self._guarded(simulation, body)

    def _describe(self) -> str:
        return f"plan {self.settlement_name} {self.selection_policy}"


class AddSettlement(BaseAction):
    """Add a new settlement."""

    def __init__(self, settlement_name: str, settlement_type: SettlementType) -> None:
        super().__init__()
        self.settlement_name = settlement_name
        self.settlement_type = SettlementType(settlement_type)

    def act(self, simulation: Any) -> None:
        def body() -> None:
            if simulation.has_settlement(self.settlement_name):
                raise _ActionFailed("Settlement already exists")
            simulation.add_settlement(
                Settlement(self.settlement_name, self.settlement_type)
            )

        self._guarded(simulation, body)

    def _describe(self) -> str:
        return f"settlement {self.settlement_name} {int(self.settlement_type)}"


class AddFacility(BaseAction):
    """Add a new facility type to the options plans choose from."""

    def __init__(
        self,
        facility_name: str,
        category: FacilityCategory,
        price: int,
        life_quality_score: int,
        economy_score: int,
        environment_score: int,
    ) -> None:
        super().__init__()
        self.facility_name = facility_name
        self.category = FacilityCategory(category)
        self.price = price
        self.life_quality_score = life_quality_score
        self.economy_score = economy_score
        self.environment_score = environment_score

    def act(self, simulation: Any) -> None:
        def body() -> None:
            if simulation.has_facility(self.facility_name):
                raise _ActionFailed("Facility already exists")
            simulation.add_facility(
                FacilityType(
                    self.facility_name,
                    self.category,
                    self.price,
                    self.life_quality_score,
                    self.economy_score,
                    self.environment_score,
                )
            )

        self._guarded(simulation, body)

    def _describe(self) -> str:
        return (
            f"facility {self.facility_name} {int(self.category)} {self.price} "
            f"{self.life_quality_score} {self.economy_score} {self.environment_score}"
        )


class PrintPlanStatus(BaseAction):
    """Print the full status of one plan."""

    def __init__(self, plan_id: int) -> None:
        super().__init__()
        self.plan_id = plan_id

    def act(self, simulation: Any) -> None:
        def body() -> None:
            if not simulation.has_plan(self.plan_id):
                raise _ActionFailed("Plan doesn't exists")
            simulation.out.write(str(simulation.get_plan(self.plan_id)))

        self._guarded(simulation, body)

    def _describe(self) -> str:
        return f"planStatus {self.plan_id}"


class ChangePlanPolicy(BaseAction):
    """Switch a plan to a different selection policy."""

    def __init__(self, plan_id: int, new_policy: str) -> None:
        super().__init__()
        self.plan_id = plan_id
        self.new_policy = new_policy

    def _build_policy(self, plan: Any) -> SelectionPolicy:
        if self.new_policy == "bal":
            life = plan.life_quality_score
            economy = plan.economy_score
            environment = plan.environment_score
            for facility in plan.under_construction:
                life += facility.life_quality_score
                economy += facility.economy_score
                environment += facility.environment_score
            return BalancedSelection(life, economy, environment)
        policy = _simple_policy(self.new_policy)
        if policy is None:
            raise _ActionFailed("Cannot change selection policy")
        return policy

    def act(self, simulation: Any) -> None:
        def body() -> None:
            if not simulation.has_plan(self.plan_id):
                raise _ActionFailed("Cannot change selection policy")
            plan = simulation.get_plan(self.plan_id)
            if str(plan.selection_policy) == self.new_policy:
                raise _ActionFailed("Cannot change selection policy")
            policy = self._build_policy(plan)
            print(
                f"planID: {self.plan_id}\n"
                f"previousPolicy: {plan.selection_policy}\n"
                f"newPolicy: {policy}",
                file=simulation.out,
            )
            plan.selection_policy = policy

        self._guarded(simulation, body)

    def _describe(self) -> str:
        return f"changePolicy {self.plan_id} {self.new_policy}"


class PrintActionsLog(BaseAction):
    """Print every action logged so far."""

    def act(self, simulation: Any) -> None:
        for action in simulation.actions_log:
            print(action, file=simulation.out)
        self._complete()

    def _describe(self) -> str:
        return "log"


class Close(BaseAction):
    """Print the final results and stop the simulation."""

    def act(self, simulation: Any) -> None:
        simulation.close()
        self._complete()

    def _describe(self) -> str:
        return "close"

    def __str__(self) -> str:
        return "close COMPLETED"


class BackupSimulation(BaseAction):
    """Keep a snapshot of the simulation, replacing any earlier one."""

    def act(self, simulation: Any) -> None:
        simulation.backup = simulation.copy()
        self._complete()

    def _describe(self) -> str:
        return "backup"

    def __str__(self) -> str:
        return "backup COMPLETED"


class RestoreSimulation(BaseAction):
    """Bring the simulation back to the last snapshot taken."""

    def act(self, simulation: Any) -> None:
        def body() -> None:
            snapshot = getattr(simulation, "backup", None)
            if snapshot is None:
                raise _ActionFailed("No backup available")
            simulation.restore(snapshot)

        self._guarded(simulation, body)

    def _describe(self) -> str:
        return "restore"