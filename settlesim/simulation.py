"""The simulation: settlements, facility options, plans and the command loop."""

from __future__ import annotations

import sys
from typing import Callable, Iterable, TextIO

from .actions import (
    AddFacility,
    AddPlan,
    AddSettlement,
    BackupSimulation,
    BaseAction,
    ChangePlanPolicy,
    Close,
    PrintActionsLog,
    PrintPlanStatus,
    RestoreSimulation,
    SimulateStep,
)
from .facility import FacilityCategory, FacilityType
from .parsing import parse_arguments
from .plan import Plan
from .selection_policy import (
    BalancedSelection,
    EconomySelection,
    NaiveSelection,
    SelectionPolicy,
    SustainabilitySelection,
)
from .settlement import Settlement, SettlementType


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be read or is malformed."""


_CONFIG_POLICIES: dict[str, Callable[[], SelectionPolicy]] = {
    "nve": NaiveSelection,
    "bal": lambda: BalancedSelection(0, 0, 0),
    "eco": EconomySelection,
    "env": SustainabilitySelection,
}

_COMMAND_ARITY = {
    "settlement": 3,
    "facility": 7,
    "plan": 3,
    "step": 2,
    "planStatus": 2,
    "changePolicy": 3,
}


def _settlement_from(args: list[str]) -> Settlement:
    return Settlement(args[1], SettlementType(int(args[2])))


def _facility_type_from(args: list[str]) -> FacilityType:
    category = FacilityCategory(int(args[2]))
    price, life, economy, environment = (int(value) for value in args[3:7])
    return FacilityType(args[1], category, price, life, economy, environment)


def parse_command(line: str) -> BaseAction | None:
    """Turn one line of user input into an action, or None for a blank line.

    Raises ValueError for unknown or malformed commands.
    """
    args = parse_arguments(line)
    if not args:
        return None
    command = args[0]
    expected = _COMMAND_ARITY.get(command)
    if expected is not None and len(args) != expected:
        raise ValueError(f"Invalid {command} command")
    try:
        match command:
            case "settlement":
                settlement = _settlement_from(args)
                return AddSettlement(settlement.name, settlement.type)
            case "facility":
                kind = _facility_type_from(args)
                return AddFacility(
                    kind.name,
                    kind.category,
                    kind.price,
                    kind.life_quality_score,
                    kind.economy_score,
                    kind.environment_score,
                )
            case "plan":
                return AddPlan(args[1], args[2])
            case "step":
                return SimulateStep(int(args[1]))
            case "planStatus":
                return PrintPlanStatus(int(args[1]))
            case "changePolicy":
                return ChangePlanPolicy(int(args[1]), args[2])
            case "log":
                return PrintActionsLog()
            case "close":
                return Close()
            case "backup":
                return BackupSimulation()
            case "restore":
                return RestoreSimulation()
    except ValueError as exc:
        raise ValueError(f"Invalid {command} command") from exc
    raise ValueError("Unknown command")


class Simulation:
    """Holds the world state and runs user actions against it."""

    def __init__(self, config_path: str | None = None, out: TextIO | None = None) -> None:
        self.out: TextIO = sys.stdout if out is None else out
        self.is_running = False
        self.plan_counter = 0
        self.actions_log: list[BaseAction] = []
        self.plans: list[Plan] = []
        self.settlements: list[Settlement] = []
        self.facility_options: list[FacilityType] = []
        self.backup: Simulation | None = None
        if config_path is not None:
            self._load(config_path)

    def _load(self, config_path: str) -> None:
        try:
            with open(config_path, encoding="utf-8") as config:
                lines = config.read().splitlines()
        except OSError as exc:
            raise ConfigError("Unable to open configuration file") from exc
        for line in lines:
            self._apply_config_line(parse_arguments(line))

    def _apply_config_line(self, args: list[str]) -> None:
        if not args or args[0].startswith("#"):
            return
        kind = args[0]
        if kind == "settlement":
            if len(args) != 3:
                raise ConfigError("Invalid settlement configuration")
            if not self.has_settlement(args[1]):
                try:
                    settlement = _settlement_from(args)
                except ValueError as exc:
                    raise ConfigError("Invalid settlement configuration") from exc
                self.add_settlement(settlement)
        elif kind == "facility":
            if len(args) != 7:
                raise ConfigError("Invalid facility configuration")
            if not self.has_facility(args[1]):
                try:
                    facility_type = _facility_type_from(args)
                except ValueError as exc:
                    raise ConfigError("Invalid facility configuration") from exc
                self.add_facility(facility_type)
        elif kind == "plan":
            if len(args) != 3:
                raise ConfigError("Invalid plan configuration")
            if not self.has_settlement(args[1]):
                raise ConfigError("Settlement not found for plan")
            factory = _CONFIG_POLICIES.get(args[2])
            if factory is None:
                raise ConfigError("Unknown selection policy")
            self.add_plan(self.get_settlement(args[1]), factory())

    def start(self, lines: Iterable[str] | None = None) -> None:
        """Read commands, one per line, until closed or input runs out."""
        source = iter(sys.stdin if lines is None else lines)
        self.open()
        while self.is_running:
            self.out.write("Enter an action: ")
            line = next(source, None)
            if line is None:
                break
            try:
                action = parse_command(line)
                if action is None:
                    continue
                action.act(self)
            except (ValueError, RuntimeError) as exc:
                print(f"Error: {exc}", file=self.out)
                continue
            self.add_action(action)

    def add_plan(self, settlement: Settlement, selection_policy: SelectionPolicy) -> Plan:
        """Create a plan with the next free id and return it."""
        plan = Plan(self.plan_counter, settlement, selection_policy, self.facility_options)
        self.plan_counter += 1
        self.plans.append(plan)
        return plan

    def add_action(self, action: BaseAction) -> None:
        self.actions_log.append(action)

    def add_settlement(self, settlement: Settlement) -> None:
        self.settlements.append(settlement)

    def add_facility(self, facility_type: FacilityType) -> None:
        self.facility_options.append(facility_type)

    def has_settlement(self, name: str) -> bool:
        return any(s.name == name for s in self.settlements)

    def has_facility(self, name: str) -> bool:
        return any(f.name == name for f in self.facility_options)

    def has_plan(self, plan_id: int) -> bool:
        return any(p.plan_id == plan_id for p in self.plans)

    def get_settlement(self, name: str) -> Settlement:
        for settlement in self.settlements:
            if settlement.name == name:
                return settlement
        raise KeyError("Settlement not found")

    def get_plan(self, plan_id: int) -> Plan:
        for plan in self.plans:
            if plan.plan_id == plan_id:
                return plan
        raise KeyError("Plan not found")

    def step(self) -> None:
        """Advance every plan by one step."""
        for plan in self.plans:
            plan.step()

    def close(self) -> None:
        """Print every plan's results and stop the command loop."""
        for plan in self.plans:
            self.out.write(
                f"PlanID: {plan.plan_id}\n"
                f"SettlementName: {plan.settlement.name}\n"
                f"LifeQuality_Score: {plan.life_quality_score}\n"
                f"Economy_Score: {plan.economy_score}\n"
                f"Environment_Score: {plan.environment_score}\n"
            )
            print("----------------------------------------", file=self.out)
        self.is_running = False
        print("Simulation closed successfully.", file=self.out)

    def open(self) -> None:
        self.is_running = True
        print("The simulation has started", file=self.out)

    def copy(self) -> Simulation:
        """Return an independent snapshot of this simulation's state."""
        twin = Simulation(out=self.out)
        twin._take_state(self)
        return twin

    def restore(self, other: Simulation) -> None:
        """Replace this simulation's state with a copy of another's."""
        self._take_state(other)

    def _take_state(self, other: Simulation) -> None:
        options = list(other.facility_options)
        plans = [plan.copy(options) for plan in other.plans]
        actions = [action.clone() for action in other.actions_log]
        self.is_running = other.is_running
        self.plan_counter = other.plan_counter
        self.settlements = list(other.settlements)
        self.facility_options = options
        self.plans = plans
        self.actions_log = actions