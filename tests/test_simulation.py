import io

import pytest

from settlesim.actions import BackupSimulation, RestoreSimulation, SimulateStep
from settlesim.facility import FacilityCategory, FacilityType
from settlesim.selection_policy import NaiveSelection
from settlesim.settlement import Settlement, SettlementType
from settlesim.simulation import ConfigError, Simulation, parse_command

CONFIG = """# sample world
settlement KfarSPL 0
settlement Haifa 1
settlement KfarSPL 2

facility Park 0 1 3 0 1
facility Market 1 2 0 4 1
facility Park 2 5 5 5 5
facility Forest 2 1 0 0 2
plan KfarSPL nve
plan Haifa env
"""


def _write(tmp_path, text):
    path = tmp_path / "config.txt"
    path.write_text(text)
    return str(path)


@pytest.fixture
def sim(tmp_path):
    return Simulation(_write(tmp_path, CONFIG), io.StringIO())


def test_config_loads_settlements_and_skips_duplicates(sim):
    assert [s.name for s in sim.settlements] == ["KfarSPL", "Haifa"]
    assert sim.get_settlement("KfarSPL").type is SettlementType.VILLAGE


def test_config_loads_facilities_without_duplicates(sim):
    assert [f.name for f in sim.facility_options] == ["Park", "Market", "Forest"]
    assert sim.facility_options[0].category is FacilityCategory.LIFE_QUALITY


def test_config_plans_and_policies(sim):
    assert [p.plan_id for p in sim.plans] == [0, 1]
    assert str(sim.get_plan(0).selection_policy) == "nve"
    assert str(sim.get_plan(1).selection_policy) == "sus"
    assert sim.plan_counter == len(sim.plans)


@pytest.mark.parametrize(
    "text",
    [
        "settlement OnlyName\n",
        "settlement A x\n",
        "facility F 0 1 2\n",
        "settlement A 0\nplan A xyz\n",
        "plan Missing nve\n",
    ],
)
def test_bad_config_raises(tmp_path, text):
    with pytest.raises(ConfigError):
        Simulation(_write(tmp_path, text), io.StringIO())


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="Unable to open configuration file"):
        Simulation(str(tmp_path / "absent.txt"), io.StringIO())


def test_lookups(sim):
    assert sim.has_settlement("Haifa")
    assert not sim.has_settlement("Nowhere")
    assert sim.has_facility("Market")
    assert not sim.has_facility("Mall")
    assert sim.has_plan(1)
    assert not sim.has_plan(7)
    with pytest.raises(KeyError):
        sim.get_plan(7)
    with pytest.raises(KeyError):
        sim.get_settlement("Nowhere")


def test_add_plan_assigns_increasing_ids():
    sim = Simulation(out=io.StringIO())
    town = Settlement("Town", SettlementType.CITY)
    sim.add_settlement(town)
    first = sim.add_plan(town, NaiveSelection())
    second = sim.add_plan(town, NaiveSelection())
    assert second.plan_id == first.plan_id + 1
    assert sim.get_plan(second.plan_id) is second


def test_step_completes_cheap_facility(sim):
    sim.step()
    plan = sim.get_plan(0)
    assert [f.name for f in plan.facilities] == ["Park"]
    assert plan.life_quality_score == 3


def test_added_facility_visible_to_plans():
    sim = Simulation(out=io.StringIO())
    town = Settlement("Town", SettlementType.VILLAGE)
    sim.add_settlement(town)
    plan = sim.add_plan(town, NaiveSelection())
    sim.add_facility(FacilityType("Well", FacilityCategory.ENVIRONMENT, 1, 0, 0, 2))
    sim.step()
    assert plan.environment_score == 2


def test_parse_command_builds_actions():
    action = parse_command("step 3")
    assert isinstance(action, SimulateStep)
    assert action.num_of_steps == 3
    assert parse_command("   ") is None
    assert str(parse_command("settlement Town 1")) == "settlement Town 1 ERROR"


@pytest.mark.parametrize(
    "line, message",
    [
        ("step", "Invalid step command"),
        ("step x", "Invalid step command"),
        ("settlement A 9", "Invalid settlement command"),
        ("dance", "Unknown command"),
    ],
)
def test_parse_command_errors(line, message):
    with pytest.raises(ValueError, match=message):
        parse_command(line)


def test_start_logs_actions(sim):
    sim.start(["settlement Town 0", "plan Town nve", "plan Nowhere nve", "log"])
    output = sim.out.getvalue()
    assert output.startswith("The simulation has started\n")
    assert "Error: Cannot create this plan" in output
    assert (
        "settlement Town 0 COMPLETED\nplan Town nve COMPLETED\nplan Nowhere nve ERROR\n"
        in output
    )
    assert [str(a) for a in sim.actions_log][-1] == "log COMPLETED"


def test_unknown_command_not_logged(sim):
    sim.start(["dance", ""])
    assert "Error: Unknown command" in sim.out.getvalue()
    assert sim.actions_log == []


def test_close_stops_loop(sim):
    sim.start(["close", "step 1"])
    output = sim.out.getvalue()
    assert not sim.is_running
    assert [str(a) for a in sim.actions_log] == ["close COMPLETED"]
    assert "PlanID: 0\nSettlementName: KfarSPL\n" in output
    assert output.endswith("Simulation closed successfully.\n")


def test_selection_failure_reported_and_not_logged(tmp_path):
    text = "settlement A 0\nfacility F 0 1 1 1 1\nplan A eco\n"
    sim = Simulation(_write(tmp_path, text), io.StringIO())
    sim.start(["step 1"])
    assert "Error: No suitable facility found for EconomySelection" in sim.out.getvalue()
    assert sim.actions_log == []


def test_copy_is_independent(sim):
    sim.step()
    twin = sim.copy()
    before = str(twin.get_plan(1))
    sim.step()
    sim.step()
    assert str(twin.get_plan(1)) == before
    assert twin.plan_counter == sim.plan_counter
    assert twin.backup is None


def test_backup_and_restore_round_trip(sim):
    sim.step()
    BackupSimulation().act(sim)
    snapshot = [str(p) for p in sim.plans]
    SimulateStep(2).act(sim)
    assert [str(p) for p in sim.plans] != snapshot
    restore = RestoreSimulation()
    restore.act(sim)
    assert [str(p) for p in sim.plans] == snapshot
    assert str(restore) == "restore COMPLETED"
    sim.step()
    sim.restore(sim.backup)
    assert [str(p) for p in sim.plans] == snapshot


def test_restore_without_backup(sim):
    sim.start(["restore", "log"])
    output = sim.out.getvalue()
    assert "Error: No backup available" in output
    assert "restore ERROR\n" in output