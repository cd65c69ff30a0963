# settlesim

A small turn-based simulation. You describe settlements and the kinds of
facility that can be built in them, then attach plans to settlements. Each plan
uses a selection policy to pick facilities and builds them step by step. When a
facility becomes operational, its plan gains that facility's life-quality,
economy and environment scores.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install .[test]
pytest
```

## Running

```
settlesim path/to/config.txt
```

The program loads the configuration file. It prints `The simulation has
started` and then reads commands from standard input, one per line, prompting
with `Enter an action: `. It stops when you enter `close` or when the input
runs out.

Run with no argument or with more than one, and it prints
`usage: simulation <config_path>`. If the configuration file cannot be opened
or is malformed, it prints the error to standard error and exits with status 1.

## Configuration file

Each line holds one entry. The program skips blank lines, lines whose first
word starts with `#`, and lines whose first word it does not recognise.

```
# name   type (0 village, 1 city, 2 metropolis)
settlement KfarSPL 0
# name   category (0 life quality, 1 economy, 2 environment)  price  lq  eco  env
facility hospital 0 5 5 3 1
facility market   1 3 1 4 1
facility park     2 2 2 0 5
# settlement  policy (nve, bal, eco, env)
plan KfarSPL eco
```

- A `settlement` or `facility` line with a name that already exists is ignored.
- A line with the wrong number of fields, or with a number that cannot be read,
  is an error.
- So is a `plan` for an unknown settlement or with an unknown policy.
- In the configuration file the sustainability policy is written `env`.

The number of facilities a plan can have under construction at once depends on
the settlement type: 1 for a village, 2 for a city and 3 for a metropolis. A
facility's price is the number of steps it takes to build. Plans are numbered
from 0 in the order they are created.

## Commands

| Command | Effect |
|---|---|
| `settlement <name> <type>` | add a settlement; fails if the name exists |
| `facility <name> <category> <price> <lq> <eco> <env>` | add a facility type; fails if the name exists |
| `plan <settlement> <policy>` | add a plan; policy is `nve`, `bal`, `eco` or `sus` |
| `step <n>` | advance every plan by `n` steps |
| `planStatus <id>` | print a plan's status, policy, scores and facilities |
| `changePolicy <id> <policy>` | switch a plan to another policy (`nve`, `bal`, `eco`, `sus`) |
| `log` | print every logged action with `COMPLETED` or `ERROR` |
| `backup` | keep a copy of the current simulation, replacing any earlier one |
| `restore` | return to the last backup; an error if there is none |
| `close` | print each plan's final scores and stop |

An action that fails prints `Error: <message>` and is still logged, with the
status `ERROR`. A line that is not a valid command also prints an error, but it
is not logged. Examples are an unknown command, a wrong number of arguments, or
a number that cannot be read.

If a plan's policy can find nothing to build during `step`, the error is
printed and the step is not logged. For example, an `eco` plan with no economy
facilities.

`changePolicy` fails if the plan does not exist, if the new policy is the one
already in use, or if the policy is unknown. Switching to `bal` starts the
balanced policy from the plan's current scores plus the scores of the
facilities it has under construction.

## Selection policies

- `nve` (`NaiveSelection`): takes the facility types in turn, cycling through the list.
- `bal` (`BalancedSelection`): picks the facility that keeps the three running
  scores closest together.
- `eco` (`EconomySelection`): cycles through facilities in the economy category only.
- `sus` (`SustainabilitySelection`): cycles through facilities in the environment
  category only.

A policy that finds nothing to pick raises `SelectionError`.

## Library use

The package is made up of these modules:

- `settlesim.settlement` defines `Settlement` and `SettlementType`.
- `settlesim.facility` defines `FacilityType`, `Facility`, `FacilityCategory`
  and `FacilityStatus`.
- `settlesim.selection_policy` holds the policies.
- `settlesim.plan` defines `Plan` and `PlanStatus`.
- `settlesim.actions` holds one action class per command.
- `settlesim.simulation` defines `Simulation`, `parse_command` and `ConfigError`.

```python
import io
from settlesim.simulation import Simulation

out = io.StringIO()
sim = Simulation("config.txt", out=out)
sim.step()
print(sim.get_plan(0))

sim.start(["step 3", "planStatus 0", "close"])
print(out.getvalue())
```

`Simulation()` with no path starts empty. `start` takes any iterable of lines
and reads standard input when given none. `out` defaults to standard output.

## Limits

Backups are kept in memory only. Nothing is saved to disk, and a backup is
lost when the program exits.