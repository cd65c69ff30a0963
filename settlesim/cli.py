"""Command-line entry point."""

from __future__ import annotations

import sys

from .simulation import ConfigError, Simulation


def main(argv: list[str] | None = None) -> int:
    """Load a configuration file and run the interactive simulation."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("usage: simulation <config_path>")
        return 0
    try:
        simulation = Simulation(args[0])
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    simulation.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())