"""Turn-based simulation of settlements building facilities under selection policies."""

__version__ = "0.1.0"