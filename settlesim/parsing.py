"""Splitting of command and configuration lines."""

from __future__ import annotations


def parse_arguments(line: str) -> list[str]:
    """Split a line into its whitespace-separated arguments."""
    return line.split()