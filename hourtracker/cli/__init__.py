"""CLI commands for hourtracker.

This package provides the command-line interface for hourtracker,
including entry logging, unavailability markers and progress reports.
"""

from hourtracker.cli.main import cli, main

__all__ = ["cli", "main"]
