"""Main CLI entry point for hourtracker.

This module provides the main click group and lazy loading
of subcommand modules.
"""

import logging

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Entries
    "log": "hourtracker.cli.entries",
    "edit": "hourtracker.cli.entries",
    "delete": "hourtracker.cli.entries",
    "day": "hourtracker.cli.entries",
    # Unavailability
    "away": "hourtracker.cli.away",
    "back": "hourtracker.cli.away",
    # Calendar
    "event": "hourtracker.cli.events",
    "events": "hourtracker.cli.events",
    "event-remove": "hourtracker.cli.events",
    # Reports
    "progress": "hourtracker.cli.progress",
    "requirements": "hourtracker.cli.progress",
    "supervision": "hourtracker.cli.progress",
    "recent": "hourtracker.cli.progress",
    "start-date": "hourtracker.cli.progress",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="hourtracker")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """hourtracker - track supervised hours toward MFT licensure.

    Log clinical, supervision and continuing-education hours and see
    how far along you are on every licensing requirement.

    \b
    Quick Start:
      hourtracker log today -c clinical -s individual -H 2
      hourtracker away 2024-12-24 --reason Holiday
      hourtracker progress
    """
    from hourtracker.config import get_log_level

    level = logging.DEBUG if verbose else getattr(logging, get_log_level(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
