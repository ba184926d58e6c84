"""Helpers shared by the hourtracker CLI commands."""

from datetime import date, datetime

import click
from rich.console import Console
from rich.panel import Panel

from hourtracker.engine.dates import day_key, parse_day_key
from hourtracker.models import MutationOutcome, NeedsConfirmation

console = Console()


def resolve_day(value: str) -> str:
    """Turn a DATE argument ("today", "yesterday" or YYYY-MM-DD) into a day key."""
    lowered = value.strip().lower()
    if lowered == "today":
        return day_key(date.today())
    if lowered == "yesterday":
        return day_key(date.fromordinal(date.today().toordinal() - 1))
    try:
        return day_key(parse_day_key(value))
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a date (use YYYY-MM-DD or 'today')")


def timestamp_for_day(key: str) -> str:
    """Build an entry timestamp on the given day at the current time of day."""
    now = datetime.now()
    moment = datetime.combine(parse_day_key(key), now.time())
    return moment.isoformat(timespec="seconds")


def show_error(message: str) -> None:
    console.print(Panel(f"[red]{message}[/red]", title="[bold red]Error[/bold red]"))


def report_rejection(outcome: MutationOutcome) -> None:
    """Render a non-Ok guard outcome and exit with status 1."""
    if isinstance(outcome, NeedsConfirmation):
        console.print("[yellow]Not saved.[/yellow]")
    else:
        show_error(outcome.reason)
    raise SystemExit(1)


def confirm_prompt(message: str) -> bool:
    return click.confirm(message, default=False)
