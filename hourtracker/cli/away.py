"""Unavailability commands for hourtracker CLI."""

from typing import Optional

import click

from hourtracker.cli.common import console, report_rejection, resolve_day
from hourtracker.config import get_data_store
from hourtracker.engine.recorder import apply_change
from hourtracker.models import CreateMarker, RemoveMarker, UnavailabilityMarker


@click.command("away")
@click.argument("date")
@click.option("-r", "--reason", default="Out of office", help="Why you are unavailable.")
@click.option("-n", "--notes", default=None, help="Optional notes.")
def mark_away(date: str, reason: str, notes: Optional[str]) -> None:
    """Mark a day as out of office.

    A day with logged hours cannot be marked, and no hours can be logged
    on a marked day until it is cleared with 'hourtracker back DATE'.
    """
    key = resolve_day(date)
    store = get_data_store()

    marker = UnavailabilityMarker(day_key=key, reason=reason, notes=notes)
    outcome = apply_change(store, CreateMarker(marker=marker))
    if not outcome.ok:
        report_rejection(outcome)

    console.print(f"[green]✓[/green] {key} marked as out of office ({reason})")


@click.command("back")
@click.argument("date")
def clear_away(date: str) -> None:
    """Clear the out-of-office marker of a day."""
    key = resolve_day(date)
    store = get_data_store()

    apply_change(store, RemoveMarker(day_key=key))
    console.print(f"[green]✓[/green] {key} is available again")
