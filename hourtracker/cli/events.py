"""Calendar commands for hourtracker CLI.

Personal events (birthdays, appointments, reminders) and federal holidays
shown alongside the hours you log.
"""

import datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from hourtracker.cli.common import console, resolve_day, show_error
from hourtracker.config import get_data_store
from hourtracker.engine.dates import parse_day_key
from hourtracker.engine.events import events_for_year
from hourtracker.engine.holidays import federal_holidays
from hourtracker.models import PersonalEvent
from hourtracker.models.options import (
    EVENT_COLORS,
    EVENT_TYPE_OPTIONS,
    RECURRENCE_OPTIONS,
    option_label,
)

EVENT_TYPE_CHOICES = [option.value for option in EVENT_TYPE_OPTIONS]
RECURRENCE_CHOICES = [option.value for option in RECURRENCE_OPTIONS]


@click.command("event")
@click.argument("date")
@click.argument("title")
@click.option("-t", "--type", "event_type", type=click.Choice(EVENT_TYPE_CHOICES),
              default="custom", help="Kind of event.")
@click.option("-r", "--repeat", type=click.Choice(RECURRENCE_CHOICES), default="none",
              help="How the event repeats.")
@click.option("-e", "--every", type=click.IntRange(min=1), default=1,
              help="Repeat every N days, weeks or months.")
@click.option("-d", "--description", default=None, help="Optional details.")
@click.option("--color", type=click.Choice(list(EVENT_COLORS)), default="blue",
              help="Display color.")
def add_event(
    date: str,
    title: str,
    event_type: str,
    repeat: str,
    every: int,
    description: Optional[str],
    color: str,
) -> None:
    """Add a personal event.

    \b
    Examples:
      hourtracker event 1990-06-15 "Mom's birthday" -t birthday -r yearly
      hourtracker event 2024-09-05 "Group supervision" -r weekly -e 2
    """
    key = resolve_day(date)
    try:
        event = PersonalEvent(
            title=title,
            description=description,
            event_date=parse_day_key(key),
            event_type=event_type,
            color=EVENT_COLORS[color],
            recurrence_type=repeat,
            recurrence_interval=every,
        )
    except ValidationError as e:
        error = e.errors()[0]
        show_error(f"{error['loc'][0]}: {error['msg']}")
        raise SystemExit(1)

    store = get_data_store()
    event_id = store.add_event(event)

    repeats = "" if repeat == "none" else f", {option_label(RECURRENCE_OPTIONS, repeat).lower()}"
    console.print(f"[green]✓[/green] Added event #{event_id}: {escape(title)} on {key}{repeats}")


@click.command("events")
@click.argument("year", type=int, required=False)
@click.option("--holidays/--no-holidays", default=True, help="Include federal holidays.")
def list_events(year: Optional[int], holidays: bool) -> None:
    """List personal events and federal holidays in a year.

    YEAR defaults to the current year.
    """
    year = year or datetime.date.today().year
    store = get_data_store()

    rows = [
        (instance.day, instance.title, option_label(EVENT_TYPE_OPTIONS, instance.event_type),
         str(instance.event_id) if instance.event_id is not None else "")
        for instance in events_for_year(store.get_events(), year)
    ]
    if holidays:
        rows.extend(
            (holiday.day, holiday.name, "Federal holiday", "") for holiday in federal_holidays(year)
        )

    if not rows:
        console.print(f"[dim]No events in {year}.[/dim]")
        return

    table = Table(title=f"Events {year}")
    table.add_column("Date", style="cyan")
    table.add_column("Event")
    table.add_column("Type", style="magenta")
    table.add_column("ID", justify="right", style="dim")

    for day, title, kind, event_id in sorted(rows, key=lambda row: (row[0], row[1])):
        table.add_row(day.isoformat(), escape(title), kind, event_id)

    console.print(table)


@click.command("event-remove")
@click.argument("event_id", type=int)
def remove_event(event_id: int) -> None:
    """Remove a personal event by the ID shown in 'hourtracker events'."""
    store = get_data_store()

    if not store.deactivate_event(event_id):
        show_error(f"No event #{event_id}")
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Removed event #{event_id}")
