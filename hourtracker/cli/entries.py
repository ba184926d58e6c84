"""Entry commands for hourtracker CLI.

Handles logging, editing and deleting hours, and showing a single day.
Every change goes through the mutation guard before it is stored.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hourtracker.cli.common import (
    confirm_prompt,
    console,
    report_rejection,
    resolve_day,
    show_error,
    timestamp_for_day,
)
from hourtracker.config import get_data_store
from hourtracker.engine.activity import display_label
from hourtracker.engine.dates import parse_day_key
from hourtracker.engine.events import events_for_date
from hourtracker.engine.holidays import holiday_name
from hourtracker.engine.recorder import apply_change
from hourtracker.models import (
    CreateEntry,
    DeleteEntry,
    Entry,
    LoggedDay,
    UnavailableDay,
    UpdateEntry,
    day_state,
)
from hourtracker.models.options import (
    CE_CATEGORY_OPTIONS,
    DELIVERY_FORMAT_OPTIONS,
    EVENT_TYPE_OPTIONS,
    get_subtype_options,
    option_label,
)

CATEGORY_CHOICES = ["clinical", "supervision", "continuing-education"]
CE_CATEGORY_CHOICES = [option.value for option in CE_CATEGORY_OPTIONS]
FORMAT_CHOICES = [option.value for option in DELIVERY_FORMAT_OPTIONS]


def _build_entry(fields: dict) -> Entry:
    try:
        return Entry.model_validate(fields)
    except ValidationError as e:
        show_error(str(e.errors()[0]["msg"]))
        raise SystemExit(1)


def _store_change(store, change, yes: bool) -> None:
    outcome = apply_change(store, change, confirm=confirm_prompt, confirmed=yes)
    if not outcome.ok:
        report_rejection(outcome)


@click.command("log")
@click.argument("date")
@click.option("-c", "--category", type=click.Choice(CATEGORY_CHOICES), required=True,
              help="Hour category.")
@click.option("-s", "--subtype", default="", help="Therapy type, supervision format or CE type.")
@click.option("-H", "--hours", type=float, required=True, help="Hours to log.")
@click.option("-n", "--notes", default="", help="Notes for the entry.")
@click.option("--audio", is_flag=True, default=False, help="Supervision reviewed audio.")
@click.option("--video", is_flag=True, default=False, help="Supervision reviewed video.")
@click.option("--ce-category", type=click.Choice(CE_CATEGORY_CHOICES), default=None,
              help="CE category (continuing education).")
@click.option("--format", "delivery_format", type=click.Choice(FORMAT_CHOICES), default=None,
              help="CE delivery format (continuing education).")
@click.option("--at", "occurred_at", default=None,
              help="ISO-8601 timestamp for the entry (default: DATE at the current time).")
@click.option("-y", "--yes", is_flag=True, default=False,
              help="Skip the confirmation for long days.")
def log_hours(
    date: str,
    category: str,
    subtype: str,
    hours: float,
    notes: str,
    audio: bool,
    video: bool,
    ce_category: Optional[str],
    delivery_format: Optional[str],
    occurred_at: Optional[str],
    yes: bool,
) -> None:
    """Log hours on a day.

    DATE is YYYY-MM-DD, 'today' or 'yesterday'.

    \b
    Examples:
      hourtracker log today -c clinical -s family -H 1.5
      hourtracker log 2024-03-02 -c supervision -s group -H 2 --video
      hourtracker log today -c continuing-education -s webinar -H 3 \\
          --ce-category ethics-law-tech --format online-interactive
    """
    key = resolve_day(date)
    entry = _build_entry({
        "category": category,
        "subtype": subtype,
        "hours": hours,
        "notes": notes,
        "reviewed_audio": audio,
        "reviewed_video": video,
        "occurred_at": occurred_at or timestamp_for_day(key),
        "ce_category": ce_category,
        "delivery_format": delivery_format,
    })

    known = [option.value for option in get_subtype_options(entry.category)]
    if entry.subtype and entry.subtype not in known:
        console.print(
            f"[yellow]Unknown subtype '{escape(entry.subtype)}' (expected one of: {', '.join(known)})[/yellow]"
        )

    store = get_data_store()
    _store_change(store, CreateEntry(day_key=key, entry=entry), yes)

    console.print(f"[green]✓[/green] Logged {entry.hours:g}h of {display_label(entry)} on {key}")


@click.command("edit")
@click.argument("date")
@click.argument("index", type=int)
@click.option("-c", "--category", type=click.Choice(CATEGORY_CHOICES), default=None)
@click.option("-s", "--subtype", default=None)
@click.option("-H", "--hours", type=float, default=None)
@click.option("-n", "--notes", default=None)
@click.option("--audio/--no-audio", default=None)
@click.option("--video/--no-video", default=None)
@click.option("--ce-category", type=click.Choice(CE_CATEGORY_CHOICES), default=None)
@click.option("--format", "delivery_format", type=click.Choice(FORMAT_CHOICES), default=None)
@click.option("--at", "occurred_at", default=None)
@click.option("-y", "--yes", is_flag=True, default=False)
def edit_entry(
    date: str,
    index: int,
    category: Optional[str],
    subtype: Optional[str],
    hours: Optional[float],
    notes: Optional[str],
    audio: Optional[bool],
    video: Optional[bool],
    ce_category: Optional[str],
    delivery_format: Optional[str],
    occurred_at: Optional[str],
    yes: bool,
) -> None:
    """Edit an entry on a day.

    INDEX is the entry number shown by 'hourtracker day DATE'. Options
    that are not given keep their current value.
    """
    key = resolve_day(date)
    store = get_data_store()

    day_entries = store.get_day_entries(key)
    if not 1 <= index <= len(day_entries):
        show_error(f"No entry #{index} on {key}")
        raise SystemExit(1)

    updates = {
        "category": category,
        "subtype": subtype,
        "hours": hours,
        "notes": notes,
        "reviewed_audio": audio,
        "reviewed_video": video,
        "ce_category": ce_category,
        "delivery_format": delivery_format,
        "occurred_at": occurred_at,
    }
    fields = day_entries[index - 1].model_dump()
    fields.update({name: value for name, value in updates.items() if value is not None})
    entry = _build_entry(fields)

    _store_change(store, UpdateEntry(day_key=key, index=index - 1, entry=entry), yes)

    console.print(f"[green]✓[/green] Updated entry #{index} on {key}")


@click.command("delete")
@click.argument("date")
@click.argument("index", type=int)
def delete_entry(date: str, index: int) -> None:
    """Delete an entry from a day.

    INDEX is the entry number shown by 'hourtracker day DATE'.
    """
    key = resolve_day(date)
    store = get_data_store()

    outcome = apply_change(store, DeleteEntry(day_key=key, index=index - 1))
    if not outcome.ok:
        report_rejection(outcome)

    console.print(f"[green]✓[/green] Deleted entry #{index} on {key}")


def _show_calendar(store, key: str) -> None:
    day = parse_day_key(key)
    name = holiday_name(day)
    if name:
        console.print(f"[magenta]Federal holiday:[/magenta] {name}")
    for instance in events_for_date(store.get_events(), day):
        kind = option_label(EVENT_TYPE_OPTIONS, instance.event_type)
        console.print(f"[cyan]Event:[/cyan] {escape(instance.title)} ({kind})")


@click.command("day")
@click.argument("date", default="today")
def show_day(date: str) -> None:
    """Show the entries or unavailability of a day.

    Federal holidays and personal events on the day are listed first.
    """
    key = resolve_day(date)
    store = get_data_store()

    try:
        state = day_state(store.get_entries(), store.get_markers(), key)
    except ValueError as e:
        show_error(str(e))
        raise SystemExit(1)

    _show_calendar(store, key)

    if isinstance(state, UnavailableDay):
        body = f"[yellow]Out of office[/yellow]: {state.marker.reason}"
        if state.marker.notes:
            body += f"\n[dim]{state.marker.notes}[/dim]"
        console.print(Panel(body, title=f"[bold]{key}[/bold]"))
        return

    if not isinstance(state, LoggedDay):
        console.print(f"[dim]No hours logged on {key}.[/dim]")
        return

    table = Table(title=key)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Activity", style="cyan")
    table.add_column("Hours", justify="right")
    table.add_column("Review")
    table.add_column("Notes")

    for position, entry in enumerate(state.entries, start=1):
        review = []
        if entry.reviewed_audio:
            review.append("audio")
        if entry.reviewed_video:
            review.append("video")
        table.add_row(
            str(position),
            display_label(entry),
            f"{entry.hours:g}",
            ", ".join(review) or "-",
            entry.notes or "",
        )

    console.print(table)
    total = sum(entry.hours for entry in state.entries)
    console.print(f"[bold]Total:[/bold] {total:g}h")
