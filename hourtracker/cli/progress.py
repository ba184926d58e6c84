"""Progress and report commands for hourtracker CLI.

Shows the compliance snapshot, the requirement table, the supervision log
and recent activity, and manages the training start date.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from hourtracker.cli.common import console, resolve_day
from hourtracker.config import get_data_store, get_training_start_date
from hourtracker.engine.activity import recent_activity, supervision_sessions
from hourtracker.engine.dates import parse_day_key
from hourtracker.engine.progress import aggregate
from hourtracker.models import ComplianceSnapshot


def _training_start(store) -> Optional[str]:
    """Config file setting wins over the stored one."""
    return get_training_start_date() or store.get_training_start_date()


def _progress_color(percent: float) -> str:
    if percent >= 100:
        return "green"
    if percent >= 50:
        return "yellow"
    return "red"


def _load_snapshot() -> ComplianceSnapshot:
    store = get_data_store()
    return aggregate(store.get_entries(), _training_start(store))


@click.command("progress")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the snapshot as JSON.")
def show_progress(as_json: bool) -> None:
    """Show progress toward every licensing requirement."""
    snapshot = _load_snapshot()

    if as_json:
        click.echo(snapshot.model_dump_json(indent=2))
        return

    table = Table(title="Compliance Progress")
    table.add_column("Requirement", style="cyan")
    table.add_column("Hours", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")

    group = None
    for status in snapshot.requirements():
        if status.group != group:
            group = status.group
            table.add_row(f"[bold]{group.replace('-', ' ').title()}[/bold]", "", "", "")
        if status.is_cap:
            color = "green" if status.met else "red"
            target = f"max {status.target:g}"
        else:
            color = _progress_color(status.progress)
            target = f"{status.target:g}"
        table.add_row(
            f"  {status.label}",
            f"{status.hours:g}",
            target,
            f"[{color}]{status.progress:.1f}%[/{color}]",
        )

    console.print(table)

    cycle = snapshot.cycle
    console.print(
        Panel(
            f"Elapsed time: [bold]{snapshot.time_progress:.1f}%[/bold] "
            f"({snapshot.time_remaining} days remaining)\n"
            f"CE cycle: {cycle.start.isoformat()} to {cycle.end.isoformat()}",
            title="[bold]Timeline[/bold]",
        )
    )


@click.command("requirements")
@click.option("--unmet", is_flag=True, default=False, help="Only show unmet requirements.")
def show_requirements(unmet: bool) -> None:
    """Show remaining hours for each requirement."""
    snapshot = _load_snapshot()

    table = Table(title="Requirements")
    table.add_column("Requirement", style="cyan")
    table.add_column("Group")
    table.add_column("Hours", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Status")

    for status in snapshot.requirements():
        if unmet and status.met:
            continue
        if status.met:
            state = "[green]Met[/green]"
        elif status.is_cap:
            state = "[red]Over limit[/red]"
        else:
            state = "[yellow]In progress[/yellow]"
        table.add_row(
            status.label,
            status.group,
            f"{status.hours:g}",
            f"{status.remaining:g}",
            state,
        )

    console.print(table)


@click.command("supervision")
def show_supervision() -> None:
    """Show the supervision log, newest first."""
    store = get_data_store()
    sessions = supervision_sessions(store.get_entries())

    if not sessions:
        console.print("[dim]No supervision logged yet.[/dim]")
        return

    table = Table(title="Supervision Log")
    table.add_column("Date", style="cyan")
    table.add_column("Hours", justify="right")
    table.add_column("Audio")
    table.add_column("Video")
    table.add_column("Notes")

    for session in sessions:
        table.add_row(
            session.day_key,
            f"{session.hours:g}",
            "✓" if session.has_audio else "",
            "✓" if session.has_video else "",
            session.notes or "",
        )

    console.print(table)
    total = sum(session.hours for session in sessions)
    reviewed = sum(s.hours for s in sessions if s.has_audio or s.has_video)
    console.print(f"[bold]Total:[/bold] {total:g}h ({reviewed:g}h with audio/video review)")


@click.command("recent")
@click.option("-l", "--limit", type=click.IntRange(min=1), default=10, show_default=True,
              help="Number of entries to show.")
def show_recent(limit: int) -> None:
    """Show the most recently logged entries."""
    store = get_data_store()
    items = recent_activity(store.get_entries(), limit=limit)

    if not items:
        console.print("[dim]No activity yet.[/dim]")
        return

    table = Table(title="Recent Activity")
    table.add_column("Date", style="cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Activity")
    table.add_column("Hours", justify="right")

    for item in items:
        table.add_row(item.day_key, str(item.index + 1), item.label, f"{item.entry.hours:g}")

    console.print(table)


@click.command("start-date")
@click.argument("date", required=False)
def start_date(date: Optional[str]) -> None:
    """Show or set the training start date.

    Without DATE the current start date is shown. A start date in
    config.toml takes precedence over the stored one.
    """
    store = get_data_store()

    if date is None:
        current = _training_start(store)
        if current:
            console.print(f"Training start date: [bold]{current}[/bold]")
        else:
            console.print("[dim]No training start date set.[/dim]")
        return

    start = parse_day_key(resolve_day(date))
    store.set_training_start_date(start)
    console.print(f"[green]✓[/green] Training start date set to {start.isoformat()}")

    if get_training_start_date():
        console.print("[yellow]Note: config.toml sets a start date, which takes precedence.[/yellow]")
