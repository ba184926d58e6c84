"""Expansion of personal events into dated occurrences.

Recurring events are expanded one calendar year at a time. Yearly and
monthly events repeat in every year, including years before the first
occurrence; weekly and daily events only repeat from their first
occurrence onward.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable

from hourtracker.models import EventInstance, PersonalEvent

# Upper bound on occurrences generated for one daily event in one year
MAX_DAILY_INSTANCES = 365


def _instance(event: PersonalEvent, day: date) -> EventInstance:
    return EventInstance(
        event_id=event.id,
        title=event.title,
        description=event.description,
        day=day,
        event_type=event.event_type,
        color=event.color,
        is_recurring=event.recurrence_type != "none",
    )


def _same_day_in_month(year: int, month: int, day: int):
    # Months without the day (Feb 30, Apr 31) are skipped
    if day > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day)


def recurring_instances(event: PersonalEvent, year: int) -> list[EventInstance]:
    """Expand an event into its occurrences within one calendar year.

    Args:
        event: The personal event.
        year: Calendar year to expand into.

    Returns:
        Occurrences in date order. Empty when the event does not occur
        in that year.
    """
    base = event.event_date
    interval = event.recurrence_interval
    start_of_year = date(year, 1, 1)
    end_of_year = date(year, 12, 31)
    days: list[date] = []

    if event.recurrence_type == "none":
        if base.year == year:
            days.append(base)

    elif event.recurrence_type == "yearly":
        day = _same_day_in_month(year, base.month, base.day)
        if day is not None:
            days.append(day)

    elif event.recurrence_type == "monthly":
        for month in range(1, 13):
            if (month - 1) % interval != (base.month - 1) % interval:
                continue
            day = _same_day_in_month(year, month, base.day)
            if day is not None:
                days.append(day)

    elif event.recurrence_type == "weekly":
        days = _stepped(base, 7 * interval, start_of_year, end_of_year)

    elif event.recurrence_type == "daily":
        days = _stepped(base, interval, start_of_year, end_of_year)[:MAX_DAILY_INSTANCES]

    return [_instance(event, day) for day in days]


def _stepped(base: date, step_days: int, start: date, end: date) -> list[date]:
    """Days base, base + step, ... that fall within start..end."""
    current = base
    if current < start:
        # Whole steps only, so the cadence carries across the year boundary
        steps = -(-(start - current).days // step_days)
        current += timedelta(days=step_days * steps)

    days = []
    while current <= end:
        days.append(current)
        current += timedelta(days=step_days)
    return days


def events_for_date(events: Iterable[PersonalEvent], day: date) -> list[EventInstance]:
    """Get the occurrences of any of the events that fall on a day."""
    return [
        instance
        for event in events
        for instance in recurring_instances(event, day.year)
        if instance.day == day
    ]


def events_for_year(events: Iterable[PersonalEvent], year: int) -> list[EventInstance]:
    """Get every occurrence of the events within a year, in date order."""
    instances = [
        instance for event in events for instance in recurring_instances(event, year)
    ]
    return sorted(instances, key=lambda instance: (instance.day, instance.title))
