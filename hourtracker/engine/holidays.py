"""US federal holidays.

Holidays fall on their calendar date. A holiday on a weekend is not
moved to the Friday or Monday it is observed on.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

from hourtracker.models import FederalHoliday

MONDAY = calendar.MONDAY
THURSDAY = calendar.THURSDAY


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Get the nth given weekday of a month (n starts at 1).

    Raises:
        ValueError: If the month has no such day.
    """
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    day = first + timedelta(days=offset + 7 * (n - 1))
    if n < 1 or day.month != month:
        raise ValueError(f"No weekday {weekday} number {n} in {year}-{month:02d}")
    return day


def last_weekday(year: int, month: int, weekday: int) -> date:
    """Get the last given weekday of a month."""
    last = date(year, month, calendar.monthrange(year, month)[1])
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def federal_holidays(year: int) -> list[FederalHoliday]:
    """List the eleven federal holidays of a year in calendar order."""
    return [
        FederalHoliday(name="New Year's Day", day=date(year, 1, 1)),
        FederalHoliday(name="Martin Luther King Jr. Day", day=nth_weekday(year, 1, MONDAY, 3)),
        FederalHoliday(name="Presidents' Day", day=nth_weekday(year, 2, MONDAY, 3)),
        FederalHoliday(name="Memorial Day", day=last_weekday(year, 5, MONDAY)),
        FederalHoliday(name="Juneteenth", day=date(year, 6, 19)),
        FederalHoliday(name="Independence Day", day=date(year, 7, 4)),
        FederalHoliday(name="Labor Day", day=nth_weekday(year, 9, MONDAY, 1)),
        FederalHoliday(name="Columbus Day", day=nth_weekday(year, 10, MONDAY, 2)),
        FederalHoliday(name="Veterans Day", day=date(year, 11, 11)),
        FederalHoliday(name="Thanksgiving Day", day=nth_weekday(year, 11, THURSDAY, 4)),
        FederalHoliday(name="Christmas Day", day=date(year, 12, 25)),
    ]


def holiday_name(value: Union[date, datetime]) -> Optional[str]:
    """Get the name of the federal holiday on a day, or None."""
    if isinstance(value, datetime):
        value = value.date()
    for holiday in federal_holidays(value.year):
        if holiday.day == value:
            return holiday.name
    return None


def is_federal_holiday(value: Union[date, datetime]) -> bool:
    return holiday_name(value) is not None
