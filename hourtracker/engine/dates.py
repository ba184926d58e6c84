"""Calendar helpers for day keys, the CE compliance cycle and elapsed time.

Everything works on the caller's local calendar. Functions that depend on
the current moment take an optional `now` so tests can pin the clock.
"""

from datetime import date, datetime
from typing import Optional, Union

from hourtracker.models.cycle import ComplianceCycle, ElapsedProgress
from hourtracker.models.requirement import ELAPSED_TARGET_DAYS

# Month the CE cycle rolls over (October)
CYCLE_START_MONTH = 10


def _local(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def _now(now: Optional[datetime]) -> datetime:
    return _local(now) if now is not None else datetime.now()


def day_key(value: Union[date, datetime]) -> str:
    """Format a date as a YYYY-MM-DD key in the local calendar.

    Args:
        value: A date or datetime. Aware datetimes are converted to local
            time before the calendar day is taken.

    Returns:
        Canonical day key.
    """
    if isinstance(value, datetime):
        value = _local(value)
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_day_key(key: str) -> date:
    """Parse a YYYY-MM-DD key as a local calendar date.

    Raises:
        ValueError: If the key is not a valid date.
    """
    try:
        year, month, day = (int(part) for part in key.strip().split("-"))
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid day key: {key!r}. Expected YYYY-MM-DD")
    return date(year, month, day)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Returns None for anything that cannot be parsed instead of raising.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    try:
        return _local(moment)
    except (OverflowError, ValueError, OSError):
        return None


def is_same_day(a: Union[date, datetime], b: Union[date, datetime]) -> bool:
    """Check whether two moments fall on the same local calendar day."""
    return day_key(a) == day_key(b)


def is_today(value: Union[date, datetime], now: Optional[datetime] = None) -> bool:
    """Check whether a moment falls on today's local calendar day."""
    return day_key(value) == day_key(_now(now))


def current_compliance_cycle(now: Optional[datetime] = None) -> ComplianceCycle:
    """Get the CE compliance cycle active at `now`.

    Cycles run for two years from Oct 1 to Sep 30. From January through
    September the active cycle began the previous October; from October
    onward a new cycle begins this October.
    """
    current = _now(now)
    if current.month < CYCLE_START_MONTH:
        start_year = current.year - 1
    else:
        start_year = current.year
    return ComplianceCycle(
        start=date(start_year, CYCLE_START_MONTH, 1),
        end=date(start_year + 2, 9, 30),
    )


def _coerce_start(start) -> Optional[date]:
    if start is None:
        return None
    if isinstance(start, datetime):
        return _local(start).date()
    if isinstance(start, date):
        return start
    if isinstance(start, str) and start.strip():
        try:
            return parse_day_key(start)
        except ValueError:
            moment = parse_timestamp(start)
            return moment.date() if moment else None
    return None


def elapsed_progress(
    start: Union[None, str, date, datetime],
    target_days: int = ELAPSED_TARGET_DAYS,
    now: Optional[datetime] = None,
) -> ElapsedProgress:
    """Calculate progress toward the minimum elapsed-time requirement.

    Elapsed time counts whole days between local midnight of the start date
    and local midnight of today.

    Args:
        start: Training start date (date, datetime or YYYY-MM-DD). None or an
            unparseable value means training has not started.
        target_days: Required duration in days.
        now: Current moment (defaults to the system clock).

    Returns:
        ElapsedProgress with percent clamped to [0, 100] and remaining days
        never below zero.

    Raises:
        ValueError: If target_days is not positive.
    """
    if target_days <= 0:
        raise ValueError(f"target_days must be positive, got {target_days}")

    start_date = _coerce_start(start)
    if start_date is None:
        return ElapsedProgress(progress_percent=0.0, remaining_days=target_days)

    today = _now(now).date()
    elapsed_days = max(0, (today - start_date).days)

    return ElapsedProgress(
        progress_percent=min(100.0, (elapsed_days / target_days) * 100),
        remaining_days=max(0, target_days - elapsed_days),
    )
