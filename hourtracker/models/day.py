"""Per-day state as a tagged union.

A day is either empty, has logged entries, or is marked unavailable. The
two non-empty states are mutually exclusive; `day_state` refuses to build
a state from collections that hold both.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from hourtracker.models.entry import DayKeyedEntries, Entry
from hourtracker.models.marker import MarkerMap, UnavailabilityMarker


class EmptyDay(BaseModel):
    """A day with no entries and no marker."""

    state: Literal["empty"] = "empty"
    day_key: str

    model_config = {"frozen": True}


class LoggedDay(BaseModel):
    """A day with at least one logged entry."""

    state: Literal["logged"] = "logged"
    day_key: str
    entries: tuple[Entry, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}


class UnavailableDay(BaseModel):
    """A day carrying an unavailability marker."""

    state: Literal["unavailable"] = "unavailable"
    day_key: str
    marker: UnavailabilityMarker

    model_config = {"frozen": True}


DayState = Annotated[
    Union[EmptyDay, LoggedDay, UnavailableDay], Field(discriminator="state")
]


def day_state(entries: DayKeyedEntries, markers: MarkerMap, day_key: str) -> DayState:
    """Resolve the state of a single day.

    Args:
        entries: Day-keyed entry collection.
        markers: Unavailability markers keyed by day.
        day_key: Day to resolve.

    Returns:
        EmptyDay, LoggedDay or UnavailableDay.

    Raises:
        ValueError: If the day has both entries and a marker.
    """
    day_entries = entries.get(day_key) or []
    marker = markers.get(day_key)

    if day_entries and marker is not None:
        raise ValueError(
            f"Day {day_key} has both logged entries and an unavailability marker"
        )
    if marker is not None:
        return UnavailableDay(day_key=day_key, marker=marker)
    if day_entries:
        return LoggedDay(day_key=day_key, entries=tuple(day_entries))
    return EmptyDay(day_key=day_key)
