"""Supervision log and recent activity listings."""

from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from hourtracker.engine import classifier
from hourtracker.engine.dates import parse_timestamp
from hourtracker.models import DayKeyedEntries, Entry
from hourtracker.models.options import (
    CE_CATEGORY_OPTIONS,
    CLINICAL_ACTIVITY_SUBTYPES,
    SUPERVISION_SUBTYPES,
    THERAPY_SUBTYPES,
    option_label,
)


class SupervisionSession(BaseModel):
    """A supervision entry as shown in the supervision log."""

    day_key: str = Field(..., description="Day the session was logged on")
    index: int = Field(..., ge=0, description="Position within the day")
    hours: float
    has_audio: bool
    has_video: bool
    notes: Optional[str] = None
    occurred_at: str

    model_config = {"frozen": True}


class ActivityItem(BaseModel):
    """A logged entry with its day, for activity listings."""

    day_key: str
    index: int = Field(..., ge=0)
    label: str
    entry: Entry

    model_config = {"frozen": True}


def display_label(entry: Entry) -> str:
    """Build a human-readable label for an entry."""
    if entry.category == "clinical":
        if classifier.is_direct_contact(entry):
            return option_label(THERAPY_SUBTYPES, entry.subtype)
        return option_label(CLINICAL_ACTIVITY_SUBTYPES, entry.subtype)
    if entry.category == "supervision":
        return f"Supervision ({option_label(SUPERVISION_SUBTYPES, entry.subtype)})"
    return f"CE: {option_label(CE_CATEGORY_OPTIONS, entry.ce_category)}"


def _indexed(entries: DayKeyedEntries):
    if not isinstance(entries, Mapping):
        return
    for day_key in sorted(entries):
        day_entries = entries[day_key]
        if not isinstance(day_entries, (list, tuple)):
            continue
        for index, entry in enumerate(day_entries):
            if isinstance(entry, Entry):
                yield day_key, index, entry


def _newest_first_key(item):
    day_key, _, entry = item
    moment = parse_timestamp(entry.occurred_at)
    # Unparseable timestamps sort after everything else
    return (moment is not None, moment or datetime.min, day_key)


def supervision_sessions(entries: DayKeyedEntries) -> list[SupervisionSession]:
    """List supervision entries, newest first."""
    items = [item for item in _indexed(entries) if classifier.is_supervision(item[2])]
    items.sort(key=_newest_first_key, reverse=True)
    return [
        SupervisionSession(
            day_key=day_key,
            index=index,
            hours=entry.hours,
            has_audio=entry.reviewed_audio,
            has_video=entry.reviewed_video,
            notes=entry.notes or None,
            occurred_at=entry.occurred_at,
        )
        for day_key, index, entry in items
    ]


def recent_activity(entries: DayKeyedEntries, limit: int = 10) -> list[ActivityItem]:
    """List the most recent entries across all days.

    Args:
        entries: Day-keyed entry collection.
        limit: Maximum number of items to return.

    Returns:
        Up to `limit` items, newest first by timestamp.
    """
    items = list(_indexed(entries))
    items.sort(key=_newest_first_key, reverse=True)
    return [
        ActivityItem(day_key=day_key, index=index, label=display_label(entry), entry=entry)
        for day_key, index, entry in items[: max(0, limit)]
    ]
