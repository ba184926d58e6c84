"""Validation and conflict rules applied before any change is persisted.

The guard is stateless: every call receives the current entries and
markers and returns an outcome. It reports the first problem it finds,
in a fixed order, and never touches storage.
"""

import logging
from collections.abc import Mapping
from typing import Optional

from hourtracker.engine.dates import day_key as format_day_key
from hourtracker.engine.dates import parse_day_key
from hourtracker.models import (
    ConflictError,
    CreateEntry,
    CreateMarker,
    DayKeyedEntries,
    DeleteEntry,
    Entry,
    LoggedDay,
    MarkerMap,
    MutationOutcome,
    NeedsConfirmation,
    Ok,
    ProposedChange,
    RemoveMarker,
    UnavailableDay,
    UpdateEntry,
    ValidationFailed,
    day_state,
)

logger = logging.getLogger(__name__)

# Entries above this many hours need an explicit confirmation
CONFIRMATION_THRESHOLD_HOURS = 16

DAY_UNAVAILABLE = "Cannot add hours to a day marked as out of office"
HOURS_ALREADY_LOGGED = "Cannot mark day as out of office when hours are already logged"
ALREADY_UNAVAILABLE = "Day is already marked as out of office"


def validate_entry(entry: Entry) -> Optional[ValidationFailed]:
    """Check the required fields of an entry.

    Args:
        entry: Entry to check.

    Returns:
        The first ValidationFailed found, or None if the entry is complete.
    """
    if not entry.hours > 0:
        return ValidationFailed(reason="Please enter valid hours", field="hours")

    if entry.category == "continuing-education":
        if not entry.subtype or not entry.subtype.strip():
            return ValidationFailed(reason="Please select a CE type", field="subtype")
        if not entry.ce_category:
            return ValidationFailed(reason="Please select a CE category", field="ce_category")
        if not entry.delivery_format:
            return ValidationFailed(
                reason="Please select a delivery format", field="delivery_format"
            )
    elif not entry.subtype or not entry.subtype.strip():
        return ValidationFailed(reason="Please select a subtype", field="subtype")

    return None


def needs_confirmation(entry: Entry) -> bool:
    """Check whether an entry crosses the soft hour threshold."""
    return entry.hours > CONFIRMATION_THRESHOLD_HOURS


def canonical_change(change: ProposedChange) -> ProposedChange:
    """Return the change with its day key in canonical YYYY-MM-DD form.

    "2024-1-5" and "2024-01-05 " both name 2024-01-05.

    Raises:
        ValueError: If the day key is not a valid date.
    """
    key = format_day_key(parse_day_key(change.day_key))
    if key == change.day_key:
        return change
    if isinstance(change, CreateMarker):
        marker = change.marker.model_copy(update={"day_key": key})
        return change.model_copy(update={"marker": marker})
    return change.model_copy(update={"day_key": key})


def _by_canonical_day(collection) -> dict:
    # Keys that are not valid dates can never match a change and are skipped
    if not isinstance(collection, Mapping):
        return {}

    canonical = {}
    for raw_key in sorted(collection, key=str):
        try:
            key = format_day_key(parse_day_key(raw_key))
        except ValueError:
            continue
        value = collection[raw_key]
        if key not in canonical:
            canonical[key] = value
        elif isinstance(canonical[key], (list, tuple)) and isinstance(value, (list, tuple)):
            canonical[key] = [*canonical[key], *value]
    return canonical


def _check_entry_write(
    entries: DayKeyedEntries,
    markers: MarkerMap,
    day_key: str,
    entry: Entry,
    index: Optional[int],
    confirmed: bool,
) -> MutationOutcome:
    try:
        state = day_state(entries, markers, day_key)
    except ValueError as e:
        return ConflictError(reason=str(e))

    if isinstance(state, UnavailableDay):
        return ConflictError(reason=DAY_UNAVAILABLE)

    if index is not None:
        day_entries = state.entries if isinstance(state, LoggedDay) else ()
        if not 0 <= index < len(day_entries):
            return ValidationFailed(reason="Entry not found for update", field="index")

    failure = validate_entry(entry)
    if failure is not None:
        return failure

    if needs_confirmation(entry) and not confirmed:
        return NeedsConfirmation(
            reason=f"You entered more than {CONFIRMATION_THRESHOLD_HOURS} hours in a day. "
            "Is this correct?"
        )

    return Ok()


def _check_entry_delete(entries: DayKeyedEntries, day_key: str, index: int) -> MutationOutcome:
    day_entries = entries.get(day_key) or []
    if not 0 <= index < len(day_entries):
        return ValidationFailed(reason="Entry not found for delete", field="index")
    return Ok()


def _check_marker_create(
    entries: DayKeyedEntries, markers: MarkerMap, change: CreateMarker
) -> MutationOutcome:
    try:
        state = day_state(entries, markers, change.day_key)
    except ValueError as e:
        return ConflictError(reason=str(e))

    if isinstance(state, LoggedDay):
        return ConflictError(reason=HOURS_ALREADY_LOGGED)
    if isinstance(state, UnavailableDay):
        return ConflictError(reason=ALREADY_UNAVAILABLE)

    if not change.marker.reason or not change.marker.reason.strip():
        return ValidationFailed(reason="Please give a reason", field="reason")

    return Ok()


def validate_mutation(
    current_entries: DayKeyedEntries,
    current_markers: MarkerMap,
    change: ProposedChange,
    confirmed: bool = False,
) -> MutationOutcome:
    """Decide whether a proposed change may be persisted.

    Every change's day key is canonicalized first, and so are the keys of
    the current collections, so "2024-1-5" and "2024-01-05" are one day.
    A key that is not a date fails with field "day_key". Checks for entry
    writes then run in this order: unavailability conflict, target index,
    hours, required fields, soft hour threshold.

    Args:
        current_entries: Day-keyed entries as they are now.
        current_markers: Unavailability markers as they are now.
        change: The proposed change.
        confirmed: Whether the caller already confirmed an entry above the
            soft hour threshold.

    Returns:
        Ok, NeedsConfirmation, ValidationFailed or ConflictError.
    """
    if not isinstance(change, (CreateEntry, UpdateEntry, DeleteEntry, CreateMarker, RemoveMarker)):
        raise TypeError(f"Unsupported change: {type(change).__name__}")

    try:
        change = canonical_change(change)
    except ValueError as e:
        logger.debug(f"{change.action} rejected: {e}")
        return ValidationFailed(reason=str(e), field="day_key")

    entries = _by_canonical_day(current_entries)
    markers = _by_canonical_day(current_markers)

    if isinstance(change, CreateEntry):
        outcome = _check_entry_write(
            entries, markers, change.day_key, change.entry, None, confirmed
        )
    elif isinstance(change, UpdateEntry):
        outcome = _check_entry_write(
            entries, markers, change.day_key, change.entry, change.index, confirmed
        )
    elif isinstance(change, DeleteEntry):
        outcome = _check_entry_delete(entries, change.day_key, change.index)
    elif isinstance(change, CreateMarker):
        outcome = _check_marker_create(entries, markers, change)
    else:
        outcome = Ok()

    if not outcome.ok:
        logger.debug(f"{change.action} on {change.day_key} rejected: {outcome.outcome}")
    return outcome
