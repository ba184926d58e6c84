"""Apply guarded changes to a persistence collaborator.

The recorder reads the current state from the store, asks the guard, asks
the confirmation collaborator when the guard wants one, and only then
writes. The store is anything with the DataStore entry and marker methods.
"""

import logging
from typing import Callable, Optional

from hourtracker.engine.guard import canonical_change, validate_mutation
from hourtracker.models import (
    CreateEntry,
    CreateMarker,
    DeleteEntry,
    MutationOutcome,
    MutationRejected,
    NeedsConfirmation,
    ProposedChange,
    RemoveMarker,
    UpdateEntry,
)

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def _persist(store, change: ProposedChange) -> None:
    if isinstance(change, CreateEntry):
        store.add_entry(change.day_key, change.entry)
    elif isinstance(change, UpdateEntry):
        store.update_entry(change.day_key, change.index, change.entry)
    elif isinstance(change, DeleteEntry):
        store.delete_entry(change.day_key, change.index)
    elif isinstance(change, CreateMarker):
        store.add_marker(change.marker)
    elif isinstance(change, RemoveMarker):
        store.remove_marker(change.day_key)


def apply_change(
    store,
    change: ProposedChange,
    confirm: Optional[Confirm] = None,
    confirmed: bool = False,
) -> MutationOutcome:
    """Validate a change against the store's current state and persist it.

    Args:
        store: Persistence collaborator (e.g. DataStore).
        change: The proposed change.
        confirm: Called with the prompt text when an entry needs
            confirmation. Without it such entries are not saved.
        confirmed: Treat the soft threshold as already confirmed.

    Returns:
        The guard's final outcome. Nothing is written unless it is Ok.
    """
    entries = store.get_entries()
    markers = store.get_markers()

    outcome = validate_mutation(entries, markers, change, confirmed=confirmed)
    if isinstance(outcome, NeedsConfirmation) and confirm is not None:
        if confirm(outcome.reason):
            outcome = validate_mutation(entries, markers, change, confirmed=True)

    if not outcome.ok:
        return outcome

    change = canonical_change(change)
    _persist(store, change)
    logger.info(f"Applied {change.action} on {change.day_key}")
    return outcome


def apply_change_or_raise(
    store,
    change: ProposedChange,
    confirm: Optional[Confirm] = None,
    confirmed: bool = False,
) -> MutationOutcome:
    """Like apply_change, but raise instead of returning a rejection.

    Raises:
        MutationRejected: If the change was not persisted.
    """
    outcome = apply_change(store, change, confirm=confirm, confirmed=confirmed)
    if not outcome.ok:
        raise MutationRejected(outcome)
    return outcome
