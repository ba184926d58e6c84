"""Data models for hourtracker."""

from hourtracker.models.cycle import ComplianceCycle, ElapsedProgress
from hourtracker.models.day import DayState, EmptyDay, LoggedDay, UnavailableDay, day_state
from hourtracker.models.entry import CECategory, Category, DayKeyedEntries, DeliveryFormat, Entry
from hourtracker.models.event import EventInstance, FederalHoliday, PersonalEvent
from hourtracker.models.marker import MarkerMap, UnavailabilityMarker
from hourtracker.models.mutation import (
    ConflictError,
    CreateEntry,
    CreateMarker,
    DeleteEntry,
    MutationOutcome,
    MutationRejected,
    NeedsConfirmation,
    Ok,
    ProposedChange,
    RemoveMarker,
    UpdateEntry,
    ValidationFailed,
)
from hourtracker.models.requirement import Requirement, RequirementStatus
from hourtracker.models.snapshot import ComplianceSnapshot

__all__ = [
    "CECategory",
    "Category",
    "ComplianceCycle",
    "ComplianceSnapshot",
    "ConflictError",
    "CreateEntry",
    "CreateMarker",
    "DayKeyedEntries",
    "DayState",
    "DeleteEntry",
    "DeliveryFormat",
    "ElapsedProgress",
    "EmptyDay",
    "Entry",
    "EventInstance",
    "FederalHoliday",
    "LoggedDay",
    "MarkerMap",
    "MutationOutcome",
    "MutationRejected",
    "NeedsConfirmation",
    "Ok",
    "PersonalEvent",
    "ProposedChange",
    "RemoveMarker",
    "Requirement",
    "RequirementStatus",
    "UnavailabilityMarker",
    "UnavailableDay",
    "UpdateEntry",
    "ValidationFailed",
    "day_state",
]
