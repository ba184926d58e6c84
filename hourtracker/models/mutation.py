"""Proposed changes and mutation outcomes."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from hourtracker.models.entry import Entry
from hourtracker.models.marker import UnavailabilityMarker


class CreateEntry(BaseModel):
    """Add an entry to a day."""

    action: Literal["create-entry"] = "create-entry"
    day_key: str = Field(..., description="Target day")
    entry: Entry

    model_config = {"frozen": True}


class UpdateEntry(BaseModel):
    """Replace the entry at `index` within a day."""

    action: Literal["update-entry"] = "update-entry"
    day_key: str = Field(..., description="Target day")
    index: int = Field(..., description="Position of the entry within the day")
    entry: Entry

    model_config = {"frozen": True}


class DeleteEntry(BaseModel):
    """Remove the entry at `index` within a day."""

    action: Literal["delete-entry"] = "delete-entry"
    day_key: str = Field(..., description="Target day")
    index: int = Field(..., description="Position of the entry within the day")

    model_config = {"frozen": True}


class CreateMarker(BaseModel):
    """Mark a day as unavailable."""

    action: Literal["create-marker"] = "create-marker"
    marker: UnavailabilityMarker

    model_config = {"frozen": True}

    @property
    def day_key(self) -> str:
        return self.marker.day_key


class RemoveMarker(BaseModel):
    """Clear a day's unavailability marker."""

    action: Literal["remove-marker"] = "remove-marker"
    day_key: str = Field(..., description="Target day")

    model_config = {"frozen": True}


ProposedChange = Union[CreateEntry, UpdateEntry, DeleteEntry, CreateMarker, RemoveMarker]


class Ok(BaseModel):
    """The change may be persisted."""

    outcome: Literal["ok"] = "ok"

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return True


class NeedsConfirmation(BaseModel):
    """The change is valid but needs an explicit confirmation first."""

    outcome: Literal["needs-confirmation"] = "needs-confirmation"
    reason: str

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return False


class ValidationFailed(BaseModel):
    """A required field is missing or invalid."""

    outcome: Literal["validation-failed"] = "validation-failed"
    reason: str
    field: Optional[str] = Field(default=None, description="Offending field")

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return False


class ConflictError(BaseModel):
    """The change would put a day into a mutually exclusive state."""

    outcome: Literal["conflict"] = "conflict"
    reason: str

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return False


MutationOutcome = Union[Ok, NeedsConfirmation, ValidationFailed, ConflictError]


class MutationRejected(Exception):
    """Raised when a change is not allowed through."""

    def __init__(self, outcome: MutationOutcome):
        self.outcome = outcome
        super().__init__(getattr(outcome, "reason", outcome.outcome))
