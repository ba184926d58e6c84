"""Calendar event data models: federal holidays and personal events."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

EventType = Literal["birthday", "anniversary", "appointment", "reminder", "custom"]
RecurrenceType = Literal["none", "daily", "weekly", "monthly", "yearly"]

DEFAULT_EVENT_COLOR = "#3B82F6"


class FederalHoliday(BaseModel):
    """A US federal holiday on its calendar date (no observed-day shift)."""

    name: str = Field(..., min_length=1, description="Holiday name")
    day: date = Field(..., description="Calendar date of the holiday")

    model_config = {"frozen": True}


class PersonalEvent(BaseModel):
    """A user-defined calendar event, optionally recurring."""

    id: Optional[int] = Field(default=None, description="Store ID, None until saved")
    title: str = Field(..., min_length=1, description="Event title")
    description: Optional[str] = Field(default=None, description="Optional details")
    event_date: date = Field(..., description="First (or only) occurrence")
    event_type: EventType = Field(default="custom", description="Kind of event")
    color: str = Field(default=DEFAULT_EVENT_COLOR, description="Display color as hex")
    recurrence_type: RecurrenceType = Field(default="none", description="How the event repeats")
    recurrence_interval: int = Field(
        default=1, ge=1, description="Repeat every N days, weeks or months"
    )

    model_config = {"frozen": True}


class EventInstance(BaseModel):
    """One occurrence of a personal event on a concrete day."""

    event_id: Optional[int] = Field(default=None, description="ID of the source event")
    title: str
    description: Optional[str] = None
    day: date
    event_type: EventType
    color: str
    is_recurring: bool = Field(..., description="Generated from a recurring event")

    model_config = {"frozen": True}
