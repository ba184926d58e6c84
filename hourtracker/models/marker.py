"""UnavailabilityMarker data model."""

from typing import Optional

from pydantic import BaseModel, Field


class UnavailabilityMarker(BaseModel):
    """Marks a single day as unavailable for logging (e.g. leave)."""

    day_key: str = Field(..., description="Day key in YYYY-MM-DD format")
    reason: str = Field(default="Out of office", description="Why the day is unavailable")
    notes: Optional[str] = Field(default=None, description="Optional notes")

    model_config = {"frozen": True}


MarkerMap = dict[str, UnavailabilityMarker]
