"""Entry data model."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

Category = Literal["clinical", "supervision", "continuing-education"]
CECategory = Literal["general", "ethics-law-tech", "suicide-prevention", "mft-specific"]
DeliveryFormat = Literal["in-person", "online-interactive", "online-non-interactive"]

# Older records used the form's tab names as categories
LEGACY_CATEGORIES = {
    "session": "clinical",
    "psychotherapy": "clinical",
    "ce": "continuing-education",
}


class Entry(BaseModel):
    """Represents one unit of logged time."""

    category: Category = Field(..., description="Regulatory category")
    subtype: str = Field(
        default="", description="Therapy modality, supervision format or CE activity"
    )
    hours: float = Field(..., description="Hours logged")
    notes: str = Field(default="", description="Free-form notes")
    reviewed_audio: bool = Field(default=False, description="Reviewed by audio")
    reviewed_video: bool = Field(default=False, description="Reviewed by video")
    occurred_at: str = Field(..., description="ISO-8601 timestamp of the entry")
    ce_category: Optional[CECategory] = Field(
        default=None, description="CE category (continuing education only)"
    )
    delivery_format: Optional[DeliveryFormat] = Field(
        default=None, description="CE delivery format (continuing education only)"
    )

    model_config = {"frozen": True}

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, str):
            return LEGACY_CATEGORIES.get(v, v)
        return v


DayKeyedEntries = dict[str, list[Entry]]
