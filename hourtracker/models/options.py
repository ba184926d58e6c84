"""Option tables for entry subtypes, CE fields and personal events."""

from typing import Optional

from pydantic import BaseModel, Field


class Option(BaseModel):
    """A selectable value with its display label."""

    value: str = Field(..., min_length=1, description="Stored value")
    label: str = Field(..., description="Display label")
    required: Optional[float] = Field(
        default=None, ge=0, description="Hours required per cycle (CE categories)"
    )

    model_config = {"frozen": True}


THERAPY_SUBTYPES = [
    Option(value="individual", label="Individual Therapy"),
    Option(value="family", label="Family Therapy"),
    Option(value="couple", label="Couple/Marriage Therapy"),
]

CLINICAL_ACTIVITY_SUBTYPES = [
    Option(value="assessment", label="Assessment/Evaluation"),
    Option(value="consultation", label="Consultation"),
    Option(value="documentation", label="Documentation/Case Notes"),
    Option(value="other", label="Other Clinical Activities"),
]

SUPERVISION_SUBTYPES = [
    Option(value="individual", label="Individual"),
    Option(value="group", label="Group"),
]

CE_SUBTYPES = [
    Option(value="workshop", label="Workshop"),
    Option(value="conference", label="Conference"),
    Option(value="webinar", label="Webinar"),
    Option(value="course", label="Course"),
    Option(value="other", label="Other"),
]

CE_CATEGORY_OPTIONS = [
    Option(value="general", label="General CE", required=17),
    Option(value="ethics-law-tech", label="Ethics, Law, or Technology", required=6),
    Option(value="suicide-prevention", label="Suicide Prevention", required=2),
    Option(value="mft-specific", label="MFT-Specific", required=15),
]

DELIVERY_FORMAT_OPTIONS = [
    Option(value="in-person", label="In-Person"),
    Option(value="online-interactive", label="Online Interactive (Live/Real-time)"),
    Option(value="online-non-interactive", label="Online Non-Interactive (Self-paced/Recorded)"),
]

EVENT_TYPE_OPTIONS = [
    Option(value="birthday", label="Birthday"),
    Option(value="anniversary", label="Anniversary"),
    Option(value="appointment", label="Appointment"),
    Option(value="reminder", label="Reminder"),
    Option(value="custom", label="Custom"),
]

RECURRENCE_OPTIONS = [
    Option(value="none", label="One-time"),
    Option(value="daily", label="Daily"),
    Option(value="weekly", label="Weekly"),
    Option(value="monthly", label="Monthly"),
    Option(value="yearly", label="Yearly"),
]

EVENT_COLORS = {
    "blue": "#3B82F6",
    "purple": "#8B5CF6",
    "green": "#10B981",
    "yellow": "#F59E0B",
    "orange": "#F97316",
    "pink": "#EC4899",
    "indigo": "#6366F1",
    "teal": "#14B8A6",
}

SUBTYPE_OPTIONS = {
    "clinical": THERAPY_SUBTYPES + CLINICAL_ACTIVITY_SUBTYPES,
    "supervision": SUPERVISION_SUBTYPES,
    "continuing-education": CE_SUBTYPES,
}


def get_subtype_options(category: str) -> list[Option]:
    """Get the subtype options offered for a category."""
    return SUBTYPE_OPTIONS.get(category, [])


def option_label(options: list[Option], value: Optional[str]) -> str:
    """Look up the label for a value, falling back to the value itself."""
    for option in options:
        if option.value == value:
            return option.label
    return value or "-"
