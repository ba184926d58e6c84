"""Regulatory targets and per-requirement status."""

from pydantic import BaseModel, Field

CLINICAL_TARGET = 3000
ENDORSEMENT_TARGET = 4000
DIRECT_CONTACT_TARGET = 1000
RELATIONAL_TARGET = 500
SUPERVISION_TARGET = 100
REVIEW_METHOD_TARGET = 25
CE_CYCLE_TARGET = 40
ETHICS_LAW_TECH_TARGET = 6
SUICIDE_PREVENTION_TARGET = 2
MFT_SPECIFIC_TARGET = 15
GENERAL_CE_TARGET = 17  # 40 - 6 - 2 - 15
NON_INTERACTIVE_CAP = 15
ELAPSED_TARGET_DAYS = 730


def general_ce_residual(
    total: float,
    ethics_law_tech: float,
    suicide_prevention: float,
    mft_specific: float,
) -> float:
    """Calculate general CE hours as what the named categories leave over.

    Returns:
        The residual, never below zero.
    """
    return max(0.0, total - ethics_law_tech - suicide_prevention - mft_specific)


class Requirement(BaseModel):
    """One row of the fixed target table."""

    key: str = Field(..., min_length=1, description="Stable identifier")
    label: str = Field(..., description="Display label")
    group: str = Field(..., description="clinical, supervision or continuing-education")
    hours_field: str = Field(..., description="Snapshot field holding the hours")
    target: float = Field(..., gt=0, description="Target hours")
    is_cap: bool = Field(default=False, description="Target is a maximum, not a minimum")

    model_config = {"frozen": True}


class RequirementStatus(BaseModel):
    """A requirement evaluated against a snapshot."""

    key: str
    label: str
    group: str
    hours: float
    target: float
    progress: float = Field(..., description="Percent of target, not clamped")
    remaining: float = Field(..., ge=0, description="Hours left (or allowance left for caps)")
    met: bool
    is_cap: bool = False

    model_config = {"frozen": True}


REQUIREMENTS = [
    Requirement(key="clinical", label="Supervised clinical training", group="clinical",
                hours_field="total_clinical_hours", target=CLINICAL_TARGET),
    Requirement(key="endorsement", label="Clinical hours (endorsement)", group="clinical",
                hours_field="total_clinical_hours", target=ENDORSEMENT_TARGET),
    Requirement(key="direct-contact", label="Mental health therapy", group="clinical",
                hours_field="direct_contact_hours", target=DIRECT_CONTACT_TARGET),
    Requirement(key="relational", label="Relational therapy", group="clinical",
                hours_field="relational_hours", target=RELATIONAL_TARGET),
    Requirement(key="supervision", label="Supervision", group="supervision",
                hours_field="total_supervision_hours", target=SUPERVISION_TARGET),
    Requirement(key="review-method", label="Supervision with audio/video review",
                group="supervision", hours_field="review_method_hours",
                target=REVIEW_METHOD_TARGET),
    Requirement(key="ce-cycle", label="Continuing education (cycle)",
                group="continuing-education", hours_field="ce_cycle_hours",
                target=CE_CYCLE_TARGET),
    Requirement(key="ethics-law-tech", label="Ethics, Law, or Technology",
                group="continuing-education", hours_field="ethics_law_tech_hours",
                target=ETHICS_LAW_TECH_TARGET),
    Requirement(key="suicide-prevention", label="Suicide Prevention",
                group="continuing-education", hours_field="suicide_prevention_hours",
                target=SUICIDE_PREVENTION_TARGET),
    Requirement(key="mft-specific", label="MFT-Specific", group="continuing-education",
                hours_field="mft_specific_hours", target=MFT_SPECIFIC_TARGET),
    Requirement(key="general-ce", label="General CE", group="continuing-education",
                hours_field="general_ce_hours", target=GENERAL_CE_TARGET),
    Requirement(key="non-interactive", label="Online non-interactive (max)",
                group="continuing-education", hours_field="non_interactive_hours",
                target=NON_INTERACTIVE_CAP, is_cap=True),
]
