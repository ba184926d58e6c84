"""ComplianceSnapshot data model.

Only raw hour totals and time progress are stored. Percentages and the
general CE residual are computed from them on access.
"""

from pydantic import BaseModel, Field, computed_field

from hourtracker.models.cycle import ComplianceCycle
from hourtracker.models.requirement import (
    CE_CYCLE_TARGET,
    CLINICAL_TARGET,
    DIRECT_CONTACT_TARGET,
    ELAPSED_TARGET_DAYS,
    ENDORSEMENT_TARGET,
    ETHICS_LAW_TECH_TARGET,
    GENERAL_CE_TARGET,
    MFT_SPECIFIC_TARGET,
    NON_INTERACTIVE_CAP,
    RELATIONAL_TARGET,
    REQUIREMENTS,
    REVIEW_METHOD_TARGET,
    SUICIDE_PREVENTION_TARGET,
    SUPERVISION_TARGET,
    RequirementStatus,
    general_ce_residual,
)


def _percent(hours: float, target: float) -> float:
    return (hours / target) * 100


class ComplianceSnapshot(BaseModel):
    """Totals and percentage-of-target for every compliance bucket."""

    # Clinical
    total_clinical_hours: float = Field(default=0.0, description="Direct contact plus other clinical")
    direct_contact_hours: float = Field(default=0.0, description="Individual, family and couple therapy")
    relational_hours: float = Field(default=0.0, description="Family and couple therapy")

    # Supervision
    total_supervision_hours: float = Field(default=0.0, description="All supervision")
    review_method_hours: float = Field(default=0.0, description="Supervision with audio/video review")

    # Continuing education (active cycle only)
    ce_cycle_hours: float = Field(default=0.0, description="All CE in the active cycle")
    ethics_law_tech_hours: float = Field(default=0.0)
    suicide_prevention_hours: float = Field(default=0.0)
    mft_specific_hours: float = Field(default=0.0)
    non_interactive_hours: float = Field(default=0.0)

    # Elapsed time
    time_progress: float = Field(default=0.0, ge=0, le=100)
    time_remaining: int = Field(default=ELAPSED_TARGET_DAYS, ge=0)

    cycle: ComplianceCycle = Field(..., description="CE cycle the CE totals cover")

    model_config = {"frozen": True}

    @computed_field
    @property
    def clinical_progress(self) -> float:
        return _percent(self.total_clinical_hours, CLINICAL_TARGET)

    @computed_field
    @property
    def endorsement_progress(self) -> float:
        return _percent(self.total_clinical_hours, ENDORSEMENT_TARGET)

    @computed_field
    @property
    def direct_contact_progress(self) -> float:
        return _percent(self.direct_contact_hours, DIRECT_CONTACT_TARGET)

    @computed_field
    @property
    def relational_progress(self) -> float:
        return _percent(self.relational_hours, RELATIONAL_TARGET)

    @computed_field
    @property
    def supervision_progress(self) -> float:
        return _percent(self.total_supervision_hours, SUPERVISION_TARGET)

    @computed_field
    @property
    def review_method_progress(self) -> float:
        return _percent(self.review_method_hours, REVIEW_METHOD_TARGET)

    @computed_field
    @property
    def ce_progress(self) -> float:
        return _percent(self.ce_cycle_hours, CE_CYCLE_TARGET)

    @computed_field
    @property
    def ethics_law_tech_progress(self) -> float:
        return _percent(self.ethics_law_tech_hours, ETHICS_LAW_TECH_TARGET)

    @computed_field
    @property
    def ethics_law_tech_mft_hours(self) -> float:
        # No MFT-only split of the ethics/law/tech bucket is tracked yet
        return self.ethics_law_tech_hours

    @computed_field
    @property
    def suicide_prevention_progress(self) -> float:
        return _percent(self.suicide_prevention_hours, SUICIDE_PREVENTION_TARGET)

    @computed_field
    @property
    def mft_specific_progress(self) -> float:
        return _percent(self.mft_specific_hours, MFT_SPECIFIC_TARGET)

    @computed_field
    @property
    def general_ce_hours(self) -> float:
        return general_ce_residual(
            self.ce_cycle_hours,
            self.ethics_law_tech_hours,
            self.suicide_prevention_hours,
            self.mft_specific_hours,
        )

    @computed_field
    @property
    def general_ce_progress(self) -> float:
        return _percent(self.general_ce_hours, GENERAL_CE_TARGET)

    @computed_field
    @property
    def non_interactive_progress(self) -> float:
        return _percent(self.non_interactive_hours, NON_INTERACTIVE_CAP)

    # Older readers expect session-named fields
    @computed_field
    @property
    def total_session_hours(self) -> float:
        return self.total_clinical_hours

    @computed_field
    @property
    def session_progress(self) -> float:
        return self.clinical_progress

    def requirements(self) -> list[RequirementStatus]:
        """Evaluate every fixed target against this snapshot.

        Returns:
            One status per requirement, in display order.
        """
        statuses = []
        for requirement in REQUIREMENTS:
            hours = getattr(self, requirement.hours_field)
            if requirement.is_cap:
                met = hours <= requirement.target
            else:
                met = hours >= requirement.target
            statuses.append(
                RequirementStatus(
                    key=requirement.key,
                    label=requirement.label,
                    group=requirement.group,
                    hours=hours,
                    target=requirement.target,
                    progress=_percent(hours, requirement.target),
                    remaining=max(0.0, requirement.target - hours),
                    met=met,
                    is_cap=requirement.is_cap,
                )
            )
        return statuses
