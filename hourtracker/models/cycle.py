"""ComplianceCycle and ElapsedProgress data models."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class ComplianceCycle(BaseModel):
    """A two-year CE reporting window, Oct 1 to Sep 30."""

    start: date = Field(..., description="First day of the cycle (Oct 1)")
    end: date = Field(..., description="Last day of the cycle (Sep 30)")

    model_config = {"frozen": True}

    def contains(self, moment: datetime) -> bool:
        """Check whether a local datetime falls inside the cycle (both days inclusive)."""
        return self.start <= moment.date() <= self.end


class ElapsedProgress(BaseModel):
    """Progress toward the minimum elapsed-time requirement."""

    progress_percent: float = Field(..., ge=0, le=100, description="Elapsed share of the target")
    remaining_days: int = Field(..., ge=0, description="Whole days left")

    model_config = {"frozen": True}
