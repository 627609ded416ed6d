from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    """Inputs for a single projection run.

    Timeline, return rate and windfall bounds are checked by
    validate_profile() rather than by the model, so a bad profile can
    still be built and then rejected with a rule identifier.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    # Timeline
    currentAge: int
    retirementAge: int

    # Investments
    currentSavings: float = Field(ge=0)
    monthlyInvestment: float = Field(ge=0)
    investmentReturn: float  # percent, 7 means 7%

    # Windfall
    windfallAmount: float
    windfallEndYear: int

    # Monthly expenses in today's dollars
    rent: float = Field(ge=0)
    otherExpenses: float = Field(ge=0)
    expenseInflation: float  # percent


class FailureKind(str, Enum):
    INVALID_TIMELINE = "InvalidTimeline"
    INVALID_RETURN_RATE = "InvalidReturnRate"
    INVALID_WINDFALL = "InvalidWindfall"


@dataclass(frozen=True)
class ValidationFailure:
    kind: FailureKind
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


MAX_RETURN_RATE = 50.0


def validate_profile(profile: Profile) -> Optional[ValidationFailure]:
    """Return the first violated rule, or None when the profile is usable."""
    if profile.currentAge >= profile.retirementAge:
        return ValidationFailure(
            FailureKind.INVALID_TIMELINE,
            "Retirement age must be greater than current age",
        )
    if profile.investmentReturn < 0 or profile.investmentReturn > MAX_RETURN_RATE:
        return ValidationFailure(
            FailureKind.INVALID_RETURN_RATE,
            "Investment return must be between 0% and 50%",
        )
    if profile.windfallAmount < 0:
        return ValidationFailure(
            FailureKind.INVALID_WINDFALL,
            "Windfall amount cannot be negative",
        )
    return None


def has_windfall_in_year(profile: Profile, target_year: int, reference_year: int) -> bool:
    # still working, not past the last windfall year, and something to receive
    age_at_year = profile.currentAge + (target_year - reference_year)
    return (
        age_at_year < profile.retirementAge
        and target_year <= profile.windfallEndYear
        and profile.windfallAmount > 0
    )


__all__ = [
    "Profile",
    "FailureKind",
    "ValidationFailure",
    "MAX_RETURN_RATE",
    "validate_profile",
    "has_windfall_in_year",
]
