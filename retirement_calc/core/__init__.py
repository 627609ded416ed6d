"""Pure calculation core: profile rules and the yearly projection."""

from retirement_calc.core.profile import (
    FailureKind,
    Profile,
    ValidationFailure,
    has_windfall_in_year,
    validate_profile,
)
from retirement_calc.core.projection import (
    WITHDRAWAL_RATE,
    ProjectionResult,
    YearlyResult,
    calculate_safe_withdrawal,
    format_currency,
    project,
)

__all__ = [
    "FailureKind",
    "Profile",
    "ValidationFailure",
    "has_windfall_in_year",
    "validate_profile",
    "WITHDRAWAL_RATE",
    "ProjectionResult",
    "YearlyResult",
    "calculate_safe_withdrawal",
    "format_currency",
    "project",
]
