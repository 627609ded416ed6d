from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal, localcontext
from typing import List, Optional

from pydantic import BaseModel

from retirement_calc.core.profile import (
    Profile,
    ValidationFailure,
    has_windfall_in_year,
    validate_profile,
)
from retirement_calc.utils.logging import get_logger

logger = get_logger(__name__)

WITHDRAWAL_RATE = 0.04  # 4% rule


class YearlyResult(BaseModel):
    year: int
    age: int
    portfolio: float
    futureRent: float
    futureOther: float
    totalMonthlyExpenses: float
    receivedWindfall: bool


@dataclass
class ProjectionResult:
    rows: List[YearlyResult] = field(default_factory=list)
    failure: Optional[ValidationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def final(self) -> Optional[YearlyResult]:
        return self.rows[-1] if self.rows else None


def project(profile: Profile, reference_year: int) -> ProjectionResult:
    """
    Build a year-by-year table from currentAge..retirementAge (inclusive).

    Order of operations (per year):
      1) Apply GROWTH to the prior balance.
      2) Add the year's contributions (monthly investment x 12).
      3) Add the windfall when the profile qualifies for it that year.
      4) Inflate today's rent/other expenses by (1 + inflation)^offset.

    reference_year is the calendar year of offset 0; callers pass it in
    so the same profile always projects the same way.
    """
    failure = validate_profile(profile)
    if failure is not None:
        logger.warning("projection rejected kind=%s", failure.kind.value)
        return ProjectionResult(failure=failure)

    growth = 1 + profile.investmentReturn / 100
    inflation = 1 + profile.expenseInflation / 100
    annual_contribution = profile.monthlyInvestment * 12

    portfolio = float(profile.currentSavings)
    rows: List[YearlyResult] = []

    for offset in range(profile.retirementAge - profile.currentAge + 1):
        year = reference_year + offset

        # 1) growth on last year's balance only
        portfolio *= growth

        # 2) contributions after growth (not grown this year)
        portfolio += annual_contribution

        # 3) windfall
        windfall = has_windfall_in_year(profile, year, reference_year)
        if windfall:
            portfolio += profile.windfallAmount

        # 4) offset 0 is today's dollars
        factor = inflation**offset
        rent = profile.rent * factor
        other = profile.otherExpenses * factor

        rows.append(
            YearlyResult(
                year=year,
                age=profile.currentAge + offset,
                portfolio=portfolio,
                futureRent=rent,
                futureOther=other,
                totalMonthlyExpenses=rent + other,
                receivedWindfall=windfall,
            )
        )

    logger.debug(
        "projected years=%d final_portfolio=%.2f", len(rows), rows[-1].portfolio
    )
    return ProjectionResult(rows=rows)


# wide enough for the exact decimal expansion of any double
_EXACT = Context(prec=1100)


def _round_half_ceiling(value: float) -> int:
    """Nearest integer, halves going toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    with localcontext(_EXACT):
        exact = Decimal(value)
        floor = exact.to_integral_value(rounding=ROUND_FLOOR)
        if exact - floor >= Decimal("0.5"):
            floor += 1
        return int(floor)


def calculate_safe_withdrawal(portfolio_value: float, rate: float = WITHDRAWAL_RATE) -> float:
    """Monthly income from withdrawing `rate` of the portfolio each year.

    Whole currency units for finite values; an overflowed (infinite)
    portfolio comes back unchanged.
    """
    monthly_withdrawal = portfolio_value * rate / 12
    if not math.isfinite(monthly_withdrawal):
        return monthly_withdrawal
    return _round_half_ceiling(monthly_withdrawal)


def _fixed(value: float, places: int) -> str:
    """Fixed-point digits the way a browser's toFixed() prints them."""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        # toFixed switches to exponent notation here
        return repr(value)
    # half away from zero on the exact binary value
    quantum = Decimal(1).scaleb(-places)
    with localcontext(_EXACT):
        return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_currency(value: float) -> str:
    if math.isnan(value):
        return "$NaN"
    if value >= 1_000_000_000:
        return f"${_fixed(value / 1_000_000_000, 2)}B"
    if value >= 1_000_000:
        return f"${_fixed(value / 1_000_000, 2)}M"
    if value >= 10_000:
        return f"${_fixed(value / 1_000, 1)}k"
    if math.isinf(value):
        return "$-∞"
    return f"${_round_half_ceiling(value):,}"


__all__ = [
    "WITHDRAWAL_RATE",
    "YearlyResult",
    "ProjectionResult",
    "project",
    "calculate_safe_withdrawal",
    "format_currency",
]
