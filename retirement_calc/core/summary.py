"""Headline figures and chart series derived from a finished projection."""

from __future__ import annotations

from typing import Dict, List, Sequence

from pydantic import BaseModel

from retirement_calc.core.projection import (
    WITHDRAWAL_RATE,
    YearlyResult,
    calculate_safe_withdrawal,
    format_currency,
)


class ProjectionSummary(BaseModel):
    retirementAge: int
    finalPortfolio: float
    monthlyWithdrawal: float
    withdrawalRate: float
    futureMonthlyExpenses: float
    display: Dict[str, str]


class ChartSeries(BaseModel):
    labels: List[str]
    portfolio: List[float]
    annualExpenses: List[float]


def summarize(
    rows: Sequence[YearlyResult], withdrawal_rate: float = WITHDRAWAL_RATE
) -> ProjectionSummary:
    if not rows:
        raise ValueError("cannot summarize an empty projection")

    final = rows[-1]
    withdrawal = calculate_safe_withdrawal(final.portfolio, withdrawal_rate)
    return ProjectionSummary(
        retirementAge=final.age,
        finalPortfolio=final.portfolio,
        monthlyWithdrawal=withdrawal,
        withdrawalRate=withdrawal_rate,
        futureMonthlyExpenses=final.totalMonthlyExpenses,
        display={
            "portfolio": format_currency(final.portfolio),
            "monthlyWithdrawal": format_currency(withdrawal),
            "futureMonthlyExpenses": format_currency(final.totalMonthlyExpenses),
        },
    )


def chart_series(rows: Sequence[YearlyResult]) -> ChartSeries:
    """Portfolio vs. annual expenses, one point per age."""
    if not rows:
        raise ValueError("cannot chart an empty projection")

    return ChartSeries(
        labels=[f"Age {row.age}" for row in rows],
        portfolio=[row.portfolio for row in rows],
        annualExpenses=[row.totalMonthlyExpenses * 12 for row in rows],
    )
