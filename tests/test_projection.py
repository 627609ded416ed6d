from __future__ import annotations

from math import isclose

import pytest

from retirement_calc.core.profile import FailureKind
from retirement_calc.core.projection import project
from tests.helpers import make_profile


def test_one_extra_year_example():
    """
    Growth is applied to last year's balance before the year's contributions land.
    """
    result = project(make_profile(), reference_year=2025)

    assert result.ok
    assert len(result.rows) == 2
    assert isclose(result.rows[0].portfolio, 3000.0, abs_tol=1e-9)
    assert isclose(result.rows[1].portfolio, 6210.0, abs_tol=1e-9)
    assert isclose(result.final.portfolio, 6210.0, abs_tol=1e-9)


@pytest.mark.parametrize("current_age, retirement_age", [(25, 65), (47, 67), (99, 100), (0, 120)])
def test_one_row_per_age_inclusive(current_age, retirement_age):
    result = project(make_profile(currentAge=current_age, retirementAge=retirement_age), 2025)

    assert len(result.rows) == retirement_age - current_age + 1
    assert [row.age for row in result.rows] == list(range(current_age, retirement_age + 1))
    assert [row.year for row in result.rows] == list(range(2025, 2025 + len(result.rows)))


def test_invalid_profile_produces_no_rows():
    result = project(make_profile(currentAge=67, retirementAge=67), 2025)

    assert not result.ok
    assert result.rows == []
    assert result.final is None
    assert result.failure.kind is FailureKind.INVALID_TIMELINE


def test_zero_return_rate_still_valid_but_distinct_from_failure():
    result = project(make_profile(investmentReturn=0, monthlyInvestment=0), 2025)

    assert result.ok
    assert result.failure is None
    assert all(row.portfolio == 0.0 for row in result.rows)


def test_expenses_inflate_from_todays_dollars():
    profile = make_profile(retirementAge=50, rent=1000.0, otherExpenses=500.0, expenseInflation=10.0)
    rows = project(profile, 2025).rows

    # offset 0 is not inflated
    assert rows[0].futureRent == 1000.0
    assert rows[0].futureOther == 500.0
    assert isclose(rows[1].futureRent, 1100.0)
    assert isclose(rows[3].futureRent, 1000.0 * 1.1**3)
    assert isclose(rows[3].futureOther, 500.0 * 1.1**3)
    for row in rows:
        assert isclose(row.totalMonthlyExpenses, row.futureRent + row.futureOther)


def test_growth_applies_before_contribution():
    profile = make_profile(currentSavings=10000.0, monthlyInvestment=100.0, investmentReturn=10.0)
    rows = project(profile, 2025).rows

    # 10000 * 1.1 + 1200, not (10000 + 1200) * 1.1
    assert isclose(rows[0].portfolio, 12200.0)
    assert isclose(rows[1].portfolio, 12200.0 * 1.1 + 1200.0)


def test_projection_is_repeatable():
    profile = make_profile(
        currentAge=30,
        retirementAge=65,
        currentSavings=5000.0,
        windfallAmount=2500.0,
        windfallEndYear=2040,
        rent=1500.0,
        otherExpenses=700.0,
        expenseInflation=2.5,
    )

    first = project(profile, 2025)
    second = project(profile, 2025)

    assert [row.model_dump() for row in first.rows] == [row.model_dump() for row in second.rows]


def test_default_profile_projection(profile):
    result = project(profile, 2025)

    assert result.ok
    assert result.rows[0].age == 47
    assert result.final.age == 67
    assert result.rows[0].receivedWindfall
    assert isclose(result.rows[0].totalMonthlyExpenses, 2000.0)
    # savings only ever grow with a positive return and no spending
    portfolios = [row.portfolio for row in result.rows]
    assert portfolios == sorted(portfolios)
