from __future__ import annotations

from retirement_calc.core.profile import Profile


def make_profile(**overrides) -> Profile:
    """A small, windfall-free profile that individual tests tweak."""
    data = {
        "currentAge": 47,
        "retirementAge": 48,
        "currentSavings": 0.0,
        "monthlyInvestment": 250.0,
        "investmentReturn": 7.0,
        "windfallAmount": 0.0,
        "windfallEndYear": 2030,
        "rent": 0.0,
        "otherExpenses": 0.0,
        "expenseInflation": 0.0,
    }
    data.update(overrides)
    return Profile(**data)
