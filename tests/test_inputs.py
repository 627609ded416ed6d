from __future__ import annotations

import pytest

from retirement_calc.core.inputs import apply_field_values, parse_assignments, parse_field
from retirement_calc.core.profile import Profile


def test_numeric_strings_are_applied(profile: Profile):
    updated = apply_field_values(profile, {"currentAge": "50", "rent": "1350.5", "investmentReturn": 6})

    assert updated.currentAge == 50
    assert updated.rent == 1350.5
    assert updated.investmentReturn == 6.0
    # untouched fields carry over
    assert updated.otherExpenses == profile.otherExpenses


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "nan", "inf", True])
def test_unusable_values_keep_previous(profile: Profile, raw):
    updated = apply_field_values(profile, {"monthlyInvestment": raw})

    assert updated.monthlyInvestment == profile.monthlyInvestment


def test_fractional_age_keeps_previous(profile: Profile):
    updated = apply_field_values(profile, {"retirementAge": "65.5", "windfallEndYear": "2035.0"})

    assert updated.retirementAge == profile.retirementAge
    assert updated.windfallEndYear == 2035
    assert isinstance(updated.windfallEndYear, int)


def test_negative_money_keeps_previous_but_rule_fields_pass_through(profile: Profile):
    updated = apply_field_values(profile, {"rent": "-10", "windfallAmount": "-10"})

    assert updated.rent == profile.rent
    # negative windfall is left for validation to report
    assert updated.windfallAmount == -10.0


def test_unknown_fields_are_ignored(profile: Profile):
    updated = apply_field_values(profile, {"salary": "100000"})

    assert updated == profile


def test_returns_new_profile(profile: Profile):
    updated = apply_field_values(profile, {"currentAge": "30"})

    assert updated is not profile
    assert profile.currentAge == 47


def test_parse_field_directly():
    assert parse_field("rent", " 12.5 ", 1.0) == 12.5
    assert parse_field("currentAge", "40", 47) == 40
    assert parse_field("currentAge", "forty", 47) == 47


def test_parse_assignments():
    assert parse_assignments(["currentAge=40", "rent = 900"]) == {"currentAge": "40", "rent": " 900"}
    assert parse_assignments(["rent="]) == {"rent": ""}


@pytest.mark.parametrize("pair", ["currentAge", "=40", "salary=1"])
def test_parse_assignments_rejects_bad_pairs(pair):
    with pytest.raises(ValueError):
        parse_assignments([pair])
