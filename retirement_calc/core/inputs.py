"""Turn loosely typed field values (form inputs, CLI pairs) into a Profile.

A blank or unparseable field keeps the value it had in the previous
profile, so a half-typed form never wipes out a good number.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Optional

from retirement_calc.core.profile import Profile

INTEGER_FIELDS = frozenset({"currentAge", "retirementAge", "windfallEndYear"})
NON_NEGATIVE_FIELDS = frozenset({"currentSavings", "monthlyInvestment", "rent", "otherExpenses"})


def _parse_number(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_field(name: str, raw: Any, previous: Any) -> Any:
    """Parse one field, falling back to `previous` when the input is unusable."""
    value = _parse_number(raw)
    if value is None:
        return previous
    if name in NON_NEGATIVE_FIELDS and value < 0:
        return previous
    if name in INTEGER_FIELDS:
        if not value.is_integer():
            return previous
        return int(value)
    return value


def apply_field_values(previous: Profile, fields: Mapping[str, Any]) -> Profile:
    """Return a new Profile with every recognised field in `fields` applied."""
    updates: Dict[str, Any] = {}
    for name in Profile.model_fields:
        if name not in fields:
            continue
        updates[name] = parse_field(name, fields[name], getattr(previous, name))

    return Profile.model_validate({**previous.model_dump(), **updates})


def parse_assignments(pairs: Iterable[str]) -> Dict[str, str]:
    """Split ``field=value`` strings; the value is parsed later."""
    fields: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"expected FIELD=VALUE, got {pair!r}")
        if name not in Profile.model_fields:
            raise ValueError(f"unknown profile field {name!r}")
        fields[name] = value
    return fields
