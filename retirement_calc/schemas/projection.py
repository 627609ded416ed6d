"""Data contracts for the projection endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from retirement_calc.core.profile import Profile
from retirement_calc.core.projection import YearlyResult
from retirement_calc.core.summary import ChartSeries, ProjectionSummary


class ProjectionRequest(Profile):
    """A full profile plus the calendar year treated as offset 0."""

    referenceYear: Optional[int] = Field(
        default=None,
        ge=1900,
        le=3000,
        description="Calendar year of the first projected row; defaults to the current year.",
    )

    def to_profile(self) -> Profile:
        return Profile.model_validate(self.model_dump(exclude={"referenceYear"}))


class FieldsRequest(BaseModel):
    """Raw form values merged over `base` (or the configured defaults)."""

    model_config = ConfigDict(extra="forbid")

    fields: Dict[str, Any] = Field(default_factory=dict)
    base: Optional[Profile] = None
    referenceYear: Optional[int] = Field(default=None, ge=1900, le=3000)


class DefaultsQuery(BaseModel):
    """Query string of the reset endpoint."""

    referenceYear: Optional[int] = Field(default=None, ge=1900, le=3000)


class ProjectionResponse(BaseModel):
    referenceYear: int
    profile: Profile
    rows: List[YearlyResult]
    summary: ProjectionSummary
    chart: ChartSeries


class FailureDetail(BaseModel):
    kind: str
    message: str


class FailureResponse(BaseModel):
    error: FailureDetail


class DefaultsResponse(BaseModel):
    profile: Profile
    withdrawalRate: float


class PingResponse(BaseModel):
    message: str
