"""Data contracts for projection requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.core.projection import Ledger
from backend.schemas.report import Highlights, YearOption

# request-size cap for the HTTP surface; project() itself takes any term
MAX_YEARS = 100


class ProjectionRequest(BaseModel):
    """Inputs required to run a projection (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    principal: float = Field(..., description="Starting balance at month 0.")
    annual_rate_percent: float = Field(
        ...,
        alias="annualRatePercent",
        description="Nominal annual rate in percent (e.g. 7.5 for 7.5%).",
    )
    years: int = Field(..., le=MAX_YEARS, description="Number of yearly periods to project.")
    monthly_contribution: float = Field(
        0.0,
        alias="monthlyContribution",
        description="Amount added at the start of each month.",
    )
    compounding_frequency: Optional[int] = Field(
        12,
        alias="compoundingFrequency",
        description="Collected by the form; interest always compounds monthly.",
    )


class ProjectionResponse(BaseModel):
    ledger: Ledger
    highlights: Highlights
    year_options: List[YearOption]
