"""Data contracts for the presentation views built from a ledger."""

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field


class Highlights(BaseModel):
    """Headline figures shown above the charts."""

    total_invested: str
    total_interest: str
    final_balance: str
    interest_percentage: str = Field(..., description="Interest as a share of the amount invested, e.g. '12.7%'.")
    balance_multiplier: str = Field(..., description="Final balance over principal, e.g. '2.4x'.")


class GrowthBadge(BaseModel):
    dollar_growth: float
    percent_growth: float
    label: str


class YearlyTableRow(BaseModel):
    year: int = Field(..., ge=1)
    starting_balance: str
    contributions: str
    interest_earned: str
    ending_balance: str
    total_invested: str
    total_interest: str
    growth: Optional[GrowthBadge] = None


class MonthlyTableRow(BaseModel):
    month: int = Field(..., ge=1, le=12)
    month_name: str
    starting_balance: str
    contribution: str
    interest_earned: str
    ending_balance: str
    growth: Optional[GrowthBadge] = None


class TableView(BaseModel):
    view: str
    year: Optional[int] = None
    rows: List[Union[YearlyTableRow, MonthlyTableRow]]


class YearOption(BaseModel):
    value: int
    label: str


class ChartDataset(BaseModel):
    label: str
    data: List[float]


class GrowthChart(BaseModel):
    labels: List[str]
    datasets: List[ChartDataset]


class BreakdownSlice(BaseModel):
    label: str
    value: float
    formatted: str
    percentage: float


class Sparkline(BaseModel):
    points: List[Tuple[float, float]]
    path: str
    area: str


class SparklineSet(BaseModel):
    invested: Sparkline
    interest: Sparkline
    balance: Sparkline


class ChartBundle(BaseModel):
    growth: GrowthChart
    breakdown: List[BreakdownSlice]
    sparklines: SparklineSet
