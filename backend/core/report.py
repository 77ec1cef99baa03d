"""Read-only views over a finished ledger: headline figures, tables, charts and sparklines."""

from __future__ import annotations

from typing import List, Optional, Sequence

from backend.core.projection import Ledger
from backend.schemas.report import (
    BreakdownSlice,
    ChartBundle,
    ChartDataset,
    GrowthBadge,
    GrowthChart,
    Highlights,
    MonthlyTableRow,
    Sparkline,
    SparklineSet,
    TableView,
    YearOption,
    YearlyTableRow,
)

YEARLY_VIEW = "yearly"
MONTHLY_VIEW = "monthly"
VIEWS = (YEARLY_VIEW, MONTHLY_VIEW)

SPARKLINE_HEIGHT = 30.0
DEFAULT_SPARKLINE_WIDTH = 200.0


def format_currency(amount: float, symbol: str = "$") -> str:
    """Format as $1,234.56 (always two decimals, sign ahead of the symbol)."""
    sign = "-" if amount < 0 and round(abs(amount), 2) != 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def build_highlights(ledger: Ledger, principal: float) -> Highlights:
    summary = ledger.summary
    interest_percentage = round(summary.total_interest / summary.total_invested * 100, 1)
    balance_multiplier = round(summary.final_balance / principal, 1)

    return Highlights(
        total_invested=format_currency(summary.total_invested),
        total_interest=format_currency(summary.total_interest),
        final_balance=format_currency(summary.final_balance),
        interest_percentage=f"{interest_percentage:.1f}%",
        balance_multiplier=f"{balance_multiplier:.1f}x",
    )


def growth_badge(previous: float, current: float, precision: int) -> GrowthBadge:
    """Dollar and percent change between consecutive ending balances."""
    dollar_growth = current - previous
    percent_growth = dollar_growth / previous * 100
    return GrowthBadge(
        dollar_growth=dollar_growth,
        percent_growth=round(percent_growth, precision),
        label=f"+{format_currency(dollar_growth)} (+{percent_growth:.{precision}f}%)",
    )


def yearly_rows(ledger: Ledger) -> List[YearlyTableRow]:
    rows: List[YearlyTableRow] = []
    previous_ending: Optional[float] = None

    for record in ledger.yearly:
        badge = None
        if previous_ending is not None:
            badge = growth_badge(previous_ending, record.ending_balance, precision=1)

        rows.append(
            YearlyTableRow(
                year=record.year_index,
                starting_balance=format_currency(record.starting_balance),
                contributions=format_currency(record.contributions),
                interest_earned=format_currency(record.interest_earned),
                ending_balance=format_currency(record.ending_balance),
                total_invested=format_currency(record.cumulative_contributions),
                total_interest=format_currency(record.cumulative_interest),
                growth=badge,
            )
        )
        previous_ending = record.ending_balance

    return rows


def monthly_rows(ledger: Ledger, year: int = 1) -> List[MonthlyTableRow]:
    rows: List[MonthlyTableRow] = []
    previous_ending: Optional[float] = None

    for record in ledger.months(year):
        badge = None
        if previous_ending is not None:
            badge = growth_badge(previous_ending, record.ending_balance, precision=2)

        rows.append(
            MonthlyTableRow(
                month=record.month_index,
                month_name=record.month_name,
                starting_balance=format_currency(record.starting_balance),
                contribution=format_currency(record.contribution),
                interest_earned=format_currency(record.interest_earned),
                ending_balance=format_currency(record.ending_balance),
                growth=badge,
            )
        )
        previous_ending = record.ending_balance

    return rows


def build_table(ledger: Ledger, view: str = YEARLY_VIEW, year: Optional[int] = None) -> TableView:
    if view not in VIEWS:
        raise ValueError(f"view must be one of {', '.join(VIEWS)}, got {view!r}")

    if view == YEARLY_VIEW:
        return TableView(view=view, rows=yearly_rows(ledger))

    selected = year if year is not None else 1
    return TableView(view=view, year=selected, rows=monthly_rows(ledger, selected))


def year_options(ledger: Ledger) -> List[YearOption]:
    return [YearOption(value=year, label=f"Year {year}") for year in range(1, ledger.years + 1)]


def growth_chart(ledger: Ledger) -> GrowthChart:
    return GrowthChart(
        labels=[f"Year {record.year_index}" for record in ledger.yearly],
        datasets=[
            ChartDataset(
                label="Total Invested",
                data=[record.cumulative_contributions for record in ledger.yearly],
            ),
            ChartDataset(
                label="Interest Earned",
                data=[record.cumulative_interest for record in ledger.yearly],
            ),
            ChartDataset(
                label="Total Balance",
                data=[record.ending_balance for record in ledger.yearly],
            ),
        ],
    )


def breakdown_chart(ledger: Ledger, principal: float) -> List[BreakdownSlice]:
    """Principal / additional contributions / interest, each as a share of the final balance."""
    summary = ledger.summary
    parts = [
        ("Principal Investment", principal),
        ("Additional Contributions", summary.total_invested - principal),
        ("Interest Earned", summary.total_interest),
    ]
    return [
        BreakdownSlice(
            label=label,
            value=value,
            formatted=format_currency(value),
            percentage=round(value / summary.final_balance * 100, 1),
        )
        for label, value in parts
    ]


def sparkline(
    values: Sequence[float],
    width: float = DEFAULT_SPARKLINE_WIDTH,
    height: float = SPARKLINE_HEIGHT,
) -> Sparkline:
    """
    Normalise a series into SVG coordinates.

    The line spans 80% of the height with a 10% margin at the bottom;
    a flat series is drawn with a range of 1.
    """
    if not values:
        return Sparkline(points=[], path="", area="")

    high = max(values)
    low = min(values)
    value_range = (high - low) or 1
    count = len(values)

    points = []
    for index, value in enumerate(values):
        x = index / (count - 1) * width if count > 1 else 0.0
        y = height - (value - low) / value_range * height * 0.8 - height * 0.1
        points.append((x, y))

    coords = [f"{x:g},{y:g}" for x, y in points]
    path = "M " + " L ".join(coords)
    area = f"M {coords[0]} L {' L '.join(coords)} L {width:g},{height:g} L 0,{height:g} Z"

    return Sparkline(points=points, path=path, area=area)


def sparklines(ledger: Ledger, width: float = DEFAULT_SPARKLINE_WIDTH) -> SparklineSet:
    return SparklineSet(
        invested=sparkline([record.cumulative_contributions for record in ledger.yearly], width),
        interest=sparkline([record.cumulative_interest for record in ledger.yearly], width),
        balance=sparkline([record.ending_balance for record in ledger.yearly], width),
    )


def build_charts(ledger: Ledger, principal: float, width: float = DEFAULT_SPARKLINE_WIDTH) -> ChartBundle:
    return ChartBundle(
        growth=growth_chart(ledger),
        breakdown=breakdown_chart(ledger, principal),
        sparklines=sparklines(ledger, width),
    )
