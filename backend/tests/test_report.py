from __future__ import annotations

from math import isclose

import pytest

from backend.core.projection import project
from backend.core.report import (
    MONTHLY_VIEW,
    breakdown_chart,
    build_highlights,
    build_table,
    format_currency,
    growth_badge,
    growth_chart,
    sparkline,
    sparklines,
    year_options,
)


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0.0, "$0.00"),
        (1234.5, "$1,234.50"),
        (1126.825030, "$1,126.83"),
        (1234567.891, "$1,234,567.89"),
        (-1234.567, "-$1,234.57"),
        (-0.001, "$0.00"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_highlights_for_two_years_at_twelve_percent():
    ledger = project(principal=1000.0, annual_rate_percent=12.0, years=2)
    highlights = build_highlights(ledger, principal=1000.0)

    # 1000 * 1.01 ** 24 = 1269.73
    assert highlights.total_invested == "$1,000.00"
    assert highlights.final_balance == "$1,269.73"
    assert highlights.total_interest == "$269.73"
    assert highlights.interest_percentage == "27.0%"
    assert highlights.balance_multiplier == "1.3x"


def test_growth_badge_label():
    badge = growth_badge(100.0, 110.0, precision=1)

    assert isclose(badge.dollar_growth, 10.0)
    assert badge.percent_growth == 10.0
    assert badge.label == "+$10.00 (+10.0%)"


def test_yearly_table_rows():
    ledger = project(principal=1000.0, annual_rate_percent=12.0, years=3, monthly_contribution=50.0)
    table = build_table(ledger)

    assert table.view == "yearly"
    assert table.year is None
    assert [row.year for row in table.rows] == [1, 2, 3]
    assert table.rows[0].growth is None
    assert table.rows[0].starting_balance == "$1,000.00"
    assert table.rows[0].contributions == "$600.00"
    assert table.rows[2].total_invested == "$2,800.00"
    for previous, row in zip(ledger.yearly, ledger.yearly[1:]):
        badge = table.rows[row.year_index - 1].growth
        assert badge is not None
        assert isclose(badge.dollar_growth, row.ending_balance - previous.ending_balance)


def test_monthly_table_defaults_to_first_year():
    ledger = project(principal=1000.0, annual_rate_percent=6.0, years=2, monthly_contribution=10.0)
    table = build_table(ledger, MONTHLY_VIEW)

    assert table.view == "monthly"
    assert table.year == 1
    assert len(table.rows) == 12
    assert table.rows[0].month_name == "January"
    assert table.rows[-1].month_name == "December"
    assert table.rows[0].growth is None
    assert table.rows[1].growth.label.endswith("%)")
    # monthly badges carry two decimals
    assert table.rows[1].growth.percent_growth == round(table.rows[1].growth.percent_growth, 2)


def test_monthly_table_for_selected_year():
    ledger = project(principal=1000.0, annual_rate_percent=6.0, years=2)
    table = build_table(ledger, MONTHLY_VIEW, year=2)

    assert table.year == 2
    assert table.rows[0].starting_balance == format_currency(ledger.yearly[1].starting_balance)


def test_table_rejects_unknown_view_and_year():
    ledger = project(principal=1000.0, annual_rate_percent=6.0, years=2)

    with pytest.raises(ValueError):
        build_table(ledger, "quarterly")
    with pytest.raises(ValueError):
        build_table(ledger, MONTHLY_VIEW, year=3)


def test_year_options():
    ledger = project(principal=1000.0, annual_rate_percent=6.0, years=3)

    options = year_options(ledger)
    assert [(option.value, option.label) for option in options] == [
        (1, "Year 1"),
        (2, "Year 2"),
        (3, "Year 3"),
    ]


def test_growth_chart_series():
    ledger = project(principal=1000.0, annual_rate_percent=5.0, years=4, monthly_contribution=100.0)
    chart = growth_chart(ledger)

    assert chart.labels == ["Year 1", "Year 2", "Year 3", "Year 4"]
    assert [dataset.label for dataset in chart.datasets] == ["Total Invested", "Interest Earned", "Total Balance"]
    invested, interest, balance = chart.datasets
    for a, b, total in zip(invested.data, interest.data, balance.data):
        assert isclose(a + b, total, rel_tol=1e-12)


def test_breakdown_shares_of_final_balance():
    ledger = project(principal=1000.0, annual_rate_percent=8.0, years=10, monthly_contribution=100.0)
    slices = breakdown_chart(ledger, principal=1000.0)

    assert [s.label for s in slices] == ["Principal Investment", "Additional Contributions", "Interest Earned"]
    assert slices[0].value == 1000.0
    assert isclose(slices[1].value, 12000.0)
    assert isclose(sum(s.value for s in slices), ledger.summary.final_balance, rel_tol=1e-12)
    assert abs(sum(s.percentage for s in slices) - 100.0) < 0.2


def test_sparkline_coordinates():
    line = sparkline([1.0, 2.0, 3.0], width=200, height=30)

    assert line.points == [(0.0, 27.0), (100.0, 15.0), (200.0, 3.0)]
    assert line.path == "M 0,27 L 100,15 L 200,3"
    assert line.area == "M 0,27 L 0,27 L 100,15 L 200,3 L 200,30 L 0,30 Z"


def test_sparkline_flat_and_short_series():
    flat = sparkline([5.0, 5.0])
    single = sparkline([42.0])
    empty = sparkline([])

    assert [y for _, y in flat.points] == [27.0, 27.0]
    assert single.path == "M 0,27"
    assert empty.points == [] and empty.path == ""


def test_sparklines_follow_yearly_series():
    ledger = project(principal=1000.0, annual_rate_percent=5.0, years=5, monthly_contribution=20.0)
    lines = sparklines(ledger, width=100)

    for line in (lines.invested, lines.interest, lines.balance):
        assert len(line.points) == 5
        assert line.points[-1][0] == 100.0
        # increasing series end at the top margin
        assert isclose(line.points[-1][1], 3.0)
