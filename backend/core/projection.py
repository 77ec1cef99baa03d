from __future__ import annotations

import logging
import math
from numbers import Integral, Real
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

MONTH_NAMES: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class InvalidInput(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


# -----------------------------
# Ledger models
# -----------------------------


class MonthRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    year_index: int
    month_index: int
    month_name: str
    starting_balance: float
    contribution: float
    interest_earned: float
    ending_balance: float


class YearRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    year_index: int
    starting_balance: float
    contributions: float
    interest_earned: float
    ending_balance: float
    # principal + every contribution made through the end of this year
    cumulative_contributions: float
    cumulative_interest: float


class Summary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_invested: float
    total_interest: float
    final_balance: float


class Ledger(BaseModel):
    """
    Complete output of one projection run.

    yearly is ordered 1..years, monthly maps each year number to its 12 months.
    """

    model_config = ConfigDict(frozen=True)

    yearly: Tuple[YearRecord, ...]
    monthly: Mapping[int, Tuple[MonthRecord, ...]]
    summary: Summary

    @field_validator("monthly", mode="after")
    @classmethod
    def _read_only_months(cls, value: Mapping[int, Tuple[MonthRecord, ...]]) -> Mapping[int, Tuple[MonthRecord, ...]]:
        # copy first so the caller's dict cannot reach into the ledger
        return MappingProxyType(dict(value))

    @field_serializer("monthly")
    def _dump_months(self, value: Mapping[int, Tuple[MonthRecord, ...]]):
        return {year: list(months) for year, months in value.items()}

    @property
    def years(self) -> int:
        return len(self.yearly)

    def year(self, year_index: int) -> YearRecord:
        if not 1 <= year_index <= self.years:
            raise ValueError(f"year must be between 1 and {self.years}, got {year_index}")
        return self.yearly[year_index - 1]

    def months(self, year_index: int) -> Tuple[MonthRecord, ...]:
        if year_index not in self.monthly:
            raise ValueError(f"year must be between 1 and {self.years}, got {year_index}")
        return self.monthly[year_index]


def month_name(month_index: int) -> str:
    return MONTH_NAMES[month_index - 1]


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_inputs(
    principal: float,
    annual_rate_percent: float,
    years: int,
    monthly_contribution: float = 0.0,
) -> List[str]:
    """Return every precondition violation; an empty list means the inputs are usable."""
    errors: List[str] = []

    if not _is_number(principal) or not math.isfinite(principal) or principal <= 0:
        errors.append("principal must be a positive number")
    if not _is_number(annual_rate_percent) or not math.isfinite(annual_rate_percent) or annual_rate_percent <= 0:
        errors.append("annual rate must be a positive number")
    if not isinstance(years, Integral) or isinstance(years, bool) or years < 1:
        errors.append("years must be a positive whole number")
    if (
        not _is_number(monthly_contribution)
        or not math.isfinite(monthly_contribution)
        or monthly_contribution < 0
    ):
        errors.append("monthly contribution must be zero or a positive number")

    return errors


def project(
    principal: float,
    annual_rate_percent: float,
    years: int,
    monthly_contribution: float = 0.0,
    compounding_frequency: int = MONTHS_PER_YEAR,
) -> Ledger:
    """
    Build the year-by-year and month-by-month ledger.

    Order of operations (per month):
      1) Add the monthly contribution at the START of the month.
      2) Apply one month of interest, (annual_rate_percent / 100) / 12, to the new balance.
      3) Record the month.

    compounding_frequency is accepted for callers that collect it, but the model
    always compounds monthly.
    """
    errors = validate_inputs(principal, annual_rate_percent, years, monthly_contribution)
    if errors:
        raise InvalidInput(errors)

    if compounding_frequency != MONTHS_PER_YEAR:
        logger.debug(
            "compounding_frequency=%s ignored; projection compounds monthly",
            compounding_frequency,
        )

    rate = annual_rate_percent / 100
    monthly_rate = rate / MONTHS_PER_YEAR
    contribution = float(monthly_contribution)

    current_balance = float(principal)
    total_contributions = float(principal)

    yearly: List[YearRecord] = []
    monthly: Dict[int, Tuple[MonthRecord, ...]] = {}

    for year in range(1, years + 1):
        start_balance = current_balance
        months: List[MonthRecord] = []

        for month in range(1, MONTHS_PER_YEAR + 1):
            month_start = current_balance

            current_balance += contribution
            total_contributions += contribution

            interest_earned = current_balance * monthly_rate
            current_balance += interest_earned

            months.append(
                MonthRecord(
                    year_index=year,
                    month_index=month,
                    month_name=month_name(month),
                    starting_balance=month_start,
                    contribution=contribution,
                    interest_earned=interest_earned,
                    ending_balance=current_balance,
                )
            )

        yearly_contributions = contribution * MONTHS_PER_YEAR
        monthly[year] = tuple(months)
        yearly.append(
            YearRecord(
                year_index=year,
                starting_balance=start_balance,
                contributions=yearly_contributions,
                interest_earned=current_balance - start_balance - yearly_contributions,
                ending_balance=current_balance,
                cumulative_contributions=total_contributions,
                cumulative_interest=current_balance - total_contributions,
            )
        )

    summary = Summary(
        total_invested=total_contributions,
        total_interest=current_balance - total_contributions,
        final_balance=current_balance,
    )

    logger.debug(
        "projected %s years: invested=%.2f interest=%.2f final=%.2f",
        years,
        summary.total_invested,
        summary.total_interest,
        summary.final_balance,
    )

    return Ledger(yearly=tuple(yearly), monthly=monthly, summary=summary)


__all__ = [
    "MONTHS_PER_YEAR",
    "MONTH_NAMES",
    "InvalidInput",
    "MonthRecord",
    "YearRecord",
    "Summary",
    "Ledger",
    "month_name",
    "validate_inputs",
    "project",
]
