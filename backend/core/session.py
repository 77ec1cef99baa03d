"""Presentation-side calculator state: current view, selected year and the last ledger."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from backend.core.projection import Ledger, project
from backend.core.report import MONTHLY_VIEW, VIEWS, YEARLY_VIEW, build_table
from backend.schemas.projection import ProjectionRequest
from backend.schemas.report import TableView

logger = logging.getLogger(__name__)

LedgerListener = Callable[[Ledger, ProjectionRequest], None]


@dataclass
class CalculatorSession:
    """
    Holds what the page shows between recalculations.

    The engine stays stateless; every successful calculate() replaces the ledger
    and notifies subscribers. A rejected input leaves the previous ledger in place.
    """

    current_view: str = YEARLY_VIEW
    selected_year: int = 1
    ledger: Optional[Ledger] = None
    inputs: Optional[ProjectionRequest] = None
    _listeners: List[LedgerListener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: LedgerListener) -> Callable[[], None]:
        """Register a 'ledger produced' callback; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def calculate(self, request: ProjectionRequest) -> Ledger:
        ledger = project(
            principal=request.principal,
            annual_rate_percent=request.annual_rate_percent,
            years=request.years,
            monthly_contribution=request.monthly_contribution,
            compounding_frequency=request.compounding_frequency or 12,
        )

        self.ledger = ledger
        self.inputs = request
        if not 1 <= self.selected_year <= ledger.years:
            self.selected_year = 1

        for listener in list(self._listeners):
            listener(ledger, request)
        return ledger

    def switch_view(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"view must be one of {', '.join(VIEWS)}, got {view!r}")
        self.current_view = view

    def select_year(self, year: int) -> None:
        if year < 1:
            raise ValueError(f"year must be 1 or later, got {year}")
        if self.ledger is not None:
            # validates the range against the current ledger
            self.ledger.year(year)
        self.selected_year = year

    @property
    def showing_year_picker(self) -> bool:
        return self.current_view == MONTHLY_VIEW

    def table(self) -> TableView:
        if self.ledger is None:
            raise ValueError("no projection has been calculated yet")
        return build_table(self.ledger, self.current_view, self.selected_year)


def log_ledger(ledger: Ledger, request: ProjectionRequest) -> None:
    logger.info(
        "projection ready: principal=%.2f rate=%.4f%% years=%s final=%.2f",
        request.principal,
        request.annual_rate_percent,
        request.years,
        ledger.summary.final_balance,
    )
