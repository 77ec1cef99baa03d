"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.health import get_health_status
from backend.core.projection import InvalidInput
from backend.core.report import MONTHLY_VIEW, YEARLY_VIEW, build_charts, build_highlights, year_options
from backend.core.session import CalculatorSession, log_ledger
from backend.schemas.health import HealthResponse
from backend.schemas.projection import ProjectionRequest, ProjectionResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidInput)
def _handle_invalid_input(exc: InvalidInput):
    logger.info("rejected projection inputs: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ValueError)
def _handle_value_error(exc: ValueError):
    return jsonify({"error": [str(exc)]}), HTTPStatus.BAD_REQUEST


def _calculate() -> CalculatorSession:
    """Validate the JSON body and run it through a fresh session."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ProjectionRequest.model_validate(raw_payload)

    session = CalculatorSession()
    session.subscribe(log_ledger)
    session.calculate(payload)
    return session


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(**get_health_status())
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Full ledger plus the headline figures and year picker."""
    session = _calculate()
    response = ProjectionResponse(
        ledger=session.ledger,
        highlights=build_highlights(session.ledger, session.inputs.principal),
        year_options=year_options(session.ledger),
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/projection/table")
def projection_table() -> Any:
    """Yearly table, or the monthly table for ?year=N (default 1)."""
    session = _calculate()
    session.switch_view(request.args.get("view", YEARLY_VIEW))

    raw_year = request.args.get("year")
    if session.current_view == MONTHLY_VIEW and raw_year is not None:
        try:
            year = int(raw_year)
        except ValueError:
            raise ValueError(f"year must be a whole number, got {raw_year!r}") from None
        session.select_year(year)
    return jsonify(session.table().model_dump(mode="json"))


@api_bp.post("/projection/charts")
def projection_charts() -> Any:
    """Growth series, breakdown slices and sparklines."""
    session = _calculate()
    charts = build_charts(
        session.ledger,
        session.inputs.principal,
        width=float(current_app.config["SPARKLINE_WIDTH"]),
    )
    return jsonify(charts.model_dump(mode="json"))
