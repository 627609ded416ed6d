"""HTTP routes for the Flask API."""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from retirement_calc.config import Settings
from retirement_calc.core.inputs import apply_field_values
from retirement_calc.core.profile import Profile
from retirement_calc.core.projection import project
from retirement_calc.core.summary import chart_series, summarize
from retirement_calc.schemas.projection import (
    DefaultsQuery,
    DefaultsResponse,
    FailureResponse,
    FieldsRequest,
    PingResponse,
    ProjectionRequest,
    ProjectionResponse,
)
from retirement_calc.utils.logging import get_logger

logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


def _projection_response(profile: Profile, reference_year: Optional[int]) -> Any:
    """Run one projection and shape it for the frontend (or a 422)."""
    if reference_year is None:
        reference_year = _current_year()
    result = project(profile, reference_year)
    if not result.ok:
        body = FailureResponse.model_validate({"error": result.failure.to_dict()})
        return jsonify(body.model_dump()), HTTPStatus.UNPROCESSABLE_ENTITY

    response = ProjectionResponse(
        referenceYear=reference_year,
        profile=profile,
        rows=result.rows,
        summary=summarize(result.rows, _settings().withdrawal_rate),
        chart=chart_series(result.rows),
    )
    return jsonify(response.model_dump()), HTTPStatus.OK


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected malformed payload errors=%d", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.BAD_REQUEST,
    )


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify(PingResponse(message="pong").model_dump())


@api_bp.get("/defaults")
def defaults() -> Any:
    settings = _settings()
    response = DefaultsResponse(
        profile=settings.default_profile(),
        withdrawalRate=settings.withdrawal_rate,
    )
    return jsonify(response.model_dump())


@api_bp.post("/projection")
def projection() -> Any:
    """Project a fully specified profile."""
    payload = ProjectionRequest.model_validate(_json_body())
    return _projection_response(payload.to_profile(), payload.referenceYear)


@api_bp.post("/projection/fields")
def projection_from_fields() -> Any:
    """Project from raw form fields; unusable fields keep their previous value."""
    payload = FieldsRequest.model_validate(_json_body())
    base = payload.base or _settings().default_profile()
    profile = apply_field_values(base, payload.fields)
    return _projection_response(profile, payload.referenceYear)


@api_bp.get("/projection/defaults")
def projection_defaults() -> Any:
    """Reset action: recompute from the configured default profile."""
    query = DefaultsQuery.model_validate(request.args.to_dict())
    return _projection_response(_settings().default_profile(), query.referenceYear)
