"""
Recurrence rule API routes.

Validation and occurrence preview for rules edited in a date picker.
Preview runs in FastAPI's threadpool and is capped at the configured
occurrence limit.
"""

import time

from fastapi import APIRouter

from recurrence import ensure_valid, preview, validate
from recurrence.config import get_settings
from observability.logging import preview_logger
from observability.metrics import recurrence_metrics, track_generation

from ..schemas import (
    FieldErrorResponse, PreviewResponse, RuleRequest, ValidationResponse
)

router = APIRouter(prefix="/recurrence", tags=["recurrence"])

tracked_preview = track_generation(recurrence_metrics)(preview)


def _kind_label(rule_request: RuleRequest):
    return rule_request.kind.value if rule_request.kind is not None else None


@router.post("/validate", response_model=ValidationResponse)
async def validate_rule(rule_request: RuleRequest) -> ValidationResponse:
    """
    Validate a recurrence rule.

    Returns every applicable error in one response, each tagged with the
    field the front end should display it next to.
    """
    errors = validate(rule_request.to_rule_config())
    error_fields = [e.field.value for e in errors]

    recurrence_metrics.record_validation(error_fields)
    preview_logger.rule_validated(_kind_label(rule_request), error_fields)

    return ValidationResponse(
        valid=not errors,
        errors=[FieldErrorResponse.from_error(e) for e in errors]
    )


@router.post("/preview", response_model=PreviewResponse)
def preview_rule(rule_request: RuleRequest) -> PreviewResponse:
    """
    Compute the occurrence dates of a recurrence rule.

    Invalid rules are rejected with 422 and the validation errors; no
    best-effort preview is produced for them. Every response, including one
    for a rule with an end date, is cut off at the configured occurrence
    limit and flagged as truncated when that happens.
    """
    config = rule_request.to_rule_config()
    ensure_valid(config)

    start_time = time.perf_counter()
    dates, truncated = tracked_preview(config, limit=get_settings().max_occurrences)
    duration_ms = (time.perf_counter() - start_time) * 1000

    preview_logger.occurrences_generated(_kind_label(rule_request), len(dates), truncated, duration_ms)

    return PreviewResponse(dates=dates, count=len(dates), truncated=truncated)
