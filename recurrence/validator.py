"""
Recurrence rule validation.

All checks run in a single pass so the caller can show every problem at once.
The date-range check is skipped when either date is unreadable, since there is
nothing meaningful to compare.
"""

import logging
from typing import List

from .dates import coerce_date
from .errors import InvalidRuleError
from .models import ErrorCode, ErrorField, FieldError, RecurrenceKind, RuleConfig

logger = logging.getLogger(__name__)

INVALID_START_DATE = "Invalid start date"
INVALID_END_DATE = "Invalid end date"
INVALID_DATE_RANGE = "End date must be after start date"
INVALID_INTERVAL = "Interval must be at least 1"
MISSING_WEEKDAYS = "Select at least one day for weekly recurrence"
INVALID_WEEKDAY = "Weekdays must be between 0 (Sunday) and 6 (Saturday)"
INVALID_NTH_WEEKDAY = "Choose a week (1-5) and a weekday (0-6) for monthly recurrence"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate(config: RuleConfig) -> List[FieldError]:
    """Check a rule for internal consistency.

    Args:
        config: Rule to check

    Returns:
        Errors in field order; empty when the rule can be generated
    """
    errors: List[FieldError] = []

    start = coerce_date(config.start_date)
    if start is None:
        errors.append(FieldError(ErrorField.start_date, ErrorCode.invalid_date, INVALID_START_DATE))

    if config.end_date is not None:
        end = coerce_date(config.end_date)
        if end is None:
            errors.append(FieldError(ErrorField.end_date, ErrorCode.invalid_date, INVALID_END_DATE))
        elif start is not None and end < start:
            errors.append(FieldError(ErrorField.date_range, ErrorCode.invalid_range, INVALID_DATE_RANGE))

    if not _is_int(config.interval) or config.interval < 1:
        errors.append(FieldError(ErrorField.interval, ErrorCode.invalid_interval, INVALID_INTERVAL))

    if config.kind == RecurrenceKind.weekly:
        if not config.weekdays:
            errors.append(FieldError(ErrorField.selected_days, ErrorCode.missing_weekday_selection,
                                     MISSING_WEEKDAYS))
        elif not all(_is_int(day) and 0 <= day <= 6 for day in config.weekdays):
            errors.append(FieldError(ErrorField.weekdays, ErrorCode.invalid_weekday, INVALID_WEEKDAY))

    if config.uses_nth_weekday:
        spec = config.nth_weekday
        if (spec is None
                or not _is_int(spec.week_ordinal) or not 1 <= spec.week_ordinal <= 5
                or not _is_int(spec.weekday) or not 0 <= spec.weekday <= 6):
            errors.append(FieldError(ErrorField.nth_weekday, ErrorCode.invalid_nth_weekday,
                                     INVALID_NTH_WEEKDAY))

    if errors:
        logger.debug(f"Rule has {len(errors)} validation error(s): "
                     f"{', '.join(e.field.value for e in errors)}")
    return errors


def is_valid(config: RuleConfig) -> bool:
    return not validate(config)


def ensure_valid(config: RuleConfig) -> None:
    """Raise InvalidRuleError if the rule has any validation errors."""
    errors = validate(config)
    if errors:
        raise InvalidRuleError(errors)
