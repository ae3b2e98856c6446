"""
Recurrence Engine Module

This module provides the recurrence rule engine, including:
- Rule validation with field-tagged errors
- Bounded occurrence generation for daily, weekly, monthly and yearly rules
- Nth-weekday-of-month resolution
"""

from .models import (
    RecurrenceKind, MonthlyMode, NthWeekdaySpec, RuleConfig,
    FieldError, ErrorField, ErrorCode
)
from .errors import RecurrenceError, NthWeekdayError, InvalidRuleError
from .validator import validate, is_valid, ensure_valid
from .generator import generate, preview, iter_occurrences
from .nth_weekday import resolve_nth_weekday
from .session import RecurrenceSession

__version__ = "1.0.0"

__all__ = [
    'RecurrenceKind',
    'MonthlyMode',
    'NthWeekdaySpec',
    'RuleConfig',
    'FieldError',
    'ErrorField',
    'ErrorCode',
    'RecurrenceError',
    'NthWeekdayError',
    'InvalidRuleError',
    'validate',
    'is_valid',
    'ensure_valid',
    'generate',
    'preview',
    'iter_occurrences',
    'resolve_nth_weekday',
    'RecurrenceSession'
]
