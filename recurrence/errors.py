"""Exceptions raised by the recurrence engine."""

from typing import List

from .models import FieldError


class RecurrenceError(Exception):
    """Base exception for recurrence processing errors."""
    pass


class NthWeekdayError(RecurrenceError):
    """Nth-weekday arguments outside ordinal 1..5 or weekday 0..6."""
    pass


class InvalidRuleError(RecurrenceError):
    """Raised when a rule that must be valid has validation errors."""

    def __init__(self, errors: List[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(e.field.value for e in self.errors)
        super().__init__(f"Invalid recurrence rule ({fields})")
