"""
Recurrence rule data model.

A RuleConfig is a transient value rebuilt by the presentation layer on every
edit. The engine never mutates it and keeps no state between calls.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple, Union

DateInput = Union[date, datetime, str, None]


class RecurrenceKind(str, Enum):
    """Recurrence frequencies supported by the engine."""
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


class MonthlyMode(str, Enum):
    """How a monthly rule picks its day."""
    day_of_month = "dayOfMonth"
    nth_weekday = "nthDay"


class ErrorField(str, Enum):
    """Field tags a presentation layer uses to place error messages."""
    start_date = "startDate"
    end_date = "endDate"
    date_range = "dateRange"
    interval = "interval"
    selected_days = "selectedDays"
    weekdays = "weekdays"
    nth_weekday = "nthWeekday"


class ErrorCode(str, Enum):
    """Validation error taxonomy."""
    invalid_date = "InvalidDate"
    invalid_range = "InvalidRange"
    invalid_interval = "InvalidInterval"
    missing_weekday_selection = "MissingWeekdaySelection"
    invalid_weekday = "InvalidWeekday"
    invalid_nth_weekday = "InvalidNthWeekday"


@dataclass(frozen=True)
class NthWeekdaySpec:
    """Selects e.g. "the second Tuesday" or "the last Friday" of a month.

    week_ordinal runs 1..5 where 5 means "last"; weekday runs 0..6 with
    Sunday as 0.
    """
    week_ordinal: int
    weekday: int

    @property
    def is_last(self) -> bool:
        return self.week_ordinal == 5


@dataclass(frozen=True)
class FieldError:
    """A validation error tagged with the field it concerns."""
    field: ErrorField
    code: ErrorCode
    message: str

    def to_dict(self) -> dict:
        return {
            'field': self.field.value,
            'code': self.code.value,
            'message': self.message,
        }


@dataclass(frozen=True)
class RuleConfig:
    """Recurrence rule as supplied by the caller.

    Dates may be given as ``date``/``datetime`` objects or as strings; strings
    are parsed during validation so an unparseable value becomes a reported
    error rather than a construction failure.
    """

    start_date: DateInput
    end_date: DateInput = None
    kind: Optional[RecurrenceKind] = None
    interval: int = 1
    weekdays: Tuple[int, ...] = field(default_factory=tuple)
    monthly_mode: MonthlyMode = MonthlyMode.day_of_month
    nth_weekday: Optional[NthWeekdaySpec] = None

    def __post_init__(self):
        # Accept any iterable of weekdays but store a canonical tuple
        if not isinstance(self.weekdays, tuple):
            object.__setattr__(self, 'weekdays', tuple(self.weekdays))

    @property
    def is_recurring(self) -> bool:
        return self.kind is not None

    @property
    def uses_nth_weekday(self) -> bool:
        return (self.kind == RecurrenceKind.monthly
                and self.monthly_mode == MonthlyMode.nth_weekday)
