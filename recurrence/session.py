"""
Editable recurrence state for a presentation layer.

The session owns the mutable values a date-picker edits and re-derives the
validation errors and occurrence preview after every change. The engine
functions it calls stay pure; all state lives here.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, List, Optional

from .dates import coerce_date, sunday_weekday
from .generator import generate
from .models import (
    DateInput, FieldError, MonthlyMode, NthWeekdaySpec, RecurrenceKind, RuleConfig
)
from .validator import validate

logger = logging.getLogger(__name__)


class RecurrenceSession:
    """Recurrence rule being edited, with its derived errors and preview."""

    def __init__(self, start_date: DateInput = None):
        self.config = RuleConfig(start_date=start_date if start_date is not None else date.today())
        self.errors: List[FieldError] = []
        self.preview: List[date] = []
        self.refresh()

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def _update(self, **changes) -> List[FieldError]:
        self.config = replace(self.config, **changes)
        return self.refresh()

    def refresh(self) -> List[FieldError]:
        """Re-validate the current rule and rebuild the preview.

        While the rule has errors there is no preview.
        """
        self.errors = validate(self.config)
        if self.errors:
            self.preview = []
            logger.debug(f"Preview suppressed: {len(self.errors)} validation error(s)")
        else:
            self.preview = generate(self.config)
        return self.errors

    def set_start_date(self, value: DateInput) -> List[FieldError]:
        return self._update(start_date=value)

    def set_end_date(self, value: DateInput) -> List[FieldError]:
        """Set or clear the end date; any empty value clears it."""
        return self._update(end_date=value or None)

    def set_kind(self, kind: Optional[RecurrenceKind]) -> List[FieldError]:
        """Change the recurrence kind.

        Switching to weekly with no days chosen preselects the start date's
        weekday so the rule stays usable.
        """
        changes = {'kind': RecurrenceKind(kind) if kind is not None else None}
        if changes['kind'] == RecurrenceKind.weekly and not self.config.weekdays:
            start = coerce_date(self.config.start_date)
            if start is not None:
                changes['weekdays'] = (sunday_weekday(start),)
        return self._update(**changes)

    def set_interval(self, interval: int) -> List[FieldError]:
        return self._update(interval=interval)

    def set_weekdays(self, weekdays: Iterable[int]) -> List[FieldError]:
        return self._update(weekdays=tuple(weekdays))

    def set_monthly_mode(self, mode: MonthlyMode) -> List[FieldError]:
        return self._update(monthly_mode=MonthlyMode(mode))

    def set_nth_weekday(self, spec: Optional[NthWeekdaySpec]) -> List[FieldError]:
        return self._update(nth_weekday=spec)

    def clear_errors(self) -> None:
        self.errors = []
