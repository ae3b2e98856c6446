"""
Calendar helpers shared by the validator and the generator.

Weekdays use the Sunday-first numbering of the presentation layer
(0 = Sunday ... 6 = Saturday), which differs from ``date.weekday()`` and
from dateutil's Monday-first weekday constants.
"""

from datetime import date, datetime, time
from typing import Optional

from dateutil.parser import parse as parse_date
from dateutil.relativedelta import MO, TU, WE, TH, FR, SA, SU

from .models import DateInput

SUNDAY_FIRST_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)

# Two defaults that differ in year, month and day: a string that leaves any
# of them out resolves differently against each and is rejected.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def coerce_date(value: DateInput) -> Optional[date]:
    """Interpret a caller-supplied value as a calendar date.

    Strings must name a full year, month and day. Returns None when the
    value is missing or cannot be read as a date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            first, second = (parse_date(value, default=default) for default in _PARSE_DEFAULTS)
        except (ValueError, OverflowError):
            return None
        if first.date() != second.date():
            return None
        return first.date()
    return None


def sunday_weekday(d: date) -> int:
    """Weekday of ``d`` with Sunday as 0."""
    return (d.weekday() + 1) % 7


def dateutil_weekday(day: int):
    """dateutil weekday constant for a Sunday-first weekday number."""
    return SUNDAY_FIRST_WEEKDAYS[day]


def as_datetime(d: date) -> datetime:
    return datetime.combine(d, time())


def first_of_month(d: date) -> date:
    return d.replace(day=1)
