"""
Nth-weekday-of-month resolution.

Ordinals 1..4 always stay inside the month: the first match falls on day
1..7, so three more weeks reach day 28 at most. Ordinal 5 means "last" and
is resolved backwards from the end of the month.
"""

from datetime import date

from dateutil.relativedelta import relativedelta

from .dates import dateutil_weekday
from .errors import NthWeekdayError

LAST = 5


def nth_weekday_of(week_ordinal: int, weekday: int):
    """dateutil weekday with the month-relative offset for an ordinal.

    Ordinal 5 maps to ``-1`` (last occurrence in the month).
    """
    return dateutil_weekday(weekday)(-1 if week_ordinal == LAST else week_ordinal)


def resolve_nth_weekday(month_anchor: date, week_ordinal: int, weekday: int) -> date:
    """Date of the ``week_ordinal``-th ``weekday`` in the month of ``month_anchor``.

    Args:
        month_anchor: Any date inside the target month
        week_ordinal: 1..4 for first..fourth, 5 for last
        weekday: 0..6 with Sunday as 0

    Returns:
        The resolved date, always inside the anchor's month

    Raises:
        NthWeekdayError: If ordinal or weekday is out of range
    """
    if not 1 <= week_ordinal <= LAST:
        raise NthWeekdayError(f"Week ordinal must be between 1 and 5: {week_ordinal}")
    if not 0 <= weekday <= 6:
        raise NthWeekdayError(f"Weekday must be between 0 and 6: {weekday}")

    target = nth_weekday_of(week_ordinal, weekday)
    if week_ordinal == LAST:
        # day=31 clamps to the month's last day before searching backwards
        return month_anchor + relativedelta(day=31, weekday=target)
    return month_anchor + relativedelta(day=1, weekday=target)
