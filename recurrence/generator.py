"""
Occurrence generation for recurrence rules.

Each recurrence kind produces an increasing stream of candidate dates;
``iter_occurrences`` clips that stream to the rule's bounds and ``generate``
materializes a finite preview from it. Daily, weekly and nth-weekday streams
come from ``dateutil.rrule``. Day-of-month and yearly steps are taken from the
start date with ``relativedelta`` instead, which clamps to the end of short
months (Jan 31 -> Feb 29 -> Mar 31) where rrule would skip them.
"""

import logging
from datetime import date
from itertools import count, islice
from typing import Iterator, List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from dateutil.rrule import rrule, DAILY, WEEKLY, MONTHLY, SU

from .config import get_settings
from .dates import as_datetime, coerce_date, dateutil_weekday, first_of_month
from .models import RecurrenceKind, RuleConfig
from .nth_weekday import nth_weekday_of
from .validator import validate

logger = logging.getLogger(__name__)


def _rrule_dates(freq, start: date, end: Optional[date], **kwargs) -> Iterator[date]:
    rule = rrule(freq, dtstart=as_datetime(start),
                 until=as_datetime(end) if end is not None else None, **kwargs)
    return (occurrence.date() for occurrence in rule)


def _clamped_steps(start: date, step) -> Iterator[date]:
    """``start + k * step`` for k = 0, 1, ... until the calendar runs out."""
    for k in count():
        try:
            yield start + step * k
        except (OverflowError, ValueError):
            return


def _candidates(config: RuleConfig, start: date, end: Optional[date]) -> Iterator[date]:
    kind = config.kind
    interval = config.interval
    if kind == RecurrenceKind.daily:
        return _rrule_dates(DAILY, start, end, interval=interval)
    if kind == RecurrenceKind.weekly:
        days = [dateutil_weekday(day) for day in sorted(set(config.weekdays))]
        return _rrule_dates(WEEKLY, start, end, interval=interval, byweekday=days, wkst=SU)
    if kind == RecurrenceKind.monthly:
        if config.uses_nth_weekday:
            spec = config.nth_weekday
            return _rrule_dates(MONTHLY, first_of_month(start), end, interval=interval,
                                byweekday=nth_weekday_of(spec.week_ordinal, spec.weekday))
        return _clamped_steps(start, relativedelta(months=interval))
    if kind == RecurrenceKind.yearly:
        return _clamped_steps(start, relativedelta(years=interval))
    raise ValueError(f"Unsupported recurrence kind: {kind}")


def iter_occurrences(config: RuleConfig) -> Iterator[date]:
    """Lazily yield the occurrences of a valid rule in chronological order.

    The stream ends at the rule's end date. Without an end date it only ends
    at the edge of the calendar, so callers must bound it themselves.
    """
    start = coerce_date(config.start_date)
    if start is None:
        return
    end = coerce_date(config.end_date)

    if config.kind is None:
        yield start
        return

    for candidate in _candidates(config, start, end):
        if end is not None and candidate > end:
            return
        if candidate < start:
            continue
        yield candidate


def preview(config: RuleConfig, limit: Optional[int] = None) -> Tuple[List[date], bool]:
    """Bounded occurrences of a rule plus whether the bound cut them short.

    Rules with an end date are returned in full unless ``limit`` is given;
    open-ended rules stop at ``limit`` or the configured occurrence cap.

    Never raises: an invalid rule or an internal failure yields the start
    date alone (or nothing when the start date itself is unreadable).
    """
    start = coerce_date(config.start_date)
    fallback = [start] if start is not None else []

    if config.kind is None:
        return fallback, False

    errors = validate(config)
    if errors:
        logger.warning(f"Occurrences requested for invalid rule "
                       f"({', '.join(e.field.value for e in errors)}), using start date")
        return fallback, False

    if limit is None and coerce_date(config.end_date) is None:
        limit = get_settings().max_occurrences

    try:
        occurrences = iter_occurrences(config)
        if limit is None:
            return list(occurrences), False
        dates = list(islice(occurrences, limit + 1))
    except Exception as e:
        logger.error(f"Error calculating occurrences, using start date: {e}")
        return fallback, False

    truncated = len(dates) > limit
    return dates[:limit], truncated


def generate(config: RuleConfig, limit: Optional[int] = None) -> List[date]:
    """Ordered, duplicate-free occurrence dates of a rule.

    Args:
        config: Rule to expand; callers should validate it first
        limit: Optional maximum number of dates to return

    Returns:
        Dates within the rule's bounds, oldest first
    """
    dates, _ = preview(config, limit)
    return dates
