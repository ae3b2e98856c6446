"""
Tests for the editable recurrence session used by a date-picker front end.
"""

import pytest
from datetime import date

from recurrence.models import ErrorField, MonthlyMode, NthWeekdaySpec, RecurrenceKind
from recurrence.session import RecurrenceSession


def error_fields(session):
    return [e.field for e in session.errors]


@pytest.mark.unit
class TestRecurrenceSession:
    """Test state changes and the derived errors and preview."""

    def test_defaults_to_today(self):
        """Test a fresh session previews today only."""
        session = RecurrenceSession()
        assert session.config.start_date == date.today()
        assert session.preview == [date.today()]
        assert session.errors == []

    def test_weekly_preselects_start_weekday(self):
        """Test that choosing weekly with no days selects the start's weekday."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_end_date(date(2024, 1, 15))
        session.set_kind(RecurrenceKind.weekly)

        assert session.config.weekdays == (1,)
        assert session.preview == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]

    def test_weekly_keeps_existing_days(self):
        """Test that an existing weekday selection is preserved."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_weekdays([1, 3])
        session.set_end_date("2024-01-15")
        session.set_kind("weekly")

        assert session.config.weekdays == (1, 3)
        assert len(session.preview) == 5

    def test_clearing_weekdays_suppresses_preview(self):
        """Test that an invalid edit leaves no preview."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_kind(RecurrenceKind.weekly)

        errors = session.set_weekdays([])

        assert [e.field for e in errors] == [ErrorField.selected_days]
        assert session.has_errors
        assert session.preview == []

    def test_range_error_and_recovery(self):
        """Test fixing an end date that precedes the start."""
        session = RecurrenceSession(date(2024, 5, 10))
        session.set_kind(RecurrenceKind.daily)

        session.set_end_date(date(2024, 5, 1))
        assert error_fields(session) == [ErrorField.date_range]
        assert session.preview == []

        session.set_end_date(date(2024, 5, 12))
        assert session.errors == []
        assert session.preview == [date(2024, 5, 10), date(2024, 5, 11), date(2024, 5, 12)]

    def test_invalid_interval(self):
        """Test an interval edit below one."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_kind(RecurrenceKind.daily)
        session.set_interval(0)
        assert error_fields(session) == [ErrorField.interval]

    def test_monthly_nth_weekday_flow(self):
        """Test building the last-Friday rule one edit at a time."""
        session = RecurrenceSession("2024-03-01")
        session.set_end_date("2024-05-31")
        session.set_kind(RecurrenceKind.monthly)
        session.set_monthly_mode(MonthlyMode.nth_weekday)
        assert error_fields(session) == [ErrorField.nth_weekday]

        session.set_nth_weekday(NthWeekdaySpec(week_ordinal=5, weekday=5))
        assert session.preview == [date(2024, 3, 29), date(2024, 4, 26), date(2024, 5, 31)]

    def test_removing_kind_returns_to_single_date(self):
        """Test switching recurrence off."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_kind(RecurrenceKind.daily)
        session.set_kind(None)
        assert session.preview == [date(2024, 1, 1)]

    @pytest.mark.parametrize("cleared", ["", None])
    def test_empty_end_date_clears_it(self, cleared):
        """Test that an empty end date removes the bound instead of erroring."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_kind(RecurrenceKind.daily)
        session.set_end_date("2024-01-03")

        session.set_end_date(cleared)

        assert session.config.end_date is None
        assert session.errors == []
        assert len(session.preview) == 365

    def test_invalid_start_date(self):
        """Test an unreadable start date."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_start_date("not a date")
        assert error_fields(session) == [ErrorField.start_date]
        assert session.preview == []

    def test_clear_errors(self):
        """Test clearing errors without touching the rule."""
        session = RecurrenceSession(date(2024, 1, 1))
        session.set_interval(0)
        session.clear_errors()
        assert session.errors == []
        assert session.refresh() != []
