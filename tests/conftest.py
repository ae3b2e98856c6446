#!/usr/bin/env python3
"""
pytest configuration for the recurrence engine tests.

Provides shared rule fixtures and keeps engine settings isolated from the
environment between tests.
"""

import os
import sys
from datetime import date

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from recurrence.config import reset_settings
from recurrence.models import (
    MonthlyMode, NthWeekdaySpec, RecurrenceKind, RuleConfig
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Start every test from default engine settings."""
    monkeypatch.delenv("RECURRENCE_MAX_OCCURRENCES", raising=False)
    monkeypatch.delenv("RECURRENCE_LOG_LEVEL", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def weekly_rule():
    """Mondays and Wednesdays for the first half of January 2024."""
    return RuleConfig(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 15),
        kind=RecurrenceKind.weekly,
        weekdays=(1, 3),
    )


@pytest.fixture
def last_friday_rule():
    """Last Friday of each month, March to May 2024."""
    return RuleConfig(
        start_date=date(2024, 3, 1),
        end_date=date(2024, 5, 31),
        kind=RecurrenceKind.monthly,
        monthly_mode=MonthlyMode.nth_weekday,
        nth_weekday=NthWeekdaySpec(week_ordinal=5, weekday=5),
    )
