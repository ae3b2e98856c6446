"""
Pydantic schemas for API request/response models.

Request bodies use the camelCase field names the date-picker front end sends,
which are also the tags carried by validation errors.
"""

from datetime import date, datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field

from recurrence.models import (
    FieldError, MonthlyMode, NthWeekdaySpec, RecurrenceKind, RuleConfig
)


# Request Schemas

class NthWeekdayRequest(BaseModel):
    """Nth weekday of month selection."""
    week_ordinal: int = Field(..., alias="weekOrdinal", description="1-4 for first-fourth, 5 for last")
    weekday: int = Field(..., description="0-6 for Sunday-Saturday")


class RuleRequest(BaseModel):
    """
    Recurrence rule as edited in the date picker.

    Dates are passed through as strings so that unreadable values come back
    as field-tagged validation errors instead of request errors.
    """
    start_date: str = Field(..., alias="startDate", description="Start date, e.g. 2024-01-01")
    end_date: Optional[str] = Field(None, alias="endDate", description="Optional inclusive end date")
    kind: Optional[RecurrenceKind] = Field(None, description="daily, weekly, monthly or yearly; omit for a single date")
    interval: int = Field(default=1, description="Stride in units of kind")
    selected_days: List[int] = Field(default_factory=list, alias="selectedDays",
                                     description="Weekdays 0-6 (Sunday first) for weekly rules")
    monthly_mode: MonthlyMode = Field(default=MonthlyMode.day_of_month, alias="monthlyMode")
    nth_weekday: Optional[NthWeekdayRequest] = Field(None, alias="nthWeekday")

    def to_rule_config(self) -> RuleConfig:
        """Build the engine's rule value from this request."""
        nth = None
        if self.nth_weekday is not None:
            nth = NthWeekdaySpec(week_ordinal=self.nth_weekday.week_ordinal,
                                 weekday=self.nth_weekday.weekday)
        return RuleConfig(
            start_date=self.start_date,
            end_date=self.end_date or None,
            kind=self.kind,
            interval=self.interval,
            weekdays=tuple(self.selected_days),
            monthly_mode=self.monthly_mode,
            nth_weekday=nth,
        )


# Response Schemas

class FieldErrorResponse(BaseModel):
    """A validation error tagged with the field it concerns."""
    field: str
    code: str
    message: str

    @classmethod
    def from_error(cls, error: FieldError) -> "FieldErrorResponse":
        return cls(**error.to_dict())


class ValidationResponse(BaseModel):
    """Result of validating a rule."""
    valid: bool
    errors: List[FieldErrorResponse] = Field(default_factory=list)


class PreviewResponse(BaseModel):
    """Occurrence dates of a valid rule."""
    dates: List[date]
    count: int
    truncated: bool = Field(..., description="True when an open-ended rule was cut off at the preview limit")


class ErrorResponse(BaseModel):
    """Standard error response format."""
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
    timestamp: datetime


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    version: str
    environment: str
