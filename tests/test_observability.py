"""
Tests for structured logging and Prometheus metrics.
"""

import json
import logging
from datetime import date

import pytest
from prometheus_client import CollectorRegistry

from observability.logging import (
    JSONFormatter, StructuredLogger, clear_request_context, configure_engine_logging,
    generate_request_id, get_request_context, set_request_context
)
from observability.metrics import RecurrenceMetrics, track_generation
from recurrence.generator import preview
from recurrence.models import RecurrenceKind, RuleConfig


def make_record(message="Occurrences generated", **extra_fields):
    record = logging.LogRecord("recurrence.test", logging.INFO, __file__, 10, message, (), None)
    record.extra_fields = extra_fields
    return record


@pytest.mark.unit
class TestStructuredLogging:
    """Test JSON log formatting and request context."""

    def test_json_fields(self):
        """Test the standard fields of a formatted record."""
        entry = json.loads(JSONFormatter().format(make_record(count=5, kind="weekly")))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "recurrence.test"
        assert entry["message"] == "Occurrences generated"
        assert entry["count"] == 5
        assert entry["kind"] == "weekly"
        assert entry["timestamp"].endswith("Z")

    def test_request_context_is_included(self):
        """Test correlation IDs from the context."""
        set_request_context(request_id="req-abc12345", client_id="picker")
        try:
            entry = json.loads(JSONFormatter().format(make_record()))
            assert entry["request_id"] == "req-abc12345"
            assert entry["client_id"] == "picker"
        finally:
            clear_request_context()

        assert get_request_context() == {"request_id": None, "client_id": None}

    def test_dates_serialize(self):
        """Test that non-JSON values are rendered as strings."""
        entry = json.loads(JSONFormatter().format(make_record(first=date(2024, 1, 1))))
        assert entry["first"] == "2024-01-01"

    def test_generate_request_id(self):
        """Test request ID format."""
        request_id = generate_request_id()
        assert request_id.startswith("req-")
        assert len(request_id) == 12

    def test_structured_logger_passes_extra_fields(self, caplog):
        """Test that specialized methods attach structured fields."""
        logger = StructuredLogger("recurrence_api.test")
        logger.logger.propagate = True

        with caplog.at_level(logging.INFO, logger="recurrence_api.test"):
            logger.rule_validated("weekly", ["selectedDays"])

        record = caplog.records[-1]
        assert record.getMessage() == "Rule rejected"
        assert record.extra_fields["error_fields"] == ["selectedDays"]
        assert record.extra_fields["event_type"] == "rule_validated"

    def test_configure_engine_logging(self):
        """Test that the engine logger gets a single JSON handler."""
        configure_engine_logging("debug")
        engine_logger = configure_engine_logging("debug")

        assert engine_logger.level == logging.DEBUG
        assert len(engine_logger.handlers) == 1
        assert isinstance(engine_logger.handlers[0].formatter, JSONFormatter)


@pytest.mark.unit
class TestRecurrenceMetrics:
    """Test metric recording on an isolated registry."""

    @pytest.fixture
    def metrics(self):
        return RecurrenceMetrics(registry=CollectorRegistry())

    def test_record_validation(self, metrics):
        """Test validation counters by outcome and field."""
        metrics.record_validation([])
        metrics.record_validation(["interval", "selectedDays"])

        sample = metrics.registry.get_sample_value
        assert sample("recurrence_validations_total", {"outcome": "valid"}) == 1.0
        assert sample("recurrence_validations_total", {"outcome": "invalid"}) == 1.0
        assert sample("recurrence_validation_errors_total", {"field": "interval"}) == 1.0

    def test_track_generation(self, metrics):
        """Test the generation decorator."""
        tracked = track_generation(metrics)(preview)
        config = RuleConfig(start_date=date(2024, 1, 1), end_date=date(2024, 1, 10),
                            kind=RecurrenceKind.daily)

        dates, truncated = tracked(config)

        assert len(dates) == 10
        assert not truncated
        sample = metrics.registry.get_sample_value
        assert sample("recurrence_generations_total", {"kind": "daily", "outcome": "complete"}) == 1.0
        assert sample("recurrence_occurrences_generated_sum") == 10.0

    def test_single_occurrence_label(self, metrics):
        """Test that rules without a kind are labelled as single."""
        metrics.record_generation(None, 1, 0.001)
        assert metrics.registry.get_sample_value(
            "recurrence_generations_total", {"kind": "single", "outcome": "complete"}) == 1.0

    def test_export(self, metrics):
        """Test text exposition."""
        metrics.record_http_request("POST", "/recurrence/preview", 200, 0.01)
        assert b"recurrence_http_requests_total" in metrics.export()
