"""
Observability package for the recurrence preview service.

Provides structured JSON logging with request correlation and Prometheus
metrics for rule validation and occurrence generation.
"""

from .metrics import RecurrenceMetrics, recurrence_metrics, metrics_registry
from .logging import (
    StructuredLogger, set_request_context, generate_request_id,
    configure_engine_logging
)

__all__ = [
    "RecurrenceMetrics",
    "recurrence_metrics",
    "metrics_registry",
    "StructuredLogger",
    "set_request_context",
    "generate_request_id",
    "configure_engine_logging"
]
