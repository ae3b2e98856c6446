"""
Prometheus metrics for the recurrence preview service.

Counts validations and generated previews, and times occurrence generation
and HTTP handling.
"""

import time
import functools
from typing import List, Optional
from prometheus_client import (
    Counter, Histogram, CollectorRegistry, generate_latest,
    CONTENT_TYPE_LATEST
)

# Global metrics registry
metrics_registry = CollectorRegistry()


class RecurrenceMetrics:
    """Metrics for rule validation and occurrence generation."""

    def __init__(self, registry: CollectorRegistry = None):
        self.registry = registry or metrics_registry
        self._setup_metrics()

    def _setup_metrics(self):
        """Initialize all Prometheus metrics."""

        self.validations_total = Counter(
            'recurrence_validations_total',
            'Total rule validations',
            ['outcome'],
            registry=self.registry
        )

        self.validation_errors_total = Counter(
            'recurrence_validation_errors_total',
            'Total validation errors reported, by field',
            ['field'],
            registry=self.registry
        )

        self.generations_total = Counter(
            'recurrence_generations_total',
            'Total occurrence previews generated',
            ['kind', 'outcome'],
            registry=self.registry
        )

        self.occurrences_generated = Histogram(
            'recurrence_occurrences_generated',
            'Number of dates in each generated preview',
            buckets=(1, 5, 10, 25, 50, 100, 200, 365, 1000, float('inf')),
            registry=self.registry
        )

        self.generation_duration = Histogram(
            'recurrence_generation_duration_seconds',
            'Occurrence generation duration in seconds',
            ['kind'],
            buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5, float('inf')),
            registry=self.registry
        )

        self.http_requests_total = Counter(
            'recurrence_http_requests_total',
            'Total HTTP requests',
            ['method', 'endpoint', 'status_code'],
            registry=self.registry
        )

        self.http_request_duration = Histogram(
            'recurrence_http_request_duration_seconds',
            'HTTP request duration in seconds',
            ['method', 'endpoint'],
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, float('inf')),
            registry=self.registry
        )

    def record_validation(self, error_fields: List[str]):
        """Record a validation outcome and its error fields."""
        self.validations_total.labels(outcome="valid" if not error_fields else "invalid").inc()
        for field in error_fields:
            self.validation_errors_total.labels(field=field).inc()

    def record_generation(self, kind: Optional[str], count: int, duration: float,
                          truncated: bool = False):
        """Record a generated preview."""
        kind_label = kind or "single"
        self.generations_total.labels(
            kind=kind_label,
            outcome="truncated" if truncated else "complete"
        ).inc()
        self.occurrences_generated.observe(count)
        self.generation_duration.labels(kind=kind_label).observe(duration)

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self.http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()
        self.http_request_duration.labels(method=method, endpoint=endpoint).observe(duration)

    def export(self) -> bytes:
        """Render the registry in Prometheus text format."""
        return generate_latest(self.registry)


def track_generation(metrics: RecurrenceMetrics = None):
    """Decorator timing a preview function that takes a rule and returns (dates, truncated)."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(config, *args, **kwargs):
            m = metrics or recurrence_metrics
            start_time = time.perf_counter()
            dates, truncated = func(config, *args, **kwargs)
            kind = config.kind.value if config.kind is not None else None
            m.record_generation(kind, len(dates), time.perf_counter() - start_time, truncated)
            return dates, truncated
        return wrapper
    return decorator


recurrence_metrics = RecurrenceMetrics()

METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST
