"""
Structured JSON logging for the recurrence preview service.

Provides request correlation IDs and structured fields for rule validation
and occurrence generation events.
"""

import json
import uuid
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Dict, List
from contextvars import ContextVar

# Context variables for request tracing
REQUEST_ID: ContextVar[str] = ContextVar('request_id', default=None)
CLIENT_ID: ContextVar[str] = ContextVar('client_id', default=None)


class JSONFormatter(logging.Formatter):
    """JSON formatter with correlation IDs and structured fields."""

    def format(self, record):
        """Format log record as structured JSON."""
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'thread': record.thread,
            'process': record.process
        }

        # Add correlation IDs from context
        if REQUEST_ID.get():
            log_entry['request_id'] = REQUEST_ID.get()
        if CLIENT_ID.get():
            log_entry['client_id'] = CLIENT_ID.get()

        # Add extra fields from record
        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        if hasattr(record, 'latency_ms'):
            log_entry['latency_ms'] = record.latency_ms

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)
            log_entry['exception_type'] = record.exc_info[0].__name__ if record.exc_info[0] else None

        return json.dumps(log_entry, default=str)


def _install_json_handler(logger: logging.Logger) -> None:
    # Remove any existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.propagate = False


class StructuredLogger:
    """Structured JSON logger with correlation IDs."""

    def __init__(self, name: str, level: int = logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        _install_json_handler(self.logger)

    def _log_with_extras(self, level: int, message: str, **extra_fields):
        """Log message with extra structured fields."""
        self.logger.log(level, message, extra={'extra_fields': extra_fields})

    def debug(self, message: str, **extra_fields):
        self._log_with_extras(logging.DEBUG, message, **extra_fields)

    def info(self, message: str, **extra_fields):
        self._log_with_extras(logging.INFO, message, **extra_fields)

    def warning(self, message: str, **extra_fields):
        self._log_with_extras(logging.WARNING, message, **extra_fields)

    def error(self, message: str, **extra_fields):
        self._log_with_extras(logging.ERROR, message, **extra_fields)

    def exception(self, message: str, **extra_fields):
        """Log exception with traceback and extra fields."""
        self.logger.exception(message, extra={'extra_fields': extra_fields})

    # Specialized logging methods for recurrence events
    def rule_validated(self, kind: Optional[str], error_fields: List[str]):
        """Log the outcome of validating a rule."""
        self.info(
            "Rule valid" if not error_fields else "Rule rejected",
            kind=kind,
            valid=not error_fields,
            error_fields=error_fields,
            event_type="rule_validated"
        )

    def occurrences_generated(self, kind: Optional[str], count: int,
                              truncated: bool, duration_ms: float):
        """Log a completed occurrence preview."""
        self.info(
            "Occurrences generated",
            kind=kind,
            count=count,
            truncated=truncated,
            latency_ms=duration_ms,
            event_type="occurrences_generated"
        )

    def api_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, client_id: Optional[str] = None):
        """Log API request."""
        self.info(
            "API request processed",
            method=method,
            path=path,
            status_code=status_code,
            latency_ms=duration_ms,
            client_id=client_id,
            event_type="api_request"
        )


# Context management functions
def set_request_context(request_id: str = None, client_id: str = None):
    """Set request context for logging correlation."""
    if request_id:
        REQUEST_ID.set(request_id)
    if client_id:
        CLIENT_ID.set(client_id)


def clear_request_context():
    """Clear all request context variables."""
    for ctx_var in [REQUEST_ID, CLIENT_ID]:
        ctx_var.set(None)


def get_request_context() -> Dict[str, Optional[str]]:
    """Get current request context as dictionary."""
    return {
        'request_id': REQUEST_ID.get(),
        'client_id': CLIENT_ID.get()
    }


def generate_request_id() -> str:
    """Generate unique request ID."""
    return f"req-{uuid.uuid4().hex[:8]}"


def configure_engine_logging(level: str = "INFO") -> logging.Logger:
    """Route the engine's module loggers through the JSON formatter."""
    engine_logger = logging.getLogger("recurrence")
    engine_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    _install_json_handler(engine_logger)
    return engine_logger


def track_http_requests(app, metrics=None):
    """Middleware to track HTTP requests with structured logging."""
    @app.middleware("http")
    async def request_logging_middleware(request, call_next):
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        request.state.request_id = request_id
        set_request_context(request_id=request_id)

        client_id = request.headers.get("X-Client-ID")
        if client_id:
            set_request_context(client_id=client_id)

        start_time = time.time()

        try:
            response = await call_next(request)
            duration_ms = (time.time() - start_time) * 1000

            api_logger.api_request(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
                client_id=client_id
            )
            if metrics is not None:
                metrics.record_http_request(request.method, request.url.path,
                                            response.status_code, duration_ms / 1000)

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000

            api_logger.error(
                "HTTP request failed",
                method=request.method,
                path=request.url.path,
                latency_ms=duration_ms,
                client_id=client_id,
                exception_type=e.__class__.__name__,
                error=str(e)
            )

            raise
        finally:
            clear_request_context()

    return request_logging_middleware


# Pre-configured loggers for different components
api_logger = StructuredLogger("recurrence_api.requests")
preview_logger = StructuredLogger("recurrence_api.preview")
