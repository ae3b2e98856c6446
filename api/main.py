"""
Recurrence Preview FastAPI Application.

Exposes the recurrence engine to a date-picker front end: rule validation,
occurrence preview, health and metrics endpoints.
"""

import os
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from recurrence import InvalidRuleError
from recurrence.config import get_settings
from observability.logging import (
    api_logger, configure_engine_logging, track_http_requests
)
from observability.metrics import recurrence_metrics, METRICS_CONTENT_TYPE

from .schemas import HealthResponse, ErrorResponse
from .routes import recurrence as recurrence_routes

# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
VERSION = os.getenv("VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

logger = api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_engine_logging(settings.log_level)

    logger.info(f"Starting Recurrence Preview API v{VERSION}")
    logger.info(f"Environment: {ENVIRONMENT}")
    logger.info("Engine settings loaded", max_occurrences=settings.max_occurrences,
                log_level=settings.log_level)
    yield

    logger.info("Shutting down Recurrence Preview API")


app = FastAPI(
    title="Recurrence Preview",
    description="""
    Validation and occurrence preview for calendar recurrence rules.

    ## Features

    * **Validation**: Field-tagged errors for every inconsistency in a rule
    * **Preview**: Ordered, bounded occurrence dates for daily, weekly,
      monthly (day of month or nth weekday) and yearly rules
    """,
    version=VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "recurrence",
            "description": "Rule validation and occurrence preview"
        },
        {
            "name": "health",
            "description": "Service health and monitoring endpoints"
        }
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if DEBUG else ["https://localhost", "https://127.0.0.1"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

track_http_requests(app, recurrence_metrics)


def _error_response(request: Request, status_code: int, error: str, message: str,
                    details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ErrorResponse(
            error=error,
            message=message,
            details=details,
            request_id=getattr(request.state, 'request_id', None),
            timestamp=datetime.now(timezone.utc)
        ))
    )


@app.exception_handler(InvalidRuleError)
async def invalid_rule_handler(request: Request, exc: InvalidRuleError):
    """Report rule validation errors with their field tags."""
    return _error_response(
        request,
        422,
        "InvalidRuleError",
        str(exc),
        details={"errors": [e.to_dict() for e in exc.errors]}
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent error format."""
    return _error_response(request, exc.status_code, exc.__class__.__name__, exc.detail)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception in API request")
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "An unexpected error occurred. Please try again later.",
        details={"exception_type": exc.__class__.__name__} if DEBUG else None
    )


app.include_router(recurrence_routes.router)


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check() -> HealthResponse:
    """Liveness check; the engine has no external dependencies."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=VERSION,
        environment=ENVIRONMENT
    )


@app.get("/metrics", tags=["health"])
async def metrics_endpoint():
    """Prometheus metrics in text exposition format."""
    return Response(content=recurrence_metrics.export(), media_type=METRICS_CONTENT_TYPE)
