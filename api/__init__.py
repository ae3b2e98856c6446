"""
Recurrence preview FastAPI application.

Main components:
- main: FastAPI application with middleware and error handling
- schemas: Pydantic models for request/response validation
- routes: API route definitions
"""

__version__ = "1.0.0"
