#!/usr/bin/env python3
"""
Development script to run the Recurrence Preview API locally.

This script starts the FastAPI application with uvicorn in development mode
with hot reloading.
"""

import os
import uvicorn
from pathlib import Path

project_root = Path(__file__).parent

def main():
    """Run the FastAPI application in development mode."""
    os.environ.setdefault("ENVIRONMENT", "development")
    os.environ.setdefault("DEBUG", "true")
    os.environ.setdefault("VERSION", "1.0.0")
    os.environ.setdefault("RECURRENCE_LOG_LEVEL", "DEBUG")

    print("Starting Recurrence Preview API")
    print(f"   Environment: {os.environ.get('ENVIRONMENT')}")
    print(f"   Preview limit: {os.environ.get('RECURRENCE_MAX_OCCURRENCES', '365')} dates")
    print("   Documentation: http://localhost:8080/docs")
    print("   API Health: http://localhost:8080/health")
    print()

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
        log_level="info",
        access_log=True,
        reload_dirs=[str(project_root / "api"), str(project_root / "recurrence")]
    )

if __name__ == "__main__":
    main()
