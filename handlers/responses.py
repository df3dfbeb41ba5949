"""
handlers/responses.py
---------------------
Shared JSON response helpers.
"""

from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse

from services.registry import Services


def utc_timestamp() -> str:
    """Current time as ISO-8601 UTC, e.g. '2024-05-01T12:00:00.123+00:00'."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def error_response(title: str, exc: Exception, status_code: int = 500, **extra) -> JSONResponse:
    """
    Build the error envelope every handler returns on failure.

    Args:
        title: Short description of what failed ('Error adding student').
        exc: The underlying exception; its message is passed through.
        status_code: 500 for request failures, 503 for the health probe.
        extra: Additional top-level keys (e.g. ``status`` for /health).
    """
    body = {
        **extra,
        "error": title,
        "message": str(exc).strip() or exc.__class__.__name__,
        "timestamp": utc_timestamp(),
    }
    return JSONResponse(status_code=status_code, content=body)


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the services built at startup."""
    return request.app.state.services
