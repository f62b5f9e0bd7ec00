"""Client-side error telemetry endpoint.

POST /api/error-tracking records why a booking attempt failed in the browser.
Only the whitelisted ErrorReport fields are read; user agent and client id are
truncated before logging.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api.routes.client import admit_client, maybe_sweep, resolve_client_id
from app.bootstrap import get_error_tracking_rate_limiter
from app.domain.error_report import ErrorReport
from config.settings import get_rate_limit_settings

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_LOGGED_USER_AGENT = 100
MAX_LOGGED_CLIENT_ID = 15


@router.post("", response_model=None)
async def track_error(request: Request) -> JSONResponse:
    """Logs a sanitized client error report."""
    limiter = get_error_tracking_rate_limiter()
    client_id = resolve_client_id(request.headers)

    if not await admit_client(limiter, client_id, endpoint="error_tracking"):
        return JSONResponse(
            content={"error": "Error tracking rate limit exceeded"},
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    await maybe_sweep(limiter, get_rate_limit_settings().sweep_probability)

    try:
        raw_body: Any = await request.json()
        try:
            report = ErrorReport.model_validate(raw_body)
        except ValidationError:
            return JSONResponse(
                content={"error": "Invalid error tracking data"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.warning(
            "client_error_reported",
            extra={
                "error_type": report.error_type,
                "city": report.city,
                "service": report.service,
                "severity": report.severity,
                "retry_count": report.retry_count,
                "reported_at": report.timestamp,
                "user_agent": request.headers.get("user-agent", "unknown")[:MAX_LOGGED_USER_AGENT],
                "client_id": client_id[:MAX_LOGGED_CLIENT_ID],
            },
        )
    except Exception as exc:
        logger.error(
            "error_tracking_failed",
            extra={"endpoint": "error_tracking", "error_type": type(exc).__name__},
        )
        return JSONResponse(
            content={"error": "Error tracking system unavailable"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(
        content={"success": True, "message": "Error tracked successfully"},
        status_code=status.HTTP_200_OK,
    )
