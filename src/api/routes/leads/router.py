"""Booking form endpoint.

POST /api/leads
1. Rate limit per client (429 with the fallback phone)
2. Parse + validate the body (400 with every field error)
3. Stamp, count and alert the owner (alert outcome never changes the response)
4. 200 acknowledgement

Patient fields never reach the logs: only city, source and error types do.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.routes.client import admit_client, maybe_sweep, resolve_client_id
from api.validators import validate_lead_data
from app.bootstrap import get_accept_lead_use_case, get_lead_rate_limiter
from app.constants.healthcare import (
    DEFAULT_LEAD_SOURCE,
    LEAD_CAPTURED_MESSAGE,
    LEAD_RATE_LIMITED_MESSAGE,
    LEAD_SERVER_ERROR_MESSAGE,
)
from app.observability import get_correlation_id
from config.settings import get_business_settings, get_rate_limit_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=None)
async def submit_lead(request: Request) -> JSONResponse:
    """Receives a booking request from the website form."""
    fallback_phone = get_business_settings().fallback_phone
    limiter = get_lead_rate_limiter()
    client_id = resolve_client_id(request.headers)

    if not await admit_client(limiter, client_id, endpoint="leads"):
        logger.warning("lead_rate_limited", extra={"endpoint": "leads"})
        return JSONResponse(
            content={"error": LEAD_RATE_LIMITED_MESSAGE.format(phone=fallback_phone)},
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    await maybe_sweep(limiter, get_rate_limit_settings().sweep_probability)

    try:
        raw_body: Any = await request.json()

        result = validate_lead_data(raw_body)
        if not result.ok or result.lead is None:
            logger.info(
                "lead_rejected",
                extra={"endpoint": "leads", "error_count": len(result.errors)},
            )
            return JSONResponse(
                content={"error": ", ".join(result.errors), "errors": result.errors},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        await get_accept_lead_use_case().execute(
            result.lead,
            correlation_id=get_correlation_id(),
            source=DEFAULT_LEAD_SOURCE,
        )
    except Exception as exc:
        logger.error(
            "lead_processing_failed",
            extra={"endpoint": "leads", "error_type": type(exc).__name__},
        )
        return JSONResponse(
            content={"error": LEAD_SERVER_ERROR_MESSAGE.format(phone=fallback_phone)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(
        content={"success": True, "message": LEAD_CAPTURED_MESSAGE},
        status_code=status.HTTP_200_OK,
    )
