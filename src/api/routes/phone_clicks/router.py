"""POST /api/phone-clicks: "Call Now" button telemetry and owner heads-up."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.routes.client import admit_client, maybe_sweep, resolve_client_id
from api.validators import parse_phone_click
from app.bootstrap import get_phone_click_rate_limiter, get_record_phone_click_use_case
from app.observability import get_correlation_id
from config.settings import get_business_settings, get_rate_limit_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=None)
async def record_phone_click(request: Request) -> JSONResponse:
    limiter = get_phone_click_rate_limiter()
    client_id = resolve_client_id(request.headers)

    if not await admit_client(limiter, client_id, endpoint="phone_clicks"):
        return JSONResponse(
            content={"error": "Too many requests"},
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    await maybe_sweep(limiter, get_rate_limit_settings().sweep_probability)

    try:
        raw_body: Any = await request.json() if await request.body() else {}
        click = parse_phone_click(
            raw_body,
            default_phone=get_business_settings().main_phone,
            user_agent=request.headers.get("user-agent", ""),
        )
        await get_record_phone_click_use_case().execute(
            click,
            correlation_id=get_correlation_id(),
        )
    except Exception as exc:
        logger.error(
            "phone_click_failed",
            extra={"endpoint": "phone_clicks", "error_type": type(exc).__name__},
        )
        return JSONResponse(
            content={"error": "Unable to record phone click"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(content={"success": True}, status_code=status.HTTP_200_OK)
