"""Entrypoint of the home doctor visit lead service.

Initializes the bootstrap and exposes the ASGI application (FastAPI).

Usage (production):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Usage (development):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import (
    get_activity_counter,
    get_notifier,
    initialize_app,
    validate_runtime_settings,
)
from app.bootstrap.clients import create_async_redis_client
from app.observability import reset_correlation_id, set_correlation_id
from app.services import drain_alert_tasks, run_daily_report_loop
from config.logging import get_logger
from config.settings import get_base_settings, get_telegram_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.responses import Response

# Logging must be configured before anything logs
initialize_app()

logger = get_logger(__name__)

CORRELATION_HEADER = "x-correlation-id"


def _start_daily_report() -> asyncio.Task[None] | None:
    telegram = get_telegram_settings()
    if not telegram.daily_report_enabled:
        logger.info("daily_report_disabled", extra={"reason": "setting"})
        return None
    if not telegram.is_configured:
        logger.info("daily_report_disabled", extra={"reason": "telegram_not_configured"})
        return None

    logger.info(
        "daily_report_scheduled",
        extra={"report_time": telegram.daily_report_time.strftime("%H:%M")},
    )
    return asyncio.create_task(
        run_daily_report_loop(
            get_notifier(),
            get_activity_counter(),
            telegram.daily_report_time,
        )
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manages the application lifecycle.

    Startup:
    - Validates settings
    - Opens the Redis client when configured
    - Starts the daily report loop

    Shutdown:
    - Waits for in-flight alerts
    - Stops the daily report loop
    - Closes Redis
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()
    app.state.redis_client = None

    if get_base_settings().redis_url:
        try:
            app.state.redis_client = create_async_redis_client()
        except Exception as exc:
            logger.warning("redis_client_not_ready", extra={"error_type": type(exc).__name__})

    report_task = _start_daily_report()

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    await drain_alert_tasks(timeout_seconds=10.0)

    if report_task is not None:
        report_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await report_task

    redis_client = getattr(app.state, "redis_client", None)
    if redis_client is not None:
        await redis_client.aclose()


async def correlation_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Binds the request's correlation id (or a new one) to every log line."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        response = await call_next(request)
    finally:
        reset_correlation_id(token)
    return response


def create_app() -> FastAPI:
    """Creates and configures the FastAPI application."""
    fastapi_app = FastAPI(
        title="Doctor Visit Leads",
        description="Booking capture and owner alerts for home doctor visits",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # The booking form is served from the public website
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    fastapi_app.middleware("http")(correlation_id_middleware)

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# ASGI application exposed to uvicorn
app = create_app()


def main() -> None:
    """Entrypoint for direct execution (development)."""
    import uvicorn

    logger.info("Starting doctor visit leads in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
