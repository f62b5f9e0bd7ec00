"""Health check endpoints."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_rate_limit_settings, get_telegram_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Result of a dependency check."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: the process is up."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe.

    The rate-limit backend is critical only when it is Redis. A missing
    Telegram configuration degrades the service (leads are still accepted) but
    does not make it unready.
    """
    rate_limit_check = await _check_rate_limit_backend(
        get_rate_limit_settings().backend,
        getattr(request.app.state, "redis_client", None),
    )
    telegram_check = _check_telegram()

    ready = rate_limit_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "rate_limit": rate_limit_check.as_dict(),
            "telegram": telegram_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_rate_limit_backend(backend: str, redis_client: Any | None) -> DependencyCheck:
    if backend != "redis":
        return DependencyCheck(status="ok")
    return await _check_redis(redis_client)


async def _check_redis(redis_client: Any | None) -> DependencyCheck:
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


def _check_telegram() -> DependencyCheck:
    if not get_telegram_settings().is_configured:
        return DependencyCheck(status="degraded", error="not_configured")
    return DependencyCheck(status="ok")
