"""Helpers shared by the public form endpoints: client identity and limiter upkeep."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from app.protocols.rate_limiter import AsyncRateLimiterProtocol

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def resolve_client_id(headers: Mapping[str, str]) -> str:
    """Identifies the caller for rate limiting.

    Uses ``x-forwarded-for`` as sent by the proxy (the whole header value),
    then ``x-real-ip``. Callers without either share the "unknown" bucket.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return UNKNOWN_CLIENT


async def admit_client(
    limiter: AsyncRateLimiterProtocol,
    client_id: str,
    *,
    endpoint: str,
) -> bool:
    """Asks the limiter for an admission; a broken backend admits (fail open)."""
    try:
        return await limiter.admit_async(client_id)
    except InfrastructureError as exc:
        logger.warning(
            "rate_limit_backend_failed",
            extra={
                "endpoint": endpoint,
                "error_type": type(exc).__name__,
                "fallback": "admit",
            },
        )
        return True


async def maybe_sweep(
    limiter: AsyncRateLimiterProtocol,
    probability: float,
    rng: Callable[[], float] = random.random,
) -> int:
    """Runs a limiter sweep on a fraction of requests. Returns clients removed."""
    if probability <= 0 or rng() >= probability:
        return 0
    try:
        removed = await limiter.sweep_async()
    except InfrastructureError as exc:
        logger.warning("rate_limit_sweep_failed", extra={"error_type": type(exc).__name__})
        return 0
    if removed:
        logger.debug("rate_limit_swept", extra={"removed_clients": removed})
    return removed
