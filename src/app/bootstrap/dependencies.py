"""Factories for the concrete components behind each protocol.

Backends are picked from the settings: the in-memory rate limiter by default,
Redis when RATE_LIMIT_BACKEND=redis.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.bootstrap.clients import create_async_redis_client
from app.infra.stores.activity_counter import MemoryActivityCounter
from app.infra.stores.memory_rate_limiter import MemoryRateLimiter
from app.infra.stores.redis_rate_limiter import RedisRateLimiter
from app.infra.telegram import TelegramNotifier
from app.use_cases import AcceptLeadUseCase, RecordPhoneClickUseCase
from config.settings import get_rate_limit_settings, get_telegram_settings

if TYPE_CHECKING:
    from app.protocols.notifier import LeadNotifierProtocol
    from app.protocols.rate_limiter import AsyncRateLimiterProtocol

logger = logging.getLogger(__name__)


def create_rate_limiter(name: str, max_submissions: int, window_ms: int) -> AsyncRateLimiterProtocol:
    """Creates a limiter on the configured backend.

    Args:
        name: Namespace of the limiter ("leads", "error_tracking"...).
        max_submissions: Admissions allowed per window.
        window_ms: Window length in milliseconds.

    Returns:
        AsyncRateLimiterProtocol implementation.
    """
    backend = get_rate_limit_settings().backend

    if backend == "redis":
        try:
            limiter = RedisRateLimiter(
                create_async_redis_client(),
                max_submissions=max_submissions,
                window_ms=window_ms,
                name=name,
            )
            logger.info("rate_limiter_created", extra={"limiter": name, "backend": "redis"})
            return limiter
        except ValueError as exc:
            logger.warning(
                "rate_limiter_redis_unavailable",
                extra={"limiter": name, "error_type": type(exc).__name__, "fallback": "memory"},
            )

    logger.info("rate_limiter_created", extra={"limiter": name, "backend": "memory"})
    return MemoryRateLimiter(max_submissions=max_submissions, window_ms=window_ms, name=name)


def create_lead_rate_limiter() -> AsyncRateLimiterProtocol:
    settings = get_rate_limit_settings()
    return create_rate_limiter("leads", settings.lead_max_submissions, settings.lead_window_ms)


def create_error_tracking_rate_limiter() -> AsyncRateLimiterProtocol:
    settings = get_rate_limit_settings()
    return create_rate_limiter(
        "error_tracking", settings.error_tracking_max, settings.error_tracking_window_ms
    )


def create_phone_click_rate_limiter() -> AsyncRateLimiterProtocol:
    settings = get_rate_limit_settings()
    return create_rate_limiter(
        "phone_clicks", settings.error_tracking_max, settings.error_tracking_window_ms
    )


def create_notifier() -> LeadNotifierProtocol:
    return TelegramNotifier(get_telegram_settings())


def create_activity_counter() -> MemoryActivityCounter:
    return MemoryActivityCounter()


def create_accept_lead_use_case(
    notifier: LeadNotifierProtocol,
    activity_counter: MemoryActivityCounter,
) -> AcceptLeadUseCase:
    return AcceptLeadUseCase(
        notifier=notifier,
        activity_counter=activity_counter,
        dispatch_mode=get_telegram_settings().dispatch_mode,
    )


def create_record_phone_click_use_case(
    notifier: LeadNotifierProtocol,
    activity_counter: MemoryActivityCounter,
) -> RecordPhoneClickUseCase:
    return RecordPhoneClickUseCase(
        notifier=notifier,
        activity_counter=activity_counter,
        dispatch_mode=get_telegram_settings().dispatch_mode,
    )
