"""Application bootstrap: initialization and wiring.

This module is the composition root: it configures logging, validates the
settings and exposes cached singletons of every component the routes use.

Usage:
    from app.bootstrap import initialize_app, get_lead_rate_limiter

    initialize_app()
    limiter = get_lead_rate_limiter()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_rate_limit_settings,
    get_telegram_settings,
)

SERVICE_NAME = "doctor_visit_leads"

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configures structured logging with correlation ids. Call once at start."""
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Validates settings at startup.

    In staging/production invalid settings abort the boot. In development they
    only produce a warning. Missing Telegram credentials are never fatal: the
    service keeps capturing leads and only the alerts are skipped.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"rate_limit: {error}" for error in get_rate_limit_settings().validate(base))

    telegram = get_telegram_settings()
    errors.extend(f"telegram: {error}" for error in telegram.validate())

    if not telegram.is_configured:
        logger.warning(
            "telegram_alerts_disabled",
            extra={"component": "bootstrap", "reason": "credentials_missing"},
        )

    if get_rate_limit_settings().backend == "memory" and not base.is_development:
        logger.warning(
            "rate_limit_memory_backend",
            extra={"component": "bootstrap", "environment": base.environment},
        )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Invalid configuration for {base.environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Component getters (lazy, cached)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_lead_rate_limiter():
    """Limiter guarding POST /api/leads (10 per 5 minutes by default)."""
    from app.bootstrap.dependencies import create_lead_rate_limiter
    return create_lead_rate_limiter()


@lru_cache(maxsize=1)
def get_error_tracking_rate_limiter():
    """Limiter guarding POST /api/error-tracking (10 per minute by default)."""
    from app.bootstrap.dependencies import create_error_tracking_rate_limiter
    return create_error_tracking_rate_limiter()


@lru_cache(maxsize=1)
def get_phone_click_rate_limiter():
    """Limiter guarding POST /api/phone-clicks."""
    from app.bootstrap.dependencies import create_phone_click_rate_limiter
    return create_phone_click_rate_limiter()


@lru_cache(maxsize=1)
def get_notifier():
    """Telegram notifier (singleton)."""
    from app.bootstrap.dependencies import create_notifier
    return create_notifier()


@lru_cache(maxsize=1)
def get_activity_counter():
    """Daily activity counter (singleton)."""
    from app.bootstrap.dependencies import create_activity_counter
    return create_activity_counter()


@lru_cache(maxsize=1)
def get_accept_lead_use_case():
    from app.bootstrap.dependencies import create_accept_lead_use_case
    return create_accept_lead_use_case(get_notifier(), get_activity_counter())


@lru_cache(maxsize=1)
def get_record_phone_click_use_case():
    from app.bootstrap.dependencies import create_record_phone_click_use_case
    return create_record_phone_click_use_case(get_notifier(), get_activity_counter())
