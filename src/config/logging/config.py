"""Centralized logging configuration.

Usage:
    from config.logging import configure_logging, get_logger

    # Once, at service start (app/bootstrap/)
    configure_logging(level="INFO", service_name="doctor_visit_leads")

    # Anywhere
    logger = get_logger(__name__)
    logger.info("lead_accepted", extra={"city": "vizag"})

Patient fields passed through ``extra`` are redacted by
PatientDataRedactionFilter before formatting.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, PatientDataRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "doctor_visit_leads"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configures structured JSON logging for the service.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (case insensitive).
        service_name: Service name stamped on every record.
        correlation_id_getter: Optional callable returning the correlation_id
            of the current context (e.g. from a ContextVar).

    Raises:
        ValueError: If the level is not valid.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(PatientDataRedactionFilter())

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Replace existing handlers to avoid duplicated lines
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Returns the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Logs that a deterministic fallback was used (no PII).

    Args:
        logger: Logger instance.
        component: Component name (e.g. "lead_alert").
        reason: Why the fallback kicked in (e.g. "telegram_not_configured").
        elapsed_ms: Elapsed time in ms, when relevant.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )
