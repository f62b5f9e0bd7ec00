"""Structured logging configuration.

Usage:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="doctor_visit_leads")

    logger = get_logger(__name__)
    logger.info("lead_accepted", extra={"city": "vizag"})

Every record carries correlation_id, service, level, logger, message and
asctime. Patient data never reaches the output.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import (
    REDACTED_VALUE,
    SENSITIVE_FIELDS,
    CorrelationIdFilter,
    PatientDataRedactionFilter,
    redact_sensitive_fields,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REDACTED_VALUE",
    "REQUIRED_LOG_FIELDS",
    "SENSITIVE_FIELDS",
    "CorrelationIdFilter",
    "PatientDataRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "redact_sensitive_fields",
]
