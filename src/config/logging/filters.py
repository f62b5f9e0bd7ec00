"""Logging filters that inject context and strip patient data.

Filters enrich or sanitize records so callers never have to do it by hand.

Injected fields:
- correlation_id: request tracing id
- service: service name (e.g. doctor_visit_leads)

Sanitized fields: any extra whose key looks patient-identifying
(see SENSITIVE_FIELDS) is replaced by REDACTED_VALUE, nested values included.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

REDACTED_VALUE = "[REDACTED]"

SENSITIVE_FIELDS = frozenset(
    {
        "age",
        "email",
        "mobile",
        "patient",
        "patient_age",
        "patient_name",
        "phone",
        "phone_number",
    }
)

# Attributes every LogRecord carries; never treated as extras.
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "correlation_id", "service"}


def redact_sensitive_fields(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``context`` with patient-identifying values masked.

    Nested mappings and lists are walked recursively. Empty values are left
    untouched so that "field missing" stays visible in logs.

    Args:
        context: Arbitrary log context.

    Returns:
        New dict safe to log.
    """
    return {key: _redact_value(key, value) for key, value in context.items()}


def _redact_value(key: Any, value: Any) -> Any:
    if isinstance(key, str) and key.lower() in SENSITIVE_FIELDS and value:
        return REDACTED_VALUE
    if isinstance(value, dict):
        return redact_sensitive_fields(value)
    if isinstance(value, (list, tuple)):
        return [_redact_item(item) for item in value]
    return value


def _redact_item(item: Any) -> Any:
    if isinstance(item, dict):
        return redact_sensitive_fields(item)
    return item


class CorrelationIdFilter(logging.Filter):
    """Injects correlation_id and service into every record.

    Args:
        service_name: Service name used to identify log lines.
        correlation_id_getter: Callable returning the current correlation_id.
            Falls back to an empty string when not provided.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adds correlation_id and service to the record.

        A correlation_id passed explicitly through ``extra`` is preserved.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class PatientDataRedactionFilter(logging.Filter):
    """Masks patient-identifying extras before the record is formatted.

    Only attributes added through ``extra`` are inspected; the standard
    LogRecord attributes (``name``, ``msg``...) are left alone.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key in _RESERVED_RECORD_ATTRS:
                continue
            redacted = _redact_value(key, value)
            if redacted is not value:
                setattr(record, key, redacted)
        return True
