"""Correlation id handling for request tracing.

The id is read from ``x-correlation-id`` (or generated) by the HTTP middleware
and injected into every log record. A ContextVar keeps it async-safe, and
background alert tasks inherit it when they are created.

Usage:
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        ...
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Returns the current correlation_id, or an empty string."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Sets the correlation_id for the current context.

    Args:
        correlation_id: Id to use. A new UUID is generated when None.

    Returns:
        Token for reset_correlation_id().
    """
    value = correlation_id or str(uuid.uuid4())
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restores the previous correlation_id."""
    _correlation_id.reset(token)
