"""Recoverable infrastructure failures."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base for transient infrastructure failures."""


class RedisConnectionError(InfrastructureError):
    """Connection/timeout failure while talking to Redis."""
