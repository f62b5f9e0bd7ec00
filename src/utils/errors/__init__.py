"""Shared utility exceptions."""

from .exceptions import (
    InfrastructureError,
    RedisConnectionError,
)

__all__ = [
    "InfrastructureError",
    "RedisConnectionError",
]
