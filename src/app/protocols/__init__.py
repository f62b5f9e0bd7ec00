"""Contracts between the endpoints and their infrastructure."""

from .notifier import LeadNotifierProtocol
from .rate_limiter import AsyncRateLimiterProtocol, RateLimiterProtocol

__all__ = [
    "AsyncRateLimiterProtocol",
    "LeadNotifierProtocol",
    "RateLimiterProtocol",
]
