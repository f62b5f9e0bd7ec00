"""Stores: concrete in-process and Redis state.

Available modules:
    - memory_rate_limiter: sliding-window limiter in process memory
    - redis_rate_limiter: sliding-window limiter on Redis sorted sets
    - activity_counter: daily lead / phone click counters for the report
"""

from __future__ import annotations

from app.infra.stores.activity_counter import MemoryActivityCounter
from app.infra.stores.memory_rate_limiter import MemoryRateLimiter
from app.infra.stores.redis_rate_limiter import RedisRateLimiter

__all__ = [
    # Memory
    "MemoryActivityCounter",
    "MemoryRateLimiter",
    # Redis
    "RedisRateLimiter",
]
