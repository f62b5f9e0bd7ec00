"""Redis Rate Limiter: sliding window shared across instances.

One sorted set per client, scored by admission time in ms. The key carries a
TTL equal to the window, so idle clients disappear without a sweep.

Key contract:
    ratelimit:<limiter name>:<client id>
    Client ids are forwarded addresses: never log them in full.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING

from app.protocols.rate_limiter import AsyncRateLimiterProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "ratelimit:"


class RedisRateLimiter(AsyncRateLimiterProtocol):
    """Sliding-window limiter stored in Redis.

    The admission is written optimistically inside a MULTI block and rolled
    back when the resulting cardinality exceeds the quota, so concurrent
    requests from different instances never over-admit.

    Args:
        redis_client: Async Redis client.
        max_submissions: Admissions allowed per window.
        window_ms: Window length in milliseconds.
        name: Limiter namespace (e.g. "leads").
    """

    def __init__(
        self,
        redis_client: AsyncRedis[bytes],
        max_submissions: int,
        window_ms: int,
        name: str = "default",
    ) -> None:
        self._redis = redis_client
        self.max_submissions = max_submissions
        self.window_ms = window_ms
        self.name = name

    def _key(self, client_id: str) -> str:
        return f"{RATE_LIMIT_PREFIX}{self.name}:{client_id}"

    async def admit_async(self, client_id: str, now_ms: float | None = None) -> bool:
        """Records the admission, then undoes it if the quota is exceeded.

        Raises:
            RedisConnectionError: If Redis cannot be reached.
        """
        now = time.time() * 1000 if now_ms is None else now_ms
        key = self._key(client_id)
        member = f"{now:.0f}:{uuid.uuid4().hex}"

        try:
            pipeline = self._redis.pipeline(transaction=True)
            pipeline.zremrangebyscore(key, "-inf", now - self.window_ms)
            pipeline.zadd(key, {member: now})
            pipeline.zcard(key)
            pipeline.pexpire(key, self.window_ms)
            _, _, count, _ = await pipeline.execute()

            if count > self.max_submissions:
                await self._redis.zrem(key, member)
                logger.debug(
                    "rate_limit_rejected",
                    extra={"limiter": self.name, "window_count": count - 1},
                )
                return False
        except RedisConnectionError:
            raise
        except Exception as exc:
            raise RedisConnectionError("Rate limit check failed in Redis") from exc

        return True

    async def sweep_async(self, now_ms: float | None = None) -> int:
        """Trims every window of this limiter; deletes the empty ones.

        Keys also expire on their own, this only speeds up reclamation.
        """
        now = time.time() * 1000 if now_ms is None else now_ms
        removed = 0
        try:
            async for key in self._redis.scan_iter(match=f"{RATE_LIMIT_PREFIX}{self.name}:*"):
                pipeline = self._redis.pipeline(transaction=True)
                pipeline.zremrangebyscore(key, "-inf", now - self.window_ms)
                pipeline.zcard(key)
                _, remaining = await pipeline.execute()
                if remaining == 0:
                    await self._redis.delete(key)
                    removed += 1
        except Exception as exc:
            raise RedisConnectionError("Rate limit sweep failed in Redis") from exc

        logger.debug("rate_limit_swept", extra={"limiter": self.name, "removed": removed})
        return removed
