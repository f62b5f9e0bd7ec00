"""Rate limiting settings for the public endpoints.

Sliding window per client: at most ``*_max`` admissions in any trailing
``*_window_ms`` milliseconds.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

RateLimitBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class RateLimitSettings:
    """Rate limiting configuration.

    Attributes:
        backend: Where windows live (memory|redis)
        lead_max_submissions: Lead submissions allowed per window
        lead_window_ms: Lead window length
        error_tracking_max: Error reports allowed per window
        error_tracking_window_ms: Error report window length
        sweep_probability: Chance that a request triggers a full sweep
    """

    backend: RateLimitBackend = "memory"
    lead_max_submissions: int = 10
    lead_window_ms: int = 300_000  # 5 min
    error_tracking_max: int = 10
    error_tracking_window_ms: int = 60_000  # 1 min
    sweep_probability: float = 0.1

    def validate(self, base: BaseSettings) -> list[str]:
        """Validates rate limiting settings.

        Args:
            base: BaseSettings, for the environment and redis_url.

        Returns:
            List of errors.
        """
        errors: list[str] = []

        if self.backend not in ("memory", "redis"):
            errors.append(f"Invalid RATE_LIMIT_BACKEND: {self.backend}")

        if self.backend == "redis" and not base.redis_url:
            errors.append("RATE_LIMIT_BACKEND=redis requires REDIS_URL")

        if self.lead_max_submissions < 1 or self.error_tracking_max < 1:
            errors.append("Rate limit maximums must be >= 1")

        if self.lead_window_ms < 1 or self.error_tracking_window_ms < 1:
            errors.append("Rate limit windows must be >= 1 ms")

        if not 0.0 <= self.sweep_probability <= 1.0:
            errors.append("RATE_LIMIT_SWEEP_PROBABILITY must be within [0, 1]")

        return errors


def _load_rate_limit_from_env() -> RateLimitSettings:
    """Loads RateLimitSettings from environment variables."""
    backend_str = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
    backend: RateLimitBackend = "redis" if backend_str == "redis" else "memory"
    return RateLimitSettings(
        backend=backend,
        lead_max_submissions=int(os.getenv("LEAD_RATE_LIMIT_MAX", "10")),
        lead_window_ms=int(os.getenv("LEAD_RATE_LIMIT_WINDOW_MS", "300000")),
        error_tracking_max=int(os.getenv("ERROR_TRACKING_RATE_LIMIT_MAX", "10")),
        error_tracking_window_ms=int(os.getenv("ERROR_TRACKING_RATE_LIMIT_WINDOW_MS", "60000")),
        sweep_probability=float(os.getenv("RATE_LIMIT_SWEEP_PROBABILITY", "0.1")),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """Returns the cached RateLimitSettings instance."""
    return _load_rate_limit_from_env()
