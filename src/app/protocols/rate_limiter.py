"""Rate limiter contracts.

Lightweight ABCs the endpoints depend on, so the in-memory limiter can be
swapped for a shared store when the service runs on more than one instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class RateLimiterProtocol(ABC):
    """Synchronous sliding-window limiter.

    Canonical methods:
    - admit(client_id, now_ms) -> bool
      True when the client is under its quota; the admission is recorded.
    - sweep(now_ms) -> int
      Drops expired state for every client; returns clients removed.
    """

    @abstractmethod
    def admit(self, client_id: str, now_ms: float | None = None) -> bool:
        """Checks and records one admission for ``client_id``.

        Args:
            client_id: Opaque client identifier (forwarded address).
            now_ms: Current time in epoch milliseconds (defaults to wall clock).

        Returns:
            True if admitted; False if the quota for the window is exhausted.
        """

    @abstractmethod
    def sweep(self, now_ms: float | None = None) -> int:
        """Removes expired timestamps and empty clients.

        Returns:
            Number of clients removed.
        """


class AsyncRateLimiterProtocol(ABC):
    """Asynchronous flavour used by the HTTP handlers."""

    @abstractmethod
    async def admit_async(self, client_id: str, now_ms: float | None = None) -> bool:
        """Async version of ``admit``."""

    @abstractmethod
    async def sweep_async(self, now_ms: float | None = None) -> int:
        """Async version of ``sweep``."""
