"""In-memory sliding-window rate limiter.

Single-process only: every instance keeps its own windows and loses them on
restart, which briefly resets abuse protection. Use RedisRateLimiter when the
service runs on more than one instance.
"""

from __future__ import annotations

import threading
import time

from app.protocols.rate_limiter import AsyncRateLimiterProtocol, RateLimiterProtocol


def _now_ms() -> float:
    return time.time() * 1000


class MemoryRateLimiter(RateLimiterProtocol, AsyncRateLimiterProtocol):
    """Per-client sliding window kept in a dict.

    A client may be admitted at most ``max_submissions`` times in any trailing
    ``window_ms`` milliseconds. A timestamp expires once ``now - t >= window_ms``.

    Args:
        max_submissions: Admissions allowed per window.
        window_ms: Window length in milliseconds.
        name: Label used in logs/metrics (e.g. "leads").
    """

    def __init__(self, max_submissions: int, window_ms: int, name: str = "default") -> None:
        if max_submissions < 1:
            raise ValueError("max_submissions must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")
        self.max_submissions = max_submissions
        self.window_ms = window_ms
        self.name = name
        self._windows: dict[str, list[float]] = {}  # client_id -> admission timestamps (ms)
        self._lock = threading.Lock()

    def _recent(self, timestamps: list[float], now_ms: float) -> list[float]:
        return [t for t in timestamps if now_ms - t < self.window_ms]

    def admit(self, client_id: str, now_ms: float | None = None) -> bool:
        """Trims the client's window, then admits if under quota."""
        now = _now_ms() if now_ms is None else now_ms
        with self._lock:
            recent = self._recent(self._windows.get(client_id, []), now)
            if len(recent) >= self.max_submissions:
                self._windows[client_id] = recent
                return False
            recent.append(now)
            self._windows[client_id] = recent
            return True

    def sweep(self, now_ms: float | None = None) -> int:
        """Re-trims every window and forgets clients with nothing left."""
        now = _now_ms() if now_ms is None else now_ms
        removed = 0
        with self._lock:
            for client_id in list(self._windows):
                recent = self._recent(self._windows[client_id], now)
                if recent:
                    self._windows[client_id] = recent
                else:
                    del self._windows[client_id]
                    removed += 1
        return removed

    def tracked_clients(self) -> int:
        """Number of clients currently holding state (tests/readiness)."""
        with self._lock:
            return len(self._windows)

    def reset(self) -> None:
        """Drops every window (tests only)."""
        with self._lock:
            self._windows.clear()

    async def admit_async(self, client_id: str, now_ms: float | None = None) -> bool:
        return self.admit(client_id, now_ms)

    async def sweep_async(self, now_ms: float | None = None) -> int:
        return self.sweep(now_ms)
