"""In-memory daily activity counters feeding the end-of-day report.

Counts only: no names, phones or addresses ever reach this store. Days are
Asia/Kolkata calendar days, matching when the owner reads the report.
"""

from __future__ import annotations

import threading
from collections import Counter
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from app.domain.activity import DailySummary

IST = ZoneInfo("Asia/Kolkata")


def local_day(moment: datetime | None = None) -> date:
    """Calendar day in IST for ``moment`` (defaults to now)."""
    return (moment or datetime.now(UTC)).astimezone(IST).date()


class MemoryActivityCounter:
    """Per-day counters of accepted leads and phone clicks.

    Args:
        retention_days: Days kept before old buckets are dropped.
    """

    def __init__(self, retention_days: int = 7) -> None:
        self._retention_days = retention_days
        self._submissions: Counter[date] = Counter()
        self._clicks: Counter[date] = Counter()
        self._by_city: dict[date, Counter[str]] = {}
        self._lock = threading.Lock()

    def record_lead(self, city: str, at: datetime | None = None) -> None:
        day = local_day(at)
        with self._lock:
            self._submissions[day] += 1
            self._by_city.setdefault(day, Counter())[city] += 1
            self._prune(day)

    def record_phone_click(self, at: datetime | None = None) -> None:
        day = local_day(at)
        with self._lock:
            self._clicks[day] += 1
            self._prune(day)

    def summary(self, day: date | None = None) -> DailySummary:
        """Snapshot of the counters for ``day`` (defaults to today, IST)."""
        target = day or local_day()
        with self._lock:
            return DailySummary(
                day=target,
                form_submissions=self._submissions[target],
                phone_clicks=self._clicks[target],
                leads_by_city=dict(self._by_city.get(target, Counter())),
            )

    def _prune(self, today: date) -> None:
        stale = [
            d
            for d in set(self._submissions) | set(self._clicks)
            if (today - d).days > self._retention_days
        ]
        for d in stale:
            self._submissions.pop(d, None)
            self._clicks.pop(d, None)
            self._by_city.pop(d, None)
