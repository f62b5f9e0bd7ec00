"""End-of-day activity report.

A background task started by the app lifespan sleeps until the configured
local time (23:55 Asia/Kolkata by default), sends the day's counters to the
owner and loops. Delivery is best-effort like every other alert.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, time, timedelta
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.infra.stores.activity_counter import MemoryActivityCounter
    from app.protocols.notifier import LeadNotifierProtocol

logger = logging.getLogger(__name__)

IST = ZoneInfo("Asia/Kolkata")


def next_run_after(now: datetime, at: time) -> datetime:
    """Next ``at`` (IST wall clock) strictly after ``now``."""
    local_now = now.astimezone(IST)
    target = datetime.combine(local_now.date(), at, tzinfo=IST)
    if target <= local_now:
        target += timedelta(days=1)
    return target


def seconds_until_next_run(now: datetime, at: time) -> float:
    """Seconds from ``now`` until the next ``at`` (IST wall clock).

    When ``now`` is exactly ``at`` the run is scheduled for the next day.
    """
    return (next_run_after(now, at) - now).total_seconds()


async def send_daily_report_now(
    notifier: LeadNotifierProtocol,
    counter: MemoryActivityCounter,
    now: datetime | None = None,
) -> bool:
    """Sends the report for the IST day containing ``now``."""
    moment = now or datetime.now(UTC)
    summary = counter.summary(moment.astimezone(IST).date())
    try:
        delivered = await notifier.send_daily_report(summary)
    except Exception as exc:
        logger.error("daily_report_crashed", extra={"error_type": type(exc).__name__})
        return False

    logger.info(
        "daily_report_sent" if delivered else "daily_report_not_delivered",
        extra={
            "day": summary.day.isoformat(),
            "form_submissions": summary.form_submissions,
            "phone_clicks": summary.phone_clicks,
        },
    )
    return delivered


async def run_daily_report_loop(
    notifier: LeadNotifierProtocol,
    counter: MemoryActivityCounter,
    at: time,
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Sends the report every day at ``at`` until cancelled.

    The next run is computed from the previous target, not from the wake-up
    time, so a timer firing slightly early cannot report the same day twice.
    """
    previous: datetime | None = None
    while True:
        now = clock()
        reference = now if previous is None or now > previous else previous
        target = next_run_after(reference, at)
        delay = max((target - now).total_seconds(), 0.0)
        logger.debug("daily_report_sleeping", extra={"seconds": round(delay)})
        await sleep(delay)
        await send_daily_report_now(notifier, counter, target)
        previous = target
