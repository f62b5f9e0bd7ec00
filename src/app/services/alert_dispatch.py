"""Fire-and-forget delivery of owner alerts.

The patient's response must not wait for Telegram. Alerts are scheduled as
asyncio tasks kept in a module-level set (so they are not garbage collected
mid-flight), bounded by a semaphore and drained on shutdown.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

_TASK_SEMAPHORE = asyncio.Semaphore(50)
_active_tasks: set[asyncio.Task[Any]] = set()


async def deliver_safely(
    *,
    kind: str,
    delivery: Awaitable[bool],
    correlation_id: str = "",
) -> bool:
    """Awaits an alert delivery and logs the outcome; never raises."""
    try:
        delivered = await delivery
    except Exception as exc:
        logger.error(
            "alert_delivery_crashed",
            extra={
                "alert_kind": kind,
                "correlation_id": correlation_id,
                "error_type": type(exc).__name__,
            },
        )
        return False

    if delivered:
        logger.info(
            "alert_delivered",
            extra={"alert_kind": kind, "correlation_id": correlation_id},
        )
    else:
        logger.warning(
            "alert_not_delivered",
            extra={"alert_kind": kind, "correlation_id": correlation_id},
        )
    return delivered


def schedule_alert_task(
    *,
    kind: str,
    delivery: Awaitable[bool],
    correlation_id: str = "",
) -> int:
    """Schedules the delivery in the background; returns active task count."""
    task = asyncio.create_task(
        _run_with_limit(deliver_safely(kind=kind, delivery=delivery, correlation_id=correlation_id))
    )
    _active_tasks.add(task)
    task.add_done_callback(_on_alert_task_done)
    logger.debug(
        "alert_scheduled",
        extra={
            "alert_kind": kind,
            "correlation_id": correlation_id,
            "active_tasks": len(_active_tasks),
        },
    )
    return len(_active_tasks)


async def dispatch_alert(
    *,
    kind: str,
    delivery: Awaitable[bool],
    mode: str,
    correlation_id: str = "",
) -> None:
    """Runs the delivery inline (awaited) or in the background, per ``mode``."""
    if mode == "inline":
        await deliver_safely(kind=kind, delivery=delivery, correlation_id=correlation_id)
        return
    schedule_alert_task(kind=kind, delivery=delivery, correlation_id=correlation_id)


async def _run_with_limit(coroutine: Awaitable[bool]) -> bool:
    async with _TASK_SEMAPHORE:
        return await coroutine


def _on_alert_task_done(task: asyncio.Task[Any]) -> None:
    _active_tasks.discard(task)
    with contextlib.suppress(asyncio.CancelledError):
        exc = task.exception()
        if exc is not None:
            logger.error(
                "alert_task_failed",
                extra={
                    "error_type": type(exc).__name__,
                    "active_tasks": len(_active_tasks),
                },
            )


def active_alert_tasks() -> int:
    return len(_active_tasks)


async def drain_alert_tasks(timeout_seconds: float = 10.0) -> None:
    """Waits for pending alerts at shutdown, cancelling stragglers."""
    if not _active_tasks:
        return

    pending_now = list(_active_tasks)
    logger.info(
        "alert_shutdown_wait",
        extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
    )
    _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not pending:
        return

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning("alert_shutdown_cancelled", extra={"cancelled_tasks": len(pending)})
