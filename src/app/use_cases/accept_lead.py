"""Accepts a validated lead: stamp it, count it, alert the owner.

The outcome of the alert never changes what the patient is told. Once a lead
passed validation the booking is acknowledged, whether or not Telegram was
reachable.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.constants.healthcare import DEFAULT_LEAD_SOURCE
from app.services.alert_dispatch import dispatch_alert

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.lead import ValidatedLead
    from app.infra.stores.activity_counter import MemoryActivityCounter
    from app.protocols.notifier import LeadNotifierProtocol

logger = logging.getLogger(__name__)


class AcceptLeadUseCase:
    """Post-validation half of the lead pipeline.

    Args:
        notifier: Owner alert channel.
        activity_counter: Daily counters for the end-of-day report.
        dispatch_mode: "background" (respond first) or "inline" (await alert).
        clock: Source of the server-side timestamp.
    """

    def __init__(
        self,
        notifier: LeadNotifierProtocol,
        activity_counter: MemoryActivityCounter,
        dispatch_mode: str = "background",
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._notifier = notifier
        self._counter = activity_counter
        self._dispatch_mode = dispatch_mode
        self._clock = clock

    async def execute(
        self,
        lead: ValidatedLead,
        correlation_id: str = "",
        source: str = DEFAULT_LEAD_SOURCE,
    ) -> ValidatedLead:
        """Stamps the lead and hands it to the notifier.

        Returns:
            The stamped lead (timestamp + source set server-side).
        """
        stamped = lead.stamped(self._clock(), source=source)
        self._counter.record_lead(stamped.city, stamped.timestamp)

        await dispatch_alert(
            kind="lead_alert",
            delivery=self._notifier.send_lead_alert(stamped),
            mode=self._dispatch_mode,
            correlation_id=correlation_id,
        )

        logger.info(
            "lead_accepted",
            extra={
                "city": stamped.city,
                "source": stamped.source,
                "dispatch_mode": self._dispatch_mode,
            },
        )
        return stamped
