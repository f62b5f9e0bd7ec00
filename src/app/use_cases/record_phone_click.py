"""Records a "Call Now" click and tells the owner a call may be incoming."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.services.alert_dispatch import dispatch_alert

if TYPE_CHECKING:
    from app.domain.lead import PhoneClick
    from app.infra.stores.activity_counter import MemoryActivityCounter
    from app.protocols.notifier import LeadNotifierProtocol

logger = logging.getLogger(__name__)


class RecordPhoneClickUseCase:
    """Counts the click for the daily report and alerts the owner."""

    def __init__(
        self,
        notifier: LeadNotifierProtocol,
        activity_counter: MemoryActivityCounter,
        dispatch_mode: str = "background",
    ) -> None:
        self._notifier = notifier
        self._counter = activity_counter
        self._dispatch_mode = dispatch_mode

    async def execute(self, click: PhoneClick, correlation_id: str = "") -> None:
        self._counter.record_phone_click(click.timestamp)
        await dispatch_alert(
            kind="phone_click_alert",
            delivery=self._notifier.send_phone_click_alert(click),
            mode=self._dispatch_mode,
            correlation_id=correlation_id,
        )
        logger.info(
            "phone_click_recorded",
            extra={"button": click.source, "city": click.city or "unknown"},
        )
