"""Owner notification contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.activity import DailySummary
    from app.domain.lead import PhoneClick, ValidatedLead


class LeadNotifierProtocol(Protocol):
    """Best-effort alert delivery.

    Every method returns True when the alert was delivered and False
    otherwise. Implementations must never raise.
    """

    async def send_lead_alert(self, lead: ValidatedLead) -> bool: ...

    async def send_phone_click_alert(self, click: PhoneClick) -> bool: ...

    async def send_daily_report(self, summary: DailySummary | None = None) -> bool: ...
