"""Telegram owner alerts: best-effort, at most one attempt per call.

Every public method returns True when Telegram accepted the message and False
otherwise. Nothing raises: a failed alert must never break the booking flow for
the patient. Failures are logged without patient fields and without the bot
token (it is part of the URL).
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from app.domain.activity import DailySummary
from app.infra.stores.activity_counter import local_day
from app.infra.telegram.messages import (
    build_daily_report,
    build_lead_alert,
    build_phone_click_alert,
)
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.domain.lead import PhoneClick, ValidatedLead
    from config.settings import TelegramSettings

logger = logging.getLogger(__name__)

PARSE_MODE = "Markdown"


class TelegramNotifier:
    """Sends alerts through the Telegram Bot API ``sendMessage`` method.

    Args:
        settings: Telegram credentials and timeouts.
        transport: Optional httpx transport (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        settings: TelegramSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._settings.is_configured

    async def send_lead_alert(self, lead: ValidatedLead) -> bool:
        """Alerts the owner about a new booking request."""
        return await self._deliver("lead_alert", build_lead_alert(lead))

    async def send_phone_click_alert(self, click: PhoneClick) -> bool:
        """Alerts the owner that a visitor pressed a "Call Now" button."""
        return await self._deliver("phone_click_alert", build_phone_click_alert(click))

    async def send_daily_report(self, summary: DailySummary | None = None) -> bool:
        """Sends the end-of-day activity summary (empty counts if none given)."""
        report = summary or DailySummary(day=local_day())
        return await self._deliver("daily_report", build_daily_report(report))

    def build_payload(self, text: str) -> dict[str, Any]:
        return {
            "chat_id": self._settings.chat_id,
            "text": text,
            "parse_mode": PARSE_MODE,
        }

    async def _deliver(self, kind: str, text: str) -> bool:
        if not self.enabled:
            log_fallback(logger, kind, reason="telegram_not_configured")
            return False

        started_at = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self._settings.send_message_url,
                    json=self.build_payload(text),
                )
        except Exception as exc:
            logger.warning(
                "telegram_delivery_failed",
                extra={
                    "alert_kind": kind,
                    "error_type": type(exc).__name__,
                    "elapsed_ms": round((time.perf_counter() - started_at) * 1000, 2),
                },
            )
            return False

        elapsed_ms = round((time.perf_counter() - started_at) * 1000, 2)
        if not response.is_success:
            logger.warning(
                "telegram_delivery_rejected",
                extra={
                    "alert_kind": kind,
                    "status_code": response.status_code,
                    "elapsed_ms": elapsed_ms,
                },
            )
            return False

        logger.info(
            "telegram_delivery_ok",
            extra={"alert_kind": kind, "elapsed_ms": elapsed_ms},
        )
        return True
