"""Telegram Bot API settings for owner alerts.

Missing credentials are a soft-disable: alerts are skipped and the service
keeps accepting leads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time
from functools import lru_cache
from typing import Literal

TELEGRAM_API_BASE_URL: str = "https://api.telegram.org"

AlertDispatchMode = Literal["background", "inline"]


@dataclass(frozen=True)
class TelegramSettings:
    """Telegram alert configuration.

    Attributes:
        bot_token: Bot token (from @BotFather)
        chat_id: Chat that receives the alerts
        api_base_url: Bot API base URL
        request_timeout_seconds: Timeout for the sendMessage call
        dispatch_mode: "background" sends alerts after responding, "inline" awaits them
        daily_report_enabled: Whether the end-of-day report task runs
        daily_report_time: Local (Asia/Kolkata) time of the daily report
    """

    bot_token: str = ""
    chat_id: str = ""
    api_base_url: str = TELEGRAM_API_BASE_URL
    request_timeout_seconds: float = 10.0
    dispatch_mode: AlertDispatchMode = "background"
    daily_report_enabled: bool = True
    daily_report_time: time = time(23, 55)

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    @property
    def send_message_url(self) -> str:
        """Full sendMessage endpoint. Contains the token: never log it."""
        return f"{self.api_base_url}/bot{self.bot_token}/sendMessage"

    def validate(self) -> list[str]:
        """Validates Telegram settings.

        Absent credentials are not an error, only inconsistent values are.
        """
        errors: list[str] = []

        if self.request_timeout_seconds <= 0:
            errors.append("TELEGRAM_REQUEST_TIMEOUT_SECONDS must be > 0")

        if self.dispatch_mode not in ("background", "inline"):
            errors.append(f"Invalid LEAD_ALERT_DISPATCH_MODE: {self.dispatch_mode}")

        if bool(self.bot_token) != bool(self.chat_id):
            errors.append("TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID must be set together")

        return errors


def _parse_report_time(value: str) -> time:
    """Parses HH:MM, falling back to 23:55 on malformed input."""
    try:
        hour_str, minute_str = value.strip().split(":", 1)
        return time(int(hour_str), int(minute_str))
    except ValueError:
        return time(23, 55)


def _load_telegram_from_env() -> TelegramSettings:
    """Loads TelegramSettings from environment variables."""
    mode_str = os.getenv("LEAD_ALERT_DISPATCH_MODE", "background").lower()
    mode: AlertDispatchMode = "inline" if mode_str == "inline" else "background"
    return TelegramSettings(
        bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
        chat_id=os.getenv("TELEGRAM_CHAT_ID", ""),
        api_base_url=os.getenv("TELEGRAM_API_BASE_URL", TELEGRAM_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("TELEGRAM_REQUEST_TIMEOUT_SECONDS", "10")),
        dispatch_mode=mode,
        daily_report_enabled=os.getenv("DAILY_REPORT_ENABLED", "true").lower() in ("true", "1"),
        daily_report_time=_parse_report_time(os.getenv("DAILY_REPORT_TIME", "23:55")),
    )


@lru_cache(maxsize=1)
def get_telegram_settings() -> TelegramSettings:
    """Returns the cached TelegramSettings instance."""
    return _load_telegram_from_env()
