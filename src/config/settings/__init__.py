"""Settings aggregator for the lead service.

Re-exports every settings class and cached getter, one module per concern.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.business import (
    DEFAULT_BUSINESS_EMAIL,
    DEFAULT_MAIN_PHONE,
    BusinessSettings,
    get_business_settings,
)
from config.settings.rate_limit import (
    RateLimitBackend,
    RateLimitSettings,
    get_rate_limit_settings,
)
from config.settings.telegram import (
    TELEGRAM_API_BASE_URL,
    AlertDispatchMode,
    TelegramSettings,
    get_telegram_settings,
)

__all__ = [
    "DEFAULT_BUSINESS_EMAIL",
    "DEFAULT_MAIN_PHONE",
    "TELEGRAM_API_BASE_URL",
    "AlertDispatchMode",
    "BaseSettings",
    "BusinessSettings",
    "Environment",
    "RateLimitBackend",
    "RateLimitSettings",
    "TelegramSettings",
    "get_base_settings",
    "get_business_settings",
    "get_rate_limit_settings",
    "get_telegram_settings",
]
