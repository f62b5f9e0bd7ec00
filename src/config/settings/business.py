"""Business contact and analytics settings.

Everything here is optional: phone and email fall back to hardcoded defaults so
a development checkout works without any secret. The legacy NEXT_PUBLIC_* names
used by the marketing site are accepted as fallbacks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_MAIN_PHONE = "+91-9182296058"
DEFAULT_BUSINESS_EMAIL = "doctorbookings2708@gmail.com"


@dataclass(frozen=True)
class BusinessSettings:
    """Business contact configuration.

    Attributes:
        main_phone: Number patients are told to call when something fails
        business_email: Public business email
        ga_measurement_id: Google Analytics measurement id (optional)
        clarity_project_id: Microsoft Clarity project id (optional)
    """

    main_phone: str = DEFAULT_MAIN_PHONE
    business_email: str = DEFAULT_BUSINESS_EMAIL
    ga_measurement_id: str = ""
    clarity_project_id: str = ""

    @property
    def fallback_phone(self) -> str:
        """Phone number quoted in every user-facing error."""
        return self.main_phone or DEFAULT_MAIN_PHONE

    @property
    def analytics_enabled(self) -> bool:
        return bool(self.ga_measurement_id or self.clarity_project_id)


def _env(name: str, legacy_name: str, default: str = "") -> str:
    return os.getenv(name) or os.getenv(legacy_name) or default


def _load_business_from_env() -> BusinessSettings:
    """Loads BusinessSettings from environment variables."""
    return BusinessSettings(
        main_phone=_env("MAIN_PHONE", "NEXT_PUBLIC_MAIN_PHONE", DEFAULT_MAIN_PHONE),
        business_email=_env(
            "BUSINESS_EMAIL", "NEXT_PUBLIC_BUSINESS_EMAIL", DEFAULT_BUSINESS_EMAIL
        ),
        ga_measurement_id=_env("GA_MEASUREMENT_ID", "NEXT_PUBLIC_GA_MEASUREMENT_ID"),
        clarity_project_id=_env("CLARITY_PROJECT_ID", "NEXT_PUBLIC_CLARITY_PROJECT_ID"),
    )


@lru_cache(maxsize=1)
def get_business_settings() -> BusinessSettings:
    """Returns the cached BusinessSettings instance."""
    return _load_business_from_env()
