"""Normalization of "Call Now" click payloads.

Every field is optional; anything unexpected falls back to a default instead of
failing, since the click already happened on the visitor's side.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.constants.healthcare import VALID_CITY_KEYS
from app.domain.lead import PHONE_CLICK_SOURCES, PhoneClick

MAX_USER_AGENT_LENGTH = 200
MAX_PHONE_NUMBER_LENGTH = 20


def parse_phone_click(raw: Any, *, default_phone: str, user_agent: str = "") -> PhoneClick:
    """Builds a PhoneClick from an untrusted body.

    Args:
        raw: Decoded JSON body (non-mappings are treated as empty).
        default_phone: Business number used when none (or garbage) is sent.
        user_agent: Request user agent, truncated.
    """
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    phone_number = data.get("phoneNumber")
    if not isinstance(phone_number, str) or not phone_number.strip():
        phone_number = default_phone
    phone_number = phone_number.strip()[:MAX_PHONE_NUMBER_LENGTH]

    source = data.get("source")
    if not isinstance(source, str) or source not in PHONE_CLICK_SOURCES:
        source = "phone_button"

    city = data.get("city")
    city_key = city.strip().casefold() if isinstance(city, str) else None
    if city_key not in VALID_CITY_KEYS:
        city_key = None

    return PhoneClick(
        phone_number=phone_number,
        source=source,
        city=city_key,
        user_agent=user_agent[:MAX_USER_AGENT_LENGTH],
    )
