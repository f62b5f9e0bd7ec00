"""Business constants: served cities, defaults and user-facing messages."""

from __future__ import annotations

from typing import Final

# City key -> display name
SERVICE_CITIES: Final[dict[str, str]] = {
    "vizag": "Vizag",
    "tirupati": "Tirupati",
    "kakinada": "Kakinada",
}

VALID_CITY_KEYS: Final[frozenset[str]] = frozenset(SERVICE_CITIES)

DEFAULT_SERVICE: Final[str] = "General Consultation"

DEFAULT_LEAD_SOURCE: Final[str] = "website"

# Response / dispatch promises quoted in alerts
RESPONSE_TIME: Final[str] = "2 minutes"
DOCTOR_ARRIVAL_TIME: Final[str] = "30 minutes"

# Endpoint messages ({phone} is the configured fallback number)
LEAD_CAPTURED_MESSAGE: Final[str] = "Lead captured successfully"
LEAD_RATE_LIMITED_MESSAGE: Final[str] = (
    "Too many submissions. Please try again in 5 minutes or call {phone} directly."
)
LEAD_SERVER_ERROR_MESSAGE: Final[str] = (
    "Unable to process booking. Please call {phone} for immediate assistance."
)
