"""Server-side validation of booking form submissions.

Every field is checked independently and all failures are reported together,
so the form can highlight every problem in one round trip. Input is untrusted:
any JSON value is accepted and non-string fields are treated as invalid, never
as a crash.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from app.constants.healthcare import DEFAULT_SERVICE, VALID_CITY_KEYS
from app.domain.lead import LeadValidationResult, ValidatedLead

NAME_MIN_LENGTH: Final[int] = 2
NAME_MAX_LENGTH: Final[int] = 50
AGE_MIN: Final[int] = 1
AGE_MAX: Final[int] = 120

_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[a-zA-Z\s.]+", re.ASCII)
_AGE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\d{1,3}", re.ASCII)
_PHONE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[6-9]\d{9}", re.ASCII)
_NON_DIGITS: Final[re.Pattern[str]] = re.compile(r"\D", re.ASCII)

NAME_TOO_SHORT: Final[str] = "Name must be at least 2 characters"
NAME_TOO_LONG: Final[str] = "Name must be less than 50 characters"
NAME_INVALID_CHARS: Final[str] = "Name can only contain letters, spaces, and periods"
AGE_OUT_OF_RANGE: Final[str] = "Age must be between 1 and 120"
PHONE_INVALID: Final[str] = "Phone must be a valid 10-digit Indian mobile number"
CITY_INVALID: Final[str] = "City must be one of: Vizag, Tirupati, Kakinada"


def validate_name(value: Any) -> tuple[str, list[str]]:
    """Trims and checks the patient name.

    Returns:
        (normalized name, errors)
    """
    name = value.strip() if isinstance(value, str) else ""
    errors: list[str] = []
    if len(name) < NAME_MIN_LENGTH:
        errors.append(NAME_TOO_SHORT)
    if len(name) > NAME_MAX_LENGTH:
        errors.append(NAME_TOO_LONG)
    if not _NAME_PATTERN.fullmatch(name):
        errors.append(NAME_INVALID_CHARS)
    return name, errors


def validate_age(value: Any) -> tuple[int | None, list[str]]:
    """Parses the age from a digit string or an int (bools rejected)."""
    age: int | None = None
    if isinstance(value, int) and not isinstance(value, bool):
        age = value
    elif isinstance(value, str) and _AGE_PATTERN.fullmatch(value.strip()):
        age = int(value.strip())

    if age is None or not AGE_MIN <= age <= AGE_MAX:
        return None, [AGE_OUT_OF_RANGE]
    return age, []


def validate_phone(value: Any) -> tuple[str, list[str]]:
    """Strips formatting and checks the Indian mobile format."""
    phone = _NON_DIGITS.sub("", value) if isinstance(value, str) else ""
    if not _PHONE_PATTERN.fullmatch(phone):
        return phone, [PHONE_INVALID]
    return phone, []


def validate_city(value: Any) -> tuple[str, list[str]]:
    """Case-folds the city and checks it is served."""
    city = value.strip().casefold() if isinstance(value, str) else ""
    if city not in VALID_CITY_KEYS:
        return city, [CITY_INVALID]
    return city, []


def normalize_service(value: Any) -> str:
    """Optional free-form service; blank or non-string means the default."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_SERVICE


def validate_lead_data(raw: Any) -> LeadValidationResult:
    """Validates a raw booking submission.

    Args:
        raw: Decoded JSON body. Anything that is not an object is treated as
            an empty object.

    Returns:
        LeadValidationResult with the ValidatedLead on success, or every
        field error found.

    Example:
        >>> validate_lead_data(
        ...     {"name": "Ravi Kumar", "age": "34", "phone": "9876543210", "city": "Vizag"}
        ... ).lead.city
        'vizag'
    """
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    name, name_errors = validate_name(data.get("name"))
    age, age_errors = validate_age(data.get("age"))
    phone, phone_errors = validate_phone(data.get("phone"))
    city, city_errors = validate_city(data.get("city"))
    service = normalize_service(data.get("service"))

    errors = [*name_errors, *age_errors, *phone_errors, *city_errors]
    if errors or age is None:
        return LeadValidationResult.failure(errors)

    return LeadValidationResult.success(
        ValidatedLead(
            name=name,
            age=age,
            phone=phone,
            city=city,
            service=service,
        )
    )
