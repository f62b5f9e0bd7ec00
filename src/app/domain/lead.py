"""Lead domain models.

ValidatedLead is the only trusted representation of a booking request. It is
built exclusively by ``api.validators.lead.validate_lead_data`` and is never
persisted: it lives for one request, is handed to the notifier and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Literal

from app.constants.healthcare import DEFAULT_LEAD_SOURCE, DEFAULT_SERVICE

PhoneClickSource = Literal["header", "sticky", "hero", "cta", "phone_button"]

PHONE_CLICK_SOURCES: frozenset[str] = frozenset(
    {"header", "sticky", "hero", "cta", "phone_button"}
)


@dataclass(frozen=True, slots=True)
class ValidatedLead:
    """Normalized booking request.

    Attributes:
        name: Patient name, trimmed (2-50 chars, letters/spaces/periods)
        age: Patient age in years (1-120)
        phone: 10-digit Indian mobile number, digits only
        city: Lower-case city key (vizag|tirupati|kakinada)
        service: Requested service, defaults to General Consultation
        timestamp: Server-side submission time, set by the endpoint
        source: Where the lead came from, set by the endpoint
    """

    name: str
    age: int
    phone: str
    city: str
    service: str = DEFAULT_SERVICE
    timestamp: datetime | None = None
    source: str = DEFAULT_LEAD_SOURCE

    def stamped(
        self,
        received_at: datetime | None = None,
        source: str = DEFAULT_LEAD_SOURCE,
    ) -> ValidatedLead:
        """Returns a copy carrying the server timestamp and source tag."""
        return replace(
            self,
            timestamp=received_at or datetime.now(UTC),
            source=source,
        )


@dataclass(frozen=True, slots=True)
class LeadValidationResult:
    """Outcome of validating a raw submission.

    Exactly one of ``lead`` / ``errors`` is meaningful: ``ok`` tells which.
    """

    ok: bool
    lead: ValidatedLead | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, lead: ValidatedLead) -> LeadValidationResult:
        return cls(ok=True, lead=lead, errors=[])

    @classmethod
    def failure(cls, errors: list[str]) -> LeadValidationResult:
        return cls(ok=False, lead=None, errors=list(errors))


@dataclass(frozen=True, slots=True)
class PhoneClick:
    """A "Call Now" button click. Carries no patient data.

    Attributes:
        phone_number: Business number the visitor dialled
        source: Button location on the page
        city: City page the click came from, when known
        user_agent: Browser user agent (truncated)
        timestamp: Server-side click time
    """

    phone_number: str
    source: PhoneClickSource = "phone_button"
    city: str | None = None
    user_agent: str = ""
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def device(self) -> str:
        return "Mobile" if "Mobile" in self.user_agent else "Desktop"
