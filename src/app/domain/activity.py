"""Daily activity summary. Counts only, never patient data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True, slots=True)
class DailySummary:
    """Activity for one Asia/Kolkata calendar day.

    Attributes:
        day: Calendar day the counts belong to
        form_submissions: Validated leads accepted
        phone_clicks: "Call Now" clicks reported
        leads_by_city: Accepted leads per city key
    """

    day: date
    form_submissions: int = 0
    phone_clicks: int = 0
    leads_by_city: dict[str, int] = field(default_factory=dict)

    @property
    def total_leads(self) -> int:
        return self.form_submissions + self.phone_clicks
