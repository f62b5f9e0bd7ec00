"""Validators for inbound payloads.

Modules:
- lead.py: booking form submissions (name, age, phone, city, service)
- phone_click.py: "Call Now" click payloads

Validators are pure functions: no IO, no logging, no exceptions on bad input.
"""

from api.validators.lead import validate_lead_data
from api.validators.phone_click import parse_phone_click

__all__ = ["parse_phone_click", "validate_lead_data"]
