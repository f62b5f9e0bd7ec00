"""Use cases of the lead service."""

from app.use_cases.accept_lead import AcceptLeadUseCase
from app.use_cases.record_phone_click import RecordPhoneClickUseCase

__all__ = [
    "AcceptLeadUseCase",
    "RecordPhoneClickUseCase",
]
