"""Client-side form error telemetry.

The browser reports why a booking attempt failed (network, validation...) so the
owner can spot broken funnels. The model ignores unknown keys, which guarantees
that patient fields sent by a careless client are never read or logged.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ErrorType = Literal["network", "validation", "server", "timeout", "unknown"]
Severity = Literal["low", "medium", "high", "critical"]

_ERROR_TYPES = frozenset({"network", "validation", "server", "timeout", "unknown"})
_SEVERITIES = frozenset({"low", "medium", "high", "critical"})


class ErrorReport(BaseModel):
    """Error tracking payload (camelCase on the wire)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    error_type: ErrorType = Field(alias="errorType")
    city: str = Field(min_length=1, max_length=50)
    timestamp: str = Field(min_length=1, max_length=64)
    service: str = Field(default="unknown", max_length=100)
    severity: Severity = "medium"
    retry_count: int = Field(default=0, alias="retryCount", ge=0)

    @field_validator("error_type", mode="before")
    @classmethod
    def unknown_error_type(cls, v: Any) -> Any:
        # Missing/empty stays invalid; unexpected labels collapse to "unknown"
        if isinstance(v, str) and v and v not in _ERROR_TYPES:
            return "unknown"
        return v

    @field_validator("service", mode="before")
    @classmethod
    def default_service(cls, v: Any) -> Any:
        if not isinstance(v, str) or not v.strip():
            return "unknown"
        return v.strip()

    @field_validator("severity", mode="before")
    @classmethod
    def default_severity(cls, v: Any) -> Any:
        if v not in _SEVERITIES:
            return "medium"
        return v

    @field_validator("retry_count", mode="before")
    @classmethod
    def default_retry_count(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            return 0
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def numeric_timestamp(cls, v: Any) -> Any:
        # Browsers may send Date.now() epoch milliseconds; zero stays invalid
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v:
            return str(v)
        return v
