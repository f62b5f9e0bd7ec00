"""Tests for POST /api/error-tracking."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.error_tracking import router as error_tracking
from app.infra.stores.memory_rate_limiter import MemoryRateLimiter
from config.settings import RateLimitSettings

VALID_REPORT = {
    "errorType": "network",
    "city": "tirupati",
    "timestamp": "2026-10-18T10:00:00Z",
    "service": "Senior Care",
    "severity": "high",
    "retryCount": 2,
}


def _build_request(*, body: bytes, headers: dict[str, str] | None = None) -> Request:
    header_items = {"content-type": "application/json", **(headers or {})}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/api/error-tracking",
        "raw_path": b"/api/error-tracking",
        "query_string": b"",
        "headers": raw_headers,
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _json(response) -> dict[str, object]:
    return json.loads(response.body.decode("utf-8"))


@pytest.fixture(autouse=True)
def _wire(monkeypatch: pytest.MonkeyPatch) -> MemoryRateLimiter:
    limiter = MemoryRateLimiter(max_submissions=10, window_ms=60_000, name="error_tracking")
    monkeypatch.setattr(error_tracking, "get_error_tracking_rate_limiter", lambda: limiter)
    monkeypatch.setattr(
        error_tracking,
        "get_rate_limit_settings",
        lambda: RateLimitSettings(sweep_probability=0.0),
    )
    return limiter


@pytest.mark.asyncio
async def test_valid_report_is_logged_sanitized(caplog: pytest.LogCaptureFixture) -> None:
    headers = {"user-agent": "U" * 300, "x-forwarded-for": "203.0.113.200, 10.0.0.1"}

    with caplog.at_level(logging.WARNING):
        response = await error_tracking.track_error(
            _build_request(body=json.dumps(VALID_REPORT).encode(), headers=headers)
        )

    assert response.status_code == 200
    assert _json(response) == {"success": True, "message": "Error tracked successfully"}
    record = next(r for r in caplog.records if r.getMessage() == "client_error_reported")
    assert record.error_type == "network"
    assert record.city == "tirupati"
    assert record.severity == "high"
    assert record.retry_count == 2
    assert record.user_agent == "U" * 100
    assert record.client_id == "203.0.113.200, "


@pytest.mark.asyncio
async def test_missing_city_returns_400_and_ignores_patient_keys(
    caplog: pytest.LogCaptureFixture,
) -> None:
    body = {k: v for k, v in VALID_REPORT.items() if k != "city"}
    body.update({"name": "Ravi Kumar", "phone": "9876543210"})

    with caplog.at_level(logging.DEBUG):
        response = await error_tracking.track_error(
            _build_request(body=json.dumps(body).encode())
        )

    assert response.status_code == 400
    assert _json(response) == {"error": "Invalid error tracking data"}
    assert "Ravi" not in caplog.text
    assert "9876543210" not in caplog.text


@pytest.mark.asyncio
async def test_patient_keys_alongside_valid_report_are_not_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    body = {**VALID_REPORT, "name": "Ravi Kumar", "phone": "9876543210"}

    with caplog.at_level(logging.DEBUG):
        response = await error_tracking.track_error(
            _build_request(body=json.dumps(body).encode())
        )

    assert response.status_code == 200
    for record in caplog.records:
        assert "Ravi" not in str(record.__dict__)
        assert "9876543210" not in str(record.__dict__)


@pytest.mark.asyncio
async def test_non_object_body_returns_400() -> None:
    response = await error_tracking.track_error(_build_request(body=b'"oops"'))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_malformed_json_returns_500() -> None:
    response = await error_tracking.track_error(_build_request(body=b"{oops"))

    assert response.status_code == 500
    assert _json(response) == {"error": "Error tracking system unavailable"}


@pytest.mark.asyncio
async def test_rate_limited_after_ten_reports() -> None:
    for _ in range(10):
        response = await error_tracking.track_error(
            _build_request(body=json.dumps(VALID_REPORT).encode())
        )
        assert response.status_code == 200

    response = await error_tracking.track_error(
        _build_request(body=json.dumps(VALID_REPORT).encode())
    )

    assert response.status_code == 429
    assert _json(response) == {"error": "Error tracking rate limit exceeded"}


@pytest.mark.asyncio
async def test_sweep_runs_when_probability_hits(monkeypatch: pytest.MonkeyPatch) -> None:
    limiter = MagicMock()
    limiter.admit_async = AsyncMock(return_value=True)
    limiter.sweep_async = AsyncMock(return_value=3)
    monkeypatch.setattr(error_tracking, "get_error_tracking_rate_limiter", lambda: limiter)
    monkeypatch.setattr(
        error_tracking,
        "get_rate_limit_settings",
        lambda: RateLimitSettings(sweep_probability=1.0),
    )

    await error_tracking.track_error(_build_request(body=json.dumps(VALID_REPORT).encode()))

    limiter.sweep_async.assert_awaited_once()
