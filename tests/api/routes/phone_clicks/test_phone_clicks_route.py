"""Tests for POST /api/phone-clicks."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.phone_clicks import router as phone_clicks
from app.infra.stores.activity_counter import MemoryActivityCounter, local_day
from app.infra.stores.memory_rate_limiter import MemoryRateLimiter
from app.use_cases import RecordPhoneClickUseCase
from config.settings import BusinessSettings, RateLimitSettings


def _build_request(*, body: bytes, headers: dict[str, str] | None = None) -> Request:
    header_items = {"content-type": "application/json", **(headers or {})}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/api/phone-clicks",
        "raw_path": b"/api/phone-clicks",
        "query_string": b"",
        "headers": raw_headers,
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


@pytest.fixture
def notifier() -> AsyncMock:
    mock = AsyncMock()
    mock.send_phone_click_alert.return_value = True
    return mock


@pytest.fixture
def counter() -> MemoryActivityCounter:
    return MemoryActivityCounter()


@pytest.fixture(autouse=True)
def _wire(
    monkeypatch: pytest.MonkeyPatch,
    notifier: AsyncMock,
    counter: MemoryActivityCounter,
) -> None:
    limiter = MemoryRateLimiter(max_submissions=10, window_ms=60_000, name="phone_clicks")
    use_case = RecordPhoneClickUseCase(notifier, counter, dispatch_mode="inline")
    monkeypatch.setattr(phone_clicks, "get_phone_click_rate_limiter", lambda: limiter)
    monkeypatch.setattr(phone_clicks, "get_record_phone_click_use_case", lambda: use_case)
    monkeypatch.setattr(phone_clicks, "get_business_settings", lambda: BusinessSettings())
    monkeypatch.setattr(
        phone_clicks,
        "get_rate_limit_settings",
        lambda: RateLimitSettings(sweep_probability=0.0),
    )


def _today() -> date:
    return local_day()


@pytest.mark.asyncio
async def test_click_is_counted_and_alerted(
    notifier: AsyncMock, counter: MemoryActivityCounter
) -> None:
    body = json.dumps({"phoneNumber": "+91-9182296058", "source": "sticky", "city": "Vizag"})

    response = await phone_clicks.record_phone_click(
        _build_request(body=body.encode(), headers={"user-agent": "Android Mobile"})
    )

    assert response.status_code == 200
    assert json.loads(response.body) == {"success": True}
    click = notifier.send_phone_click_alert.await_args.args[0]
    assert click.source == "sticky"
    assert click.city == "vizag"
    assert click.device == "Mobile"
    assert counter.summary(_today()).phone_clicks == 1


@pytest.mark.asyncio
async def test_empty_body_uses_business_phone(notifier: AsyncMock) -> None:
    response = await phone_clicks.record_phone_click(_build_request(body=b""))

    assert response.status_code == 200
    click = notifier.send_phone_click_alert.await_args.args[0]
    assert click.phone_number == "+91-9182296058"
    assert click.source == "phone_button"


@pytest.mark.asyncio
async def test_alert_failure_still_returns_200(notifier: AsyncMock) -> None:
    notifier.send_phone_click_alert.side_effect = RuntimeError("down")
    response = await phone_clicks.record_phone_click(_build_request(body=b"{}"))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_malformed_json_returns_500() -> None:
    response = await phone_clicks.record_phone_click(_build_request(body=b"{nope"))
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_rate_limited(monkeypatch: pytest.MonkeyPatch, notifier: AsyncMock) -> None:
    limiter = MagicMock()
    limiter.admit_async = AsyncMock(return_value=False)
    monkeypatch.setattr(phone_clicks, "get_phone_click_rate_limiter", lambda: limiter)

    response = await phone_clicks.record_phone_click(_build_request(body=b"{}"))

    assert response.status_code == 429
    notifier.send_phone_click_alert.assert_not_awaited()
