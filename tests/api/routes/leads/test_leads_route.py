"""Tests for POST /api/leads."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from starlette.requests import Request

from api.routes.leads import router as leads
from app.infra.stores.activity_counter import MemoryActivityCounter
from app.infra.stores.memory_rate_limiter import MemoryRateLimiter
from app.infra.telegram import TelegramNotifier
from app.use_cases import AcceptLeadUseCase
from config.settings import BusinessSettings, RateLimitSettings, TelegramSettings
from utils.errors import RedisConnectionError

VALID_BODY = {"name": "Ravi Kumar", "age": "34", "phone": "98765 43210", "city": "Vizag"}


def _build_request(
    *,
    body: bytes,
    headers: dict[str, str] | None = None,
) -> Request:
    header_items = {"content-type": "application/json", **(headers or {})}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/api/leads",
        "raw_path": b"/api/leads",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _json(response) -> dict[str, object]:
    return json.loads(response.body.decode("utf-8"))


@pytest.fixture
def notifier() -> AsyncMock:
    mock = AsyncMock()
    mock.send_lead_alert.return_value = True
    return mock


@pytest.fixture
def limiter() -> MemoryRateLimiter:
    return MemoryRateLimiter(max_submissions=10, window_ms=300_000, name="leads")


@pytest.fixture(autouse=True)
def _wire(
    monkeypatch: pytest.MonkeyPatch,
    notifier: AsyncMock,
    limiter: MemoryRateLimiter,
) -> None:
    use_case = AcceptLeadUseCase(
        notifier=notifier,
        activity_counter=MemoryActivityCounter(),
        dispatch_mode="inline",
        clock=lambda: datetime(2026, 10, 18, 9, 0, tzinfo=UTC),
    )
    monkeypatch.setattr(leads, "get_lead_rate_limiter", lambda: limiter)
    monkeypatch.setattr(leads, "get_accept_lead_use_case", lambda: use_case)
    monkeypatch.setattr(
        leads,
        "get_business_settings",
        lambda: BusinessSettings(main_phone="+91-9000000000"),
    )
    monkeypatch.setattr(
        leads,
        "get_rate_limit_settings",
        lambda: RateLimitSettings(sweep_probability=0.0),
    )


@pytest.mark.asyncio
async def test_valid_lead_is_accepted_and_alerted(notifier: AsyncMock) -> None:
    response = await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))

    assert response.status_code == 200
    assert _json(response) == {"success": True, "message": "Lead captured successfully"}
    notifier.send_lead_alert.assert_awaited_once()
    lead = notifier.send_lead_alert.await_args.args[0]
    assert lead.phone == "9876543210"
    assert lead.city == "vizag"
    assert lead.source == "website"
    assert lead.timestamp == datetime(2026, 10, 18, 9, 0, tzinfo=UTC)


@pytest.mark.asyncio
async def test_notifier_failure_still_returns_200(notifier: AsyncMock) -> None:
    notifier.send_lead_alert.return_value = False
    response = await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))
    assert response.status_code == 200

    notifier.send_lead_alert.side_effect = RuntimeError("telegram down")
    response = await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_invalid_age_returns_400_without_alert(notifier: AsyncMock) -> None:
    body = json.dumps({**VALID_BODY, "age": "200"}).encode()

    response = await leads.submit_lead(_build_request(body=body))

    assert response.status_code == 400
    assert _json(response) == {
        "error": "Age must be between 1 and 120",
        "errors": ["Age must be between 1 and 120"],
    }
    notifier.send_lead_alert.assert_not_awaited()


@pytest.mark.asyncio
async def test_all_errors_are_joined() -> None:
    body = json.dumps({"name": "A", "age": "34", "phone": "123", "city": "Vizag"}).encode()

    payload = _json(await leads.submit_lead(_build_request(body=body)))

    assert payload["errors"] == [
        "Name must be at least 2 characters",
        "Phone must be a valid 10-digit Indian mobile number",
    ]
    assert payload["error"] == ", ".join(payload["errors"])


@pytest.mark.asyncio
async def test_non_object_body_returns_400(notifier: AsyncMock) -> None:
    response = await leads.submit_lead(_build_request(body=b"[1, 2, 3]"))

    assert response.status_code == 400
    notifier.send_lead_alert.assert_not_awaited()


@pytest.mark.asyncio
async def test_malformed_json_returns_500_with_phone(notifier: AsyncMock) -> None:
    response = await leads.submit_lead(_build_request(body=b"{not json"))

    assert response.status_code == 500
    assert _json(response) == {
        "error": "Unable to process booking. Please call +91-9000000000 for immediate assistance."
    }
    notifier.send_lead_alert.assert_not_awaited()


@pytest.mark.asyncio
async def test_eleventh_submission_is_rate_limited(notifier: AsyncMock) -> None:
    headers = {"x-forwarded-for": "203.0.113.7"}
    for _ in range(10):
        response = await leads.submit_lead(
            _build_request(body=json.dumps(VALID_BODY).encode(), headers=headers)
        )
        assert response.status_code == 200

    response = await leads.submit_lead(
        _build_request(body=json.dumps(VALID_BODY).encode(), headers=headers)
    )

    assert response.status_code == 429
    assert _json(response) == {
        "error": "Too many submissions. Please try again in 5 minutes or call "
        "+91-9000000000 directly."
    }
    assert notifier.send_lead_alert.await_count == 10

    other = await leads.submit_lead(
        _build_request(body=json.dumps(VALID_BODY).encode(), headers={"x-real-ip": "10.0.0.1"})
    )
    assert other.status_code == 200


@pytest.mark.asyncio
async def test_rate_limit_applies_before_validation(
    monkeypatch: pytest.MonkeyPatch, notifier: AsyncMock
) -> None:
    limiter = MagicMock()
    limiter.admit_async = AsyncMock(return_value=False)
    monkeypatch.setattr(leads, "get_lead_rate_limiter", lambda: limiter)

    response = await leads.submit_lead(_build_request(body=b"{not json"))

    assert response.status_code == 429
    limiter.admit_async.assert_awaited_once_with("unknown")


@pytest.mark.asyncio
async def test_limiter_backend_failure_fails_open(
    monkeypatch: pytest.MonkeyPatch, notifier: AsyncMock
) -> None:
    limiter = MagicMock()
    limiter.admit_async = AsyncMock(side_effect=RedisConnectionError("down"))
    monkeypatch.setattr(leads, "get_lead_rate_limiter", lambda: limiter)

    response = await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))

    assert response.status_code == 200
    notifier.send_lead_alert.assert_awaited_once()


@pytest.mark.asyncio
async def test_patient_fields_never_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG):
        await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))
        await leads.submit_lead(
            _build_request(body=json.dumps({**VALID_BODY, "age": "200"}).encode())
        )

    assert "Ravi" not in caplog.text
    assert "9876543210" not in caplog.text
    for record in caplog.records:
        assert "Ravi" not in str(record.__dict__)
        assert "98765" not in str(record.__dict__)


@pytest.mark.parametrize(
    "telegram_reply",
    [
        lambda request: httpx.Response(500, json={"ok": False}),
        lambda request: httpx.Response(401, json={"ok": False, "description": "Unauthorized"}),
    ],
)
@pytest.mark.asyncio
async def test_failing_telegram_webhook_still_returns_200(
    monkeypatch: pytest.MonkeyPatch, telegram_reply
) -> None:
    calls: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return telegram_reply(request)

    use_case = AcceptLeadUseCase(
        notifier=TelegramNotifier(
            TelegramSettings(bot_token="123:secret-token", chat_id="-100200"),
            transport=httpx.MockTransport(_handler),
        ),
        activity_counter=MemoryActivityCounter(),
        dispatch_mode="inline",
    )
    monkeypatch.setattr(leads, "get_accept_lead_use_case", lambda: use_case)

    response = await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))

    assert response.status_code == 200
    assert _json(response) == {"success": True, "message": "Lead captured successfully"}
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_unreachable_telegram_still_returns_200(monkeypatch: pytest.MonkeyPatch) -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    use_case = AcceptLeadUseCase(
        notifier=TelegramNotifier(
            TelegramSettings(bot_token="123:secret-token", chat_id="-100200"),
            transport=httpx.MockTransport(_handler),
        ),
        activity_counter=MemoryActivityCounter(),
        dispatch_mode="inline",
    )
    monkeypatch.setattr(leads, "get_accept_lead_use_case", lambda: use_case)

    response = await leads.submit_lead(_build_request(body=json.dumps(VALID_BODY).encode()))

    assert response.status_code == 200
