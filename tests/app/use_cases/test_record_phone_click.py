"""Tests for RecordPhoneClickUseCase."""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from app.domain.lead import PhoneClick
from app.infra.stores.activity_counter import MemoryActivityCounter
from app.use_cases import RecordPhoneClickUseCase


@pytest.mark.asyncio
async def test_counts_click_and_alerts() -> None:
    notifier = AsyncMock()
    notifier.send_phone_click_alert.return_value = False
    counter = MemoryActivityCounter()
    click = PhoneClick(
        phone_number="+91-9182296058",
        timestamp=datetime(2026, 10, 18, 9, 0, tzinfo=UTC),
    )

    await RecordPhoneClickUseCase(notifier, counter, dispatch_mode="inline").execute(click)

    notifier.send_phone_click_alert.assert_awaited_once_with(click)
    assert counter.summary(date(2026, 10, 18)).phone_clicks == 1
