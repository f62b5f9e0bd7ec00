"""Pytest configuration for the doctor visit leads service."""

import sys
from pathlib import Path

import pytest

# Adds src/ to the path so tests use absolute imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings getters are lru_cached; every test starts from a clean env read."""
    from config.settings import (
        get_base_settings,
        get_business_settings,
        get_rate_limit_settings,
        get_telegram_settings,
    )

    getters = (
        get_base_settings,
        get_business_settings,
        get_rate_limit_settings,
        get_telegram_settings,
    )
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()
