"""Pytest configuration and shared fixtures"""

from datetime import datetime, timedelta
from typing import Callable, Iterable

import pytest

from epgstation_cleaner.models.recorded import RecordedItem
from tests.factories import NOW, recorded_payload, to_epoch_ms

CONFIG_ENV_VARS = (
    "EPGSTATION_BASE_URL",
    "RETAIN_DURATION",
    "IS_DRY_RUN",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "TRUST_ALL_CERTIFICATES",
    "REQUEST_TIMEOUT",
)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset configuration environment variables before each test"""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for retention checks."""
    return NOW


@pytest.fixture
def make_record() -> Callable[..., RecordedItem]:
    """Factory building RecordedItem models aged relative to NOW."""

    def factory(
        record_id: int = 1,
        age: timedelta = timedelta(hours=400),
        types: Iterable[str] = ("ts", "encoded"),
        protected: bool = False,
    ) -> RecordedItem:
        payload = recorded_payload(
            record_id, to_epoch_ms(NOW - age), types=types, protected=protected
        )
        return RecordedItem.model_validate(payload)

    return factory
