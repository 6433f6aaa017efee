"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from dayuse_pricing.common.db import build_engine  # noqa: E402
from dayuse_pricing.holidays.holiday_source import HolidaySourceError  # noqa: E402
from dayuse_pricing.storage.property_store import PropertyStore  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    defaults = {
        "PROJECT_NAME": "test-project",
        "ENV": "test",
        "LOG_LEVEL": "INFO",
        "DATABASE_URL": "sqlite:///:memory:",
        "HOLIDAY_API_BASE_URL": "https://holidays.example.test/api/v1",
        "HOTEL_CONFIG_PATH": str(ROOT_DIR / "configs" / "hotels.yaml"),
    }

    for key, value in defaults.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


class StubHolidaySource:
    """In-memory holiday source; years listed in `failing_years` raise like a network failure."""

    def __init__(self, tables: dict[int, dict[str, str]] | None = None, failing_years: set[int] | None = None) -> None:
        self.tables = tables or {}
        self.failing_years = failing_years or set()
        self.calls: list[int] = []

    def fetch_year(self, year: int) -> dict[str, str]:
        self.calls.append(year)
        if year in self.failing_years:
            raise HolidaySourceError(f"stub failure for {year}")
        return dict(self.tables.get(year, {}))


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store(tmp_path: Path) -> PropertyStore:
    return PropertyStore(build_engine(f"sqlite:///{tmp_path / 'store.db'}"))


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_holiday_source() -> type[StubHolidaySource]:
    return StubHolidaySource


@pytest.fixture
def tokyo_timezone(monkeypatch: pytest.MonkeyPatch):
    """Run the test with the process local timezone pinned to UTC+9."""

    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "JST-9")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
