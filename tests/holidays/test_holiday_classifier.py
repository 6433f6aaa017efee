# This test file covers the cached holiday classifier and its two lookup paths.
# It exists so the non-blocking lookup never starts answering from the network by accident.
# Async paths are driven with asyncio.run to keep the suite free of extra plugins.

from __future__ import annotations

import asyncio
from datetime import date, datetime

from dayuse_pricing.holidays.holiday_classifier import HolidayCache, HolidayClassifier, date_key

HOLIDAYS_2024 = {"2024-01-01": "New Year's Day", "2024-01-08": "Coming of Age Day"}


def test_sync_lookup_answers_false_until_year_is_loaded(make_holiday_source) -> None:
    source = make_holiday_source({2024: HOLIDAYS_2024})
    classifier = HolidayClassifier(source)

    assert classifier.is_holiday("2024-01-01") is False
    assert source.calls == []

    asyncio.run(classifier.load_year(2024))

    assert classifier.is_holiday("2024-01-01") is True
    assert classifier.is_holiday(date(2024, 1, 2)) is False
    assert classifier.holiday_name("2024-01-08") == "Coming of Age Day"


def test_load_year_is_idempotent(make_holiday_source) -> None:
    source = make_holiday_source({2024: HOLIDAYS_2024})
    classifier = HolidayClassifier(source)

    asyncio.run(classifier.load_year(2024))
    asyncio.run(classifier.load_year(2024))

    assert source.calls == [2024]


def test_concurrent_loads_share_one_fetch(make_holiday_source) -> None:
    source = make_holiday_source({2024: HOLIDAYS_2024})
    classifier = HolidayClassifier(source)

    async def _load_twice() -> list[dict[str, str]]:
        return await asyncio.gather(classifier.load_year(2024), classifier.load_year(2024))

    first, second = asyncio.run(_load_twice())

    assert first == second == HOLIDAYS_2024
    assert source.calls == [2024]


def test_failed_fetch_caches_empty_table(make_holiday_source) -> None:
    source = make_holiday_source(failing_years={2030})
    classifier = HolidayClassifier(source)

    table = asyncio.run(classifier.load_year(2030))

    assert table == {}
    assert classifier.is_year_loaded(2030)
    assert classifier.is_holiday("2030-01-01") is False
    asyncio.run(classifier.load_year(2030))
    assert source.calls == [2030]


def test_async_lookup_loads_missing_year(make_holiday_source) -> None:
    source = make_holiday_source({2024: HOLIDAYS_2024})
    classifier = HolidayClassifier(source)

    assert asyncio.run(classifier.is_holiday_async("2024-01-08")) is True
    assert asyncio.run(classifier.get_holiday_name("2024-01-01")) == "New Year's Day"
    assert source.calls == [2024]


def test_injected_cache_is_shared_and_clearable(make_holiday_source) -> None:
    cache = HolidayCache()
    cache.set(2024, HOLIDAYS_2024)
    classifier = HolidayClassifier(make_holiday_source(), cache=cache)

    assert classifier.is_holiday("2024-01-01") is True
    assert cache.years() == [2024]

    classifier.clear_cache()

    assert not cache.contains(2024)
    assert classifier.is_holiday("2024-01-01") is False


def test_date_key_uses_calendar_date_of_local_values() -> None:
    assert date_key("2024-01-08") == "2024-01-08"
    assert date_key("2024-01-08T23:30:00") == "2024-01-08"
    assert date_key(datetime(2024, 1, 8, 23, 59)) == "2024-01-08"
    assert date_key(date(2024, 2, 29)) == "2024-02-29"


def test_date_key_converts_offset_strings_to_local_day(tokyo_timezone) -> None:
    assert date_key("2024-01-08T23:30:00Z") == "2024-01-09"
    assert date_key("2024-01-08T20:00:00-05:00") == "2024-01-09"
    assert date_key("2024-01-09T08:00:00+09:00") == "2024-01-09"


def test_offset_timestamp_is_classified_by_local_day(make_holiday_source, tokyo_timezone) -> None:
    cache = HolidayCache()
    cache.set(2024, {"2024-01-08": "Coming of Age Day"})
    classifier = HolidayClassifier(make_holiday_source(), cache=cache)

    assert classifier.is_holiday("2024-01-07T16:00:00Z") is True
    assert classifier.is_holiday("2024-01-08T16:00:00Z") is False


class _BrokenSource:
    def __init__(self) -> None:
        self.calls = 0

    def fetch_year(self, year: int) -> dict[str, str]:
        self.calls += 1
        raise ConnectionError("socket reset")


def test_unexpected_source_error_caches_empty_table() -> None:
    source = _BrokenSource()
    classifier = HolidayClassifier(source)

    assert asyncio.run(classifier.load_year(2024)) == {}
    assert classifier.is_year_loaded(2024)
    assert classifier.is_holiday("2024-01-01") is False
    asyncio.run(classifier.load_year(2024))
    assert source.calls == 1
