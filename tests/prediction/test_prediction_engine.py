# This test file covers the day-use forecast and its holiday fallback chain.
# It exists so weekday, holiday, and Saturday substitution rules stay deterministic.
# Holiday tables are placed in an injected cache so no test performs a fetch.

from __future__ import annotations

import asyncio

import pytest

from dayuse_pricing.holidays.holiday_classifier import HolidayCache, HolidayClassifier
from dayuse_pricing.prediction.prediction_engine import (
    BASIS_HOLIDAY_AVERAGE,
    BASIS_HOLIDAY_SATURDAY,
    BASIS_NO_DATA,
    BASIS_OVERALL_AVERAGE,
    DayusePredictionEngine,
    PredictionResult,
    day_of_week_stats,
    weekday_basis,
)


@pytest.fixture
def engine(make_holiday_source) -> DayusePredictionEngine:
    cache = HolidayCache()
    cache.set(2024, {"2024-01-01": "New Year's Day", "2024-01-08": "Coming of Age Day", "2024-02-12": "Substitute Holiday"})
    return DayusePredictionEngine(HolidayClassifier(make_holiday_source(), cache=cache))


@pytest.fixture
def plain_engine(make_holiday_source) -> DayusePredictionEngine:
    cache = HolidayCache()
    cache.set(2024, {})
    return DayusePredictionEngine(HolidayClassifier(make_holiday_source(), cache=cache))


def test_empty_history_predicts_nothing(engine: DayusePredictionEngine) -> None:
    result = engine.predict([], "2024-01-22")

    assert result == PredictionResult(count=0, revenue=0, avg_price=0, has_data=False, basis=BASIS_NO_DATA)


def test_two_mondays_average_per_day(plain_engine: DayusePredictionEngine) -> None:
    history = [
        {"id": "1", "date": "2024-01-08", "price": 5000},
        {"id": "2", "date": "2024-01-15", "price": 7000},
    ]

    result = plain_engine.predict(history, "2024-01-22")

    assert result.count == 1
    assert result.revenue == 6000
    assert result.avg_price == 6000
    assert result.has_data is True
    assert result.basis == weekday_basis(1) == "Monday weekday historical average"


def test_holiday_averages_past_holidays(engine: DayusePredictionEngine) -> None:
    history = [
        {"id": "1", "date": "2024-01-01", "price": 3000},
        {"id": "2", "date": "2024-01-01", "price": 5000},
        {"id": "3", "date": "2024-01-08", "price": 4000},
        {"id": "4", "date": "2024-01-15", "price": 90000},
    ]

    result = engine.predict(history, "2024-02-12")

    assert result.basis == BASIS_HOLIDAY_AVERAGE
    assert result.count == 2
    assert result.revenue == 6000
    assert result.avg_price == 3000


def test_holiday_without_holiday_history_uses_saturdays(engine: DayusePredictionEngine) -> None:
    history = [
        {"id": "1", "date": "2024-01-13", "price": 8000},
        {"id": "2", "date": "2024-01-20", "price": 4000},
        {"id": "3", "date": "2024-01-20", "price": 6000},
        {"id": "4", "date": "2024-01-16", "price": 1000},
    ]

    result = engine.predict(history, "2024-02-12")

    assert result.basis == BASIS_HOLIDAY_SATURDAY
    assert result.count == 2
    assert result.revenue == 9000
    assert result.avg_price == 4500


def test_holiday_without_holiday_or_saturday_history_uses_all_days(engine: DayusePredictionEngine) -> None:
    history = [
        {"id": "1", "date": "2024-01-16", "price": 1000},
        {"id": "2", "date": "2024-01-17", "price": 3000},
    ]

    result = engine.predict(history, "2024-02-12")

    assert result.basis == BASIS_OVERALL_AVERAGE
    assert result.revenue == 2000


def test_missing_weekday_falls_back_to_overall_average(plain_engine: DayusePredictionEngine) -> None:
    history = [
        {"id": "1", "date": "2024-01-15", "price": 2000},
        {"id": "2", "date": "2024-01-15", "price": 3000},
        {"id": "3", "date": "2024-01-16", "price": 4000},
    ]

    result = plain_engine.predict(history, "2024-01-19")

    assert result.basis == BASIS_OVERALL_AVERAGE
    assert result.count == 2
    assert result.revenue == 4500
    assert result.avg_price == 2250


def test_unloaded_holiday_year_is_treated_as_regular_day(make_holiday_source) -> None:
    engine = DayusePredictionEngine(HolidayClassifier(make_holiday_source({2025: {"2025-01-01": "New Year's Day"}})))
    history = [{"id": "1", "date": "2024-01-03", "price": 5000}]

    result = engine.predict(history, "2025-01-01")

    assert result.basis == weekday_basis(3)


def test_average_price_uses_rounded_averages(plain_engine: DayusePredictionEngine) -> None:
    history = [
        {"id": "1", "date": "2024-01-15", "price": 1000},
        {"id": "2", "date": "2024-01-22", "price": 1000},
        {"id": "3", "date": "2024-01-22", "price": 1001},
    ]

    result = plain_engine.predict(history, "2024-01-29")

    assert result.count == 2
    assert result.revenue == 1501
    assert result.avg_price == 751


def test_day_of_week_stats_cover_every_weekday() -> None:
    history = [
        {"id": "1", "date": "2024-01-14", "price": 7000},
        {"id": "2", "date": "2024-01-15", "price": 3000},
    ]

    stats = day_of_week_stats(history)

    assert [item.day_name for item in stats][:2] == ["Sunday", "Monday"]
    assert len(stats) == 7
    assert stats[0].avg_revenue == 7000
    assert stats[1].avg_revenue == 3000
    assert stats[2].avg_revenue == 5000


def test_initialize_preloads_target_year(make_holiday_source) -> None:
    source = make_holiday_source({2024: {"2024-02-12": "Substitute Holiday"}})
    engine = DayusePredictionEngine(HolidayClassifier(source))

    asyncio.run(engine.initialize(2024))

    history = [{"id": "1", "date": "2024-01-13", "price": 8000}]
    assert engine.predict(history, "2024-02-12").basis == BASIS_HOLIDAY_SATURDAY
    assert source.calls == [2024]
