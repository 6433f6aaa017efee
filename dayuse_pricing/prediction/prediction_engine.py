# This module forecasts today's day-use bookings and revenue from past daily totals.
# It exists to keep the weekday and holiday averaging rules in one deterministic place.
# Holidays are averaged against past holidays, falling back to Saturdays, then to all days.
# Holiday lookups use the classifier's cache-only path so a forecast never waits on the network.

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any

import pandas as pd

from dayuse_pricing.common.numbers import round_half_up
from dayuse_pricing.holidays.holiday_classifier import HolidayClassifier
from dayuse_pricing.prediction.daily_aggregates import (
    HistoryInput,
    build_daily_aggregates,
    sunday_first_weekday,
)

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
SATURDAY = 6

BASIS_NO_DATA = "no data"
BASIS_HOLIDAY_AVERAGE = "holiday historical average"
BASIS_HOLIDAY_SATURDAY = "holiday (substituted with Saturday data)"
BASIS_OVERALL_AVERAGE = "overall average (no weekday data)"


def weekday_basis(day_of_week: int) -> str:
    return f"{WEEKDAY_NAMES[day_of_week]} weekday historical average"


@dataclass(frozen=True)
class PredictionResult:
    count: int
    revenue: int
    avg_price: int
    has_data: bool
    basis: str

    @classmethod
    def empty(cls, basis: str = BASIS_NO_DATA) -> PredictionResult:
        return cls(count=0, revenue=0, avg_price=0, has_data=False, basis=basis)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WeekdayStats:
    day_of_week: int
    day_name: str
    avg_count: int
    avg_revenue: int
    avg_price: int


def average_daily_aggregates(daily: pd.DataFrame, basis: str) -> PredictionResult:
    """Average per-day counts and revenue; the price is derived from the rounded averages."""

    if daily.empty:
        return PredictionResult.empty(basis)

    avg_count = round_half_up(daily["count"].mean())
    avg_revenue = round_half_up(daily["revenue"].mean())
    avg_price = round_half_up(avg_revenue / avg_count) if avg_count > 0 else 0
    return PredictionResult(
        count=avg_count,
        revenue=avg_revenue,
        avg_price=avg_price,
        has_data=True,
        basis=basis,
    )


def predict_from_weekday(
    daily: pd.DataFrame,
    day_of_week: int,
    basis_override: str | None = None,
) -> PredictionResult:
    same_weekday = daily[daily["day_of_week"] == day_of_week]
    if same_weekday.empty:
        return average_daily_aggregates(daily, BASIS_OVERALL_AVERAGE)
    return average_daily_aggregates(same_weekday, basis_override or weekday_basis(day_of_week))


def day_of_week_stats(history: HistoryInput | None) -> list[WeekdayStats]:
    """Weekday averages for reporting; holidays are not substituted here."""

    daily = build_daily_aggregates(history)
    stats: list[WeekdayStats] = []
    for day_of_week, day_name in enumerate(WEEKDAY_NAMES):
        prediction = predict_from_weekday(daily, day_of_week)
        stats.append(
            WeekdayStats(
                day_of_week=day_of_week,
                day_name=day_name,
                avg_count=prediction.count,
                avg_revenue=prediction.revenue,
                avg_price=prediction.avg_price,
            )
        )
    return stats


def day_of_week_stats_frame(history: HistoryInput | None) -> pd.DataFrame:
    return pd.DataFrame([asdict(item) for item in day_of_week_stats(history)])


class DayusePredictionEngine:
    def __init__(self, classifier: HolidayClassifier) -> None:
        self.classifier = classifier

    async def initialize(self, year: int) -> None:
        """Preload the holiday table so synchronous predictions see that year's holidays."""

        await self.classifier.load_year(year)

    def predict(self, history: HistoryInput | None, target_date: date | datetime | str) -> PredictionResult:
        daily = build_daily_aggregates(history)
        if daily.empty:
            return PredictionResult.empty()

        if self.classifier.is_holiday(target_date):
            holiday_mask = daily["date"].map(self.classifier.is_holiday).astype(bool)
            holiday_days = daily[holiday_mask]
            if not holiday_days.empty:
                return average_daily_aggregates(holiday_days, BASIS_HOLIDAY_AVERAGE)
            return predict_from_weekday(daily, SATURDAY, BASIS_HOLIDAY_SATURDAY)

        return predict_from_weekday(daily, sunday_first_weekday(target_date))

    def day_of_week_stats(self, history: HistoryInput | None) -> list[WeekdayStats]:
        return day_of_week_stats(history)
