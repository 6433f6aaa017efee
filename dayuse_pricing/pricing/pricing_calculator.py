# This module turns a monthly revenue target into today's minimum acceptable room rate.
# It exists so the dashboard and the command-line report share one derivation of the daily numbers.
# Manual day-use actuals replace the forecast only when both count and average price are positive.
# Remaining inventory never drops below one room, so the rate is always computable.

from __future__ import annotations

import calendar
from dataclasses import asdict, dataclass
from typing import Any

from dayuse_pricing.common.numbers import ceil_div, round_half_up
from dayuse_pricing.prediction.prediction_engine import PredictionResult

DAYUSE_SOURCE_MANUAL = "manual"
DAYUSE_SOURCE_PREDICTION = "prediction"


@dataclass(frozen=True)
class PricingInput:
    monthly_target: int
    days_in_month: int
    total_rooms: int
    booked_stay_rooms: int = 0
    manual_dayuse_count: int = 0
    manual_dayuse_avg_price: int = 0

    def manual_dayuse_revenue(self) -> int | None:
        if self.manual_dayuse_count > 0 and self.manual_dayuse_avg_price > 0:
            return self.manual_dayuse_count * self.manual_dayuse_avg_price
        return None


@dataclass(frozen=True)
class PricingContext:
    monthly_target: int
    daily_target: int
    total_rooms: int
    booked_stay_rooms: int
    dayuse_revenue: int
    dayuse_source: str
    remaining_rooms: int
    required_revenue: int
    minimum_price: int

    @property
    def target_set(self) -> bool:
        """False means a zero minimum price reflects a missing target, not a met one."""

        return self.daily_target > 0

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["target_set"] = self.target_set
        return payload


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(int(year), int(month))[1]


def daily_target_for(monthly_target: int, month_days: int) -> int:
    if month_days <= 0:
        raise ValueError(f"days_in_month must be positive, got {month_days}")
    if monthly_target <= 0:
        return 0
    return round_half_up(monthly_target / month_days)


def compute_minimum_price(pricing_input: PricingInput, prediction: PredictionResult) -> PricingContext:
    daily_target = daily_target_for(pricing_input.monthly_target, pricing_input.days_in_month)

    manual_revenue = pricing_input.manual_dayuse_revenue()
    if manual_revenue is not None:
        dayuse_revenue = manual_revenue
        dayuse_source = DAYUSE_SOURCE_MANUAL
    else:
        dayuse_revenue = prediction.revenue
        dayuse_source = DAYUSE_SOURCE_PREDICTION

    remaining_rooms = max(1, pricing_input.total_rooms - pricing_input.booked_stay_rooms)
    shortfall = daily_target - dayuse_revenue
    minimum_price = 0 if shortfall <= 0 else ceil_div(shortfall, remaining_rooms)

    return PricingContext(
        monthly_target=pricing_input.monthly_target,
        daily_target=daily_target,
        total_rooms=pricing_input.total_rooms,
        booked_stay_rooms=pricing_input.booked_stay_rooms,
        dayuse_revenue=dayuse_revenue,
        dayuse_source=dayuse_source,
        remaining_rooms=remaining_rooms,
        required_revenue=max(0, shortfall),
        minimum_price=minimum_price,
    )
