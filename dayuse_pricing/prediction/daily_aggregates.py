# This module collapses individual day-use sales into one row per calendar date.
# It exists so every averaging path in the prediction engine starts from the same daily totals.
# Weekday indexes follow the Sunday=0 .. Saturday=6 convention used throughout the dashboard.
# Records are only read here; nothing in this module mutates the stored history.

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from dayuse_pricing.holidays.holiday_classifier import to_local_date

AGGREGATE_COLUMNS = ["date", "day_of_week", "count", "revenue"]

HistoryInput = Iterable[Mapping[str, Any]] | pd.DataFrame


def sunday_first_weekday(value: Any) -> int:
    """0=Sunday .. 6=Saturday."""

    return (to_local_date(value).weekday() + 1) % 7


def history_frame(history: HistoryInput | None) -> pd.DataFrame:
    if history is None:
        return pd.DataFrame(columns=["date", "price"])
    if isinstance(history, pd.DataFrame):
        frame = history.copy()
    else:
        frame = pd.DataFrame([dict(record) for record in history])
    if frame.empty:
        return pd.DataFrame(columns=["date", "price"])
    if "date" not in frame.columns:
        raise ValueError("history records must carry a 'date' field")
    if "price" not in frame.columns:
        frame["price"] = 0
    return frame


def build_daily_aggregates(history: HistoryInput | None) -> pd.DataFrame:
    """Return one row per date with the record count and summed price."""

    frame = history_frame(history)
    if frame.empty:
        return pd.DataFrame(columns=AGGREGATE_COLUMNS)

    frame["date"] = frame["date"].map(lambda value: to_local_date(value).isoformat())
    frame["price"] = pd.to_numeric(frame["price"], errors="coerce").fillna(0).astype(int)

    daily = (
        frame.groupby("date", sort=True)
        .agg(count=("price", "size"), revenue=("price", "sum"))
        .reset_index()
    )
    daily["day_of_week"] = daily["date"].map(sunday_first_weekday)
    daily["count"] = daily["count"].astype(int)
    daily["revenue"] = daily["revenue"].astype(int)
    return daily[AGGREGATE_COLUMNS]
