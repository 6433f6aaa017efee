"""
Public-holiday classification backed by an explicitly owned per-year cache.

Two lookups are exposed on purpose:

* `HolidayClassifier.is_holiday` is synchronous and only reads the cache. A year that was
  never loaded answers ``False``. The prediction engine uses this one so forecasting never
  waits on the network.
* `HolidayClassifier.is_holiday_async` loads the year first when needed and then performs the
  same lookup.

A failed fetch caches an empty table for that year, so later synchronous lookups for it keep
answering ``False`` instead of retrying.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Protocol

from dayuse_pricing.holidays.holiday_source import HolidaySourceError

LOGGER = logging.getLogger("holidays")

HolidayTable = dict[str, str]
DateLike = date | datetime | str


class HolidaySource(Protocol):
    def fetch_year(self, year: int) -> HolidayTable: ...


def to_local_date(value: DateLike) -> date:
    """Resolve a date-like value to a calendar date in the local timezone."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return to_local_date(datetime.fromisoformat(text.replace("Z", "+00:00")))


def date_key(value: DateLike) -> str:
    """Canonical `YYYY-MM-DD` key of the local calendar date."""

    return to_local_date(value).isoformat()


class HolidayCache:
    """Year to holiday-table mapping with no eviction."""

    def __init__(self) -> None:
        self._tables: dict[int, HolidayTable] = {}

    def get(self, year: int) -> HolidayTable | None:
        return self._tables.get(int(year))

    def set(self, year: int, table: HolidayTable) -> None:
        self._tables[int(year)] = dict(table)

    def contains(self, year: int) -> bool:
        return int(year) in self._tables

    def years(self) -> list[int]:
        return sorted(self._tables)

    def clear(self) -> None:
        self._tables.clear()


class HolidayClassifier:
    def __init__(self, source: HolidaySource, cache: HolidayCache | None = None) -> None:
        self.source = source
        self.cache = cache if cache is not None else HolidayCache()
        self._pending: dict[int, asyncio.Task[HolidayTable]] = {}

    async def load_year(self, year: int) -> HolidayTable:
        """Fetch and cache one year; cached years are returned without a new request."""

        year = int(year)
        cached = self.cache.get(year)
        if cached is not None:
            return cached

        pending = self._pending.get(year)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_into_cache(year))
            self._pending[year] = pending
        try:
            return await pending
        finally:
            self._pending.pop(year, None)

    async def _fetch_into_cache(self, year: int) -> HolidayTable:
        try:
            table = await asyncio.to_thread(self.source.fetch_year, year)
        except HolidaySourceError as exc:
            LOGGER.warning("holiday fetch failed year=%s, treating as no holidays: %s", year, exc)
            table = {}
        except Exception:
            LOGGER.exception("unexpected holiday source failure year=%s, treating as no holidays", year)
            table = {}
        self.cache.set(year, table)
        return self.cache.get(year) or {}

    def is_year_loaded(self, year: int) -> bool:
        return self.cache.contains(year)

    def is_holiday(self, value: DateLike) -> bool:
        day = to_local_date(value)
        table = self.cache.get(day.year)
        if table is None:
            return False
        return day.isoformat() in table

    async def is_holiday_async(self, value: DateLike) -> bool:
        day = to_local_date(value)
        await self.load_year(day.year)
        return self.is_holiday(day)

    def holiday_name(self, value: DateLike) -> str | None:
        day = to_local_date(value)
        table = self.cache.get(day.year) or {}
        return table.get(day.isoformat()) or None

    async def get_holiday_name(self, value: DateLike) -> str | None:
        day = to_local_date(value)
        await self.load_year(day.year)
        return self.holiday_name(day)

    def clear_cache(self) -> None:
        self.cache.clear()
