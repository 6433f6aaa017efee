# This file assembles everything one front-desk screen needs for a hotel and a date.
# It exists so the Streamlit pages and the command-line report share the same read and write paths.
# The service reads stored history, targets, and actuals, then runs prediction and pricing.
# It performs no rendering and never blocks on the holiday fetch unless asked to preload.

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

import pandas as pd

from dayuse_pricing.common.db import build_engine
from dayuse_pricing.common.settings import Settings
from dayuse_pricing.holidays.holiday_classifier import HolidayClassifier
from dayuse_pricing.holidays.holiday_source import HolidaySourceClient
from dayuse_pricing.ingestion.csv_loader import CsvParseResult, UploadPreview, parse_uploaded_csv, summarize_upload
from dayuse_pricing.prediction.daily_aggregates import sunday_first_weekday
from dayuse_pricing.prediction.prediction_engine import (
    WEEKDAY_NAMES,
    DayusePredictionEngine,
    PredictionResult,
    day_of_week_stats_frame,
)
from dayuse_pricing.pricing.hotel_directory import Hotel, HotelDirectory, load_hotel_directory
from dayuse_pricing.pricing.pricing_calculator import (
    PricingContext,
    PricingInput,
    compute_minimum_price,
    days_in_month,
)
from dayuse_pricing.storage.property_store import DailyInput, MergeSummary, PropertyStore, year_month_key

LOGGER = logging.getLogger("pricing_service")

UPLOAD_MODE_MERGE = "merge"
UPLOAD_MODE_REPLACE = "replace"
VALID_UPLOAD_MODES = {UPLOAD_MODE_MERGE, UPLOAD_MODE_REPLACE}


def parse_count(raw: Any) -> int:
    """Lenient integer parse for form fields: blanks and junk count as 0."""

    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    try:
        return int(float(str(raw).strip()))
    except (ValueError, OverflowError):
        return 0


def parse_optional_count(raw: Any) -> int | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return parse_count(raw)


@dataclass(frozen=True)
class PricingSnapshot:
    hotel: Hotel
    target_date: date
    day_name: str
    holiday_name: str | None
    holidays_loaded: bool
    monthly_target: int
    prediction: PredictionResult
    pricing: PricingContext
    daily_input: DailyInput

    def to_dict(self) -> dict[str, Any]:
        return {
            "hotel_id": self.hotel.id,
            "hotel_name": self.hotel.name,
            "target_date": self.target_date.isoformat(),
            "day_name": self.day_name,
            "holiday_name": self.holiday_name,
            "holidays_loaded": self.holidays_loaded,
            "monthly_target": self.monthly_target,
            "prediction": self.prediction.to_dict(),
            "pricing": self.pricing.to_dict(),
            "daily_input": self.daily_input.to_dict(),
        }


@dataclass(frozen=True)
class ImportReport:
    mode: str
    preview: UploadPreview
    skipped_rows: int
    total_records: int
    merge_summary: MergeSummary | None = None


class PricingService:
    """Read and write paths for the front-desk pricing screen."""

    def __init__(
        self,
        *,
        store: PropertyStore,
        directory: HotelDirectory,
        classifier: HolidayClassifier,
        csv_max_file_bytes: int = 5 * 1024 * 1024,
    ) -> None:
        self.store = store
        self.directory = directory
        self.classifier = classifier
        self.predictor = DayusePredictionEngine(classifier)
        self.csv_max_file_bytes = csv_max_file_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> PricingService:
        source = HolidaySourceClient(
            base_url=settings.HOLIDAY_API_BASE_URL,
            timeout_seconds=settings.HOLIDAY_REQUEST_TIMEOUT_SECONDS,
        )
        return cls(
            store=PropertyStore(build_engine(settings.DATABASE_URL)),
            directory=load_hotel_directory(settings.HOTEL_CONFIG_PATH),
            classifier=HolidayClassifier(source),
            csv_max_file_bytes=settings.CSV_MAX_FILE_BYTES,
        )

    def require_hotel(self, hotel_id: str) -> Hotel:
        hotel = self.directory.get(hotel_id)
        if hotel is None:
            raise ValueError(f"Unknown hotel id: {hotel_id!r}")
        return hotel

    async def preload_holidays(self, year: int) -> None:
        await self.predictor.initialize(year)

    def build_snapshot(
        self,
        hotel_id: str,
        target_date: date,
        *,
        booked_stay_rooms: Any = None,
        manual_dayuse_count: Any = None,
        manual_dayuse_avg_price: Any = None,
    ) -> PricingSnapshot:
        """Predict and price one day; omitted manual values fall back to the saved actuals."""

        hotel = self.require_hotel(hotel_id)
        daily_input = self.store.get_daily_input(hotel_id, target_date.isoformat())
        if booked_stay_rooms is None:
            booked_stay_rooms = daily_input.stay_count
        if manual_dayuse_count is None:
            manual_dayuse_count = daily_input.dayuse_count
        if manual_dayuse_avg_price is None:
            manual_dayuse_avg_price = daily_input.dayuse_avg_price

        monthly_target = self.store.get_monthly_target(hotel_id, target_date.year, target_date.month)
        history = self.store.get_dayuse_records(hotel_id)
        prediction = self.predictor.predict(history, target_date)
        pricing = compute_minimum_price(
            PricingInput(
                monthly_target=monthly_target,
                days_in_month=days_in_month(target_date.year, target_date.month),
                total_rooms=hotel.rooms,
                booked_stay_rooms=parse_count(booked_stay_rooms),
                manual_dayuse_count=parse_count(manual_dayuse_count),
                manual_dayuse_avg_price=parse_count(manual_dayuse_avg_price),
            ),
            prediction,
        )

        return PricingSnapshot(
            hotel=hotel,
            target_date=target_date,
            day_name=WEEKDAY_NAMES[sunday_first_weekday(target_date)],
            holiday_name=self.classifier.holiday_name(target_date),
            holidays_loaded=self.classifier.is_year_loaded(target_date.year),
            monthly_target=monthly_target,
            prediction=prediction,
            pricing=pricing,
            daily_input=daily_input,
        )

    def save_daily_input(
        self,
        hotel_id: str,
        target_date: date,
        *,
        dayuse_count: Any = None,
        dayuse_avg_price: Any = None,
        stay_count: Any = None,
        stay_avg_price: Any = None,
    ) -> DailyInput:
        self.require_hotel(hotel_id)
        return self.store.save_daily_input(
            hotel_id,
            target_date.isoformat(),
            dayuse_count=parse_optional_count(dayuse_count),
            dayuse_avg_price=parse_optional_count(dayuse_avg_price),
            stay_count=parse_optional_count(stay_count),
            stay_avg_price=parse_optional_count(stay_avg_price),
        )

    def monthly_target_schedule(self, hotel_id: str, start: date, *, months: int = 12) -> list[dict[str, Any]]:
        """Targets for `months` consecutive months starting at the month of `start`."""

        self.require_hotel(hotel_id)
        schedule: list[dict[str, Any]] = []
        for offset in range(months):
            month_index = start.month - 1 + offset
            year = start.year + month_index // 12
            month = month_index % 12 + 1
            schedule.append(
                {
                    "year": year,
                    "month": month,
                    "year_month": year_month_key(year, month),
                    "monthly_target": self.store.get_monthly_target(hotel_id, year, month),
                }
            )
        return schedule

    def save_monthly_target(self, hotel_id: str, year: int, month: int, raw_value: Any) -> int:
        self.require_hotel(hotel_id)
        target = max(0, parse_count(raw_value))
        self.store.save_monthly_target(hotel_id, year, month, target)
        return target

    def parse_upload(self, file_name: str, content: bytes) -> CsvParseResult:
        return parse_uploaded_csv(file_name, content, max_bytes=self.csv_max_file_bytes)

    def import_history(
        self,
        hotel_id: str,
        file_name: str,
        parsed: CsvParseResult,
        *,
        mode: str = UPLOAD_MODE_MERGE,
    ) -> ImportReport:
        self.require_hotel(hotel_id)
        if mode not in VALID_UPLOAD_MODES:
            raise ValueError(f"Unsupported upload mode: {mode!r}")

        preview = summarize_upload(file_name, parsed)
        if mode == UPLOAD_MODE_REPLACE:
            total = self.store.replace_dayuse_records(hotel_id, parsed.records)
            return ImportReport(
                mode=mode,
                preview=preview,
                skipped_rows=len(parsed.skipped_rows),
                total_records=total,
            )

        summary = self.store.merge_dayuse_records(hotel_id, parsed.records)
        return ImportReport(
            mode=mode,
            preview=preview,
            skipped_rows=len(parsed.skipped_rows),
            total_records=summary.total,
            merge_summary=summary,
        )

    def clear_history(self, hotel_id: str) -> None:
        self.require_hotel(hotel_id)
        self.store.clear_dayuse_records(hotel_id)
        LOGGER.info("day-use history cleared hotel_id=%s", hotel_id)

    def weekday_stats(self, hotel_id: str) -> pd.DataFrame:
        self.require_hotel(hotel_id)
        return day_of_week_stats_frame(self.store.get_dayuse_records(hotel_id))

    def export_backup(self) -> str:
        return json.dumps(self.store.export_all(), ensure_ascii=False, indent=2)

    def import_backup(self, content: bytes | str) -> None:
        """Restore a backup produced by `export_backup`; invalid files leave the store untouched."""

        raw = content.decode("utf-8-sig") if isinstance(content, bytes) else content
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Backup file is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Backup file must contain a JSON object")
        self.store.import_all(data)
        LOGGER.info("backup restored sections=%s", sorted(key for key in data if data[key] is not None))
