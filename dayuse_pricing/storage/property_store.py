# This file implements the per-property store for targets, day-use history, and daily actuals.
# It exists so dashboard pages and the report read and write one SQLite database through one class.
# Day-use records are upserted by id with a shallow overwrite, and their first-seen order is kept.
# Corrupt stored JSON is logged and treated as missing instead of breaking the dashboard.

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

from dayuse_pricing.storage.ddl import ensure_store_tables

LOGGER = logging.getLogger("storage")

DAILY_INPUT_FIELDS = ("dayuse_count", "dayuse_avg_price", "stay_count", "stay_avg_price")


@dataclass(frozen=True)
class DailyInput:
    dayuse_count: int | None = None
    dayuse_avg_price: int | None = None
    stay_count: int | None = None
    stay_avg_price: int | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MergeSummary:
    added: int
    updated: int
    total: int


def year_month_key(year: int, month: int) -> str:
    return f"{int(year)}-{int(month):02d}"


def _loads(raw: str | None, default: Any, *, context: str) -> Any:
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        LOGGER.error("failed to parse stored payload for %s; using default", context)
        return default


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def _record_id(record: Mapping[str, Any]) -> str | None:
    raw = record.get("id")
    if raw is None:
        return None
    record_id = str(raw).strip()
    return record_id or None


def _record_price(record: Mapping[str, Any]) -> int:
    try:
        return int(record.get("price") or 0)
    except (TypeError, ValueError):
        return 0


class PropertyStore:
    def __init__(self, engine: Engine, *, clock: Callable[[], datetime] | None = None) -> None:
        self.engine = engine
        self.clock = clock or (lambda: datetime.now(tz=UTC))
        ensure_store_tables(engine)

    # Monthly targets

    def get_monthly_target(self, hotel_id: str, year: int, month: int) -> int:
        with self.engine.connect() as connection:
            value = connection.execute(
                text(
                    """
                    SELECT target_amount
                    FROM hotel_monthly_target
                    WHERE hotel_id = :hotel_id AND year_month = :year_month
                    """
                ),
                {"hotel_id": hotel_id, "year_month": year_month_key(year, month)},
            ).scalar()
        return int(value or 0)

    def save_monthly_target(self, hotel_id: str, year: int, month: int, target: int) -> None:
        with self.engine.begin() as connection:
            self._upsert_monthly_target(connection, hotel_id, year_month_key(year, month), int(target))

    def get_monthly_targets(self, hotel_id: str) -> dict[str, int]:
        with self.engine.connect() as connection:
            rows = connection.execute(
                text(
                    """
                    SELECT year_month, target_amount
                    FROM hotel_monthly_target
                    WHERE hotel_id = :hotel_id
                    ORDER BY year_month
                    """
                ),
                {"hotel_id": hotel_id},
            ).all()
        return {str(row.year_month): int(row.target_amount) for row in rows}

    @staticmethod
    def _upsert_monthly_target(connection: Connection, hotel_id: str, year_month: str, target: int) -> None:
        connection.execute(
            text(
                """
                INSERT INTO hotel_monthly_target (hotel_id, year_month, target_amount)
                VALUES (:hotel_id, :year_month, :target_amount)
                ON CONFLICT (hotel_id, year_month) DO UPDATE SET
                    target_amount = excluded.target_amount
                """
            ),
            {"hotel_id": hotel_id, "year_month": year_month, "target_amount": target},
        )

    # Day-use history

    def get_dayuse_records(self, hotel_id: str) -> list[dict[str, Any]]:
        with self.engine.connect() as connection:
            rows = connection.execute(
                text(
                    """
                    SELECT record_id, payload_json
                    FROM dayuse_record
                    WHERE hotel_id = :hotel_id
                    ORDER BY seq
                    """
                ),
                {"hotel_id": hotel_id},
            ).all()

        records: list[dict[str, Any]] = []
        for row in rows:
            payload = _loads(row.payload_json, None, context=f"dayuse_record {hotel_id}/{row.record_id}")
            if isinstance(payload, dict):
                records.append(payload)
        return records

    def count_dayuse_records(self, hotel_id: str) -> int:
        with self.engine.connect() as connection:
            return int(
                connection.execute(
                    text("SELECT COUNT(*) FROM dayuse_record WHERE hotel_id = :hotel_id"),
                    {"hotel_id": hotel_id},
                ).scalar()
                or 0
            )

    def merge_dayuse_records(self, hotel_id: str, records: Iterable[Mapping[str, Any]]) -> MergeSummary:
        """Upsert by id: known ids are shallow-overwritten, new ids are appended."""

        with self.engine.begin() as connection:
            summary = self._merge_records(connection, hotel_id, records)
        LOGGER.info(
            "merged dayuse records hotel_id=%s added=%s updated=%s total=%s",
            hotel_id,
            summary.added,
            summary.updated,
            summary.total,
        )
        return summary

    def replace_dayuse_records(self, hotel_id: str, records: Iterable[Mapping[str, Any]]) -> int:
        """Replace the whole history of one property; returns the stored record count."""

        with self.engine.begin() as connection:
            connection.execute(
                text("DELETE FROM dayuse_record WHERE hotel_id = :hotel_id"),
                {"hotel_id": hotel_id},
            )
            summary = self._merge_records(connection, hotel_id, records)
        LOGGER.info("replaced dayuse records hotel_id=%s total=%s", hotel_id, summary.total)
        return summary.total

    def clear_dayuse_records(self, hotel_id: str) -> None:
        with self.engine.begin() as connection:
            connection.execute(
                text("DELETE FROM dayuse_record WHERE hotel_id = :hotel_id"),
                {"hotel_id": hotel_id},
            )

    def _merge_records(
        self,
        connection: Connection,
        hotel_id: str,
        records: Iterable[Mapping[str, Any]],
    ) -> MergeSummary:
        rows = connection.execute(
            text("SELECT record_id, seq, payload_json FROM dayuse_record WHERE hotel_id = :hotel_id"),
            {"hotel_id": hotel_id},
        ).all()
        existing: dict[str, dict[str, Any]] = {}
        next_seq = 0
        for row in rows:
            payload = _loads(row.payload_json, {}, context=f"dayuse_record {hotel_id}/{row.record_id}")
            existing[str(row.record_id)] = payload if isinstance(payload, dict) else {}
            next_seq = max(next_seq, int(row.seq) + 1)

        added = 0
        updated = 0
        skipped = 0
        for record in records:
            record_id = _record_id(record)
            if record_id is None:
                skipped += 1
                continue

            if record_id in existing:
                merged = {**existing[record_id], **dict(record)}
                connection.execute(
                    text(
                        """
                        UPDATE dayuse_record
                        SET record_date = :record_date, price = :price, payload_json = :payload_json
                        WHERE hotel_id = :hotel_id AND record_id = :record_id
                        """
                    ),
                    {
                        "hotel_id": hotel_id,
                        "record_id": record_id,
                        "record_date": str(merged.get("date", "")),
                        "price": _record_price(merged),
                        "payload_json": _dumps(merged),
                    },
                )
                existing[record_id] = merged
                updated += 1
            else:
                stored = dict(record)
                connection.execute(
                    text(
                        """
                        INSERT INTO dayuse_record (hotel_id, record_id, seq, record_date, price, payload_json)
                        VALUES (:hotel_id, :record_id, :seq, :record_date, :price, :payload_json)
                        """
                    ),
                    {
                        "hotel_id": hotel_id,
                        "record_id": record_id,
                        "seq": next_seq,
                        "record_date": str(stored.get("date", "")),
                        "price": _record_price(stored),
                        "payload_json": _dumps(stored),
                    },
                )
                existing[record_id] = stored
                next_seq += 1
                added += 1

        if skipped:
            LOGGER.warning("skipped %s dayuse records without an id hotel_id=%s", skipped, hotel_id)
        return MergeSummary(added=added, updated=updated, total=len(existing))

    # Today's manual actuals

    def get_daily_input(self, hotel_id: str, date_str: str) -> DailyInput:
        with self.engine.connect() as connection:
            raw = connection.execute(
                text(
                    """
                    SELECT payload_json
                    FROM daily_input
                    WHERE hotel_id = :hotel_id AND input_date = :input_date
                    """
                ),
                {"hotel_id": hotel_id, "input_date": date_str},
            ).scalar()

        payload = _loads(raw, {}, context=f"daily_input {hotel_id}/{date_str}")
        if not isinstance(payload, dict):
            return DailyInput()
        return DailyInput(
            **{field: payload.get(field) for field in DAILY_INPUT_FIELDS},
            updated_at=payload.get("updated_at"),
        )

    def save_daily_input(self, hotel_id: str, date_str: str, **fields: int | None) -> DailyInput:
        unknown = sorted(set(fields).difference(DAILY_INPUT_FIELDS))
        if unknown:
            raise ValueError(f"Unknown daily input fields: {unknown}")

        current = self.get_daily_input(hotel_id, date_str).to_dict()
        merged = {**current, **fields, "updated_at": self.clock().isoformat()}
        with self.engine.begin() as connection:
            self._upsert_daily_input(connection, hotel_id, date_str, merged)
        return DailyInput(**merged)

    @staticmethod
    def _upsert_daily_input(
        connection: Connection,
        hotel_id: str,
        date_str: str,
        payload: Mapping[str, Any],
    ) -> None:
        connection.execute(
            text(
                """
                INSERT INTO daily_input (hotel_id, input_date, payload_json, updated_at)
                VALUES (:hotel_id, :input_date, :payload_json, :updated_at)
                ON CONFLICT (hotel_id, input_date) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """
            ),
            {
                "hotel_id": hotel_id,
                "input_date": date_str,
                "payload_json": _dumps(dict(payload)),
                "updated_at": payload.get("updated_at"),
            },
        )

    # Application state (password hash, login attempts, session)

    def get_state(self, key: str, default: Any = None) -> Any:
        with self.engine.connect() as connection:
            raw = connection.execute(
                text("SELECT value_json FROM app_state WHERE state_key = :state_key"),
                {"state_key": key},
            ).scalar()
        return _loads(raw, default, context=f"app_state {key}")

    def set_state(self, key: str, value: Any) -> None:
        with self.engine.begin() as connection:
            connection.execute(
                text(
                    """
                    INSERT INTO app_state (state_key, value_json)
                    VALUES (:state_key, :value_json)
                    ON CONFLICT (state_key) DO UPDATE SET value_json = excluded.value_json
                    """
                ),
                {"state_key": key, "value_json": _dumps(value)},
            )

    def delete_state(self, key: str) -> None:
        with self.engine.begin() as connection:
            connection.execute(
                text("DELETE FROM app_state WHERE state_key = :state_key"),
                {"state_key": key},
            )

    # Backup

    def export_all(self) -> dict[str, Any]:
        with self.engine.connect() as connection:
            target_rows = connection.execute(
                text("SELECT hotel_id, year_month, target_amount FROM hotel_monthly_target ORDER BY hotel_id, year_month")
            ).all()
            hotel_ids = connection.execute(
                text("SELECT DISTINCT hotel_id FROM dayuse_record ORDER BY hotel_id")
            ).scalars().all()
            input_rows = connection.execute(
                text("SELECT hotel_id, input_date, payload_json FROM daily_input ORDER BY hotel_id, input_date")
            ).all()

        hotel_settings: dict[str, dict[str, dict[str, int]]] = {}
        for row in target_rows:
            hotel_settings.setdefault(str(row.hotel_id), {"monthly_targets": {}})
            hotel_settings[str(row.hotel_id)]["monthly_targets"][str(row.year_month)] = int(row.target_amount)

        daily_input: dict[str, dict[str, Any]] = {}
        for row in input_rows:
            payload = _loads(row.payload_json, {}, context=f"daily_input {row.hotel_id}/{row.input_date}")
            daily_input.setdefault(str(row.hotel_id), {})[str(row.input_date)] = payload

        return {
            "hotel_settings": hotel_settings,
            "dayuse_data": {str(hotel_id): self.get_dayuse_records(str(hotel_id)) for hotel_id in hotel_ids},
            "daily_input": daily_input,
            "exported_at": self.clock().isoformat(),
        }

    def import_all(self, data: Mapping[str, Any]) -> None:
        """Restore each backup section that is present, replacing what is stored for it."""

        hotel_settings = data.get("hotel_settings")
        dayuse_data = data.get("dayuse_data")
        daily_input = data.get("daily_input")

        with self.engine.begin() as connection:
            if hotel_settings is not None:
                connection.execute(text("DELETE FROM hotel_monthly_target"))
                for hotel_id, settings in dict(hotel_settings).items():
                    for year_month, target in dict(settings.get("monthly_targets", {})).items():
                        self._upsert_monthly_target(connection, str(hotel_id), str(year_month), int(target or 0))

            if dayuse_data is not None:
                connection.execute(text("DELETE FROM dayuse_record"))
                for hotel_id, records in dict(dayuse_data).items():
                    self._merge_records(connection, str(hotel_id), list(records))

            if daily_input is not None:
                connection.execute(text("DELETE FROM daily_input"))
                for hotel_id, by_date in dict(daily_input).items():
                    for date_str, payload in dict(by_date).items():
                        self._upsert_daily_input(connection, str(hotel_id), str(date_str), dict(payload))
