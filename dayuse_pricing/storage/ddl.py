"""DDL helpers for the local store tables."""

from __future__ import annotations

from sqlalchemy.engine import Engine

STORE_DDL = [
    """
    CREATE TABLE IF NOT EXISTS hotel_monthly_target (
        hotel_id TEXT NOT NULL,
        year_month TEXT NOT NULL,
        target_amount INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (hotel_id, year_month)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS dayuse_record (
        hotel_id TEXT NOT NULL,
        record_id TEXT NOT NULL,
        seq INTEGER NOT NULL,
        record_date TEXT NOT NULL,
        price INTEGER NOT NULL DEFAULT 0,
        payload_json TEXT NOT NULL,
        PRIMARY KEY (hotel_id, record_id)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_dayuse_record_hotel_seq
        ON dayuse_record (hotel_id, seq)
    """,
    """
    CREATE TABLE IF NOT EXISTS daily_input (
        hotel_id TEXT NOT NULL,
        input_date TEXT NOT NULL,
        payload_json TEXT NOT NULL,
        updated_at TEXT,
        PRIMARY KEY (hotel_id, input_date)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS app_state (
        state_key TEXT PRIMARY KEY,
        value_json TEXT NOT NULL
    )
    """,
]


def ensure_store_tables(engine: Engine) -> None:
    """Create store tables in deterministic order; safe to re-run."""

    with engine.begin() as connection:
        for statement in STORE_DDL:
            connection.exec_driver_sql(statement)
