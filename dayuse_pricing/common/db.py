"""
Database connection utilities.
The store is a local SQLite file, so engines are built lazily from settings instead of at import time.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url


def build_engine(database_url: str) -> Engine:
    """Create an engine, making sure the parent directory of a SQLite file exists."""

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, pool_pre_ping=True, future=True)
