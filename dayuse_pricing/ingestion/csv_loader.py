"""
Day-use CSV parsing and validation.
File-level problems (wrong extension, too large, missing required columns, no usable rows) raise
`CsvValidationError`. Row-level problems are skipped with a logged warning so one bad line does
not block an import.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

LOGGER = logging.getLogger("ingestion")

REQUIRED_COLUMNS = ("id", "date", "price")
INTEGER_COLUMNS = ("price", "duration_minutes")
DEFAULT_MAX_FILE_BYTES = 5 * 1024 * 1024
CSV_FORMAT_HINT = "id,date,duration_minutes,price,check_in,check_out"


class CsvValidationError(ValueError):
    """Raised when an uploaded file cannot be used as day-use history."""


@dataclass(frozen=True)
class SkippedRow:
    row_number: int | None
    reason: str


@dataclass
class CsvParseResult:
    records: list[dict[str, Any]]
    skipped_rows: list[SkippedRow] = field(default_factory=list)


@dataclass(frozen=True)
class UploadPreview:
    file_name: str
    row_count: int
    first_date: str
    last_date: str


def _parse_date(value: str) -> str | None:
    if not value:
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    if parsed.tzinfo is not None:
        return parsed.to_pydatetime().astimezone().date().isoformat()
    return parsed.date().isoformat()


def parse_dayuse_csv(text: str) -> CsvParseResult:
    """Parse CSV text into day-use records keyed by lower-cased header names."""

    stripped = text.strip().lstrip("\ufeff")
    lines = [line for line in stripped.splitlines() if line.strip()]
    if len(lines) < 2:
        raise CsvValidationError("A header row and at least one data row are required")

    skipped: list[SkippedRow] = []

    def _on_bad_line(fields: list[str]) -> None:
        skipped.append(SkippedRow(row_number=None, reason=f"column count mismatch ({len(fields)} fields)"))
        return None

    frame = pd.read_csv(
        io.StringIO(stripped),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=_on_bad_line,
    )
    frame.columns = [str(column).strip().lower() for column in frame.columns]

    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise CsvValidationError(f"Missing required columns: {', '.join(missing)}")

    frame = frame.fillna("").apply(lambda column: column.astype(str).str.strip())

    records: list[dict[str, Any]] = []
    for position, row in enumerate(frame.to_dict(orient="records"), start=2):
        record: dict[str, Any] = dict(row)
        for column in INTEGER_COLUMNS:
            if column in record:
                number = pd.to_numeric(record[column], errors="coerce")
                record[column] = 0 if pd.isna(number) else int(number)

        if not record.get("id"):
            skipped.append(SkippedRow(row_number=position, reason="missing id"))
            continue

        normalized_date = _parse_date(str(record.get("date", "")))
        if normalized_date is None:
            skipped.append(SkippedRow(row_number=position, reason="invalid date"))
            continue
        record["date"] = normalized_date
        records.append(record)

    for row in skipped:
        LOGGER.warning("skipped csv row=%s reason=%s", row.row_number, row.reason)

    if not records:
        raise CsvValidationError("No valid rows were found in the file")
    return CsvParseResult(records=records, skipped_rows=skipped)


def _check_file(file_name: str, size_bytes: int, max_bytes: int) -> None:
    if not file_name.lower().endswith(".csv"):
        raise CsvValidationError("Please choose a .csv file")
    if size_bytes > max_bytes:
        raise CsvValidationError(f"File must be {max_bytes // (1024 * 1024)}MB or smaller")


def parse_uploaded_csv(
    file_name: str,
    content: bytes,
    *,
    max_bytes: int = DEFAULT_MAX_FILE_BYTES,
) -> CsvParseResult:
    _check_file(file_name, len(content), max_bytes)
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CsvValidationError("File is not UTF-8 encoded text") from exc
    return parse_dayuse_csv(text)


def load_dayuse_csv(path: str | Path, *, max_bytes: int = DEFAULT_MAX_FILE_BYTES) -> CsvParseResult:
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")
    return parse_uploaded_csv(csv_path.name, csv_path.read_bytes(), max_bytes=max_bytes)


def summarize_upload(file_name: str, result: CsvParseResult) -> UploadPreview:
    return UploadPreview(
        file_name=file_name,
        row_count=len(result.records),
        first_date=str(result.records[0]["date"]),
        last_date=str(result.records[-1]["date"]),
    )
