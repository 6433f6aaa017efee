"""
Command-line minimum-rate report for one hotel and date.
It loads the holiday year first, so unlike the dashboard the printed numbers are the corrected ones.
Run it via `python -m dayuse_pricing.pricing.pricing_report --hotel-id hotel_a`.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from datetime import date

from dayuse_pricing.common.logging import configure_logging
from dayuse_pricing.common.settings import get_settings
from dayuse_pricing.ingestion.csv_loader import load_dayuse_csv
from dayuse_pricing.pricing.pricing_service import UPLOAD_MODE_MERGE, VALID_UPLOAD_MODES, PricingService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print today's day-use forecast and minimum room rate")
    parser.add_argument("--hotel-id", default=None)
    parser.add_argument("--date", default=None, help="Target date (YYYY-MM-DD); defaults to today")
    parser.add_argument("--csv", default=None, help="Import this day-use CSV before reporting")
    parser.add_argument("--upload-mode", default=UPLOAD_MODE_MERGE, choices=sorted(VALID_UPLOAD_MODES))
    parser.add_argument("--monthly-target", type=int, default=None, help="Save this monthly target first")
    parser.add_argument("--booked-stay-rooms", type=int, default=None)
    parser.add_argument("--dayuse-count", type=int, default=None)
    parser.add_argument("--dayuse-avg-price", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging()
    settings = get_settings()
    service = PricingService.from_settings(settings)

    hotel_id = args.hotel_id or service.directory.default_hotel_id()
    target_date = date.fromisoformat(args.date) if args.date else date.today()

    if args.csv:
        parsed = load_dayuse_csv(args.csv, max_bytes=settings.CSV_MAX_FILE_BYTES)
        service.import_history(hotel_id, args.csv, parsed, mode=args.upload_mode)
    if args.monthly_target is not None:
        service.save_monthly_target(hotel_id, target_date.year, target_date.month, args.monthly_target)

    asyncio.run(service.preload_holidays(target_date.year))
    snapshot = service.build_snapshot(
        hotel_id,
        target_date,
        booked_stay_rooms=args.booked_stay_rooms,
        manual_dayuse_count=args.dayuse_count,
        manual_dayuse_avg_price=args.dayuse_avg_price,
    )
    print(json.dumps(snapshot.to_dict(), indent=2, default=str, ensure_ascii=False))


if __name__ == "__main__":
    main()
