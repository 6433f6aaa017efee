# This file defines runtime configuration for the front-desk dashboard.
# It exists so page defaults can be tuned through environment variables without code edits.
# Shared settings (database, holiday source, password policy) stay in the common settings model.
# The dataclass keeps these dashboard-only knobs explicit and easy to test.

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from dayuse_pricing.pricing.pricing_service import UPLOAD_MODE_MERGE, VALID_UPLOAD_MODES


@dataclass(frozen=True)
class DashboardConfig:
    target_months_ahead: int
    default_upload_mode: str
    stats_chart_height: int
    currency_symbol: str


def load_dashboard_config(*, load_env: bool = True) -> DashboardConfig:
    if load_env:
        load_dotenv()

    upload_mode = os.getenv("DASHBOARD_DEFAULT_UPLOAD_MODE", UPLOAD_MODE_MERGE).strip().lower()
    if upload_mode not in VALID_UPLOAD_MODES:
        raise ValueError(
            f"DASHBOARD_DEFAULT_UPLOAD_MODE must be one of {sorted(VALID_UPLOAD_MODES)}, got: {upload_mode!r}"
        )

    return DashboardConfig(
        target_months_ahead=max(1, int(os.getenv("DASHBOARD_TARGET_MONTHS_AHEAD", "12"))),
        default_upload_mode=upload_mode,
        stats_chart_height=int(os.getenv("DASHBOARD_STATS_CHART_HEIGHT", "280")),
        currency_symbol=os.getenv("DASHBOARD_CURRENCY_SYMBOL", "¥"),
    )
