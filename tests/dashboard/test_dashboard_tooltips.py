# This test file checks that every tooltip the pages reference is defined.
# It exists so a renamed card cannot silently lose its explanation.

from __future__ import annotations

from dayuse_pricing.dashboard.tooltips import TOOLTIPS


def test_required_tooltip_keys_exist() -> None:
    required_keys = {
        "monthly_target",
        "daily_target",
        "predicted_count",
        "predicted_revenue",
        "prediction_basis",
        "manual_dayuse",
        "manual_stay",
        "minimum_price",
        "remaining_rooms",
        "required_revenue",
        "dayuse_revenue",
        "weekday_stats_chart",
    }

    missing_keys = required_keys.difference(TOOLTIPS.keys())
    assert not missing_keys

    for key in required_keys:
        assert isinstance(TOOLTIPS[key], str)
        assert TOOLTIPS[key].strip()
