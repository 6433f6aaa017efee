# This file defines tooltip text for the dashboard cards and charts.
# A single dictionary keeps explanations consistent between pages and tests.

from __future__ import annotations

TOOLTIPS: dict[str, str] = {
    "monthly_target": "Revenue goal for the whole month, entered on the Settings page.",
    "daily_target": "Monthly target divided evenly across the days of this month.",
    "predicted_count": "Average number of day-use bookings on comparable past days.",
    "predicted_revenue": "Average day-use revenue on comparable past days.",
    "prediction_basis": "Which past days were averaged: same weekday, past holidays, or all days as a fallback.",
    "manual_dayuse": "Enter today's actual day-use count and average price to replace the forecast.",
    "manual_stay": "Rooms already sold for an overnight stay; they are removed from the remaining inventory.",
    "minimum_price": "Lowest overnight rate per remaining room that still reaches today's target.",
    "remaining_rooms": "Total rooms minus rooms already booked, never fewer than one.",
    "required_revenue": "Part of today's target not yet covered by day-use revenue.",
    "dayuse_revenue": "Today's manual day-use actuals when entered, otherwise the forecast.",
    "weekday_stats_chart": "Average day-use revenue per weekday across the uploaded history.",
}
