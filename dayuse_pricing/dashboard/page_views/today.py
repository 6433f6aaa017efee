# This file renders the today page: target, forecast, actuals, and the minimum room rate.
# It exists so the front desk can read the floor price and record actuals on one screen.
# The page renders from cached holidays first and asks the app to refresh once they are loaded.

from __future__ import annotations

from datetime import date

import streamlit as st

from dayuse_pricing.dashboard.components.summary_cards import (
    render_minimum_price_card,
    render_prediction_cards,
    render_target_cards,
)
from dayuse_pricing.dashboard.dashboard_config import DashboardConfig
from dayuse_pricing.dashboard.formatting import format_count, format_minimum_price, format_money, format_target
from dayuse_pricing.dashboard.ui_text import HOLIDAYS_LOADING, NO_HISTORY, TARGET_MET, TARGET_NOT_SET
from dayuse_pricing.pricing.pricing_service import PricingService, PricingSnapshot


def _render_actuals_form(service: PricingService, snapshot: PricingSnapshot, tooltips: dict[str, str]) -> None:
    saved = snapshot.daily_input
    with st.form(f"actuals_{snapshot.hotel.id}_{snapshot.target_date.isoformat()}"):
        st.subheader("Today's Actuals", help=tooltips["manual_dayuse"])
        col1, col2 = st.columns(2)
        dayuse_count = col1.number_input("Day-use bookings", min_value=0, step=1, value=saved.dayuse_count or 0)
        dayuse_avg_price = col2.number_input(
            "Day-use average price", min_value=0, step=100, value=saved.dayuse_avg_price or 0
        )
        col3, col4 = st.columns(2)
        stay_count = col3.number_input(
            "Rooms booked for stay", min_value=0, step=1, value=saved.stay_count or 0, help=tooltips["manual_stay"]
        )
        stay_avg_price = col4.number_input("Stay average price", min_value=0, step=100, value=saved.stay_avg_price or 0)
        submitted = st.form_submit_button("Save actuals")

    if submitted:
        service.save_daily_input(
            snapshot.hotel.id,
            snapshot.target_date,
            dayuse_count=dayuse_count,
            dayuse_avg_price=dayuse_avg_price,
            stay_count=stay_count,
            stay_avg_price=stay_avg_price,
        )
        st.rerun()


def render(
    *,
    service: PricingService,
    hotel_id: str,
    target_date: date,
    config: DashboardConfig,
    tooltips: dict[str, str],
) -> PricingSnapshot:
    snapshot = service.build_snapshot(hotel_id, target_date)
    symbol = config.currency_symbol

    title = f"{snapshot.target_date:%Y-%m-%d} ({snapshot.day_name})"
    if snapshot.holiday_name:
        title = f"{title} | {snapshot.holiday_name}"
    st.header(title)
    if not snapshot.holidays_loaded:
        st.caption(HOLIDAYS_LOADING)

    pricing = snapshot.pricing
    render_target_cards(
        monthly_target=format_target(snapshot.monthly_target, symbol=symbol),
        daily_target=format_target(pricing.daily_target, symbol=symbol),
        tooltips=tooltips,
    )
    if not pricing.target_set:
        st.info(TARGET_NOT_SET)

    prediction = snapshot.prediction
    render_prediction_cards(
        predicted_count=format_count(prediction.count),
        predicted_revenue=format_money(prediction.revenue, symbol=symbol),
        basis=prediction.basis,
        tooltips=tooltips,
    )
    if not prediction.has_data:
        st.info(NO_HISTORY)

    _render_actuals_form(service, snapshot, tooltips)

    render_minimum_price_card(
        minimum_price=format_minimum_price(pricing.minimum_price, symbol=symbol),
        remaining_rooms=format_count(pricing.remaining_rooms),
        required_revenue=format_money(pricing.required_revenue, symbol=symbol),
        dayuse_revenue=format_money(pricing.dayuse_revenue, symbol=symbol),
        tooltips=tooltips,
    )
    if pricing.target_set and pricing.minimum_price == 0:
        st.success(TARGET_MET)
    return snapshot
